# hf_inference/infrastructure/request_builder.py
import json
from typing import Any, Dict, Optional

from hf_inference.common.errors import ConfigurationError
from hf_inference.domain.entities.inference_options import EffectiveOptions
from hf_inference.domain.entities.task_request import TaskRequest
from hf_inference.domain.entities.transport_models import TransportRequest


def resolve_url(model: Optional[str], *, endpoint_url: Optional[str], api_base_url: str) -> str:
    """A bound endpoint is used verbatim; otherwise <api base><model>."""
    if endpoint_url:
        return endpoint_url
    if not model:
        raise ConfigurationError("Model is required for Inference API")
    return f"{api_base_url}{model}"


def build_headers(
    effective: EffectiveOptions,
    *,
    api_key: Optional[str],
    binary: bool,
    stream: bool = False,
) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    if binary:
        # Hints only travel as headers for binary bodies; JSON bodies carry `options`
        if effective.wait_for_model:
            headers["X-Wait-For-Model"] = "true"
        if not effective.use_cache:
            headers["X-Use-Cache"] = "false"
        if effective.skip_model_load:
            headers["X-Load-Model"] = "0"
    else:
        headers["Content-Type"] = "application/json"

    if stream:
        headers["Accept"] = "text/event-stream"

    # Custom headers go last so they can override anything computed above
    headers.update(effective.extra_headers)
    return headers


def build_transport_request(
    task_request: TaskRequest,
    effective: EffectiveOptions,
    *,
    api_key: Optional[str],
    endpoint_url: Optional[str],
    api_base_url: str,
    binary: bool = False,
    stream: bool = False,
    include_credentials: bool = False,
) -> TransportRequest:
    """
    Turn a task request and its merged options into a transport-ready
    request: URL, headers, and either a JSON text body or the raw bytes.
    """
    url = resolve_url(task_request.model, endpoint_url=endpoint_url, api_base_url=api_base_url)

    if binary and not task_request.is_binary:
        raise ConfigurationError("Binary task requires a `data` buffer")
    if not binary and task_request.is_binary:
        raise ConfigurationError("Raw `data` can only be sent by a binary task")

    content: Any
    if binary:
        content = task_request.data
    else:
        body: Dict[str, Any] = {**task_request.payload}
        if stream:
            body["stream"] = True
        body["options"] = effective.to_wire()
        content = json.dumps(body)

    return TransportRequest(
        url=url,
        headers=build_headers(effective, api_key=api_key, binary=binary, stream=stream),
        content=content,
        credentials="include" if include_credentials else "same-origin",
    )
