# hf_inference/infrastructure/hf_inference_client.py
import json
import logging
from typing import Any, AsyncGenerator, List, Mapping, Optional, Union

from hf_inference.common.config import Settings, get_settings
from hf_inference.common.errors import ProtocolError, ServerError, TransportError
from hf_inference.domain.contracts.i_inference_client import IInferenceClient
from hf_inference.domain.contracts.i_transport import ITransport
from hf_inference.domain.entities.inference_options import (
    EffectiveOptions,
    InferenceOptions,
    merge_options,
)
from hf_inference.domain.entities.task_request import TaskRequest
from hf_inference.domain.entities.transport_models import TransportResponse
from hf_inference.infrastructure.httpx_transport import HttpxTransport
from hf_inference.infrastructure.request_builder import build_transport_request
from hf_inference.infrastructure.sse_decoder import SseDecoder, SseMessage

logger = logging.getLogger(__name__)

OptionsLike = Union[InferenceOptions, Mapping[str, Any], None]


class HfInferenceClient(IInferenceClient):
    """
    Hugging Face Inference API client: the unary and streaming dispatch paths.

    A model that is still loading answers 503. Unless `retry_on_unavailable`
    is disabled, such a call is sent exactly once more with `wait_for_model`
    forced on; the second answer is final whatever its status.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_options: OptionsLike = None,
        endpoint_url: Optional[str] = None,
        *,
        transport: Optional[ITransport] = None,
        api_base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._api_key = api_key if api_key is not None else self._settings.api_key
        self._default_options = InferenceOptions.coerce(default_options)
        self._endpoint_url = endpoint_url if endpoint_url is not None else self._settings.endpoint_url
        self._api_base_url = api_base_url or self._settings.api_base_url

        self._transport: Optional[ITransport] = transport
        self._owns_transport = transport is None

    @property
    def endpoint_url(self) -> Optional[str]:
        return self._endpoint_url

    def _ensure_ready(self) -> ITransport:
        if self._transport is None:
            self._transport = HttpxTransport(timeout=self._settings.request_timeout)
        return self._transport

    def endpoint(self, endpoint_url: str) -> "HfInferenceClient":
        """
        Same key, defaults and transport, bound to a fixed URL (e.g. a private
        deployment). The returned client borrows the transport.
        """
        return HfInferenceClient(
            self._api_key,
            self._default_options,
            endpoint_url,
            transport=self._ensure_ready(),
            api_base_url=self._api_base_url,
            settings=self._settings,
        )

    @staticmethod
    def _should_retry(effective: EffectiveOptions, response: TransportResponse) -> bool:
        return (
            effective.retry_on_unavailable
            and response.status_code == 503
            and not effective.wait_for_model
        )

    async def _send(
        self,
        task_request: TaskRequest,
        options: OptionsLike,
        *,
        binary: bool,
        stream: bool,
        include_credentials: bool,
    ) -> TransportResponse:
        call_options = InferenceOptions.coerce(options)
        retried = False

        # At most two attempts; the second always waits for the model
        while True:
            effective = merge_options(
                self._default_options,
                call_options,
                wait_for_model=True if retried else None,
            )
            transport_request = build_transport_request(
                task_request,
                effective,
                api_key=self._api_key,
                endpoint_url=self._endpoint_url,
                api_base_url=self._api_base_url,
                binary=binary,
                stream=stream,
                include_credentials=include_credentials,
            )
            response = await self._ensure_ready().send(transport_request, stream=stream)

            if retried or not self._should_retry(effective, response):
                return response

            logger.info("Model at %s is loading (503); retrying once with wait_for_model", transport_request.url)
            await response.aclose()
            retried = True

    @staticmethod
    async def _raise_for_error_envelope(response: TransportResponse) -> None:
        """Raise ServerError if a failed response carries a JSON `error`."""
        if response.media_type != "application/json":
            return
        try:
            output = json.loads(await response.aread())
        except ValueError:
            return
        if isinstance(output, dict) and "error" in output:
            logger.warning("Inference API error (%s): %s", response.status_code, output["error"])
            raise ServerError(str(output["error"]), status_code=response.status_code)

    async def request(
        self,
        task_request: TaskRequest,
        options: OptionsLike = None,
        *,
        binary: bool = False,
        blob: bool = False,
        include_credentials: bool = False,
    ) -> Any:
        """
        Send one call and return the decoded JSON value, or the raw bytes when
        `blob` is set. The value is not shape-checked here.
        """
        response = await self._send(
            task_request,
            options,
            binary=binary,
            stream=False,
            include_credentials=include_credentials,
        )

        if blob:
            if not response.is_success:
                await self._raise_for_error_envelope(response)
                raise TransportError(
                    "An error occurred while fetching the blob",
                    status_code=response.status_code,
                )
            return await response.aread()

        # The API always answers with JSON, error envelopes included
        try:
            output = json.loads(await response.aread())
        except ValueError as e:
            raise TransportError(
                f"Server returned a non-JSON response (status {response.status_code})",
                status_code=response.status_code,
            ) from e

        if isinstance(output, dict) and "error" in output:
            logger.warning("Inference API error (%s): %s", response.status_code, output["error"])
            raise ServerError(str(output["error"]), status_code=response.status_code)
        return output

    async def streaming_request(
        self,
        task_request: TaskRequest,
        options: OptionsLike = None,
        *,
        include_credentials: bool = False,
    ) -> AsyncGenerator[Any, None]:
        """
        Yield each non-empty SSE `data` payload, JSON-decoded, in arrival order.

        Events are produced chunk by chunk: every message completed by one
        network read is yielded before the next read is issued. The response
        is released on every exit path, including the consumer abandoning the
        iterator (close it with `contextlib.aclosing` to make that immediate).
        """
        response = await self._send(
            task_request,
            options,
            binary=False,
            stream=True,
            include_credentials=include_credentials,
        )

        try:
            if not response.is_success:
                await self._raise_for_error_envelope(response)
                raise TransportError(
                    f"Server response contains error: {response.status_code}",
                    status_code=response.status_code,
                )
            if response.media_type != "text/event-stream":
                raise ProtocolError(
                    "Server does not support event stream content type, it returned "
                    f"{response.headers.get('content-type')}"
                )
            if response.stream is None:
                raise ProtocolError("Server returned an event stream without a body")

            messages: List[SseMessage] = []
            decoder = SseDecoder(messages.append)

            async for chunk in response.stream:
                decoder.feed(chunk)
                batch = list(messages)
                messages.clear()

                for message in batch:
                    if not message.data:
                        continue
                    try:
                        event = json.loads(message.data)
                    except ValueError as e:
                        raise ProtocolError(f"Event stream frame is not valid JSON: {message.data!r}") from e

                    # Some error payloads come back in-stream
                    if isinstance(event, dict) and "error" in event:
                        logger.warning("Inference API streaming error: %s", event["error"])
                        raise ServerError(str(event["error"]), status_code=response.status_code)

                    logger.debug("stream event: %s", message.data)
                    yield event
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        if self._transport is not None and self._owns_transport:
            await self._transport.aclose()
            self._transport = None

    async def __aenter__(self) -> "HfInferenceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
