"""
tests/test_request_builder.py

Request construction:
✔ URL resolution (endpoint override, base + model, ConfigurationError)
✔ JSON body = task fields + options envelope
✔ binary body with X-* hint headers and no JSON content type
✔ custom headers applied last
✔ credentials mode
"""

import json

import pytest

from hf_inference.common.errors import ConfigurationError
from hf_inference.domain.entities.inference_options import InferenceOptions, merge_options
from hf_inference.domain.entities.task_request import TaskRequest
from hf_inference.infrastructure.request_builder import build_transport_request, resolve_url

BASE = "https://api-inference.huggingface.co/models/"


def build(task_request, options=None, **kwargs):
    params = dict(api_key=None, endpoint_url=None, api_base_url=BASE)
    params.update(kwargs)
    return build_transport_request(task_request, merge_options(None, options), **params)


class TestResolveUrl:
    def test_base_plus_model(self):
        assert resolve_url("gpt2", endpoint_url=None, api_base_url=BASE) == BASE + "gpt2"

    def test_endpoint_used_verbatim(self):
        url = "https://my-deployment.example.com/generate"
        assert resolve_url("gpt2", endpoint_url=url, api_base_url=BASE) == url
        assert resolve_url(None, endpoint_url=url, api_base_url=BASE) == url

    def test_missing_model_and_endpoint(self):
        with pytest.raises(ConfigurationError):
            resolve_url(None, endpoint_url=None, api_base_url=BASE)


class TestJsonRequest:
    def test_body_wraps_task_fields_with_options(self):
        task = TaskRequest(model="gpt2", payload={"inputs": "hi", "parameters": {"top_k": 5}})
        request = build(task, InferenceOptions(use_cache=False))
        body = json.loads(request.content)
        assert body["inputs"] == "hi"
        assert body["parameters"] == {"top_k": 5}
        assert body["options"]["use_cache"] is False
        assert "model" not in body
        assert request.method == "POST"
        assert request.url == BASE + "gpt2"

    def test_content_type_always_json(self):
        request = build(TaskRequest(model="gpt2", payload={"inputs": "x"}))
        assert request.headers["Content-Type"] == "application/json"

    def test_no_hint_headers_on_json_body(self):
        options = InferenceOptions(wait_for_model=True, use_cache=False, skip_model_load=True)
        request = build(TaskRequest(model="gpt2", payload={"inputs": "x"}), options)
        assert not any(name.startswith("X-") for name in request.headers)

    def test_authorization_only_with_api_key(self):
        task = TaskRequest(model="gpt2", payload={"inputs": "x"})
        assert "Authorization" not in build(task).headers
        assert build(task, api_key="hf_secret").headers["Authorization"] == "Bearer hf_secret"

    def test_stream_marker(self):
        request = build(TaskRequest(model="gpt2", payload={"inputs": "x"}), stream=True)
        assert json.loads(request.content)["stream"] is True
        assert request.headers["Accept"] == "text/event-stream"

    def test_raw_data_rejected(self):
        with pytest.raises(ConfigurationError):
            build(TaskRequest(model="m", data=b"abc"))


class TestBinaryRequest:
    def test_body_is_raw_bytes_without_json_headers(self):
        request = build(TaskRequest(model="m", data=b"\x89PNG"), binary=True)
        assert request.content == b"\x89PNG"
        assert "Content-Type" not in request.headers

    def test_hint_headers_each_gated(self):
        task = TaskRequest(model="m", data=b"x")
        assert build(task, binary=True).headers == {}

        headers = build(
            task,
            InferenceOptions(wait_for_model=True, use_cache=False, skip_model_load=True),
            binary=True,
        ).headers
        assert headers["X-Wait-For-Model"] == "true"
        assert headers["X-Use-Cache"] == "false"
        assert headers["X-Load-Model"] == "0"

        headers = build(task, InferenceOptions(use_cache=False), binary=True).headers
        assert headers == {"X-Use-Cache": "false"}

    def test_missing_data_rejected(self):
        with pytest.raises(ConfigurationError):
            build(TaskRequest(model="m", payload={"inputs": "x"}), binary=True)


class TestCustomHeaders:
    def test_custom_headers_override_computed(self):
        options = InferenceOptions(extra_headers={"Authorization": "Bearer other", "X-Trace": "1"})
        request = build(TaskRequest(model="m", payload={}), options, api_key="hf_secret")
        assert request.headers["Authorization"] == "Bearer other"
        assert request.headers["X-Trace"] == "1"


class TestCredentials:
    def test_default_same_origin(self):
        assert build(TaskRequest(model="m", payload={})).credentials == "same-origin"

    def test_include(self):
        assert build(TaskRequest(model="m", payload={}), include_credentials=True).credentials == "include"
