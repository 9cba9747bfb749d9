"""Pytest configuration and fixtures."""

import json
from typing import Any, List, Optional

import httpx
import pytest

from hf_inference.common.config import Settings
from hf_inference.domain.contracts.i_transport import ITransport
from hf_inference.domain.entities.transport_models import TransportRequest, TransportResponse


class FakeTransport(ITransport):
    """
    In-memory ITransport: replays queued responses in order and records every
    request it was asked to send.
    """

    def __init__(self, *responses: TransportResponse):
        self.responses: List[TransportResponse] = list(responses)
        self.requests: List[TransportRequest] = []
        self.stream_flags: List[bool] = []
        self.closed = False

    async def send(self, request: TransportRequest, *, stream: bool = False) -> TransportResponse:
        self.requests.append(request)
        self.stream_flags.append(stream)
        if not self.responses:
            raise AssertionError("FakeTransport ran out of responses")
        return self.responses.pop(0)

    async def aclose(self) -> None:
        self.closed = True

    def sent_bodies(self) -> List[Any]:
        return [json.loads(r.content) for r in self.requests]


class EchoTransport(ITransport):
    """Answers every JSON request with its own body."""

    def __init__(self):
        self.requests: List[TransportRequest] = []

    async def send(self, request: TransportRequest, *, stream: bool = False) -> TransportResponse:
        self.requests.append(request)
        content = request.content.encode() if isinstance(request.content, str) else request.content
        return json_response({}, content=content)


def json_response(payload: Any, status_code: int = 200, *, content: Optional[bytes] = None) -> TransportResponse:
    return TransportResponse(
        status_code=status_code,
        headers=httpx.Headers({"content-type": "application/json"}),
        content=json.dumps(payload).encode() if content is None else content,
    )


class ChunkStream:
    """Async byte stream over fixed chunks; remembers how far it was read and whether it was closed."""

    def __init__(self, chunks: List[bytes], *, fail_after: Optional[int] = None, error: Optional[Exception] = None):
        self.chunks = list(chunks)
        self.reads = 0
        self.closed = 0
        self.fail_after = fail_after
        self.error = error

    def __aiter__(self):
        return self

    async def __anext__(self) -> bytes:
        if self.fail_after is not None and self.reads >= self.fail_after:
            raise self.error
        if self.reads >= len(self.chunks):
            raise StopAsyncIteration
        chunk = self.chunks[self.reads]
        self.reads += 1
        return chunk

    async def close(self) -> None:
        self.closed += 1


def stream_response(
    stream: ChunkStream,
    status_code: int = 200,
    content_type: Optional[str] = "text/event-stream",
) -> TransportResponse:
    headers = httpx.Headers({"content-type": content_type} if content_type else {})
    return TransportResponse(status_code=status_code, headers=headers, stream=stream, close=stream.close)


@pytest.fixture
def settings() -> Settings:
    # Explicit values so a developer's .env / HF_* environment never leaks into tests
    return Settings(
        _env_file=None,
        api_key=None,
        api_base_url="https://api-inference.huggingface.co/models/",
        endpoint_url=None,
        request_timeout=60.0,
    )
