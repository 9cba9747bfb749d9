"""
tests/test_streaming_dispatch.py

Streaming dispatcher:
✔ three chunks / four frames (last empty) → three events in order
✔ events from one chunk are yielded before the next read
✔ retry on 503 before any byte is read, closing the first response
✔ error statuses, wrong content type, absent body
✔ stream released on completion, error and early abandonment
"""

import json

import httpx
import pytest

from hf_inference.common.errors import ProtocolError, ServerError, TransportError
from hf_inference.domain.entities.task_request import TaskRequest
from hf_inference.domain.entities.transport_models import TransportResponse
from hf_inference.infrastructure.hf_inference_client import HfInferenceClient

from tests.conftest import ChunkStream, FakeTransport, json_response, stream_response


def token_event(i: int, text: str) -> dict:
    return {
        "token": {"id": i, "text": text, "logprob": -0.5, "special": False},
        "generated_text": None,
        "details": None,
    }


def frame(payload) -> bytes:
    return f"data: {json.dumps(payload)}\n\n".encode()


def make_client(transport, settings):
    return HfInferenceClient(transport=transport, settings=settings)


TASK = TaskRequest(model="bigcode/starcoder", payload={"inputs": "def fib(n):"})


class TestStreamDecoding:
    @pytest.mark.asyncio
    async def test_four_frames_in_three_chunks(self, settings):
        first, second, third = frame(token_event(1, "a")), frame(token_event(2, "b")), frame(token_event(3, "c"))
        raw = first + second + third + b"data:\n\n"
        # chunk boundaries fall inside frames
        chunks = [raw[:10], raw[10 : len(first) + 20], raw[len(first) + 20 :]]
        stream = ChunkStream(chunks)
        client = make_client(FakeTransport(stream_response(stream)), settings)

        events = [event async for event in client.streaming_request(TASK)]

        assert [e["token"]["text"] for e in events] == ["a", "b", "c"]
        assert stream.closed == 1

    @pytest.mark.asyncio
    async def test_chunk_events_yielded_before_next_read(self, settings):
        stream = ChunkStream([frame(token_event(1, "a")) + frame(token_event(2, "b")), frame(token_event(3, "c"))])
        client = make_client(FakeTransport(stream_response(stream)), settings)
        events = client.streaming_request(TASK)

        assert (await events.__anext__())["token"]["id"] == 1
        assert stream.reads == 1
        assert (await events.__anext__())["token"]["id"] == 2
        assert stream.reads == 1
        assert (await events.__anext__())["token"]["id"] == 3
        assert stream.reads == 2
        with pytest.raises(StopAsyncIteration):
            await events.__anext__()

    @pytest.mark.asyncio
    async def test_request_is_marked_as_stream(self, settings):
        transport = FakeTransport(stream_response(ChunkStream([])))
        client = make_client(transport, settings)

        assert [e async for e in client.streaming_request(TASK)] == []

        assert transport.stream_flags == [True]
        assert json.loads(transport.requests[0].content)["stream"] is True

    @pytest.mark.asyncio
    async def test_invalid_json_frame(self, settings):
        stream = ChunkStream([b"data: {not json\n\n"])
        client = make_client(FakeTransport(stream_response(stream)), settings)

        with pytest.raises(ProtocolError):
            [e async for e in client.streaming_request(TASK)]
        assert stream.closed == 1

    @pytest.mark.asyncio
    async def test_in_stream_error_event(self, settings):
        stream = ChunkStream([frame(token_event(1, "a")) + frame({"error": "Request failed during generation"})])
        client = make_client(FakeTransport(stream_response(stream)), settings)
        seen = []

        with pytest.raises(ServerError, match="Request failed during generation"):
            async for event in client.streaming_request(TASK):
                seen.append(event)

        assert len(seen) == 1
        assert stream.closed == 1


class TestStreamRetry:
    @pytest.mark.asyncio
    async def test_503_then_stream(self, settings):
        loading = TransportResponse(
            status_code=503,
            headers=httpx.Headers({"content-type": "application/json"}),
            stream=ChunkStream([b'{"error": "loading"}']),
        )
        closed = []

        async def close_loading():
            closed.append(True)

        loading.close = close_loading
        good = ChunkStream([frame(token_event(1, "a"))])
        transport = FakeTransport(loading, stream_response(good))
        client = make_client(transport, settings)

        events = [e async for e in client.streaming_request(TASK)]

        assert len(events) == 1
        assert closed == [True]
        bodies = transport.sent_bodies()
        assert [b["options"]["wait_for_model"] for b in bodies] == [False, True]

    @pytest.mark.asyncio
    async def test_503_twice(self, settings):
        transport = FakeTransport(json_response({"error": "loading"}, 503), json_response({"error": "still loading"}, 503))
        client = make_client(transport, settings)

        with pytest.raises(ServerError, match="still loading"):
            [e async for e in client.streaming_request(TASK)]
        assert len(transport.requests) == 2


class TestStreamPreconditions:
    @pytest.mark.asyncio
    async def test_error_status_without_envelope(self, settings):
        stream = ChunkStream([b"Bad Gateway"])
        client = make_client(FakeTransport(stream_response(stream, 502, "text/plain")), settings)

        with pytest.raises(TransportError) as exc_info:
            [e async for e in client.streaming_request(TASK)]
        assert exc_info.value.status_code == 502
        assert stream.closed == 1

    @pytest.mark.asyncio
    async def test_wrong_content_type(self, settings):
        stream = ChunkStream([b'[{"generated_text": "x"}]'])
        client = make_client(FakeTransport(stream_response(stream, 200, "application/json")), settings)

        with pytest.raises(ProtocolError, match="application/json"):
            [e async for e in client.streaming_request(TASK)]
        assert stream.reads == 0
        assert stream.closed == 1

    @pytest.mark.asyncio
    async def test_missing_content_type(self, settings):
        stream = ChunkStream([])
        client = make_client(FakeTransport(stream_response(stream, 200, None)), settings)

        with pytest.raises(ProtocolError):
            [e async for e in client.streaming_request(TASK)]

    @pytest.mark.asyncio
    async def test_content_type_parameters_accepted(self, settings):
        stream = ChunkStream([frame(token_event(1, "a"))])
        client = make_client(FakeTransport(stream_response(stream, 200, "text/event-stream; charset=utf-8")), settings)

        assert len([e async for e in client.streaming_request(TASK)]) == 1

    @pytest.mark.asyncio
    async def test_absent_body(self, settings):
        response = TransportResponse(status_code=200, headers=httpx.Headers({"content-type": "text/event-stream"}))
        client = make_client(FakeTransport(response), settings)

        with pytest.raises(ProtocolError):
            [e async for e in client.streaming_request(TASK)]


class TestStreamRelease:
    @pytest.mark.asyncio
    async def test_read_error_propagates_and_releases(self, settings):
        stream = ChunkStream(
            [frame(token_event(1, "a")), frame(token_event(2, "b"))],
            fail_after=1,
            error=TransportError("connection reset"),
        )
        client = make_client(FakeTransport(stream_response(stream)), settings)
        seen = []

        with pytest.raises(TransportError, match="connection reset"):
            async for event in client.streaming_request(TASK):
                seen.append(event)

        assert len(seen) == 1
        assert stream.closed == 1

    @pytest.mark.asyncio
    async def test_early_abandonment_releases_once(self, settings):
        stream = ChunkStream([frame(token_event(i, str(i))) for i in range(5)])
        client = make_client(FakeTransport(stream_response(stream)), settings)
        events = client.streaming_request(TASK)

        await events.__anext__()
        await events.aclose()

        assert stream.reads == 1
        assert stream.closed == 1
