# hf_inference/infrastructure/httpx_transport.py
import logging
from typing import AsyncIterator, Optional
from urllib.parse import urlsplit

import httpx

from hf_inference.common.errors import TransportError
from hf_inference.domain.contracts.i_transport import ITransport
from hf_inference.domain.entities.transport_models import TransportRequest, TransportResponse

logger = logging.getLogger(__name__)


def _origin_of(url: str) -> tuple:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    port = parts.port or {"http": 80, "https": 443}.get(scheme)
    return scheme, (parts.hostname or "").lower(), port


class HttpxTransport(ITransport):
    """
    ITransport over a single httpx.AsyncClient.

    Ambient credentials live in a cookie jar owned by the transport. A request
    marked `include` always gets them; a `same-origin` request only gets them
    when its URL shares scheme, host and port with `origin`.
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = 60.0,
        origin: Optional[str] = None,
        cookies: Optional[httpx.Cookies] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._timeout = timeout
        self._origin = _origin_of(origin) if origin else None
        self._cookies = httpx.Cookies(cookies)
        self._client = client
        self._owns_client = client is None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _attaches_credentials(self, request: TransportRequest) -> bool:
        if request.credentials == "include":
            return True
        return self._origin is not None and _origin_of(request.url) == self._origin

    async def send(self, request: TransportRequest, *, stream: bool = False) -> TransportResponse:
        client = self._ensure_client()
        # For streams, avoid a hard timeout: a generation may take arbitrarily long
        http_request = client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.content,
            timeout=None if stream else self._timeout,
        )
        if self._attaches_credentials(request):
            self._cookies.set_cookie_header(http_request)

        try:
            response = await client.send(http_request, stream=stream)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {request.url} failed: {e}") from e

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)

        if not stream:
            return TransportResponse(
                status_code=response.status_code,
                headers=response.headers,
                content=response.content,
            )

        return TransportResponse(
            status_code=response.status_code,
            headers=response.headers,
            stream=self._aiter_bytes(response),
            close=response.aclose,
        )

    @staticmethod
    async def _aiter_bytes(response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TransportError(f"Reading response stream failed: {e}") from e

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
