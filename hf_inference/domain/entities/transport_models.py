# hf_inference/domain/entities/transport_models.py

from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Dict, Literal, Optional, Union

import httpx

CredentialsMode = Literal["include", "same-origin"]


@dataclass(frozen=True)
class TransportRequest:
    """One HTTP attempt. Built fresh per attempt, never reused across a retry."""

    url: str
    headers: Dict[str, str]
    content: Optional[Union[str, bytes]] = None
    method: str = "POST"
    credentials: CredentialsMode = "same-origin"


@dataclass
class TransportResponse:
    """
    Status, headers and exactly one of a buffered body (`content`) or a live
    byte stream (`stream`). `aclose` releases the stream; it is safe to call
    more than once.
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: Optional[bytes] = None
    stream: Optional[AsyncIterator[bytes]] = None
    close: Optional[Callable[[], Awaitable[None]]] = None
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def media_type(self) -> str:
        """Content type without parameters, lower-cased ("" when absent)."""
        ctype = self.headers.get("content-type") or ""
        return ctype.split(";", 1)[0].strip().lower()

    async def aread(self) -> bytes:
        """Buffer the remaining body, draining the stream if there is one."""
        if self.content is None:
            chunks = []
            if self.stream is not None:
                async for chunk in self.stream:
                    chunks.append(chunk)
                self.stream = None
            self.content = b"".join(chunks)
        return self.content

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.close is not None:
            await self.close()
