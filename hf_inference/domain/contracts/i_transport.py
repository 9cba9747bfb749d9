# hf_inference/domain/contracts/i_transport.py
# -----------------------------------------------------------------------------
# The transport is the only component that touches the network. Keeping it
# behind one async method lets the dispatchers run against httpx in
# production and against in-memory fakes in tests.
# -----------------------------------------------------------------------------

from __future__ import annotations

from abc import ABC, abstractmethod

from hf_inference.domain.entities.transport_models import TransportRequest, TransportResponse


class ITransport(ABC):
    """
    Send one request and return status, headers and a body.

    Contract
    --------
    - `stream=False`: the returned response has `content` buffered.
    - `stream=True`: the returned response has a live `stream` of byte chunks
      and the caller owns it until `aclose()`.
    - Failures of the send or of a later read surface as `TransportError`.
    """

    @abstractmethod
    async def send(self, request: TransportRequest, *, stream: bool = False) -> TransportResponse:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
