# hf_inference/domain/contracts/i_inference_client.py
# -----------------------------------------------------------------------------
# Task services depend on this interface only. It exposes the two dispatch
# paths (unary and streaming); neither knows anything about task semantics.
# -----------------------------------------------------------------------------

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncGenerator, Optional

from hf_inference.domain.entities.inference_options import InferenceOptions
from hf_inference.domain.entities.task_request import TaskRequest


class IInferenceClient(ABC):
    """
    Generic contract for calling an Inference API model.

    Design notes
    ------------
    - `request` returns the decoded JSON value (or raw bytes in blob mode)
      without checking its shape; validation belongs to the caller.
    - `streaming_request` returns an async iterator of decoded SSE `data`
      payloads. It is finite and cannot be restarted.
    """

    @abstractmethod
    async def request(
        self,
        task_request: TaskRequest,
        options: Optional[InferenceOptions] = None,
        *,
        binary: bool = False,
        blob: bool = False,
        include_credentials: bool = False,
    ) -> Any:
        raise NotImplementedError

    @abstractmethod
    def streaming_request(
        self,
        task_request: TaskRequest,
        options: Optional[InferenceOptions] = None,
        *,
        include_credentials: bool = False,
    ) -> AsyncGenerator[Any, None]:
        raise NotImplementedError
