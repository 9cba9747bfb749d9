# hf_inference/domain/entities/task_request.py

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class TaskRequest:
    """
    What a task facade hands to a dispatcher: either JSON task fields
    (`inputs`, `parameters`, ...) or an opaque binary buffer, plus the
    target model when one is known.
    """

    model: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    data: Optional[bytes] = None

    @property
    def is_binary(self) -> bool:
        return self.data is not None

    @classmethod
    def from_args(cls, args: BaseModel, *, default_model: Optional[str] = None) -> "TaskRequest":
        """Split a task argument DTO into model, JSON fields and raw data."""
        fields = args.model_dump(exclude_none=True)
        model = fields.pop("model", None) or default_model
        data = fields.pop("data", None)
        if data is not None:
            return cls(model=model, data=bytes(data))
        return cls(model=model, payload=fields)
