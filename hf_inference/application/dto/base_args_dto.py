# hf_inference/application/dto/base_args_dto.py

from typing import Optional
from pydantic import BaseModel, ConfigDict


class TaskArgsDTO(BaseModel):
    # Model-specific fields beyond the declared ones are forwarded as-is
    model_config = ConfigDict(extra="allow", protected_namespaces=())

    # Optional when the client is bound to an endpoint
    model: Optional[str] = None


class BinaryTaskArgsDTO(TaskArgsDTO):
    data: bytes
