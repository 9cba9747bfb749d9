# hf_inference/application/dto/image_task_request_dto.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from hf_inference.application.dto.base_args_dto import BinaryTaskArgsDTO, TaskArgsDTO


class ImageClassificationArgsDTO(BinaryTaskArgsDTO):
    pass


class ObjectDetectionArgsDTO(BinaryTaskArgsDTO):
    pass


class ImageSegmentationArgsDTO(BinaryTaskArgsDTO):
    pass


class ImageToTextArgsDTO(BinaryTaskArgsDTO):
    pass


class TextToImageParametersDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    # what not to include in the image
    negative_prompt: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    num_inference_steps: Optional[int] = None
    guidance_scale: Optional[float] = None


class TextToImageArgsDTO(TaskArgsDTO):
    inputs: str
    parameters: Optional[TextToImageParametersDTO] = None
