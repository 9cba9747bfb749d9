# hf_inference/application/dto/image_task_response_dto.py

from hf_inference.application.dto.base_response_dto import LabelScoreDTO, ResponseDTO


class ImageClassificationResponseDTO(LabelScoreDTO):
    pass


class BoundingBoxDTO(ResponseDTO):
    xmin: float
    ymin: float
    xmax: float
    ymax: float


class ObjectDetectionResponseDTO(LabelScoreDTO):
    box: BoundingBoxDTO


class ImageSegmentationResponseDTO(LabelScoreDTO):
    # base64-encoded PNG
    mask: str


class ImageToTextResponseDTO(ResponseDTO):
    generated_text: str
