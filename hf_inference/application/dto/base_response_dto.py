# hf_inference/application/dto/base_response_dto.py

from pydantic import BaseModel, ConfigDict


class ResponseDTO(BaseModel):
    """
    Shape of a response body as the Inference API sends it.

    Strict: nothing is coerced, so "0.9" is not a number and True is not
    a number either. Unknown members are ignored.
    """

    model_config = ConfigDict(strict=True)


class LabelScoreDTO(ResponseDTO):
    label: str
    score: float
