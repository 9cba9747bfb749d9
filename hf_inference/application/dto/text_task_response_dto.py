# hf_inference/application/dto/text_task_response_dto.py

from typing import List

from hf_inference.application.dto.base_response_dto import ResponseDTO


class FillMaskResponseDTO(ResponseDTO):
    score: float
    sequence: str
    token: int
    token_str: str


class SummarizationResponseDTO(ResponseDTO):
    summary_text: str


class QuestionAnswerResponseDTO(ResponseDTO):
    answer: str
    # character offsets into the context
    start: int
    end: int
    score: float


class TableQuestionAnswerResponseDTO(ResponseDTO):
    aggregator: str
    answer: str
    cells: List[str]
    # (row, column) pairs of the cells used
    coordinates: List[List[int]]


class TextGenerationResponseDTO(ResponseDTO):
    generated_text: str


class TokenClassificationResponseDTO(ResponseDTO):
    entity_group: str
    score: float
    word: str
    start: int
    end: int


class TranslationResponseDTO(ResponseDTO):
    translation_text: str


class ZeroShotClassificationResponseDTO(ResponseDTO):
    sequence: str
    labels: List[str]
    scores: List[float]


class ConversationDTO(ResponseDTO):
    generated_responses: List[str]
    past_user_inputs: List[str]


class ConversationalResponseDTO(ResponseDTO):
    conversation: ConversationDTO
    generated_text: str
    warnings: List[str]
