# hf_inference/application/dto/text_task_request_dto.py

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict

from hf_inference.application.dto.base_args_dto import TaskArgsDTO


class TaskParametersDTO(BaseModel):
    model_config = ConfigDict(extra="allow")


class FillMaskArgsDTO(TaskArgsDTO):
    inputs: str


class SummarizationParametersDTO(TaskParametersDTO):
    max_length: Optional[int] = None
    # soft limit, in seconds (0-120)
    max_time: Optional[float] = None
    min_length: Optional[int] = None
    repetition_penalty: Optional[float] = None
    temperature: Optional[float] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None


class SummarizationArgsDTO(TaskArgsDTO):
    inputs: str
    parameters: Optional[SummarizationParametersDTO] = None


class QuestionAnswerInputsDTO(BaseModel):
    context: str
    question: str


class QuestionAnswerArgsDTO(TaskArgsDTO):
    inputs: QuestionAnswerInputsDTO


class TableQuestionAnswerInputsDTO(BaseModel):
    query: str
    # dict of columns; all lists must have the same length
    table: Dict[str, List[str]]


class TableQuestionAnswerArgsDTO(TaskArgsDTO):
    inputs: TableQuestionAnswerInputsDTO


class TextClassificationArgsDTO(TaskArgsDTO):
    inputs: str


class TextGenerationParametersDTO(TaskParametersDTO):
    do_sample: Optional[bool] = None
    max_new_tokens: Optional[int] = None
    max_time: Optional[float] = None
    num_return_sequences: Optional[int] = None
    repetition_penalty: Optional[float] = None
    return_full_text: Optional[bool] = None
    temperature: Optional[float] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None


class TextGenerationArgsDTO(TaskArgsDTO):
    inputs: str
    parameters: Optional[TextGenerationParametersDTO] = None


class TokenClassificationParametersDTO(TaskParametersDTO):
    aggregation_strategy: Optional[Literal["none", "simple", "first", "average", "max"]] = None


class TokenClassificationArgsDTO(TaskArgsDTO):
    inputs: str
    parameters: Optional[TokenClassificationParametersDTO] = None


class TranslationArgsDTO(TaskArgsDTO):
    inputs: str


class ZeroShotClassificationParametersDTO(TaskParametersDTO):
    candidate_labels: List[str]
    multi_label: Optional[bool] = None


class ZeroShotClassificationArgsDTO(TaskArgsDTO):
    inputs: Union[str, List[str]]
    parameters: ZeroShotClassificationParametersDTO


class ConversationalInputsDTO(BaseModel):
    text: str
    generated_responses: Optional[List[str]] = None
    past_user_inputs: Optional[List[str]] = None


class ConversationalArgsDTO(TaskArgsDTO):
    inputs: ConversationalInputsDTO
    parameters: Optional[SummarizationParametersDTO] = None


class FeatureExtractionArgsDTO(TaskArgsDTO):
    inputs: Union[str, List[str]]


class SentenceSimilarityArgsDTO(TaskArgsDTO):
    # e.g. {"source_sentence": ..., "sentences": [...]}
    inputs: Union[Dict[str, Any], List[Dict[str, Any]]]
