# hf_inference/application/validators/output_contracts.py
# -----------------------------------------------------------------------------
# Responses come from the network, so their shape is checked at run time
# before they reach the caller. Each task maps to one strict pydantic type
# (no coercion, and booleans are not numbers).
# -----------------------------------------------------------------------------

import logging
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, NamedTuple, Optional, Union

from pydantic import ConfigDict, Field, TypeAdapter, ValidationError

from hf_inference.application.dto.audio_task_response_dto import (
    AudioClassificationResponseDTO,
    AutomaticSpeechRecognitionResponseDTO,
)
from hf_inference.application.dto.base_response_dto import LabelScoreDTO
from hf_inference.application.dto.image_task_response_dto import (
    ImageClassificationResponseDTO,
    ImageSegmentationResponseDTO,
    ImageToTextResponseDTO,
    ObjectDetectionResponseDTO,
)
from hf_inference.application.dto.text_task_response_dto import (
    ConversationalResponseDTO,
    FillMaskResponseDTO,
    QuestionAnswerResponseDTO,
    SummarizationResponseDTO,
    TableQuestionAnswerResponseDTO,
    TextGenerationResponseDTO,
    TokenClassificationResponseDTO,
    TranslationResponseDTO,
    ZeroShotClassificationResponseDTO,
)
from hf_inference.common.errors import ShapeViolation
from hf_inference.domain.entities.text_generation_stream import TextGenerationStreamOutput

logger = logging.getLogger(__name__)

# Models carry their own strict config; bare containers and scalars need it here
_STRICT = ConfigDict(strict=True)


class InferenceTask(str, Enum):
    FILL_MASK = "fill_mask"
    SUMMARIZATION = "summarization"
    QUESTION_ANSWER = "question_answer"
    TABLE_QUESTION_ANSWER = "table_question_answer"
    TEXT_CLASSIFICATION = "text_classification"
    TEXT_GENERATION = "text_generation"
    TEXT_GENERATION_STREAM = "text_generation_stream"
    TOKEN_CLASSIFICATION = "token_classification"
    TRANSLATION = "translation"
    ZERO_SHOT_CLASSIFICATION = "zero_shot_classification"
    CONVERSATIONAL = "conversational"
    FEATURE_EXTRACTION = "feature_extraction"
    SENTENCE_SIMILARITY = "sentence_similarity"
    AUTOMATIC_SPEECH_RECOGNITION = "automatic_speech_recognition"
    AUDIO_CLASSIFICATION = "audio_classification"
    IMAGE_CLASSIFICATION = "image_classification"
    OBJECT_DETECTION = "object_detection"
    IMAGE_SEGMENTATION = "image_segmentation"
    TEXT_TO_IMAGE = "text_to_image"
    IMAGE_TO_TEXT = "image_to_text"


def to_list(value: Any) -> Any:
    """Some tasks answer with either one object or a list of them."""
    return value if isinstance(value, list) else [value]


def list_of(item: Any) -> TypeAdapter:
    return TypeAdapter(List[item], config=_STRICT)


def non_empty_list_of(item: Any) -> TypeAdapter:
    """For tasks whose facade hands back the first element."""
    return TypeAdapter(Annotated[List[item], Field(min_length=1)], config=_STRICT)


class OutputContract(NamedTuple):
    expected: str
    adapter: TypeAdapter
    normalize: Optional[Callable[[Any], Any]] = None


OUTPUT_CONTRACTS: Dict[InferenceTask, OutputContract] = {
    InferenceTask.FILL_MASK: OutputContract(
        "Array<score: number, sequence: string, token: number, token_str: string>",
        list_of(FillMaskResponseDTO),
    ),
    InferenceTask.SUMMARIZATION: OutputContract(
        "Array<summary_text: string> (non-empty)",
        non_empty_list_of(SummarizationResponseDTO),
    ),
    InferenceTask.QUESTION_ANSWER: OutputContract(
        "<answer: string, end: number, score: number, start: number>",
        TypeAdapter(QuestionAnswerResponseDTO),
    ),
    InferenceTask.TABLE_QUESTION_ANSWER: OutputContract(
        "<aggregator: string, answer: string, cells: string[], coordinates: number[][]>",
        TypeAdapter(TableQuestionAnswerResponseDTO),
    ),
    # The API nests the label list one level deep: [[{label, score}, ...]]
    InferenceTask.TEXT_CLASSIFICATION: OutputContract(
        "Array<Array<label: string, score: number>> (non-empty)",
        non_empty_list_of(List[LabelScoreDTO]),
    ),
    InferenceTask.TEXT_GENERATION: OutputContract(
        "Array<generated_text: string> (non-empty)",
        non_empty_list_of(TextGenerationResponseDTO),
    ),
    InferenceTask.TEXT_GENERATION_STREAM: OutputContract(
        "<token: {id: number, text: string, logprob: number, special: boolean}, "
        "generated_text: string | null, details: object | null>",
        TypeAdapter(TextGenerationStreamOutput),
    ),
    InferenceTask.TOKEN_CLASSIFICATION: OutputContract(
        "Array<end: number, entity_group: string, score: number, start: number, word: string>",
        list_of(TokenClassificationResponseDTO),
        normalize=to_list,
    ),
    InferenceTask.TRANSLATION: OutputContract(
        "Array<translation_text: string> (non-empty)",
        non_empty_list_of(TranslationResponseDTO),
    ),
    InferenceTask.ZERO_SHOT_CLASSIFICATION: OutputContract(
        "Array<labels: string[], scores: number[], sequence: string>",
        list_of(ZeroShotClassificationResponseDTO),
        normalize=to_list,
    ),
    InferenceTask.CONVERSATIONAL: OutputContract(
        "<conversation: {generated_responses: string[], past_user_inputs: string[]}, "
        "generated_text: string, warnings: string[]>",
        TypeAdapter(ConversationalResponseDTO),
    ),
    # one vector per input, or a single vector for a single input
    InferenceTask.FEATURE_EXTRACTION: OutputContract(
        "Array<Array<number> | number>",
        list_of(Union[float, List[float]]),
    ),
    InferenceTask.SENTENCE_SIMILARITY: OutputContract(
        "Array<number>",
        list_of(float),
    ),
    InferenceTask.AUTOMATIC_SPEECH_RECOGNITION: OutputContract(
        "<text: string>",
        TypeAdapter(AutomaticSpeechRecognitionResponseDTO),
    ),
    InferenceTask.AUDIO_CLASSIFICATION: OutputContract(
        "Array<label: string, score: number>",
        list_of(AudioClassificationResponseDTO),
    ),
    InferenceTask.IMAGE_CLASSIFICATION: OutputContract(
        "Array<label: string, score: number>",
        list_of(ImageClassificationResponseDTO),
    ),
    InferenceTask.OBJECT_DETECTION: OutputContract(
        "Array<{label: string, score: number, box: {xmin: number, ymin: number, xmax: number, ymax: number}}>",
        list_of(ObjectDetectionResponseDTO),
    ),
    InferenceTask.IMAGE_SEGMENTATION: OutputContract(
        "Array<label: string, mask: string, score: number>",
        list_of(ImageSegmentationResponseDTO),
    ),
    InferenceTask.TEXT_TO_IMAGE: OutputContract(
        "bytes (non-empty)",
        TypeAdapter(Annotated[bytes, Field(min_length=1)], config=_STRICT),
    ),
    InferenceTask.IMAGE_TO_TEXT: OutputContract(
        "Array<generated_text: string> (non-empty)",
        non_empty_list_of(ImageToTextResponseDTO),
    ),
}


def parse_output(task: InferenceTask, value: Any) -> Any:
    """
    Validate `value` against the task's contract and return the parsed
    result (response DTOs, or the stream event model). Raises ShapeViolation.
    """
    contract = OUTPUT_CONTRACTS[task]
    if contract.normalize is not None:
        value = contract.normalize(value)
    try:
        return contract.adapter.validate_python(value)
    except ValidationError as e:
        logger.warning("Output of %s does not match %s", task.value, contract.expected)
        logger.debug("Rejected %s output: %r (%s)", task.value, value, e)
        raise ShapeViolation(task.value, contract.expected) from e


def validate_output(task: InferenceTask, value: Any) -> Any:
    """
    Return `value` (normalized to a list where the task allows a bare object)
    if it satisfies the task's contract, otherwise raise ShapeViolation.
    The value itself is never modified.
    """
    contract = OUTPUT_CONTRACTS[task]
    if contract.normalize is not None:
        value = contract.normalize(value)
    parse_output(task, value)
    return value
