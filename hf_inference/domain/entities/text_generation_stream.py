# hf_inference/domain/entities/text_generation_stream.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TextGenerationStreamFinishReason(str, Enum):
    # number of generated tokens == max_new_tokens
    LENGTH = "length"
    # the model generated its end of sequence token
    END_OF_SEQUENCE_TOKEN = "eos_token"
    # the model generated a text included in stop_sequences
    STOP_SEQUENCE = "stop_sequence"


class StreamModel(BaseModel):
    # Events come straight off the wire: no coercion
    model_config = ConfigDict(strict=True)


class TextGenerationStreamToken(StreamModel):
    id: int
    text: str
    logprob: float
    # special tokens can be skipped when concatenating
    special: bool


class TextGenerationStreamPrefillToken(StreamModel):
    id: int
    text: str
    # the first prompt token has no logprob
    logprob: Optional[float] = None


class TextGenerationStreamBestOfSequence(StreamModel):
    generated_text: str
    # the wire value is a plain string, matched against the enum values
    finish_reason: TextGenerationStreamFinishReason = Field(strict=False)
    generated_tokens: int
    seed: Optional[int] = None
    prefill: List[TextGenerationStreamPrefillToken] = []
    tokens: List[TextGenerationStreamToken] = []


class TextGenerationStreamDetails(StreamModel):
    finish_reason: TextGenerationStreamFinishReason = Field(strict=False)
    generated_tokens: int
    seed: Optional[int] = None
    prefill: List[TextGenerationStreamPrefillToken] = []
    tokens: List[TextGenerationStreamToken] = []
    best_of_sequences: Optional[List[TextGenerationStreamBestOfSequence]] = None


class TextGenerationStreamOutput(StreamModel):
    """
    One event of a streamed generation. `generated_text` and `details` are
    only populated on the final event.
    """

    token: TextGenerationStreamToken
    generated_text: Optional[str] = None
    details: Optional[TextGenerationStreamDetails] = None
