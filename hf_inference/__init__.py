"""
Client for the Hugging Face Inference API.

Builds task requests, retries once when a model is still loading, decodes
token streams from server-sent events, and checks every response against the
shape its task declares.

Example usage:
    from hf_inference import HfInference

    hf = HfInference("hf_...")
    summary = await hf.text.summarization({"model": "facebook/bart-large-cnn", "inputs": text})
"""

from .application.hf_inference import HfInference
from .application.validators.output_contracts import InferenceTask, validate_output
from .common.errors import (
    ConfigurationError,
    InferenceError,
    ProtocolError,
    ServerError,
    ShapeViolation,
    TransportError,
)
from .domain.entities.inference_options import EffectiveOptions, InferenceOptions, merge_options
from .domain.entities.text_generation_stream import TextGenerationStreamOutput
from .infrastructure.hf_inference_client import HfInferenceClient
from .infrastructure.httpx_transport import HttpxTransport

__all__ = [
    "HfInference",
    "HfInferenceClient",
    "HttpxTransport",
    "InferenceOptions",
    "EffectiveOptions",
    "merge_options",
    "InferenceTask",
    "validate_output",
    "TextGenerationStreamOutput",
    "InferenceError",
    "ConfigurationError",
    "TransportError",
    "ServerError",
    "ProtocolError",
    "ShapeViolation",
]
