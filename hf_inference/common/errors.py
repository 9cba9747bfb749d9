# hf_inference/common/errors.py
# -----------------------------------------------------------------------------
# Every failure surfaced by the client derives from InferenceError, so callers
# can catch the whole family at once or pick out a single kind.
# -----------------------------------------------------------------------------

from typing import Optional


class InferenceError(Exception):
    """Base class for all errors raised by hf_inference."""


class ConfigurationError(InferenceError, ValueError):
    """The call cannot be built, e.g. no model and no bound endpoint."""


class TransportError(InferenceError):
    """
    The request could not be completed: the send/read itself failed, or the
    server answered with a non-success status and no decodable error envelope.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServerError(InferenceError):
    """The server answered with a `{"error": "..."}` envelope."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(InferenceError):
    """A streaming response broke the event-stream contract."""


class ShapeViolation(InferenceError, TypeError):
    """A decoded response does not match the output contract of its task."""

    def __init__(self, task: str, expected: str):
        super().__init__(f"Invalid inference output for {task}: output must be of type {expected}")
        self.task = task
        self.expected = expected
