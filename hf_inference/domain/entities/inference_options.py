# hf_inference/domain/entities/inference_options.py

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hf_inference.common.errors import ConfigurationError

# Built-in defaults, the lowest layer of the precedence chain
OPTION_DEFAULTS: Dict[str, bool] = {
    "retry_on_unavailable": True,
    "use_cache": True,
    "skip_model_load": False,
    "use_accelerated_hardware": False,
    "wait_for_model": False,
}


class InferenceOptions(BaseModel):
    """
    Options accepted at client level (defaults) and per call.

    Every field is optional: `None` means "not set at this level" so that a
    lower layer's value shows through. Both the Python names and the wire
    names used by the Inference API are accepted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # If a request 503s and wait_for_model is not set, retry once with wait_for_model=True
    retry_on_unavailable: Optional[bool] = Field(default=None, alias="retry_on_error")
    # Set False to bypass the server-side result cache (non-deterministic models)
    use_cache: Optional[bool] = None
    # Do not load the model if it is not already available
    skip_model_load: Optional[bool] = Field(default=None, alias="dont_load_model")
    # Run on GPU instead of CPU
    use_accelerated_hardware: Optional[bool] = Field(default=None, alias="use_gpu")
    # Block until the model is loaded instead of receiving 503
    wait_for_model: Optional[bool] = None
    extra_headers: Optional[Dict[str, str]] = Field(default=None, alias="headers")

    @classmethod
    def coerce(
        cls, value: Union["InferenceOptions", Mapping[str, Any], None]
    ) -> Optional["InferenceOptions"]:
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid inference options: {e}") from e


class EffectiveOptions(BaseModel):
    """Fully resolved options for one attempt of one call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    retry_on_unavailable: bool = Field(alias="retry_on_error")
    use_cache: bool
    skip_model_load: bool = Field(alias="dont_load_model")
    use_accelerated_hardware: bool = Field(alias="use_gpu")
    wait_for_model: bool
    extra_headers: Dict[str, str] = Field(default_factory=dict, alias="headers")

    def to_wire(self) -> Dict[str, bool]:
        """The `options` member of a JSON request body; headers travel as headers."""
        return self.model_dump(by_alias=True, exclude={"extra_headers"})


def merge_options(
    client_defaults: Optional[InferenceOptions],
    call_options: Optional[InferenceOptions],
    *,
    wait_for_model: Optional[bool] = None,
) -> EffectiveOptions:
    """
    Resolve options in a fixed order:
    built-in defaults < client defaults < call options < forced overrides.

    Scalars are replaced field by field; `extra_headers` is unioned with the
    later layer winning per header name.
    """
    resolved: Dict[str, bool] = dict(OPTION_DEFAULTS)
    headers: Dict[str, str] = {}

    for layer in (client_defaults, call_options):
        if layer is None:
            continue
        for name in OPTION_DEFAULTS:
            value = getattr(layer, name)
            if value is not None:
                resolved[name] = value
        if layer.extra_headers:
            headers.update(layer.extra_headers)

    if wait_for_model is not None:
        resolved["wait_for_model"] = wait_for_model

    return EffectiveOptions(**resolved, extra_headers=headers)
