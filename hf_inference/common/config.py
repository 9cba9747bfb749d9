# hf_inference/common/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api-inference.huggingface.co/models/"


class Settings(BaseSettings):
    # Load from .env / environment with the HF_ prefix; ignore stray keys
    model_config = SettingsConfigDict(
        env_prefix="HF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Bearer token; leave unset for anonymous (rate-limited) access
    api_key: Optional[str] = None

    api_base_url: str = DEFAULT_API_BASE_URL

    # Private deployment URL, used verbatim instead of api_base_url + model
    endpoint_url: Optional[str] = None

    # Applied by the transport to unary calls only; streams never time out
    request_timeout: Optional[float] = 60.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Construct with no args so pydantic-settings reads .env / env automatically
    return Settings()
