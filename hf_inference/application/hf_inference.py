# hf_inference/application/hf_inference.py

from typing import Optional

from hf_inference.application.services.audio_inference_service import AudioInferenceService
from hf_inference.application.services.image_inference_service import ImageInferenceService
from hf_inference.application.services.text_inference_service import TextInferenceService
from hf_inference.common.config import Settings
from hf_inference.domain.contracts.i_transport import ITransport
from hf_inference.infrastructure.hf_inference_client import HfInferenceClient, OptionsLike


class HfInference:
    """
    Entry point: one client shared by the text, audio and image task services.

    Example usage:
        async with HfInference(api_key) as hf:
            res = await hf.text.fill_mask({"model": "bert-base-uncased", "inputs": "Paris is the [MASK] of France."})
            async for event in hf.text.text_generation_stream({"model": "gpt2", "inputs": "Hello"}):
                print(event.token.text, end="")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_options: OptionsLike = None,
        endpoint_url: Optional[str] = None,
        *,
        transport: Optional[ITransport] = None,
        include_credentials: bool = False,
        settings: Optional[Settings] = None,
        client: Optional[HfInferenceClient] = None,
    ):
        self.client = client or HfInferenceClient(
            api_key,
            default_options,
            endpoint_url,
            transport=transport,
            settings=settings,
        )
        self.include_credentials = include_credentials

        self.text = TextInferenceService(self.client, include_credentials=include_credentials)
        self.audio = AudioInferenceService(self.client, include_credentials=include_credentials)
        self.image = ImageInferenceService(self.client, include_credentials=include_credentials)

    def endpoint(self, endpoint_url: str) -> "HfInference":
        """Same configuration, bound to `endpoint_url` instead of the public API."""
        return HfInference(
            client=self.client.endpoint(endpoint_url),
            include_credentials=self.include_credentials,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HfInference":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
