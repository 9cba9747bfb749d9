# hf_inference/application/services/audio_inference_service.py

from typing import Any, Dict, List, Mapping, Union

from hf_inference.application.dto.audio_task_request_dto import (
    AudioClassificationArgsDTO,
    AutomaticSpeechRecognitionArgsDTO,
)
from hf_inference.application.services.base_task_service import BaseTaskService, OptionsLike
from hf_inference.application.validators.output_contracts import InferenceTask


class AudioInferenceService(BaseTaskService):
    """
    Audio tasks. The raw audio bytes are the request body; options that the
    API reads as hints travel in X-* headers instead of a JSON envelope.
    """

    async def automatic_speech_recognition(
        self,
        args: Union[AutomaticSpeechRecognitionArgsDTO, Mapping[str, Any]],
        options: OptionsLike = None,
    ) -> Dict[str, Any]:
        """Transcribe audio. Returns {text}."""
        return await self._run(
            InferenceTask.AUTOMATIC_SPEECH_RECOGNITION,
            args,
            AutomaticSpeechRecognitionArgsDTO,
            options,
            binary=True,
        )

    async def audio_classification(
        self,
        args: Union[AudioClassificationArgsDTO, Mapping[str, Any]],
        options: OptionsLike = None,
    ) -> List[Dict[str, Any]]:
        return await self._run(
            InferenceTask.AUDIO_CLASSIFICATION,
            args,
            AudioClassificationArgsDTO,
            options,
            binary=True,
        )
