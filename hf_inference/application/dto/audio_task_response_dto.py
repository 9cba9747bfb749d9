# hf_inference/application/dto/audio_task_response_dto.py

from hf_inference.application.dto.base_response_dto import LabelScoreDTO, ResponseDTO


class AutomaticSpeechRecognitionResponseDTO(ResponseDTO):
    text: str


class AudioClassificationResponseDTO(LabelScoreDTO):
    pass
