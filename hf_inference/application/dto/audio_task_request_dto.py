# hf_inference/application/dto/audio_task_request_dto.py

from hf_inference.application.dto.base_args_dto import BinaryTaskArgsDTO


class AutomaticSpeechRecognitionArgsDTO(BinaryTaskArgsDTO):
    pass


class AudioClassificationArgsDTO(BinaryTaskArgsDTO):
    pass
