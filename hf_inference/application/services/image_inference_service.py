# hf_inference/application/services/image_inference_service.py

from typing import Any, Dict, List, Mapping, Union

from hf_inference.application.dto.image_task_request_dto import (
    ImageClassificationArgsDTO,
    ImageSegmentationArgsDTO,
    ImageToTextArgsDTO,
    ObjectDetectionArgsDTO,
    TextToImageArgsDTO,
)
from hf_inference.application.services.base_task_service import BaseTaskService, OptionsLike
from hf_inference.application.validators.output_contracts import InferenceTask

Args = Mapping[str, Any]


class ImageInferenceService(BaseTaskService):
    """
    Vision tasks. Image inputs are sent as raw bytes; `text_to_image` is the
    one task that sends JSON and receives raw image bytes back.
    """

    async def image_classification(
        self, args: Union[ImageClassificationArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        return await self._run(
            InferenceTask.IMAGE_CLASSIFICATION, args, ImageClassificationArgsDTO, options, binary=True
        )

    async def object_detection(
        self, args: Union[ObjectDetectionArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """
        Returns:
            List of {label, score, box: {xmin, ymin, xmax, ymax}} in pixel coordinates.
        """
        return await self._run(
            InferenceTask.OBJECT_DETECTION, args, ObjectDetectionArgsDTO, options, binary=True
        )

    async def image_segmentation(
        self, args: Union[ImageSegmentationArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """Returns {label, score, mask} per segment; `mask` is a base64-encoded image."""
        return await self._run(
            InferenceTask.IMAGE_SEGMENTATION, args, ImageSegmentationArgsDTO, options, binary=True
        )

    async def image_to_text(
        self, args: Union[ImageToTextArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        res = await self._run(InferenceTask.IMAGE_TO_TEXT, args, ImageToTextArgsDTO, options, binary=True)
        return res[0]

    async def text_to_image(
        self, args: Union[TextToImageArgsDTO, Args], options: OptionsLike = None
    ) -> bytes:
        """Generate an image from a prompt. Returns the encoded image bytes as served."""
        return await self._run(InferenceTask.TEXT_TO_IMAGE, args, TextToImageArgsDTO, options, blob=True)
