# hf_inference/application/services/text_inference_service.py

from typing import Any, AsyncGenerator, Dict, List, Mapping, Union

from hf_inference.application.dto.text_task_request_dto import (
    ConversationalArgsDTO,
    FeatureExtractionArgsDTO,
    FillMaskArgsDTO,
    QuestionAnswerArgsDTO,
    SentenceSimilarityArgsDTO,
    SummarizationArgsDTO,
    TableQuestionAnswerArgsDTO,
    TextClassificationArgsDTO,
    TextGenerationArgsDTO,
    TokenClassificationArgsDTO,
    TranslationArgsDTO,
    ZeroShotClassificationArgsDTO,
)
from hf_inference.application.services.base_task_service import BaseTaskService, OptionsLike
from hf_inference.application.validators.output_contracts import InferenceTask, parse_output
from hf_inference.domain.entities.inference_options import InferenceOptions
from hf_inference.domain.entities.text_generation_stream import TextGenerationStreamOutput

Args = Mapping[str, Any]


class TextInferenceService(BaseTaskService):
    """
    NLP tasks: every call sends a JSON body and gets JSON back.
    """

    async def fill_mask(
        self, args: Union[FillMaskArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """
        Guess the word that fills the model's mask token in `inputs`.

        Returns:
            List of {score, sequence, token, token_str}, most probable first.
        """
        return await self._run(InferenceTask.FILL_MASK, args, FillMaskArgsDTO, options)

    async def summarization(
        self, args: Union[SummarizationArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        """Summarize a long text. Returns {summary_text}."""
        res = await self._run(InferenceTask.SUMMARIZATION, args, SummarizationArgsDTO, options)
        return res[0]

    async def question_answer(
        self, args: Union[QuestionAnswerArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        """
        Answer a question from a context text.

        Returns:
            {answer, score, start, end}; start/end are character offsets into the context.
        """
        return await self._run(InferenceTask.QUESTION_ANSWER, args, QuestionAnswerArgsDTO, options)

    async def table_question_answer(
        self, args: Union[TableQuestionAnswerArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        return await self._run(InferenceTask.TABLE_QUESTION_ANSWER, args, TableQuestionAnswerArgsDTO, options)

    async def text_classification(
        self, args: Union[TextClassificationArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """Returns the [{label, score}] list for the single input text."""
        res = await self._run(InferenceTask.TEXT_CLASSIFICATION, args, TextClassificationArgsDTO, options)
        return res[0]

    async def text_generation(
        self, args: Union[TextGenerationArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        """Continue a prompt. Returns {generated_text} for the first sequence."""
        res = await self._run(InferenceTask.TEXT_GENERATION, args, TextGenerationArgsDTO, options)
        return res[0]

    async def text_generation_stream(
        self, args: Union[TextGenerationArgsDTO, Args], options: OptionsLike = None
    ) -> AsyncGenerator[TextGenerationStreamOutput, None]:
        """
        Stream a generation token by token.

        Only text-generation-inference backed models support this. Every
        event is checked against the stream event contract before it is
        yielded; the last one carries `generated_text` and `details`.
        A malformed event ends the iteration with ShapeViolation.
        """
        events = self.inference_client.streaming_request(
            self._task_request(args, TextGenerationArgsDTO),
            InferenceOptions.coerce(options),
            include_credentials=self.include_credentials,
        )
        try:
            async for event in events:
                yield parse_output(InferenceTask.TEXT_GENERATION_STREAM, event)
        finally:
            await events.aclose()

    async def token_classification(
        self, args: Union[TokenClassificationArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """
        Named entity recognition and similar tagging.

        The API may answer with a single entity object instead of a list; the
        result is always a list of {entity_group, score, word, start, end}.
        """
        return await self._run(InferenceTask.TOKEN_CLASSIFICATION, args, TokenClassificationArgsDTO, options)

    async def translation(
        self, args: Union[TranslationArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        res = await self._run(InferenceTask.TRANSLATION, args, TranslationArgsDTO, options)
        return res[0]

    async def zero_shot_classification(
        self, args: Union[ZeroShotClassificationArgsDTO, Args], options: OptionsLike = None
    ) -> List[Dict[str, Any]]:
        """
        Score `inputs` against `parameters.candidate_labels`.

        Returns one {sequence, labels, scores} per input, always as a list.
        """
        return await self._run(InferenceTask.ZERO_SHOT_CLASSIFICATION, args, ZeroShotClassificationArgsDTO, options)

    async def conversational(
        self, args: Union[ConversationalArgsDTO, Args], options: OptionsLike = None
    ) -> Dict[str, Any]:
        """One chat turn. Pass the previous turns back in to keep the conversation going."""
        return await self._run(InferenceTask.CONVERSATIONAL, args, ConversationalArgsDTO, options)

    async def feature_extraction(
        self, args: Union[FeatureExtractionArgsDTO, Args], options: OptionsLike = None
    ) -> List[Any]:
        """Embeddings: a vector per input, or a flat vector for a single sentence."""
        return await self._run(InferenceTask.FEATURE_EXTRACTION, args, FeatureExtractionArgsDTO, options)

    async def sentence_similarity(
        self, args: Union[SentenceSimilarityArgsDTO, Args], options: OptionsLike = None
    ) -> List[float]:
        return await self._run(InferenceTask.SENTENCE_SIMILARITY, args, SentenceSimilarityArgsDTO, options)
