# hf_inference/application/services/base_task_service.py

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from hf_inference.application.dto.base_args_dto import TaskArgsDTO
from hf_inference.application.validators.output_contracts import InferenceTask, validate_output
from hf_inference.common.errors import ConfigurationError
from hf_inference.domain.contracts.i_inference_client import IInferenceClient
from hf_inference.domain.entities.inference_options import InferenceOptions
from hf_inference.domain.entities.task_request import TaskRequest

ArgsT = TypeVar("ArgsT", bound=TaskArgsDTO)
OptionsLike = Union[InferenceOptions, Mapping[str, Any], None]


class BaseTaskService:
    def __init__(
        self,
        inference_client: IInferenceClient,
        default_model: Optional[str] = None,
        *,
        include_credentials: bool = False,
    ):
        """
        :param inference_client:    Concrete IInferenceClient (unary + streaming dispatch).
        :param default_model:       Model id used when the task arguments name none.
        :param include_credentials: Attach ambient credentials (cookies) to every request.
        """
        self.inference_client = inference_client
        self.default_model = default_model
        self.include_credentials = include_credentials

    def _task_request(self, args: Union[ArgsT, Mapping[str, Any]], dto: Type[ArgsT]) -> TaskRequest:
        if not isinstance(args, dto):
            try:
                args = dto.model_validate(dict(args))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid arguments for {dto.__name__}: {e}") from e
        return TaskRequest.from_args(args, default_model=self.default_model)

    async def _run(
        self,
        task: InferenceTask,
        args: Union[ArgsT, Mapping[str, Any]],
        dto: Type[ArgsT],
        options: OptionsLike,
        *,
        binary: bool = False,
        blob: bool = False,
    ) -> Any:
        """Dispatch one unary call and hand the result through the task's contract."""
        response = await self.inference_client.request(
            self._task_request(args, dto),
            InferenceOptions.coerce(options),
            binary=binary,
            blob=blob,
            include_credentials=self.include_credentials,
        )
        return validate_output(task, response)
