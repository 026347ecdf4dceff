"""Workflow engine REST client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import TypeAdapter, ValidationError

from formbridge import logger
from formbridge.exceptions import GatewayError, TransientFetchFailure
from formbridge.settings import build_httpx_client_kwargs
from formbridge.typing.models import MessageResult, NextTask, VariableValue

if TYPE_CHECKING:
    from types import TracebackType

    from formbridge.settings import Settings
    from formbridge.typing.models import CompleteTaskRequest, MessageRequest

MESSAGE_PATH = "/message"
TASK_PATH = "/task"
COMPLETE_TASK_SUFFIX = "/complete"
FORM_VARIABLES_SUFFIX = "/form-variables"

_VARIABLES_ADAPTER = TypeAdapter(dict[str, VariableValue])


class EngineClient:
    """Async client for the Camunda 7 REST API."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize client.

        Args:
            settings (Settings): Runtime settings.
            transport (httpx.AsyncBaseTransport | None): Optional transport override.
        """
        self._settings = settings
        self._client = httpx.AsyncClient(
            **build_httpx_client_kwargs(settings),
            limits=httpx.Limits(max_connections=settings.engine_max_connections),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
        error_type: type[GatewayError] = GatewayError,
    ) -> Any:
        """Send one request and decode its JSON body.

        Args:
            method (str): HTTP method.
            path (str): Path relative to the engine base URL.
            params (dict[str, str] | None): Query parameters.
            payload (dict[str, Any] | None): JSON body.
            error_type (type[GatewayError]): Exception raised on failure.

        Raises:
            GatewayError: If the request fails or returns invalid JSON.

        Returns:
            Any: Decoded body, None when empty.
        """
        try:
            response = await self._client.request(method, path, params=params, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = f"{method} {path} failed with status {exc.response.status_code}"
            logger.error(message, extra={"body": exc.response.text[:500]})
            raise error_type(message=message) from exc
        except httpx.HTTPError as exc:
            message = f"{method} {path} failed: {exc}"
            logger.error(message)
            raise error_type(message=message) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise error_type(message=f"{method} {path} returned invalid JSON") from exc

    async def start_process_via_message(self, request: MessageRequest) -> MessageResult:
        """Correlate a message and return the first correlation result.

        Args:
            request (MessageRequest): Message payload.

        Raises:
            GatewayError: If the call fails or returns no result.

        Returns:
            MessageResult: Correlation result.
        """
        data = await self._request("POST", MESSAGE_PATH, payload=request.model_dump(mode="json", by_alias=True))
        if isinstance(data, list):
            data = data[0] if data else None
        if data is None:
            raise GatewayError(message=f"Message '{request.message_name}' returned no result")
        try:
            return MessageResult.model_validate(data)
        except ValidationError as exc:
            raise GatewayError(message=f"Message '{request.message_name}' returned an invalid result") from exc

    async def fetch_next_task(self, process_instance_id: str) -> NextTask | None:
        """Look up the next task of a process instance in a single attempt.

        Args:
            process_instance_id (str): Process instance to poll.

        Raises:
            TransientFetchFailure: If the engine call itself fails.

        Returns:
            NextTask | None: The first pending task, None when there is none yet.
        """
        data = await self._request(
            "GET",
            TASK_PATH,
            params={"processInstanceId": process_instance_id},
            error_type=TransientFetchFailure,
        )
        if isinstance(data, list):
            data = data[0] if data else None
        if data is None:
            return None
        try:
            return NextTask.model_validate(data)
        except ValidationError as exc:
            raise TransientFetchFailure(message="Next task payload is invalid") from exc

    async def complete_task(self, task_id: str, request: CompleteTaskRequest) -> dict[str, Any]:
        """Complete a task.

        Args:
            task_id (str): Task identifier.
            request (CompleteTaskRequest): Completion payload.

        Returns:
            dict[str, Any]: Returned variables, empty when the engine sent none.
        """
        data = await self._request(
            "POST",
            f"{TASK_PATH}/{task_id}{COMPLETE_TASK_SUFFIX}",
            payload=request.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        logger.info("Task completed", extra={"task_id": task_id, "variables": len(request.variables)})
        return data if isinstance(data, dict) else {}

    async def get_form_variables(self, task_id: str) -> dict[str, VariableValue]:
        """Return the form variables of a task.

        Args:
            task_id (str): Task identifier.

        Raises:
            GatewayError: If the call fails or the payload is invalid.

        Returns:
            dict[str, VariableValue]: Variables by name.
        """
        data = await self._request("GET", f"{TASK_PATH}/{task_id}{FORM_VARIABLES_SUFFIX}")
        try:
            return _VARIABLES_ADAPTER.validate_python(data or {})
        except ValidationError as exc:
            raise GatewayError(message=f"Form variables of task '{task_id}' are invalid") from exc
