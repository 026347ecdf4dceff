"""Task-level operations combining the engine gateway and the form pipelines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formbridge import logger
from formbridge.exceptions import GatewayError
from formbridge.gateway.retry import fetch_next_task_with_retry
from formbridge.logging import task_log_context
from formbridge.orchestrator import (
    form_document_from_variables,
    load_form_document,
    prepare_display_form,
    prepare_submission,
    render_form_document,
)
from formbridge.processing import prefill_values
from formbridge.typing.models import CompleteTaskRequest, MessageRequest, TaskCompletion
from formbridge.variables import build_task_variables

if TYPE_CHECKING:
    from formbridge.settings import Settings
    from formbridge.typing.protocol import WorkflowEngine

TOKEN_MESSAGE_NAME = "getToken"
TOKEN_VARIABLE = "token"


class TaskService:
    """Serves task forms to the client UI and submits them back to the engine."""

    def __init__(self, engine: WorkflowEngine, settings: Settings) -> None:
        """Initialize service.

        Args:
            engine (WorkflowEngine): Workflow engine gateway.
            settings (Settings): Runtime settings.
        """
        self._engine = engine
        self._settings = settings

    async def get_token(self) -> str:
        """Obtain an access token through the engine's ``getToken`` message flow.

        Raises:
            GatewayError: If the result carries no token.

        Returns:
            str: Access token.
        """
        credentials = {
            "username": self._settings.token_username,
            "grant_type": self._settings.token_grant_type,
            "scope": self._settings.token_scope,
            "client_id": self._settings.token_client_id,
            "auth_code": self._settings.token_auth_code,
        }
        request = MessageRequest(
            message_name=TOKEN_MESSAGE_NAME,
            business_key="1",
            process_variables=build_task_variables(
                {name: value for name, value in credentials.items() if value is not None},
            ),
        )
        result = await self._engine.start_process_via_message(request)
        token = result.variables.get(TOKEN_VARIABLE)
        if token is None or token.value is None:
            raise GatewayError(message="Token variable missing from message result")
        logger.info("Token retrieved")
        return str(token.value)

    async def load_task_form(self, task_id: str) -> str:
        """Return the display-ready form of a task as JSON.

        Args:
            task_id (str): Task identifier.

        Returns:
            str: Nested, type-keyed form document.
        """
        with task_log_context(task_id=task_id):
            variables = await self._engine.get_form_variables(task_id)
            display = prepare_display_form(form_document_from_variables(variables))
            if self._settings.prefill_component_types:
                forest = prefill_values(display.components, variables, types=self._settings.prefill_component_types)
                display = display.model_copy(update={"components": forest})
            return render_form_document(display)

    async def complete_task(
        self,
        task_id: str,
        process_instance_id: str,
        variables_json: str,
    ) -> TaskCompletion:
        """Submit a filled form and return the form of the next task.

        Args:
            task_id (str): Task being completed.
            process_instance_id (str): Process instance the task belongs to.
            variables_json (str): Nested form document sent back by the UI.

        Returns:
            TaskCompletion: Next task identity and its display-ready form.
        """
        with task_log_context(task_id=task_id, process_instance_id=process_instance_id):
            submission = prepare_submission(
                load_form_document(variables_json),
                scheme=self._settings.submission_path_scheme,
            )
            variables = build_task_variables(
                submission,
                extra={
                    "clientIdentifier": self._settings.client_identifier,
                    "clientAddress": self._settings.client_address,
                },
            )
            await self._engine.complete_task(task_id, CompleteTaskRequest(variables=variables))

            next_task = await fetch_next_task_with_retry(
                self._engine,
                process_instance_id,
                max_attempts=self._settings.next_task_max_attempts,
                delay=self._settings.next_task_retry_delay,
            )
            logger.info("Moved to next task", extra={"next_task_id": next_task.id})

        view_json = await self.load_task_form(next_task.id)
        return TaskCompletion(next_task_id=next_task.id, next_task_name=next_task.name, view_json=view_json)
