"""Gateway interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from formbridge.typing.models import (
        CompleteTaskRequest,
        MessageRequest,
        MessageResult,
        NextTask,
        VariableValue,
    )


class NextTaskSource(Protocol):
    """Anything that can be polled once for the next task of a process."""

    async def fetch_next_task(self, process_instance_id: str) -> NextTask | None:
        """Fetch the next task in a single attempt.

        Args:
            process_instance_id: Process instance to poll.

        Returns:
            NextTask | None: The task, or None when the engine has none ready yet.
        """


class WorkflowEngine(NextTaskSource, Protocol):
    """Workflow engine operations used by the task service."""

    async def start_process_via_message(self, request: MessageRequest) -> MessageResult:
        """Correlate a message and return its result.

        Args:
            request: Message payload.

        Returns:
            MessageResult: Correlation result with variables.
        """

    async def get_form_variables(self, task_id: str) -> dict[str, VariableValue]:
        """Return the form variables of a task.

        Args:
            task_id: Task identifier.

        Returns:
            dict[str, VariableValue]: Variables by name.
        """

    async def complete_task(self, task_id: str, request: CompleteTaskRequest) -> dict[str, object]:
        """Complete a task with submitted variables.

        Args:
            task_id: Task identifier.
            request: Completion payload.

        Returns:
            dict[str, object]: Raw engine response.
        """
