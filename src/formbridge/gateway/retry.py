"""Bounded polling for the next task of a process instance."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import backoff

from formbridge import logger
from formbridge.exceptions import FetchExhaustedError

if TYPE_CHECKING:
    from formbridge.typing.models import NextTask
    from formbridge.typing.protocol import NextTaskSource

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 0.5


def _not_ready(result: NextTask | None) -> bool:
    return result is None


def _log_retry(details: dict[str, Any]) -> None:
    logger.warning(
        "Next task not ready, retrying",
        extra={"attempt": details["tries"], "wait": details["wait"]},
    )


async def fetch_next_task_with_retry(
    source: NextTaskSource,
    process_instance_id: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY,
) -> NextTask:
    """Poll for the next task with a fixed delay between attempts.

    An attempt that yields no task is retried after ``delay`` seconds, up to
    ``max_attempts`` attempts in total. An attempt that raises (for instance
    ``TransientFetchFailure``) is not retried. Cancelling the calling task
    interrupts a pending delay.

    Args:
        source (NextTaskSource): Engine polled once per attempt.
        process_instance_id (str): Process instance to poll.
        max_attempts (int): Maximum number of attempts.
        delay (float): Seconds to wait between attempts.

    Raises:
        FetchExhaustedError: If no attempt returned a task.

    Returns:
        NextTask: The next task.
    """

    @backoff.on_predicate(
        backoff.constant,
        predicate=_not_ready,
        max_tries=max_attempts,
        jitter=None,
        on_backoff=_log_retry,
        logger=None,
        interval=delay,
    )
    async def _attempt() -> NextTask | None:
        return await source.fetch_next_task(process_instance_id)

    task = await _attempt()
    if task is None:
        logger.error("Next task fetch exhausted", extra={"process_instance_id": process_instance_id})
        raise FetchExhaustedError(message="Fetching the next task failed", attempts=max_attempts)
    return task
