"""Structlog setup shared by the CLI, the pipelines and the engine gateway.

Log calls across the package pass their structured payload through
``extra={...}``; the payload is lifted to top-level keys before rendering so
that JSON logs stay flat. Task-scoped keys (task and process instance ids)
are bound once per operation with :func:`task_log_context`.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

from formbridge.settings import Settings, get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import EventDict, Processor

PACKAGE_LOGGER_NAME = "formbridge"

_LOGGING_CONFIGURED = False


def _lift_extra(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Merge the ``extra`` payload into the event, without clobbering bound keys."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def _event_as_message(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Expose the structlog event under a "message" key.

    Args:
        logger: The logger instance (unused).
        method_name: The logging method name (unused).
        event_dict: The original event dictionary.

    Returns:
        The event dictionary with "message" instead of "event".
    """
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _stdlib_handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def _processors(*, json_output: bool) -> list[Processor]:
    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        _lift_extra,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _event_as_message,
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(*, settings: Settings | None = None, force: bool = False) -> None:
    """Route structlog events through stdlib handlers on stderr and the optional log file.

    Args:
        settings (Settings | None): Runtime settings, loaded when omitted.
        force (bool): Reconfigure even when logging is already set up.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603

    if _LOGGING_CONFIGURED and not force:
        return

    config = settings or get_settings()
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=_stdlib_handlers(config.log_file),
        force=force,
    )
    structlog.configure(
        processors=_processors(json_output=config.log_json),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> structlog.BoundLogger:
    """Return a package logger, configuring logging lazily."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return structlog.get_logger(name)


@contextmanager
def task_log_context(*, task_id: str, process_instance_id: str | None = None) -> Iterator[None]:
    """Bind task identifiers to every log event emitted inside the block."""
    bound = {"task_id": task_id}
    if process_instance_id is not None:
        bound["process_instance_id"] = process_instance_id
    with structlog.contextvars.bound_contextvars(**bound):
        yield
