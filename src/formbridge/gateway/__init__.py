"""Workflow engine gateway."""

from formbridge.gateway.engine import EngineClient
from formbridge.gateway.retry import fetch_next_task_with_retry

__all__ = ["EngineClient", "fetch_next_task_with_retry"]
