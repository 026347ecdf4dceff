"""Wrapping of submitted values into the engine variable envelope."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from formbridge.typing.enums import VariableType
from formbridge.typing.models import VariableValue

if TYPE_CHECKING:
    from collections.abc import Mapping

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def infer_variable_type(value: Any) -> VariableType:
    """Return the engine type matching a Python value.

    Args:
        value (Any): Submitted value.

    Returns:
        VariableType: Declared engine type.
    """
    if value is None:
        return VariableType.NULL
    if isinstance(value, bool):
        return VariableType.BOOLEAN
    if isinstance(value, int):
        return VariableType.INTEGER if _INT32_MIN <= value <= _INT32_MAX else VariableType.LONG
    if isinstance(value, float):
        return VariableType.DOUBLE
    if isinstance(value, dict | list):
        return VariableType.JSON
    return VariableType.STRING


def wrap_variable(value: Any) -> VariableValue:
    """Wrap a value as ``{value, type}``; JSON values are sent serialized."""
    variable_type = infer_variable_type(value)
    if variable_type == VariableType.JSON:
        return VariableValue(value=json.dumps(value), type=variable_type.to_str())
    if variable_type == VariableType.STRING and not isinstance(value, str):
        value = str(value)
    return VariableValue(value=value, type=variable_type.to_str())


def build_task_variables(
    submission: Mapping[str, Any],
    *,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, VariableValue]:
    """Build the variables of a task completion.

    Caller constants in ``extra`` are merged after the submission and win on
    a name clash.

    Args:
        submission (Mapping[str, Any]): Submitted value by key.
        extra (Mapping[str, Any] | None): Caller-supplied constant values.

    Returns:
        dict[str, VariableValue]: Wrapped variables by name.
    """
    variables = {key: wrap_variable(value) for key, value in submission.items()}
    for key, value in (extra or {}).items():
        variables[key] = wrap_variable(value)
    return variables
