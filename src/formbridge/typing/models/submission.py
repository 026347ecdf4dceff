"""Workflow engine request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SubmissionValueMap = dict[str, Any]


class VariableValue(BaseModel):
    """Engine variable envelope: a value and its declared type."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    value: Any = None
    type: str | None = None
    value_info: dict[str, Any] | None = Field(default=None, alias="valueInfo")


class CompleteTaskRequest(BaseModel):
    """Payload of a task completion call."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    variables: dict[str, VariableValue] = Field(default_factory=dict)
    with_variables_in_return: bool = Field(default=True, alias="withVariablesInReturn")


class MessageRequest(BaseModel):
    """Payload correlating a message that starts a process."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    message_name: str = Field(alias="messageName")
    business_key: str | None = Field(default=None, alias="businessKey")
    process_variables: dict[str, VariableValue] = Field(default_factory=dict, alias="processVariables")
    result_enabled: bool = Field(default=True, alias="resultEnabled")
    variables_in_result_enabled: bool = Field(default=True, alias="variablesInResultEnabled")


class MessageResult(BaseModel):
    """Result of a message correlation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    result_type: str | None = Field(default=None, alias="resultType")
    process_instance: dict[str, Any] | None = Field(default=None, alias="processInstance")
    variables: dict[str, VariableValue] = Field(default_factory=dict)


class NextTask(BaseModel):
    """A task waiting in a process instance."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str | None = None
    process_instance_id: str | None = Field(default=None, alias="processInstanceId")
    task_definition_key: str | None = Field(default=None, alias="taskDefinitionKey")


class TaskCompletion(BaseModel):
    """Outcome returned to the client after completing a task."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    next_task_id: str = Field(alias="nextTaskId")
    next_task_name: str | None = Field(default=None, alias="nextTaskName")
    view_json: str = Field(alias="viewJson")
