"""Core domain model exports."""

from formbridge.typing.models.component import (
    PROPERTIES_KEY,
    ButtonOption,
    ButtonsEntry,
    Component,
    OpaqueEntry,
    PropertyBag,
    PropertyEntry,
    RequiredFieldDescriptor,
    RequiredFieldsEntry,
    typed_properties_key,
)
from formbridge.typing.models.document import FormDocument
from formbridge.typing.models.selection import BranchSelection, MatchedBranch, NoSelection, UnmatchedSelection
from formbridge.typing.models.submission import (
    CompleteTaskRequest,
    MessageRequest,
    MessageResult,
    NextTask,
    SubmissionValueMap,
    TaskCompletion,
    VariableValue,
)

__all__ = [
    "PROPERTIES_KEY",
    "BranchSelection",
    "ButtonOption",
    "ButtonsEntry",
    "CompleteTaskRequest",
    "Component",
    "FormDocument",
    "MatchedBranch",
    "MessageRequest",
    "MessageResult",
    "NextTask",
    "NoSelection",
    "OpaqueEntry",
    "PropertyBag",
    "PropertyEntry",
    "RequiredFieldDescriptor",
    "RequiredFieldsEntry",
    "SubmissionValueMap",
    "TaskCompletion",
    "UnmatchedSelection",
    "VariableValue",
    "typed_properties_key",
]
