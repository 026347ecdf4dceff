"""Typing-centric domain modules."""

from formbridge.typing.enums import PathScheme, PropertyEntryKind, VariableType
from formbridge.typing.models import (
    BranchSelection,
    ButtonOption,
    Component,
    FormDocument,
    MatchedBranch,
    NoSelection,
    PropertyBag,
    RequiredFieldDescriptor,
    SubmissionValueMap,
    TaskCompletion,
    UnmatchedSelection,
    VariableValue,
)
from formbridge.typing.protocol import NextTaskSource, WorkflowEngine

__all__ = [
    "BranchSelection",
    "ButtonOption",
    "Component",
    "FormDocument",
    "MatchedBranch",
    "NextTaskSource",
    "NoSelection",
    "PathScheme",
    "PropertyBag",
    "PropertyEntryKind",
    "RequiredFieldDescriptor",
    "SubmissionValueMap",
    "TaskCompletion",
    "UnmatchedSelection",
    "VariableType",
    "VariableValue",
    "WorkflowEngine",
]
