"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class PathScheme(_EnumMixin):
    """How submission keys are derived from required-field descriptors."""

    STRUCTURAL = "structural"
    FIELD_NAME = "field_name"


class VariableType(_EnumMixin):
    """Value types understood by the workflow engine variable envelope."""

    STRING = "String"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    LONG = "Long"
    DOUBLE = "Double"
    JSON = "Json"
    NULL = "Null"


class PropertyEntryKind(_EnumMixin):
    """Recognized shapes of a property bag entry."""

    REQUIRED_FIELDS = "submitRequiredFields"
    BUTTONS = "buttons"
    OPAQUE = "opaque"
