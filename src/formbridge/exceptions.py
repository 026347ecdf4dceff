"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


class FormStructureError(PackageError):
    """Raised when a form document is structurally invalid.

    Structural errors abort the whole transformation: no partially built
    tree is ever returned alongside one.
    """


@dataclass(frozen=True)
class DuplicateIdError(FormStructureError):
    """Raised when two components of one flat list share an id."""

    component_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Duplicate component id '{self.component_id}'"


@dataclass(frozen=True)
class DanglingParentReferenceError(FormStructureError):
    """Raised when a parent id does not resolve inside the document."""

    component_id: str
    parent_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Component '{self.component_id}' references unknown parent '{self.parent_id}'"


@dataclass(frozen=True)
class CyclicParentageError(FormStructureError):
    """Raised when parent pointers loop back on themselves."""

    cycle: tuple[str, ...]

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Cyclic parentage: {' -> '.join(self.cycle)}"


@dataclass(frozen=True)
class MalformedDocumentError(FormStructureError):
    """Raised when a document cannot be parsed into the component model."""

    message: str
    path: str | None = None
    details: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Return error message payload."""
        location = f" at '{self.path}'" if self.path else ""
        suffix = f" ({'; '.join(self.details)})" if self.details else ""
        return f"{self.message}{location}{suffix}"


@dataclass(frozen=True)
class GatewayError(PackageError):
    """Raised when a workflow engine call fails."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class TransientFetchFailure(GatewayError):
    """Raised when a single next-task fetch reports an explicit transport error."""


@dataclass(frozen=True)
class FetchExhaustedError(GatewayError):
    """Raised when every next-task attempt came back without a task."""

    attempts: int = 0

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message} after {self.attempts} attempts"
