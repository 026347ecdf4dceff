"""Formbridge package."""

from formbridge.exceptions import (
    CyclicParentageError,
    DanglingParentReferenceError,
    DependencyError,
    DuplicateIdError,
    FetchExhaustedError,
    FormStructureError,
    GatewayError,
    MalformedDocumentError,
    PackageError,
    SettingsError,
    TransientFetchFailure,
)
from formbridge.logging import configure_logging, get_logger
from formbridge.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formbridge")

__all__ = [
    "CyclicParentageError",
    "DanglingParentReferenceError",
    "DependencyError",
    "DuplicateIdError",
    "FetchExhaustedError",
    "FormStructureError",
    "GatewayError",
    "MalformedDocumentError",
    "PackageError",
    "Settings",
    "SettingsError",
    "TransientFetchFailure",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
