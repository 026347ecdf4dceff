"""Display and submission pipelines over form documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from formbridge import logger
from formbridge.exceptions import MalformedDocumentError
from formbridge.processing import build_tree, extract_required_fields, rekey_by_type
from formbridge.typing.enums import PathScheme
from formbridge.typing.models import FormDocument

if TYPE_CHECKING:
    from formbridge.typing.models import SubmissionValueMap, VariableValue

VIEW_JSON_VARIABLE = "viewJson"


def _error_location(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ()))


def load_form_document(raw: str | bytes | Mapping[str, Any]) -> FormDocument:
    """Parse a form document from JSON text or an already decoded mapping.

    Type-qualified ``<type>Properties`` keys are accepted and normalized.

    Args:
        raw (str | bytes | Mapping[str, Any]): Document payload.

    Raises:
        MalformedDocumentError: If the payload is not a valid form document.

    Returns:
        FormDocument: Parsed document.
    """
    try:
        if isinstance(raw, str | bytes):
            return FormDocument.model_validate_json(raw)
        return FormDocument.model_validate(raw)
    except ValidationError as exc:
        errors = exc.errors()
        raise MalformedDocumentError(
            message="Invalid form document",
            path=_error_location(errors[0]) if errors else None,
            details=tuple(f"{_error_location(error)}: {error['msg']}" for error in errors),
        ) from exc


def form_document_from_variables(
    variables: Mapping[str, VariableValue],
    *,
    key: str = VIEW_JSON_VARIABLE,
) -> FormDocument:
    """Read the form definition carried by a task's form variables.

    Args:
        variables (Mapping[str, VariableValue]): Form variables by name.
        key (str): Variable holding the serialized form.

    Raises:
        MalformedDocumentError: If the variable is missing or empty.

    Returns:
        FormDocument: Parsed document.
    """
    carrier = variables.get(key)
    if carrier is None or carrier.value in (None, ""):
        raise MalformedDocumentError(message="Form definition variable is missing", path=key)
    return load_form_document(carrier.value)


def render_form_document(document: FormDocument) -> str:
    """Serialize a document as compact JSON using wire key names."""
    return document.model_dump_json(by_alias=True)


def prepare_display_form(document: FormDocument) -> FormDocument:
    """Turn a designer document into the nested, type-keyed form the UI renders.

    Args:
        document (FormDocument): Document with a flat component list.

    Returns:
        FormDocument: Same envelope with a rekeyed component forest.
    """
    forest = rekey_by_type(build_tree(document.components))
    logger.info("Display form prepared", extra={"form_name": document.form_name, "roots": len(forest)})
    return document.model_copy(update={"components": forest})


def prepare_submission(
    document: FormDocument,
    *,
    scheme: PathScheme = PathScheme.STRUCTURAL,
) -> SubmissionValueMap:
    """Extract the submission map from a nested document sent back by the UI.

    Args:
        document (FormDocument): Document with a nested component forest.
        scheme (PathScheme): Key derivation scheme.

    Returns:
        SubmissionValueMap: Submitted value by key.
    """
    submission = extract_required_fields(document.components, scheme=scheme)
    logger.info("Submission prepared", extra={"form_name": document.form_name, "fields": len(submission)})
    return submission
