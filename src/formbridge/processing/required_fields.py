"""Extraction of the submission map from a component forest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formbridge import logger
from formbridge.typing.enums import PathScheme, PropertyEntryKind
from formbridge.typing.models import (
    PROPERTIES_KEY,
    BranchSelection,
    MatchedBranch,
    NoSelection,
    SubmissionValueMap,
    UnmatchedSelection,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from formbridge.typing.models import Component, RequiredFieldsEntry

DOCUMENT_ROOT = "componentsList"


def select_branch(component: Component) -> BranchSelection:
    """Resolve which button option of a component is selected.

    The selector is the value of the last descriptor of the component's own
    ``submitRequiredFields``; it must equal a button id exactly.

    Args:
        component (Component): Component carrying ``buttons``.

    Returns:
        BranchSelection: No selection, an unmatched selector, or the matched option.
    """
    bag = component.properties
    if bag is None or bag.buttons is None or bag.required_fields is None or not bag.required_fields.fields:
        return NoSelection()

    raw_selector = bag.required_fields.fields[-1].value
    if raw_selector is None or raw_selector == "":
        return NoSelection()

    selector = str(raw_selector)
    for index, option in enumerate(bag.buttons.options):
        if option.id == selector:
            return MatchedBranch(selector=selector, index=index, option=option)
    return UnmatchedSelection(selector=selector)


def _field_path(component_path: str, entry: RequiredFieldsEntry, position: int) -> str:
    base = f"{component_path}.{PROPERTIES_KEY}.{PropertyEntryKind.REQUIRED_FIELDS.value}"
    return base if entry.single else f"{base}[{position}]"


def _emit_own_fields(
    component: Component,
    component_path: str,
    scheme: PathScheme,
    result: SubmissionValueMap,
) -> None:
    entry = component.properties.required_fields if component.properties else None
    if entry is None:
        return
    for position, descriptor in enumerate(entry.fields):
        if not descriptor.is_required:
            continue
        if scheme == PathScheme.FIELD_NAME:
            key = descriptor.field_name
        else:
            key = _field_path(component_path, entry, position)
        if key in result:
            logger.debug("Submission key overwritten", extra={"key": key, "component_id": component.id})
        result[key] = descriptor.value


def _visit(
    component: Component,
    component_path: str,
    scheme: PathScheme,
    result: SubmissionValueMap,
) -> None:
    selection = select_branch(component)
    if isinstance(selection, MatchedBranch):
        branch_path = f"{component_path}.{PROPERTIES_KEY}.{PropertyEntryKind.BUTTONS.value}[{selection.index}]"
        for position, item in enumerate(selection.option.items):
            _visit(item, f"{branch_path}.items[{position}]", scheme, result)
    elif isinstance(selection, UnmatchedSelection):
        logger.debug(
            "Button selection matches no option",
            extra={"component_id": component.id, "selector": selection.selector},
        )

    _emit_own_fields(component, component_path, scheme, result)

    for position, child in enumerate(component.children):
        _visit(child, f"{component_path}.items[{position}]", scheme, result)


def extract_required_fields(
    forest: Sequence[Component],
    *,
    scheme: PathScheme = PathScheme.STRUCTURAL,
) -> SubmissionValueMap:
    """Collect the values a nested form contributes to a task submission.

    Components are visited in document pre-order. For each one, the selected
    button branch is walked first (unselected branches are skipped entirely),
    then its own required descriptors are emitted, then its children. Only
    descriptors flagged ``isRequired`` are emitted. When two descriptors map
    to the same key the one visited last wins.

    With ``PathScheme.STRUCTURAL`` keys are JSON paths into the nested
    document, e.g. ``componentsList[0].items[1].Properties.submitRequiredFields[0]``.
    With ``PathScheme.FIELD_NAME`` keys are the descriptors' field names.

    Args:
        forest (Sequence[Component]): Root components of the nested form.
        scheme (PathScheme): Key derivation scheme.

    Returns:
        SubmissionValueMap: Submitted value by key.
    """
    result: SubmissionValueMap = {}
    for position, root in enumerate(forest):
        _visit(root, f"{DOCUMENT_ROOT}[{position}]", scheme, result)
    logger.debug("Required fields extracted", extra={"fields": len(result), "scheme": scheme.to_str()})
    return result
