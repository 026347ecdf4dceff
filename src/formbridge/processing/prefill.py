"""Prefill of required-field values from current task variables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formbridge.typing.models import ButtonsEntry, RequiredFieldsEntry

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping, Sequence

    from formbridge.typing.models import Component, PropertyBag, VariableValue


def _prefill_bag(
    bag: PropertyBag,
    *,
    fill: bool,
    variables: Mapping[str, VariableValue],
    types: Collection[str],
) -> PropertyBag:
    entries: list[Any] = []
    for entry in bag.entries:
        if fill and isinstance(entry, RequiredFieldsEntry):
            fields = []
            for descriptor in entry.fields:
                current = variables.get(descriptor.field_name)
                if current is not None and current.value is not None:
                    descriptor = descriptor.model_copy(update={"value": current.value})  # noqa: PLW2901
                fields.append(descriptor)
            entries.append(entry.model_copy(update={"fields": fields}))
        elif isinstance(entry, ButtonsEntry):
            options = [
                option.model_copy(update={"items": prefill_values(option.items, variables, types=types)})
                for option in entry.options
            ]
            entries.append(entry.model_copy(update={"options": options}))
        else:
            entries.append(entry)
    return bag.model_copy(update={"entries": entries})


def prefill_values(
    forest: Sequence[Component],
    variables: Mapping[str, VariableValue],
    *,
    types: Collection[str],
) -> list[Component]:
    """Copy current engine values into the required fields of selected component types.

    A descriptor takes the value of the task variable named by its
    ``fieldName`` when that variable exists and is not null.

    Args:
        forest (Sequence[Component]): Root components.
        variables (Mapping[str, VariableValue]): Current task variables by name.
        types (Collection[str]): Component types to prefill.

    Returns:
        list[Component]: New forest with prefilled values.
    """
    result: list[Component] = []
    for component in forest:
        update: dict[str, Any] = {"children": prefill_values(component.children, variables, types=types)}
        if component.properties is not None:
            update["properties"] = _prefill_bag(
                component.properties,
                fill=component.type in types,
                variables=variables,
                types=types,
            )
        result.append(component.model_copy(update=update))
    return result
