"""Type-qualified renaming of component property bags."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formbridge.typing.models import PROPERTIES_KEY, ButtonsEntry, PropertyBag, typed_properties_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from formbridge.typing.models import Component


def _rekey_bag(bag: PropertyBag) -> PropertyBag:
    """Rekey the components nested under the bag's ``buttons`` entry."""
    entries = [
        entry.model_copy(
            update={
                "options": [
                    option.model_copy(update={"items": rekey_by_type(option.items)}) for option in entry.options
                ],
            },
        )
        if isinstance(entry, ButtonsEntry)
        else entry
        for entry in bag.entries
    ]
    return bag.model_copy(update={"entries": entries})


def _rekey_component(component: Component) -> Component:
    update: dict[str, Any] = {"children": rekey_by_type(component.children)}
    bag = component.properties
    if bag is not None:
        update["properties"] = _rekey_bag(bag)
        if bag.is_empty():
            update["properties_key"] = PROPERTIES_KEY
        elif component.type:
            update["properties_key"] = typed_properties_key(component.type)
    return component.model_copy(update=update)


def rekey_by_type(forest: Sequence[Component]) -> list[Component]:
    """Store every non-empty property bag under a key derived from its component type.

    A component of type ``input`` ends up with ``inputProperties`` instead of
    ``Properties``. Components reached through ``children`` and through the
    items of every button option are handled alike. Empty bags go back under
    ``Properties`` and absent bags stay absent. Bag contents are never altered, and applying the function to
    its own output changes nothing.

    Args:
        forest (Sequence[Component]): Root components.

    Returns:
        list[Component]: New forest; opaque property values are shared with the input.
    """
    return [_rekey_component(component) for component in forest]
