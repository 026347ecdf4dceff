"""Form component models.

A component arrives from the form designer as a loosely typed JSON object.
The property bag is parsed into an ordered list of tagged entries so that
downstream code can branch on the entry kind instead of probing for keys:

* ``submitRequiredFields`` becomes a :class:`RequiredFieldsEntry`;
* ``buttons`` becomes a :class:`ButtonsEntry` whose options hold nested
  components;
* anything else is kept verbatim as an :class:`OpaqueEntry`.

On the wire the bag is stored either under ``Properties`` or under a
type-qualified key such as ``inputProperties``. Both spellings are accepted
on input; the key used on output is tracked by ``Component.properties_key``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)

from formbridge.typing.enums import PropertyEntryKind

PROPERTIES_KEY = "Properties"
PROPERTIES_SUFFIX = "Properties"

_TYPED_PROPERTIES_KEY = re.compile(rf"^.+{PROPERTIES_SUFFIX}$", re.DOTALL)


def _coerce_identifier(value: object) -> object:
    """Accept numeric identifiers emitted by some designers."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def typed_properties_key(component_type: str) -> str:
    """Return the type-qualified storage key of a property bag.

    Args:
        component_type (str): Component type tag.

    Returns:
        str: Key such as ``inputProperties``.
    """
    return f"{component_type}{PROPERTIES_SUFFIX}"


class RequiredFieldDescriptor(BaseModel):
    """A value a component contributes to a task submission."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    value: Any = None
    is_required: bool = Field(default=False, alias="isRequired")


class ButtonOption(BaseModel):
    """One mutually exclusive branch of a button group."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    items: list[Component] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        return _coerce_identifier(value)


class RequiredFieldsEntry(BaseModel):
    """``submitRequiredFields`` entry of a property bag."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["submitRequiredFields"] = PropertyEntryKind.REQUIRED_FIELDS.value
    fields: list[RequiredFieldDescriptor] = Field(default_factory=list)
    single: bool = Field(default=False, description="Wire value was one object rather than a list.")


class ButtonsEntry(BaseModel):
    """``buttons`` entry of a property bag."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["buttons"] = PropertyEntryKind.BUTTONS.value
    options: list[ButtonOption] = Field(default_factory=list)


class OpaqueEntry(BaseModel):
    """Any other property, passed through untouched."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["opaque"] = PropertyEntryKind.OPAQUE.value
    name: str
    value: Any = None


PropertyEntry = Annotated[RequiredFieldsEntry | ButtonsEntry | OpaqueEntry, Field(discriminator="kind")]


class PropertyBag(BaseModel):
    """Ordered, tagged view over a component property bag."""

    model_config = ConfigDict(extra="forbid")

    entries: list[PropertyEntry] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> PropertyBag:
        """Parse a wire property bag.

        Args:
            raw (Mapping[str, Any]): Property name to value mapping.

        Returns:
            PropertyBag: Parsed bag, preserving key order.
        """
        entries: list[dict[str, Any]] = []
        for name, value in raw.items():
            if name == PropertyEntryKind.REQUIRED_FIELDS and value is not None:
                single = isinstance(value, Mapping)
                entries.append(
                    {
                        "kind": PropertyEntryKind.REQUIRED_FIELDS.value,
                        "fields": [value] if single else value,
                        "single": single,
                    },
                )
            elif name == PropertyEntryKind.BUTTONS and value is not None:
                entries.append({"kind": PropertyEntryKind.BUTTONS.value, "options": value})
            else:
                entries.append({"kind": PropertyEntryKind.OPAQUE.value, "name": name, "value": value})
        return cls.model_validate({"entries": entries})

    @property
    def required_fields(self) -> RequiredFieldsEntry | None:
        """Return the ``submitRequiredFields`` entry, if any."""
        for entry in self.entries:
            if isinstance(entry, RequiredFieldsEntry):
                return entry
        return None

    @property
    def buttons(self) -> ButtonsEntry | None:
        """Return the ``buttons`` entry, if any."""
        for entry in self.entries:
            if isinstance(entry, ButtonsEntry):
                return entry
        return None

    def is_empty(self) -> bool:
        """Return whether the bag holds no entry at all."""
        return not self.entries

    @model_serializer(mode="wrap")
    def _serialize_as_mapping(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        result: dict[str, Any] = {}
        for entry in dumped.get("entries", []):
            kind = entry.get("kind")
            if kind == PropertyEntryKind.REQUIRED_FIELDS:
                fields = entry.get("fields", [])
                result[PropertyEntryKind.REQUIRED_FIELDS.value] = (
                    fields[0] if entry.get("single") and len(fields) == 1 else fields
                )
            elif kind == PropertyEntryKind.BUTTONS:
                result[PropertyEntryKind.BUTTONS.value] = entry.get("options", [])
            else:
                result[entry["name"]] = entry.get("value")
        return result


class Component(BaseModel):
    """One form element, flat or nested."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(
        validation_alias=AliasChoices("componentId", "id"),
        serialization_alias="componentId",
    )
    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parentComponentId", "parentId", "parent_id"),
        serialization_alias="parentComponentId",
    )
    type: str = ""
    properties: PropertyBag | None = Field(
        default=None,
        validation_alias=AliasChoices(PROPERTIES_KEY, "properties"),
        serialization_alias=PROPERTIES_KEY,
    )
    children: list[Component] = Field(
        default_factory=list,
        validation_alias=AliasChoices("items", "children"),
        serialization_alias="items",
    )
    properties_key: str = Field(default=PROPERTIES_KEY, exclude=True)

    @field_validator("id", "parent_id", mode="before")
    @classmethod
    def _normalize_ids(cls, value: object) -> object:
        return _coerce_identifier(value)

    @model_validator(mode="before")
    @classmethod
    def _normalize_typed_properties_key(cls, data: Any) -> Any:
        """Move a ``<type>Properties`` bag back under ``Properties``."""
        if not isinstance(data, Mapping):
            return data

        typed_keys = [key for key in data if isinstance(key, str) and _TYPED_PROPERTIES_KEY.fullmatch(key)]
        if not typed_keys:
            return data

        plain_keys = [key for key in (PROPERTIES_KEY, "properties") if key in data]
        if len(typed_keys) + len(plain_keys) > 1:
            keys = ", ".join([*plain_keys, *typed_keys])
            raise ValueError(f"component carries more than one property bag: {keys}")  # noqa: TRY003

        key = typed_keys[0]
        normalized = {(PROPERTIES_KEY if name == key else name): value for name, value in data.items()}
        normalized.setdefault("properties_key", key)
        return normalized

    @field_validator("properties", mode="before")
    @classmethod
    def _parse_property_bag(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return PropertyBag.from_mapping(value)
        return value

    @model_serializer(mode="wrap")
    def _serialize_properties_key(
        self,
        handler: SerializerFunctionWrapHandler,
        info: SerializationInfo,
    ) -> dict[str, Any]:
        dumped = handler(self)
        bag_key = PROPERTIES_KEY if info.by_alias else "properties"
        if self.properties_key == bag_key:
            return dumped
        return {(self.properties_key if key == bag_key else key): value for key, value in dumped.items()}


ButtonOption.model_rebuild()
ButtonsEntry.model_rebuild()
PropertyBag.model_rebuild()
Component.model_rebuild()
