from __future__ import annotations

import pytest
from pydantic import ValidationError

from formbridge.typing.models import (
    ButtonsEntry,
    Component,
    FormDocument,
    OpaqueEntry,
    PropertyBag,
    RequiredFieldsEntry,
    typed_properties_key,
)


def test_component_accepts_designer_and_short_key_names() -> None:
    designer = Component.model_validate({"componentId": "a", "parentComponentId": "root", "type": "input"})
    short = Component.model_validate({"id": "a", "parentId": "root", "type": "input"})

    assert designer.id == short.id == "a"
    assert designer.parent_id == short.parent_id == "root"


def test_component_coerces_numeric_ids() -> None:
    component = Component.model_validate({"componentId": 7, "parentComponentId": 3})

    assert component.id == "7"
    assert component.parent_id == "3"


def test_component_normalizes_type_keyed_bag() -> None:
    component = Component.model_validate(
        {"componentId": "a", "type": "input", "inputProperties": {"label": "Name"}},
    )

    assert component.properties is not None
    assert component.properties_key == "inputProperties"
    assert component.properties.entries == [OpaqueEntry(name="label", value="Name")]
    assert component.model_dump(by_alias=True)["inputProperties"] == {"label": "Name"}


def test_component_with_two_bags_is_rejected() -> None:
    with pytest.raises(ValidationError, match="more than one property bag"):
        Component.model_validate(
            {"componentId": "a", "Properties": {}, "inputProperties": {}},
        )


def test_property_bag_keeps_entry_order_and_kinds() -> None:
    bag = PropertyBag.from_mapping(
        {
            "label": "Pick",
            "buttons": [{"id": "yes", "items": []}],
            "submitRequiredFields": [{"fieldName": "pick", "value": "yes", "isRequired": True}],
            "style": {"color": "red"},
        },
    )

    assert [type(entry) for entry in bag.entries] == [OpaqueEntry, ButtonsEntry, RequiredFieldsEntry, OpaqueEntry]
    assert list(bag.model_dump()) == ["label", "buttons", "submitRequiredFields", "style"]
    assert bag.model_dump()["buttons"] == [{"id": "yes", "items": []}]


def test_single_required_field_object_round_trips_as_object() -> None:
    descriptor = {"fieldName": "total", "value": 1, "isRequired": False}
    bag = PropertyBag.from_mapping({"submitRequiredFields": descriptor})

    assert bag.required_fields is not None
    assert bag.required_fields.single is True
    assert bag.model_dump(by_alias=True)["submitRequiredFields"] == descriptor


def test_null_structured_entries_stay_opaque() -> None:
    bag = PropertyBag.from_mapping({"buttons": None, "submitRequiredFields": None})

    assert bag.buttons is None
    assert bag.required_fields is None
    assert bag.model_dump() == {"buttons": None, "submitRequiredFields": None}


def test_unknown_descriptor_keys_are_preserved() -> None:
    component = Component.model_validate(
        {
            "componentId": "a",
            "Properties": {
                "submitRequiredFields": [{"fieldName": "x", "value": 1, "isRequired": True, "mask": "99"}],
            },
        },
    )

    dumped = component.model_dump(by_alias=True)
    assert dumped["Properties"]["submitRequiredFields"][0]["mask"] == "99"


def test_form_document_round_trips_envelope_and_extra_keys() -> None:
    document = FormDocument.model_validate(
        {
            "processName": "onboarding",
            "formName": "step-1",
            "componentsList": [{"componentId": "a"}],
            "designerVersion": 4,
        },
    )

    dumped = document.model_dump(by_alias=True)
    assert document.process_name == "onboarding"
    assert dumped["componentsList"][0]["componentId"] == "a"
    assert dumped["designerVersion"] == 4


def test_typed_properties_key() -> None:
    assert typed_properties_key("radio") == "radioProperties"


def test_component_normalizes_bag_keyed_by_hyphenated_type() -> None:
    component = Component.model_validate(
        {
            "componentId": "when",
            "type": "date-picker",
            "date-pickerProperties": {
                "submitRequiredFields": [{"fieldName": "when", "value": "2024-01-01", "isRequired": True}],
            },
        },
    )

    assert component.properties is not None
    assert component.properties.required_fields is not None
    assert component.properties_key == "date-pickerProperties"
    assert "date-pickerProperties" not in (component.model_extra or {})


def test_bare_properties_key_is_not_treated_as_type_keyed() -> None:
    component = Component.model_validate({"componentId": "a", "Properties": {"label": "A"}})

    assert component.properties_key == "Properties"
