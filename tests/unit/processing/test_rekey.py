from __future__ import annotations

from formbridge.processing import build_tree, rekey_by_type
from formbridge.typing.models import Component


def _button_group() -> Component:
    return Component.model_validate(
        {
            "componentId": "choice",
            "type": "radio",
            "Properties": {
                "submitRequiredFields": [{"fieldName": "choice", "value": "yes", "isRequired": True}],
                "buttons": [
                    {
                        "id": "yes",
                        "items": [
                            {
                                "componentId": "yes-input",
                                "type": "input",
                                "Properties": {"label": "Why?"},
                            },
                        ],
                    },
                ],
            },
        },
    )


def test_rekey_renames_bag_after_component_type() -> None:
    forest = [Component(id="name", type="input", properties={"label": "Name"})]

    dumped = rekey_by_type(forest)[0].model_dump(by_alias=True)

    assert "Properties" not in dumped
    assert dumped["inputProperties"] == {"label": "Name"}


def test_rekey_keeps_bag_contents_and_key_order() -> None:
    forest = [Component(id="name", type="input", properties={"b": 1, "a": 2, "label": "Name"})]
    before = forest[0].model_dump(by_alias=True)["Properties"]

    after = rekey_by_type(forest)[0].model_dump(by_alias=True)["inputProperties"]

    assert after == before
    assert list(after) == ["b", "a", "label"]


def test_rekey_recurses_into_children() -> None:
    flat = [
        Component(id="group", type="group", properties={"title": "G"}),
        Component(id="field", parent_id="group", type="input", properties={"label": "F"}),
    ]

    dumped = rekey_by_type(build_tree(flat))[0].model_dump(by_alias=True)

    assert "groupProperties" in dumped
    assert "inputProperties" in dumped["items"][0]


def test_rekey_recurses_into_button_items() -> None:
    dumped = rekey_by_type([_button_group()])[0].model_dump(by_alias=True)

    item = dumped["radioProperties"]["buttons"][0]["items"][0]
    assert item["inputProperties"] == {"label": "Why?"}
    assert "Properties" not in item


def test_rekey_leaves_absent_and_empty_bags_alone() -> None:
    forest = [
        Component(id="empty", type="group", properties={}),
        Component(id="absent", type="divider"),
        Component(id="untyped", properties={"x": 1}),
    ]

    dumped = [component.model_dump(by_alias=True) for component in rekey_by_type(forest)]

    assert dumped[0]["Properties"] == {}
    assert dumped[1]["Properties"] is None
    assert dumped[2]["Properties"] == {"x": 1}


def test_rekey_is_idempotent() -> None:
    forest = [_button_group(), Component(id="name", type="input", properties={"label": "Name"})]

    once = rekey_by_type(forest)
    twice = rekey_by_type(once)

    assert [c.model_dump(by_alias=True) for c in twice] == [c.model_dump(by_alias=True) for c in once]


def test_rekey_fixes_a_bag_stored_under_another_type_key() -> None:
    component = Component.model_validate(
        {"componentId": "b", "type": "input", "groupProperties": {"label": "B"}},
    )

    dumped = rekey_by_type([component])[0].model_dump(by_alias=True)

    assert "groupProperties" not in dumped
    assert dumped["inputProperties"] == {"label": "B"}


def test_rekey_does_not_modify_input_forest() -> None:
    forest = [_button_group()]
    before = forest[0].model_dump(by_alias=True)

    rekey_by_type(forest)

    assert forest[0].model_dump(by_alias=True) == before


def test_rekey_moves_empty_bag_off_a_stale_type_key() -> None:
    component = Component.model_validate({"componentId": "b", "type": "input", "groupProperties": {}})

    rekeyed = rekey_by_type([component])[0]
    dumped = rekeyed.model_dump(by_alias=True)

    assert rekeyed.properties_key == "Properties"
    assert dumped["Properties"] == {}
    assert "groupProperties" not in dumped
    assert "inputProperties" not in dumped


def test_rekey_handles_types_with_non_word_characters() -> None:
    component = Component(id="when", type="date-picker", properties={"label": "When"})

    dumped = rekey_by_type([component])[0].model_dump(by_alias=True)
    reloaded = Component.model_validate(dumped)

    assert dumped["date-pickerProperties"] == {"label": "When"}
    assert reloaded.properties_key == "date-pickerProperties"
    assert reloaded.properties is not None
    assert reloaded.model_dump(by_alias=True) == dumped
