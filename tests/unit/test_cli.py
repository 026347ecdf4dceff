from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path

import pytest

from formbridge import cli
from formbridge.settings import Settings
from formbridge.typing.enums import PathScheme
from formbridge.typing.models import TaskCompletion

_FLAT_FORM = {
    "componentsList": [
        {"componentId": "a", "type": "group"},
        {
            "componentId": "b",
            "parentComponentId": "a",
            "type": "input",
            "Properties": {"submitRequiredFields": [{"fieldName": "name", "value": "Alice", "isRequired": True}]},
        },
    ],
}


def _write_form(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "form.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_build_parser_rejects_unknown_scheme(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["extract", "--input", "form.json", "--scheme", "xpath"])

    assert "--scheme must be one of" in capsys.readouterr().err


def test_main_without_command_prints_help(mocker, capsys) -> None:
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("sys.argv", ["formbridge"])

    assert cli.main() == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_display_writes_nested_form(mocker, tmp_path: Path) -> None:
    input_path = _write_form(tmp_path, _FLAT_FORM)
    output_path = tmp_path / "out" / "display.json"
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("sys.argv", ["formbridge", "display", "--input", str(input_path), "--output", str(output_path)])

    assert cli.main() == 0

    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["componentsList"][0]["items"][0]["inputProperties"]["submitRequiredFields"][0]["value"] == "Alice"


def test_main_extract_prints_submission(mocker, tmp_path: Path, capsys) -> None:
    nested = {"componentsList": [{**_FLAT_FORM["componentsList"][1], "parentComponentId": None}]}
    input_path = _write_form(tmp_path, nested)
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("sys.argv", ["formbridge", "extract", "--input", str(input_path), "--scheme", "field_name"])

    assert cli.main() == 0

    assert json.loads(capsys.readouterr().out) == {"name": "Alice"}


def test_run_extract_falls_back_to_configured_scheme(tmp_path: Path) -> None:
    nested = {"componentsList": [_FLAT_FORM["componentsList"][1]]}
    args = Namespace(input_path=_write_form(tmp_path, nested), scheme=None)

    payload = cli._run_extract(args, Settings(submission_path_scheme=PathScheme.FIELD_NAME))

    assert json.loads(payload) == {"name": "Alice"}


def test_main_returns_error_code_on_structure_error(mocker, tmp_path: Path) -> None:
    duplicated = {"componentsList": [{"componentId": "a"}, {"componentId": "a"}]}
    input_path = _write_form(tmp_path, duplicated)
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("sys.argv", ["formbridge", "display", "--input", str(input_path)])

    assert cli.main() == 1


def test_main_returns_error_code_on_missing_input(mocker, tmp_path: Path) -> None:
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("sys.argv", ["formbridge", "display", "--input", str(tmp_path / "missing.json")])

    assert cli.main() == 1


def test_main_runs_complete_flow(mocker, tmp_path: Path, capsys) -> None:
    input_path = _write_form(tmp_path, _FLAT_FORM)
    mocker.patch("formbridge.cli.get_settings", return_value=Settings())
    mocker.patch("formbridge.cli.ensure_cli_dependencies_for_engine")
    run_complete = mocker.patch(
        "formbridge.cli._run_complete",
        new=mocker.AsyncMock(
            return_value=TaskCompletion(next_task_id="t-2", view_json="{}").model_dump_json(by_alias=True),
        ),
    )
    mocker.patch(
        "sys.argv",
        ["formbridge", "complete", "--input", str(input_path), "--task-id", "t-1", "--process-instance-id", "pi-1"],
    )

    assert cli.main() == 0

    run_complete.assert_awaited_once()
    assert json.loads(capsys.readouterr().out)["nextTaskId"] == "t-2"
