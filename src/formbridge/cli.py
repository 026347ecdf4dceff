"""CLI entry point for formbridge."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from formbridge import __version__, logger
from formbridge.dependencies import ensure_cli_dependencies_for_engine
from formbridge.exceptions import PackageError
from formbridge.logging import configure_logging
from formbridge.orchestrator import (
    load_form_document,
    prepare_display_form,
    prepare_submission,
    render_form_document,
)
from formbridge.settings import Settings, get_settings
from formbridge.typing.enums import PathScheme


def _path_scheme_from_cli(value: str) -> PathScheme:
    """Convert `--scheme` CLI value into a path scheme.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        PathScheme: Selected scheme.
    """
    try:
        return PathScheme(value)
    except ValueError as exc:
        supported = ", ".join(member.value for member in PathScheme)
        raise argparse.ArgumentTypeError(f"--scheme must be one of: {supported}") from exc


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formbridge")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    display_parser = subparsers.add_parser("display", help="Nest and type-key a flat designer form")
    display_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    display_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    extract_parser = subparsers.add_parser("extract", help="Extract the submission map from a nested form")
    extract_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    extract_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    extract_parser.add_argument("--scheme", default=None, type=_path_scheme_from_cli, dest="scheme")

    complete_parser = subparsers.add_parser("complete", help="Submit a nested form and fetch the next task form")
    complete_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    complete_parser.add_argument("--task-id", required=True, dest="task_id")
    complete_parser.add_argument("--process-instance-id", required=True, dest="process_instance_id")
    complete_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    return parser


def _write_output(payload: str, output_path: Path | None) -> None:
    if output_path is None:
        sys.stdout.write(payload + "\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(payload, encoding="utf-8")
    logger.info("Output written", extra={"output_path": str(output_path)})


def _run_display(args: argparse.Namespace) -> str:
    document = load_form_document(args.input_path.read_text(encoding="utf-8"))
    return render_form_document(prepare_display_form(document))


def _run_extract(args: argparse.Namespace, settings: Settings) -> str:
    document = load_form_document(args.input_path.read_text(encoding="utf-8"))
    submission = prepare_submission(document, scheme=args.scheme or settings.submission_path_scheme)
    return json.dumps(submission, ensure_ascii=False)


async def _run_complete(args: argparse.Namespace, settings: Settings) -> str:
    from formbridge.gateway.engine import EngineClient  # noqa: PLC0415
    from formbridge.service import TaskService  # noqa: PLC0415

    async with EngineClient(settings) as engine:
        completion = await TaskService(engine, settings).complete_task(
            args.task_id,
            args.process_instance_id,
            args.input_path.read_text(encoding="utf-8"),
        )
    return completion.model_dump_json(by_alias=True)


def main() -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "display":
            payload = _run_display(args)
        elif args.command == "extract":
            payload = _run_extract(args, settings)
        else:
            ensure_cli_dependencies_for_engine()
            payload = asyncio.run(_run_complete(args, settings))
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except OSError:
        logger.exception("Could not read or write a file", extra={"command": args.command})
        return 1

    _write_output(payload, args.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
