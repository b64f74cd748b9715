"""CLI entry point for ResumeFill."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from resumefill import __version__, logger
from resumefill.dependencies import ensure_cli_dependencies_for_resolve
from resumefill.exceptions import AnswerRequestError, PackageError
from resumefill.logging import configure_logging
from resumefill.requester import check_connection
from resumefill.resolver import run_resolution_pass
from resumefill.settings import Settings, get_settings
from resumefill.typing.models import FieldDescriptor, ResolutionReport

_FIELDS_ADAPTER = TypeAdapter(list[FieldDescriptor])


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="resumefill")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve form fields against a resume")
    resolve_parser.add_argument("--resume", required=True, type=Path, dest="resume_path")
    resolve_parser.add_argument("--fields", required=True, type=Path, dest="fields_path")
    resolve_parser.add_argument(
        "--output",
        type=Path,
        default=Path("results/decisions.json"),
        dest="output_path",
    )

    subparsers.add_parser("ping", help="Check API credentials and connectivity")

    return parser


def load_fields(path: Path) -> list[FieldDescriptor]:
    """Load field descriptors from a JSON file.

    Args:
        path (Path): JSON list of `{question, field_kind, options}` objects.

    Returns:
        list[FieldDescriptor]: Descriptors in file order.
    """
    return _FIELDS_ADAPTER.validate_json(path.read_bytes())


def persist_report(report: ResolutionReport, output_path: Path) -> None:
    """Write a resolution report as JSON.

    Args:
        report (ResolutionReport): Pass report.
        output_path (Path): Destination file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def _run_resolve(args: argparse.Namespace, settings: Settings) -> int:
    try:
        resume_text = args.resume_path.read_text(encoding="utf-8")
        fields = load_fields(args.fields_path)
    except (OSError, ValidationError):
        logger.exception("Could not read inputs")
        return 1

    try:
        report = run_resolution_pass(fields, resume_text, settings=settings)
    except AnswerRequestError as exc:
        logger.error(
            "Failed to get answers",
            extra={"error": str(exc), "category": exc.category.to_str(), "guidance": exc.guidance},
        )
        return 1

    persist_report(report, args.output_path)
    logger.info(
        "Decisions written",
        extra={"output_path": str(args.output_path), "filled": report.filled, "skipped": report.skipped},
    )
    return 0


def _run_ping(settings: Settings) -> int:
    result = check_connection(settings.requester_config(), http_client=settings.get_httpx_client())
    return 0 if result.success else 1


def main() -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args()

    if args.command not in {"resolve", "ping"}:
        parser.print_help()
        return 0

    ensure_cli_dependencies_for_resolve()

    try:
        if args.command == "ping":
            return _run_ping(settings)
        return _run_resolve(args, settings)
    except PackageError:
        logger.exception("Command failed")
        return 1
    except KeyboardInterrupt:
        logger.info("Aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error")
        return 1
    finally:
        settings.close_httpx_client()


if __name__ == "__main__":
    raise SystemExit(main())
