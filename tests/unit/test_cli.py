from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path

import pytest

from resumefill import cli
from resumefill.exceptions import AnswerRequestError
from resumefill.settings import Settings
from resumefill.typing.enums import FailureCategory, FieldKind
from resumefill.typing.models import ConnectionCheck, FieldDescriptor, MatchDecision, ResolutionReport, ResolvedField


def _patch_main(mocker, namespace: Namespace) -> None:
    parser = mocker.Mock()
    parser.parse_args.return_value = namespace
    mocker.patch("resumefill.cli.build_parser", return_value=parser)
    mocker.patch("resumefill.cli.get_settings", return_value=Settings())
    mocker.patch("resumefill.cli.configure_logging")
    mocker.patch("resumefill.cli.ensure_cli_dependencies_for_resolve")


def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    resume_path = tmp_path / "resume.txt"
    resume_path.write_text("Jane Doe\nPython developer", encoding="utf-8")
    fields_path = tmp_path / "fields.json"
    fields_path.write_text(
        json.dumps(
            [
                {"question": "Full name"},
                {"question": "Skills", "field_kind": "checkbox", "options": ["Python", "Go"]},
            ],
        ),
        encoding="utf-8",
    )
    return resume_path, fields_path


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_build_parser_resolve_defaults() -> None:
    args = cli.build_parser().parse_args(["resolve", "--resume", "cv.txt", "--fields", "fields.json"])

    assert args.resume_path == Path("cv.txt")
    assert args.fields_path == Path("fields.json")
    assert args.output_path == Path("results/decisions.json")


def test_load_fields_parses_descriptors(tmp_path: Path) -> None:
    _, fields_path = _write_inputs(tmp_path)

    fields = cli.load_fields(fields_path)

    assert fields[0] == FieldDescriptor(question="Full name")
    assert fields[1].field_kind == FieldKind.CHECKBOX
    assert fields[1].options == ("Python", "Go")


def test_persist_report_writes_json(tmp_path: Path) -> None:
    field = FieldDescriptor(question="Full name")
    report = ResolutionReport(fields=[ResolvedField(field=field, decision=MatchDecision.fill("Jane"))])
    output_path = tmp_path / "nested" / "decisions.json"

    cli.persist_report(report, output_path)

    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["total"] == 1
    assert payload["fields"][0]["decision"]["kind"] == "fill"


def test_main_runs_resolve_flow(mocker, tmp_path: Path) -> None:
    resume_path, fields_path = _write_inputs(tmp_path)
    output_path = tmp_path / "decisions.json"
    _patch_main(
        mocker,
        Namespace(command="resolve", resume_path=resume_path, fields_path=fields_path, output_path=output_path),
    )
    run_pass = mocker.patch("resumefill.cli.run_resolution_pass", return_value=ResolutionReport())

    result = cli.main()

    assert result == 0
    assert output_path.exists()
    fields = run_pass.call_args.args[0]
    assert [field.question for field in fields] == ["Full name", "Skills"]
    assert run_pass.call_args.args[1].startswith("Jane Doe")


def test_main_reports_answer_request_failure(mocker, tmp_path: Path) -> None:
    resume_path, fields_path = _write_inputs(tmp_path)
    output_path = tmp_path / "decisions.json"
    _patch_main(
        mocker,
        Namespace(command="resolve", resume_path=resume_path, fields_path=fields_path, output_path=output_path),
    )
    mocker.patch(
        "resumefill.cli.run_resolution_pass",
        side_effect=AnswerRequestError(message="HTTP 429", attempts=4, category=FailureCategory.RATE_LIMIT),
    )

    assert cli.main() == 1
    assert not output_path.exists()


def test_main_fails_on_missing_resume(mocker, tmp_path: Path) -> None:
    _, fields_path = _write_inputs(tmp_path)
    _patch_main(
        mocker,
        Namespace(
            command="resolve",
            resume_path=tmp_path / "missing.txt",
            fields_path=fields_path,
            output_path=tmp_path / "out.json",
        ),
    )
    run_pass = mocker.patch("resumefill.cli.run_resolution_pass")

    assert cli.main() == 1
    run_pass.assert_not_called()


@pytest.mark.parametrize(("success", "expected"), [(True, 0), (False, 1)])
def test_main_runs_ping(mocker, success: bool, expected: int) -> None:
    _patch_main(mocker, Namespace(command="ping"))
    mocker.patch.object(Settings, "get_httpx_client", return_value=None)
    mocker.patch(
        "resumefill.cli.check_connection",
        return_value=ConnectionCheck(success=success, message="API test successful"),
    )

    assert cli.main() == expected


def test_main_without_command_prints_help(mocker) -> None:
    _patch_main(mocker, Namespace(command=None))

    assert cli.main() == 0


def test_main_returns_130_on_keyboard_interrupt(mocker) -> None:
    _patch_main(mocker, Namespace(command="ping"))
    mocker.patch("resumefill.cli._run_ping", side_effect=KeyboardInterrupt)

    assert cli.main() == 130
