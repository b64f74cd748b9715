from __future__ import annotations

import json

import pytest

from resumefill.exceptions import MalformedResponseError
from resumefill.prompts import (
    ANSWER_INSTRUCTIONS,
    build_answer_messages,
    build_answer_payload,
    parse_answer_map,
    strip_code_fence,
)
from resumefill.typing.enums import FieldKind
from resumefill.typing.models import FieldDescriptor


def test_build_answer_payload_lists_questions_with_field_types() -> None:
    fields = [
        FieldDescriptor(question="Full name", field_kind=FieldKind.TEXT),
        FieldDescriptor(question="Skills", field_kind=FieldKind.CHECKBOX, options=("Python", "Go")),
    ]

    payload = json.loads(build_answer_payload("Jane Doe, engineer", fields))

    assert payload == {
        "resume": "Jane Doe, engineer",
        "questions": [
            {"question": "Full name", "fieldType": "text"},
            {"question": "Skills", "fieldType": "checkbox"},
        ],
    }


def test_build_answer_messages_uses_system_instructions() -> None:
    messages = build_answer_messages("resume", [FieldDescriptor(question="Email", field_kind=FieldKind.EMAIL)])

    assert [message["role"] for message in messages] == ["system", "user"]
    assert messages[0]["content"] == ANSWER_INSTRUCTIONS
    assert "Email" in messages[1]["content"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('```json\n{"q1":"a1"}\n```', '{"q1":"a1"}'),
        ('```\n{"q1":"a1"}```', '{"q1":"a1"}'),
        ('  {"q1":"a1"}  ', '{"q1":"a1"}'),
    ],
)
def test_strip_code_fence(raw: str, expected: str) -> None:
    assert strip_code_fence(raw) == expected


def test_parse_answer_map_accepts_fenced_json() -> None:
    assert parse_answer_map('```json\n{"q1":"a1"}\n```') == {"q1": "a1"}


def test_parse_answer_map_coerces_values() -> None:
    content = json.dumps(
        {
            "Skills": ["Python", "SQL", None, " "],
            "Years": 5,
            "Relocate": True,
            "Sponsorship": False,
            "Notes": None,
            "Empty": "  ",
            "Nested": {"a": 1},
            "Name": " Jane Doe ",
        },
    )

    assert parse_answer_map(content) == {
        "Skills": "Python, SQL",
        "Years": "5",
        "Relocate": "Yes",
        "Sponsorship": "No",
        "Name": "Jane Doe",
    }


@pytest.mark.parametrize(
    ("content", "message"),
    [
        (None, "Empty response content"),
        ("   ", "Empty response content"),
        ("not json", "not valid JSON"),
        ('["a", "b"]', "Expected a JSON object, got list"),
    ],
)
def test_parse_answer_map_rejects_malformed_content(content: str | None, message: str) -> None:
    with pytest.raises(MalformedResponseError, match=message):
        parse_answer_map(content)
