"""Prompt builders and response parsing for answer generation."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

from resumefill.exceptions import MalformedResponseError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resumefill.typing.models import AnswerMap, FieldDescriptor

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")

ANSWER_INSTRUCTIONS = """
You are a JSON generator that fills forms based on resume data. Given a plain-text resume and a list of \
form questions with their field types, return ONLY valid JSON mapping each exact question string to an \
appropriate answer.

Guidelines for different field types:
- text/textarea: Provide detailed, relevant text from the resume. Be comprehensive but concise.
- radio: Choose ONE option that best matches. Use common short answers like "Yes", "No", \
"Bachelor's Degree", "Master's Degree", "Full Time", "Part Time", etc.
- checkbox: Provide comma-separated values for multiple selections if applicable
- dropdown: Provide a single value that would likely appear in a dropdown menu
- date: Provide dates in YYYY-MM-DD format when possible, or MM/DD/YYYY if that seems more appropriate
- email: Extract email address from resume
- phone: Extract phone number from resume
- url: Extract website/LinkedIn URL from resume

Important rules:
1. For Yes/No questions about experience, eligibility, authorization - default to "Yes" unless clearly \
contradicted by resume
2. For education questions - use common degree names: "High School", "Bachelor's Degree", \
"Master's Degree", "PhD"
3. For employment status - use "Full Time", "Part Time", "Contract", "Student", "Unemployed"
4. For location questions - provide country/state/city as appropriate
5. For radio buttons with limited options, pick the most reasonable choice
6. Always provide an answer for every question - never leave fields empty
7. Use standard, common terminology that would appear in dropdown menus

Be concise but accurate. Prioritize common, standardized answers that are likely to match form options.
Do NOT include any markdown or code fences.
""".strip()

CONNECTION_PROBE_INSTRUCTIONS = "You are a helpful assistant. Respond with 'API test successful'."
CONNECTION_PROBE_MESSAGE = "Test API connection - please confirm this is working"


def build_answer_payload(resume_text: str, fields: Sequence[FieldDescriptor]) -> str:
    """Build the user message carrying the resume and the question batch.

    Args:
        resume_text (str): Resume plain text.
        fields (Sequence[FieldDescriptor]): Fields to answer.

    Returns:
        str: JSON payload.
    """
    return json.dumps(
        {"resume": resume_text, "questions": [field.to_prompt_item() for field in fields]},
        ensure_ascii=False,
    )


def build_answer_messages(resume_text: str, fields: Sequence[FieldDescriptor]) -> list[dict[str, str]]:
    """Build chat messages for one answer request."""
    return [
        {"role": "system", "content": ANSWER_INSTRUCTIONS},
        {"role": "user", "content": build_answer_payload(resume_text, fields)},
    ]


def strip_code_fence(content: str) -> str:
    """Remove a leading ```json fence and a trailing ``` fence."""
    stripped = content.strip()
    stripped = _FENCE_START.sub("", stripped)
    return _FENCE_END.sub("", stripped).strip()


def _coerce_answer(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        parts = [str(item).strip() for item in value if item is not None and str(item).strip()]
        return ", ".join(parts) or None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, dict):
        return None
    text = str(value).strip()
    return text or None


def parse_answer_map(content: str | None) -> AnswerMap:
    """Parse model output into an answer map.

    Scalars become strings, lists are joined with `", "` and null or empty
    answers are dropped.

    Args:
        content (str | None): Raw message content.

    Raises:
        MalformedResponseError: If the content is not a JSON object.

    Returns:
        AnswerMap: Question to answer mapping.
    """
    if content is None or not content.strip():
        raise MalformedResponseError(message="Empty response content")

    try:
        payload = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(message=f"Response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError(message=f"Expected a JSON object, got {type(payload).__name__}")

    answers: AnswerMap = {}
    for question, value in payload.items():
        answer = _coerce_answer(value)
        if answer is not None:
            answers[str(question)] = answer
    return answers
