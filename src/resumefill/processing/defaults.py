"""Keyword-triggered defaults for questions without an upstream answer."""

from __future__ import annotations

from dataclasses import dataclass

from resumefill.typing.enums import FieldKind


@dataclass(frozen=True)
class SmartDefault:
    """Default answer used when a question mentions one of its triggers."""

    name: str
    triggers: tuple[str, ...]
    value: str

    def applies_to(self, question: str) -> bool:
        """Return whether a trigger occurs in the question, ignoring case."""
        lowered = question.lower()
        return any(trigger in lowered for trigger in self.triggers)


SMART_DEFAULTS: tuple[SmartDefault, ...] = (
    SmartDefault(
        name="yes_no",
        triggers=("experience", "willing", "available", "authorized", "eligible", "interested"),
        value="Yes",
    ),
    SmartDefault(
        name="education",
        triggers=("education", "degree", "qualification", "study"),
        value="Bachelor's Degree",
    ),
    SmartDefault(name="employment", triggers=("employment", "status", "currently working"), value="Employed"),
    SmartDefault(
        name="location",
        triggers=("country", "location", "where", "city", "state"),
        value="United States",
    ),
)

DEFAULTABLE_KINDS = frozenset({FieldKind.RADIO, FieldKind.DROPDOWN, FieldKind.TEXT, FieldKind.TEXTAREA})


def find_default(question: str, *, table: tuple[SmartDefault, ...] = SMART_DEFAULTS) -> SmartDefault | None:
    """Return the first table entry triggered by the question."""
    return next((entry for entry in table if entry.applies_to(question)), None)


def resolve_default(
    question: str,
    field_kind: FieldKind | None = None,
    *,
    table: tuple[SmartDefault, ...] = SMART_DEFAULTS,
) -> str | None:
    """Infer a default answer from question keywords.

    Args:
        question (str): Question text.
        field_kind (FieldKind | None): Field kind; defaults only apply to
            radio, dropdown, text and textarea fields. `None` skips the check.
        table (tuple[SmartDefault, ...]): Ordered default table.

    Returns:
        str | None: Default answer, or None when nothing applies.
    """
    if field_kind is not None and field_kind not in DEFAULTABLE_KINDS:
        return None
    entry = find_default(question, table=table)
    return entry.value if entry else None
