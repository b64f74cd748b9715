"""Match decisions and resolution reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from resumefill.typing.enums import AnswerSource, DecisionKind, FieldOutcome, MatchTier
from resumefill.typing.models.field import FieldDescriptor


class OptionMatch(BaseModel):
    """Winning candidate of the matching engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int
    tier: MatchTier


class MatchDecision(BaseModel):
    """What the filler should do with one field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: DecisionKind
    text: str | None = None
    index: int | None = None
    indices: tuple[int, ...] = Field(default_factory=tuple)

    @field_validator("indices")
    @classmethod
    def _sort_indices(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        """Keep checkbox indices distinct and ordered.

        Args:
            value (tuple[int, ...]): Raw indices.

        Returns:
            tuple[int, ...]: Sorted distinct indices.
        """
        return tuple(sorted(set(value)))

    @classmethod
    def fill(cls, text: str) -> MatchDecision:
        """Build a literal text decision."""
        return cls(kind=DecisionKind.FILL, text=text)

    @classmethod
    def select(cls, index: int) -> MatchDecision:
        """Build a single-choice decision."""
        return cls(kind=DecisionKind.SELECT, index=index)

    @classmethod
    def select_many(cls, indices: tuple[int, ...] | list[int] | set[int]) -> MatchDecision:
        """Build a multi-choice decision."""
        return cls(kind=DecisionKind.SELECT_MANY, indices=tuple(indices))

    @classmethod
    def no_match(cls) -> MatchDecision:
        """Build the empty decision."""
        return cls(kind=DecisionKind.NO_MATCH)

    @property
    def matched(self) -> bool:
        """Return whether the decision changes the form."""
        return self.kind != DecisionKind.NO_MATCH


class ResolvedField(BaseModel):
    """Decision for one field plus how it was reached."""

    model_config = ConfigDict(extra="forbid")

    field: FieldDescriptor
    decision: MatchDecision
    answer: str | None = None
    source: AnswerSource = AnswerSource.NONE
    outcome: FieldOutcome = FieldOutcome.SKIPPED


class ResolutionReport(BaseModel):
    """Result of one resolution pass."""

    model_config = ConfigDict(extra="forbid")

    fields: list[ResolvedField] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def filled(self) -> int:
        """Number of fields with a decision applied."""
        return sum(1 for item in self.fields if item.outcome == FieldOutcome.FILLED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skipped(self) -> int:
        """Number of fields left untouched."""
        return sum(1 for item in self.fields if item.outcome == FieldOutcome.SKIPPED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        """Number of fields in the pass."""
        return len(self.fields)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_rate(self) -> int:
        """Rounded percentage of filled fields."""
        if not self.fields:
            return 0
        return round(self.filled / self.total * 100)

    def decisions(self) -> list[tuple[FieldDescriptor, MatchDecision]]:
        """Return `(field, decision)` pairs in page order."""
        return [(item.field, item.decision) for item in self.fields]
