"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldKind(_EnumMixin):
    """Semantic category of a form field."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    DATE = "date"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"


class DecisionKind(_EnumMixin):
    """Shape of a match decision."""

    FILL = "fill"
    SELECT = "select"
    SELECT_MANY = "select_many"
    NO_MATCH = "no_match"


class MatchTier(_EnumMixin):
    """Matching strategy that produced a candidate."""

    EXACT = "exact"
    PARTIAL = "partial"
    FUZZY = "fuzzy"


class AnswerSource(_EnumMixin):
    """Origin of the answer used to resolve a field."""

    UPSTREAM = "upstream"
    SMART_DEFAULT = "smart_default"
    NONE = "none"


class FieldOutcome(_EnumMixin):
    """Per-field resolution outcome."""

    FILLED = "filled"
    SKIPPED = "skipped"


class FailureCategory(_EnumMixin):
    """Coarse classification of upstream failures."""

    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    OTHER = "other"


class RetryPhase(_EnumMixin):
    """States of the answer request retry machine."""

    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
