"""Typing-centric domain modules."""

from resumefill.typing.enums import (
    AnswerSource,
    DecisionKind,
    FailureCategory,
    FieldKind,
    FieldOutcome,
    MatchTier,
    RetryPhase,
)
from resumefill.typing.models import (
    AnswerMap,
    ConnectionCheck,
    FieldDescriptor,
    MatchDecision,
    OptionMatch,
    RequesterConfig,
    ResolutionReport,
    ResolvedField,
)
from resumefill.typing.protocol import AnswerBackend, AnswerRequester, FieldFiller

__all__ = [
    "AnswerBackend",
    "AnswerMap",
    "AnswerRequester",
    "AnswerSource",
    "ConnectionCheck",
    "DecisionKind",
    "FailureCategory",
    "FieldDescriptor",
    "FieldFiller",
    "FieldKind",
    "FieldOutcome",
    "MatchDecision",
    "MatchTier",
    "OptionMatch",
    "RequesterConfig",
    "ResolutionReport",
    "ResolvedField",
    "RetryPhase",
]
