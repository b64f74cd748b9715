"""Core domain model exports."""

from resumefill.typing.models.decision import MatchDecision, OptionMatch, ResolutionReport, ResolvedField
from resumefill.typing.models.field import FieldDescriptor
from resumefill.typing.models.request import ConnectionCheck, RequesterConfig

AnswerMap = dict[str, str]

__all__ = [
    "AnswerMap",
    "ConnectionCheck",
    "FieldDescriptor",
    "MatchDecision",
    "OptionMatch",
    "RequesterConfig",
    "ResolutionReport",
    "ResolvedField",
]
