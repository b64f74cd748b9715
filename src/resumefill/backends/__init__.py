"""Answer generation backends."""

from resumefill.backends.openai_answers import OpenAIAnswerBackend, classify_failure, validate_config
from resumefill.typing.protocol import AnswerBackend

__all__ = [
    "AnswerBackend",
    "OpenAIAnswerBackend",
    "classify_failure",
    "validate_config",
]
