"""Collaborator interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resumefill.typing.models import AnswerMap, FieldDescriptor, MatchDecision, RequesterConfig


class AnswerBackend(Protocol):
    """One upstream answer-generation call, without retries."""

    def generate_answers(self, resume_text: str, fields: Sequence[FieldDescriptor]) -> AnswerMap:
        """Return the answer map for one batch.

        Args:
            resume_text: Resume plain text.
            fields: Fields to answer.

        Returns:
            AnswerMap: Question to answer mapping.
        """


class AnswerRequester(Protocol):
    """Batch answer provider used by the resolver."""

    def __call__(
        self,
        resume_text: str,
        fields: Sequence[FieldDescriptor],
        config: RequesterConfig,
    ) -> AnswerMap:
        """Return the answer map for a page, retrying as configured.

        Args:
            resume_text: Resume plain text.
            fields: Fields to answer.
            config: Requester options.

        Returns:
            AnswerMap: Question to answer mapping.
        """


class FieldFiller(Protocol):
    """Applies a decision to the rendered form."""

    def apply(self, field: FieldDescriptor, decision: MatchDecision) -> bool:
        """Apply one decision.

        Args:
            field: Target field.
            decision: Decision to apply.

        Returns:
            bool: True when the form was changed.
        """
