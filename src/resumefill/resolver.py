"""Field resolution orchestration."""

from __future__ import annotations

import time
from functools import partial
from typing import TYPE_CHECKING

from resumefill import logger
from resumefill.processing.defaults import resolve_default
from resumefill.processing.matching import DEFAULT_CONSTANTS, MatchingConstants, decide
from resumefill.processing.synonyms import matching_classes
from resumefill.requester import request_answers
from resumefill.settings import get_settings
from resumefill.typing.enums import AnswerSource, FieldKind, FieldOutcome
from resumefill.typing.models import MatchDecision, ResolutionReport, ResolvedField

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import httpx

    from resumefill.settings import Settings
    from resumefill.typing.models import AnswerMap, FieldDescriptor, RequesterConfig
    from resumefill.typing.protocol import AnswerRequester, FieldFiller

    Strategy = Callable[..., MatchDecision]


def select_single_radio(
    answer: str,  # noqa: ARG001
    field: FieldDescriptor,
    *,
    constants: MatchingConstants,  # noqa: ARG001
) -> MatchDecision:
    """Select the only option of a single-choice radio group."""
    if field.field_kind == FieldKind.RADIO and len(field.options) == 1:
        return MatchDecision.select(0)
    return MatchDecision.no_match()


# Tried in order until one produces a decision other than NO_MATCH.
RESOLUTION_STRATEGIES: tuple[Strategy, ...] = (decide, select_single_radio)


class FieldResolver:
    """Resolve every field of a page against one batch of answers."""

    def __init__(
        self,
        config: RequesterConfig,
        *,
        requester: AnswerRequester | None = None,
        http_client: httpx.Client | None = None,
        constants: MatchingConstants = DEFAULT_CONSTANTS,
        strategies: tuple[Strategy, ...] = RESOLUTION_STRATEGIES,
    ) -> None:
        """Initialize resolver.

        Args:
            config (RequesterConfig): Options passed to the answer requester.
            requester (AnswerRequester | None): Batch answer provider; defaults to `request_answers`.
            http_client (httpx.Client | None): HTTP client for the default requester.
            constants (MatchingConstants): Fuzzy matching constants.
            strategies (tuple[Strategy, ...]): Ordered decision strategies.
        """
        self._config = config
        self._requester = requester or partial(request_answers, http_client=http_client)
        self._constants = constants
        self._strategies = strategies

    def _decide(self, answer: str, field: FieldDescriptor) -> MatchDecision:
        for strategy in self._strategies:
            decision = strategy(answer, field, constants=self._constants)
            if decision.matched:
                return decision
        return MatchDecision.no_match()

    def resolve_field(self, field: FieldDescriptor, answers: AnswerMap) -> ResolvedField:
        """Resolve one field from the answer map or a smart default.

        Args:
            field (FieldDescriptor): Field to resolve.
            answers (AnswerMap): Upstream answers for the page.

        Returns:
            ResolvedField: Decision and how it was reached.
        """
        answer = (answers.get(field.question) or "").strip()
        source = AnswerSource.UPSTREAM
        if not answer:
            default = resolve_default(field.question, field.field_kind)
            if default is None:
                logger.info("No answer or default for field", extra={"question": field.question})
                return ResolvedField(field=field, decision=MatchDecision.no_match())
            answer = default
            source = AnswerSource.SMART_DEFAULT

        decision = self._decide(answer, field)
        outcome = FieldOutcome.FILLED if decision.matched else FieldOutcome.SKIPPED
        logger.debug(
            "Field resolved",
            extra={
                "question": field.question,
                "field_kind": field.field_kind.to_str(),
                "answer": answer,
                "source": source.to_str(),
                "decision": decision.kind.to_str(),
                "synonym_classes": matching_classes(answer),
            },
        )
        if not decision.matched:
            logger.warning(
                "No option matched answer",
                extra={"question": field.question, "answer": answer, "options": list(field.options)},
            )
        return ResolvedField(field=field, decision=decision, answer=answer, source=source, outcome=outcome)

    def resolve(self, fields: Sequence[FieldDescriptor], resume_text: str) -> ResolutionReport:
        """Run one resolution pass.

        Args:
            fields (Sequence[FieldDescriptor]): Fields in page order.
            resume_text (str): Resume plain text.

        Returns:
            ResolutionReport: One resolved entry per field, in page order.
        """
        if not fields:
            return ResolutionReport()

        answers = self._requester(resume_text, fields, self._config)
        report = ResolutionReport(fields=[self.resolve_field(field, answers) for field in fields])
        logger.info(
            "Resolution pass complete",
            extra={"filled": report.filled, "skipped": report.skipped, "total": report.total},
        )
        return report


def apply_decisions(
    report: ResolutionReport,
    filler: FieldFiller,
    *,
    settle_delay_ms: int = 100,
    sleep: Callable[[float], None] = time.sleep,
) -> ResolutionReport:
    """Hand filled decisions to the filler one field at a time.

    A field the filler rejects or fails on is counted as skipped; the pass
    continues with the next field.

    Args:
        report (ResolutionReport): Resolved fields.
        filler (FieldFiller): Collaborator that mutates the form.
        settle_delay_ms (int): Pause after each applied field.
        sleep (Callable[[float], None]): Delay function, in seconds.

    Returns:
        ResolutionReport: Report with outcomes updated from the filler.
    """
    applied: list[ResolvedField] = []
    for item in report.fields:
        if item.outcome != FieldOutcome.FILLED:
            applied.append(item)
            continue
        try:
            changed = filler.apply(item.field, item.decision)
        except Exception:
            logger.exception("Error filling field", extra={"question": item.field.question})
            changed = False
        if changed:
            sleep(settle_delay_ms / 1000)
            applied.append(item)
        else:
            logger.warning("Filler did not apply decision", extra={"question": item.field.question})
            applied.append(item.model_copy(update={"outcome": FieldOutcome.SKIPPED}))
    return ResolutionReport(fields=applied)


def run_resolution_pass(
    fields: Sequence[FieldDescriptor],
    resume_text: str,
    *,
    settings: Settings | None = None,
    filler: FieldFiller | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ResolutionReport:
    """Resolve a page and optionally apply the decisions.

    Args:
        fields (Sequence[FieldDescriptor]): Fields in page order.
        resume_text (str): Resume plain text.
        settings (Settings | None): Runtime settings; loaded when omitted.
        filler (FieldFiller | None): Optional collaborator applying decisions.
        sleep (Callable[[float], None]): Delay function for the settle pause.

    Returns:
        ResolutionReport: Pass report.
    """
    config = settings or get_settings()
    resolver = FieldResolver(config.requester_config(), http_client=config.get_httpx_client())
    report = resolver.resolve(fields, resume_text)
    if filler is not None:
        report = apply_decisions(report, filler, settle_delay_ms=config.settle_delay_ms, sleep=sleep)
    logger.info(
        "Form filling complete",
        extra={
            "filled": report.filled,
            "total": report.total,
            "skipped": report.skipped,
            "success_rate": report.success_rate,
        },
    )
    return report
