"""Batched answer requests with exponential backoff."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from resumefill import logger
from resumefill.backends.openai_answers import OpenAIAnswerBackend
from resumefill.exceptions import AnswerRequestError, MalformedResponseError, UpstreamCallFailure
from resumefill.typing.enums import FailureCategory, RetryPhase

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import httpx

    from resumefill.typing.models import AnswerMap, ConnectionCheck, FieldDescriptor, RequesterConfig
    from resumefill.typing.protocol import AnswerBackend

RetryableError = UpstreamCallFailure | MalformedResponseError


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry and how long to wait in between."""

    max_retries: int = 3
    base_delay_ms: int = 1000

    @classmethod
    def from_config(cls, config: RequesterConfig) -> RetryPolicy:
        """Build the policy from requester options."""
        return cls(max_retries=config.max_retries, base_delay_ms=config.retry_base_delay_ms)

    @property
    def max_attempts(self) -> int:
        """Total attempts including the first one."""
        return self.max_retries + 1

    def delay_ms(self, attempt: int) -> int:
        """Return the wait after failed attempt `attempt` (counted from 1)."""
        return self.base_delay_ms * 2 ** (attempt - 1)


@dataclass(frozen=True)
class RetryState:
    """Immutable state of the retry machine.

    Transitions: ATTEMPTING(n) -> SUCCEEDED | RETRYING(n) | FAILED, and
    RETRYING(n) -> ATTEMPTING(n + 1) once the delay has elapsed.
    """

    phase: RetryPhase
    attempt: int
    delay_ms: int = 0
    error: RetryableError | None = None

    @classmethod
    def start(cls) -> RetryState:
        """Return the state of the first attempt."""
        return cls(phase=RetryPhase.ATTEMPTING, attempt=1)

    def succeed(self) -> RetryState:
        """Move to SUCCEEDED."""
        return replace(self, phase=RetryPhase.SUCCEEDED, delay_ms=0, error=None)

    def fail(self, error: RetryableError, policy: RetryPolicy) -> RetryState:
        """Move to RETRYING, or FAILED when no attempt is left."""
        if self.attempt >= policy.max_attempts:
            return replace(self, phase=RetryPhase.FAILED, delay_ms=0, error=error)
        return replace(self, phase=RetryPhase.RETRYING, delay_ms=policy.delay_ms(self.attempt), error=error)

    def resume(self) -> RetryState:
        """Move from RETRYING to the next attempt."""
        return RetryState(phase=RetryPhase.ATTEMPTING, attempt=self.attempt + 1)


def request_answers(
    resume_text: str,
    fields: Sequence[FieldDescriptor],
    config: RequesterConfig,
    *,
    backend: AnswerBackend | None = None,
    http_client: httpx.Client | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AnswerMap:
    """Obtain the answer map for a batch of fields in one upstream call, with retries.

    Any non-success response, transport error or unparseable body fails the
    whole attempt; no partial answer map is kept.

    Args:
        resume_text (str): Resume plain text.
        fields (Sequence[FieldDescriptor]): Fields to answer.
        config (RequesterConfig): Requester options.
        backend (AnswerBackend | None): Backend override; defaults to the OpenAI-compatible backend.
        http_client (httpx.Client | None): HTTP client for the default backend.
        sleep (Callable[[float], None]): Delay function, in seconds.

    Raises:
        AnswerRequestError: If every attempt failed.

    Returns:
        AnswerMap: Question to answer mapping.
    """
    answer_backend = backend or OpenAIAnswerBackend(config, http_client=http_client)
    policy = RetryPolicy.from_config(config)
    state = RetryState.start()
    answers: AnswerMap = {}

    while True:
        if state.phase == RetryPhase.ATTEMPTING:
            logger.debug("Requesting answers", extra={"attempt": state.attempt, "questions": len(fields)})
            try:
                answers = answer_backend.generate_answers(resume_text, fields)
            except (UpstreamCallFailure, MalformedResponseError) as exc:
                state = state.fail(exc, policy)
                logger.warning(
                    "Answer request attempt failed",
                    extra={"attempt": state.attempt, "error": str(exc), "category": exc.category.to_str()},
                )
            else:
                state = state.succeed()
        elif state.phase == RetryPhase.RETRYING:
            sleep(state.delay_ms / 1000)
            state = state.resume()
        elif state.phase == RetryPhase.SUCCEEDED:
            return answers
        else:
            error = state.error
            message = str(error) if error else "unknown error"
            category = error.category if error else FailureCategory.OTHER
            raise AnswerRequestError(message=message, attempts=state.attempt, category=category) from error


def check_connection(
    config: RequesterConfig,
    *,
    backend: OpenAIAnswerBackend | None = None,
    http_client: httpx.Client | None = None,
) -> ConnectionCheck:
    """Send one probe request, without retries.

    Args:
        config (RequesterConfig): Requester options.
        backend (OpenAIAnswerBackend | None): Backend override.
        http_client (httpx.Client | None): HTTP client for the default backend.

    Returns:
        ConnectionCheck: Probe outcome.
    """
    probe_backend = backend or OpenAIAnswerBackend(config, http_client=http_client)
    result = probe_backend.probe()
    if result.success:
        logger.info("API connection test succeeded", extra={"model": config.model})
    else:
        logger.warning(
            "API connection test failed",
            extra={"status_code": result.status_code, "error": result.message},
        )
    return result

