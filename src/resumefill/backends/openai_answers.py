"""OpenAI-compatible answer generation backend."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from openai import (
    APIConnectionError,
    APIError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    OpenAI,
)
from pydantic import BaseModel

from resumefill import logger
from resumefill.exceptions import BackendError, MalformedResponseError, UpstreamCallFailure
from resumefill.prompts import (
    CONNECTION_PROBE_INSTRUCTIONS,
    CONNECTION_PROBE_MESSAGE,
    build_answer_messages,
    parse_answer_map,
)
from resumefill.typing.enums import FailureCategory
from resumefill.typing.models import ConnectionCheck

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from resumefill.typing.models import AnswerMap, FieldDescriptor, RequesterConfig

OPENROUTER_KEY_PREFIX = "sk-or-v1-"
_PROBE_MAX_TOKENS = 100


def classify_failure(message: str, status_code: int | None = None) -> FailureCategory:
    """Map a failed call onto a coarse category for user guidance.

    Args:
        message (str): Failure message.
        status_code (int | None): HTTP status, when a response was received.

    Returns:
        FailureCategory: Failure category.
    """
    lowered = message.lower()
    if status_code in {401, 403} or "auth" in lowered or "credential" in lowered:
        return FailureCategory.AUTHENTICATION
    if status_code == 429 or "429" in lowered or "rate limit" in lowered:
        return FailureCategory.RATE_LIMIT
    if any(marker in lowered for marker in ("network", "fetch", "connection", "timed out")):
        return FailureCategory.NETWORK
    return FailureCategory.OTHER


def validate_config(config: RequesterConfig) -> None:
    """Check the endpoint configuration before any call.

    Args:
        config (RequesterConfig): Requester options.

    Raises:
        BackendError: If the base URL or the API key is missing.
    """
    if not config.base_url:
        raise BackendError(message="OPENAI_BASE_URL is required for answer generation")
    if not config.api_key:
        raise BackendError(message="OPENAI_API_KEY is required for answer generation")
    if "openrouter.ai" in config.base_url and not config.api_key.startswith(OPENROUTER_KEY_PREFIX):
        logger.warning(
            "API key format looks incorrect for OpenRouter",
            extra={"expected_prefix": OPENROUTER_KEY_PREFIX},
        )


class OpenAIAnswerBackend:
    """Single-attempt answer generation against OpenAI-compatible endpoints."""

    def __init__(self, config: RequesterConfig, *, http_client: httpx.Client | None = None) -> None:
        """Initialize backend.

        Args:
            config (RequesterConfig): Requester options.
            http_client (httpx.Client | None): Shared HTTP client, e.g. from settings.
        """
        self._config = config
        self._http_client = http_client

    def _client(self) -> OpenAI:
        validate_config(self._config)
        # Retries are driven by the requester state machine, not by the SDK.
        return OpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            http_client=self._http_client,
            default_headers=self._config.headers or None,
            max_retries=0,
        )

    def _post_chat_completions(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one completion request.

        Args:
            payload (dict[str, Any]): Request payload.

        Raises:
            UpstreamCallFailure: If the endpoint answers with an error or cannot be reached.
            MalformedResponseError: If the body cannot be read as a chat completion.

        Returns:
            dict[str, Any]: Completion payload.
        """
        client = self._client()
        try:
            completion = client.chat.completions.create(**payload)
        except APIStatusError as exc:
            message = f"HTTP {exc.status_code}: {exc.message}"
            raise UpstreamCallFailure(
                message=message,
                status_code=exc.status_code,
                category=classify_failure(message, exc.status_code),
            ) from exc
        except APITimeoutError as exc:
            raise UpstreamCallFailure(
                message="Chat completion request timed out",
                category=FailureCategory.NETWORK,
            ) from exc
        except APIConnectionError as exc:
            raise UpstreamCallFailure(
                message=f"Network error: {exc}",
                category=FailureCategory.NETWORK,
            ) from exc
        except (APIResponseValidationError, json.JSONDecodeError) as exc:
            raise MalformedResponseError(message=f"Response body is not a chat completion: {exc}") from exc
        except APIError as exc:
            message = f"API error: {exc.message}"
            raise UpstreamCallFailure(message=message, category=classify_failure(message)) from exc

        # Non-JSON bodies (e.g. a gateway HTML page) come back as plain text.
        if not isinstance(completion, BaseModel):
            raise MalformedResponseError(message="Response body is not a chat completion")

        data = completion.model_dump(mode="json")
        error = data.get("error")
        if error:
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            status_code = code if isinstance(code, int) else None
            raise UpstreamCallFailure(
                message=message,
                status_code=status_code,
                category=classify_failure(message, status_code),
            )
        return data

    @staticmethod
    def _message_content(data: dict[str, Any]) -> str | None:
        choices = data.get("choices") or []
        if not choices:
            raise MalformedResponseError(message="Response has no choices")
        message = choices[0].get("message") or {}
        return message.get("content")

    def generate_answers(self, resume_text: str, fields: Sequence[FieldDescriptor]) -> AnswerMap:
        """Ask the model for answers to one batch of questions.

        Args:
            resume_text (str): Resume plain text.
            fields (Sequence[FieldDescriptor]): Fields to answer.

        Returns:
            AnswerMap: Question to answer mapping.
        """
        payload = {
            "model": self._config.model,
            "messages": build_answer_messages(resume_text, fields),
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }
        data = self._post_chat_completions(payload)
        answers = parse_answer_map(self._message_content(data))
        logger.info("Answers generated", extra={"questions": len(fields), "answers": len(answers)})
        return answers

    def probe(self) -> ConnectionCheck:
        """Send one short request to check credentials and connectivity.

        Returns:
            ConnectionCheck: Probe outcome; failures are reported, not raised.
        """
        payload = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": CONNECTION_PROBE_INSTRUCTIONS},
                {"role": "user", "content": CONNECTION_PROBE_MESSAGE},
            ],
            "temperature": self._config.temperature,
            "max_tokens": _PROBE_MAX_TOKENS,
        }
        try:
            data = self._post_chat_completions(payload)
            content = self._message_content(data)
        except UpstreamCallFailure as exc:
            return ConnectionCheck(
                success=False,
                message=exc.message,
                status_code=exc.status_code,
                category=exc.category,
            )
        except MalformedResponseError as exc:
            return ConnectionCheck(success=False, message=exc.message, category=exc.category)
        return ConnectionCheck(success=True, message=(content or "").strip())
