from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from resumefill.exceptions import AnswerRequestError
from resumefill.requester import check_connection, request_answers
from resumefill.typing.enums import FailureCategory
from resumefill.typing.models import FieldDescriptor, RequesterConfig

if TYPE_CHECKING:
    from tests.conftest import RecordingSleep

_FIELDS = [FieldDescriptor(question="Full name")]
_CONFIG = RequesterConfig(
    base_url="https://llm.local/v1",
    api_key="test-api-key",  # pragma: allowlist secret
    model="x",
)


def _completion(content: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "x",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {"role": "assistant", "content": content},
                },
            ],
        },
    )


def _html_page() -> httpx.Response:
    return httpx.Response(200, text="<html>bad gateway</html>", headers={"content-type": "text/html"})


def _truncated_json() -> httpx.Response:
    return httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})


def _server_error() -> httpx.Response:
    return httpx.Response(500, json={"error": {"message": "upstream exploded"}})


class _ScriptedEndpoint:
    """Replays canned responses; the last one repeats once the script runs out."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        factory = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return factory()


def _client(endpoint: _ScriptedEndpoint) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(endpoint))


def test_fenced_json_reply_is_parsed(recording_sleep: RecordingSleep) -> None:
    endpoint = _ScriptedEndpoint(lambda: _completion('```json\n{"Full name": "Jane Doe"}\n```'))

    with _client(endpoint) as client:
        answers = request_answers("resume", _FIELDS, _CONFIG, http_client=client, sleep=recording_sleep)

    assert answers == {"Full name": "Jane Doe"}
    assert recording_sleep.calls == []
    request = endpoint.requests[0]
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer test-api-key"  # pragma: allowlist secret
    assert json.loads(request.content)["model"] == "x"


def test_server_errors_are_retried_until_success(recording_sleep: RecordingSleep) -> None:
    endpoint = _ScriptedEndpoint(
        _server_error,
        _server_error,
        _server_error,
        lambda: _completion('{"Full name": "Jane Doe"}'),
    )

    with _client(endpoint) as client:
        answers = request_answers("resume", _FIELDS, _CONFIG, http_client=client, sleep=recording_sleep)

    assert answers == {"Full name": "Jane Doe"}
    assert len(endpoint.requests) == 4
    assert recording_sleep.calls == [1.0, 2.0, 4.0]


@pytest.mark.parametrize("bad_reply", [_html_page, _truncated_json])
def test_unreadable_body_is_retried(bad_reply: Any, recording_sleep: RecordingSleep) -> None:
    endpoint = _ScriptedEndpoint(bad_reply)

    with _client(endpoint) as client, pytest.raises(AnswerRequestError) as exc_info:
        request_answers("resume", _FIELDS, _CONFIG, http_client=client, sleep=recording_sleep)

    assert exc_info.value.attempts == 4
    assert len(endpoint.requests) == 4
    assert recording_sleep.calls == [1.0, 2.0, 4.0]


def test_unreadable_body_then_success(recording_sleep: RecordingSleep) -> None:
    endpoint = _ScriptedEndpoint(_html_page, lambda: _completion('{"Full name": "Jane Doe"}'))

    with _client(endpoint) as client:
        answers = request_answers("resume", _FIELDS, _CONFIG, http_client=client, sleep=recording_sleep)

    assert answers == {"Full name": "Jane Doe"}
    assert recording_sleep.calls == [1.0]


def test_unauthorized_reply_ends_as_authentication_failure(recording_sleep: RecordingSleep) -> None:
    endpoint = _ScriptedEndpoint(lambda: httpx.Response(401, json={"error": {"message": "No auth credentials"}}))

    with _client(endpoint) as client, pytest.raises(AnswerRequestError) as exc_info:
        request_answers("resume", _FIELDS, _CONFIG, http_client=client, sleep=recording_sleep)

    assert exc_info.value.category == FailureCategory.AUTHENTICATION
    assert "API key" in exc_info.value.guidance


def test_connection_check_reports_unreadable_body() -> None:
    endpoint = _ScriptedEndpoint(_html_page)

    with _client(endpoint) as client:
        result = check_connection(_CONFIG, http_client=client)

    assert not result.success
    assert len(endpoint.requests) == 1


def test_connection_check_success() -> None:
    endpoint = _ScriptedEndpoint(lambda: _completion("API test successful"))

    with _client(endpoint) as client:
        result = check_connection(_CONFIG, http_client=client)

    assert result.success
    assert result.message == "API test successful"
