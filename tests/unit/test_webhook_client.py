"""Unit tests for decision webhook delivery and retry"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from agrilend_gateway.infrastructure.clients.webhook import DecisionWebhookClient, is_retryable

WEBHOOK_URL = "http://notify.test/decision-events"
SLEEP = "agrilend_gateway.infrastructure.clients.webhook.asyncio.sleep"
PAYLOAD = {"event": "LOAN_DECISION_COMMITTED", "application_id": "app-1", "status": "approved"}


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", WEBHOOK_URL))


def _client() -> DecisionWebhookClient:
    return DecisionWebhookClient(webhook_url=WEBHOOK_URL, max_retries=3, backoff_base=0.5)


def test_backoff_doubles_each_attempt():
    client = _client()
    assert [client.backoff_delay(n) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]


def test_delivered_on_first_attempt():
    with patch("httpx.AsyncClient.post", return_value=_response(200)) as mock_post, \
            patch(SLEEP, new_callable=AsyncMock) as mock_sleep:
        asyncio.run(_client().send_decision_event(PAYLOAD))

    assert mock_post.await_count == 1
    assert mock_post.call_args.kwargs["json"] == PAYLOAD
    mock_sleep.assert_not_awaited()


def test_retries_transient_failures_then_delivers():
    side_effect = [httpx.ConnectError("connection refused"), _response(503), _response(202)]

    with patch("httpx.AsyncClient.post", side_effect=side_effect) as mock_post, \
            patch(SLEEP, new_callable=AsyncMock) as mock_sleep:
        asyncio.run(_client().send_decision_event(PAYLOAD))

    assert mock_post.await_count == 3
    assert [c.args[0] for c in mock_sleep.await_args_list] == [0.5, 1.0]


def test_gives_up_after_max_retries():
    with patch("httpx.AsyncClient.post", side_effect=httpx.ConnectError("connection refused")) as mock_post, \
            patch(SLEEP, new_callable=AsyncMock) as mock_sleep:
        with pytest.raises(httpx.ConnectError):
            asyncio.run(_client().send_decision_event(PAYLOAD))

    assert mock_post.await_count == 3
    assert mock_sleep.await_count == 2


def test_client_error_is_not_retried():
    with patch("httpx.AsyncClient.post", return_value=_response(400)) as mock_post, \
            patch(SLEEP, new_callable=AsyncMock) as mock_sleep:
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(_client().send_decision_event(PAYLOAD))

    assert mock_post.await_count == 1
    mock_sleep.assert_not_awaited()


@pytest.mark.parametrize(
    "status, retryable",
    [(500, True), (503, True), (408, True), (429, True), (400, False), (404, False)],
)
def test_is_retryable_status(status, retryable):
    response = _response(status)
    error = httpx.HTTPStatusError("failed", request=response.request, response=response)
    assert is_retryable(error) is retryable
