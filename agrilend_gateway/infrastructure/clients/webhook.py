"""Decision event webhook client with exponential backoff retry logic"""

import httpx
import asyncio
import logging
from typing import Dict, Any
from agrilend_gateway.config import settings
from agrilend_gateway.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter

logger = logging.getLogger(__name__)

# Client errors worth another attempt; any other 4xx will fail the same way again
RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


def is_retryable(error: httpx.HTTPError) -> bool:
    """Network failures and 5xx are retried; 4xx only for timeouts and rate limits"""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status >= 500 or status in RETRYABLE_CLIENT_STATUSES
    return True


class DecisionWebhookClient:
    """Publishes committed loan decisions to downstream subscribers (farmer notifications)"""

    def __init__(
        self,
        webhook_url: str | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.webhook_url = webhook_url or settings.decision_webhook_url
        self.max_retries = max_retries or settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base if backoff_base is None else backoff_base

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the given failed attempt: base * 2^(attempt-1)"""
        return self.backoff_base * (2 ** (attempt - 1))

    async def send_decision_event(self, payload: Dict[str, Any]) -> None:
        """
        Send a LOAN_DECISION_COMMITTED event with retry logic.

        The decision is already committed when this runs, so a delivery
        failure is logged and re-raised but never rolls anything back.

        Raises:
            httpx.HTTPError: Last delivery error once attempts are exhausted,
                or immediately for a non-retryable 4xx response
        """
        application_id = payload.get("application_id")
        attempt = 0
        async with httpx.AsyncClient() as client:
            while True:
                attempt += 1
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(
                            self.webhook_url,
                            json=payload,
                            timeout=settings.http_timeout_seconds,
                        )
                        response.raise_for_status()
                    return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    webhook_failure_counter.inc()

                    if not is_retryable(e) or attempt >= self.max_retries:
                        logger.error(
                            f"Decision webhook failed after {attempt} attempt(s): {e}",
                            extra={"application_id": application_id},
                        )
                        raise

                    delay = self.backoff_delay(attempt)
                    logger.warning(
                        f"Decision webhook attempt {attempt} failed, retrying in {delay}s: {e}",
                        extra={"application_id": application_id},
                    )
                    await asyncio.sleep(delay)
