import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx
import orjson

from ..models import CallbackPayload
from .notification import payload_to_dict

logger = logging.getLogger(__name__)


# Delivery failure is returned as False, never raised.
class CallbackSender:
    def __init__(
        self,
        token: str = "",
        max_attempts: int = 3,
        backoff_base: float = 10.0,
        timeout: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.token = token
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self.timeout = timeout
        self.sleep = sleep
        self.transport = transport

    def backoff_delay(self, attempt: int) -> float:
        """Delay after the given 1-based failed attempt."""
        return self.backoff_base * (2 ** (attempt - 1))

    async def send(self, url: str, payload: CallbackPayload) -> bool:
        body = orjson.dumps(payload_to_dict(payload))
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    r = await client.post(url, content=body, headers=headers)
                    r.raise_for_status()
                    logger.info("Callback delivered to %s (status %d)", url, r.status_code)
                    return True
                except httpx.HTTPStatusError as exc:
                    logger.warning(
                        "Callback attempt %d/%d failed with status: %d",
                        attempt, self.max_attempts, exc.response.status_code,
                    )
                except (httpx.HTTPError, httpx.InvalidURL) as exc:
                    logger.warning("Callback attempt %d/%d failed: %s", attempt, self.max_attempts, exc)

                if attempt < self.max_attempts:
                    await self.sleep(self.backoff_delay(attempt))

        logger.error("Callback to %s failed after %d attempts", url, self.max_attempts)
        return False
