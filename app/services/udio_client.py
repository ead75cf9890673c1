import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from ..models import Song, SongsResponse

logger = logging.getLogger(__name__)


class UdioError(Exception):
    pass


class SongFetchError(UdioError):
    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(f"Failed to fetch songs after {attempts} attempts")
        self.attempts = attempts
        self.last_error = last_error


class UdioClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        max_attempts: int = 5,
        retry_delay: float = 0.0,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.transport = transport

    async def fetch_songs(self, track_ids: Sequence[str]) -> List[Song]:
        if not track_ids:
            raise ValueError("track_ids must not be empty")

        url = f"{self.base_url}/songs"
        params = {"songIds": ",".join(track_ids)}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

        last_error: Optional[BaseException] = None
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    r = await client.get(url, params=params, headers=headers)
                    r.raise_for_status()
                    return SongsResponse.model_validate(r.json()).songs
                except (httpx.HTTPError, ValueError) as exc:
                    # ValueError covers bad JSON and pydantic ValidationError
                    last_error = exc
                    logger.warning("Song status attempt %d/%d failed: %s", attempt, self.max_attempts, _describe(exc))
                if attempt < self.max_attempts and self.retry_delay > 0:
                    await asyncio.sleep(self.retry_delay)

        raise SongFetchError(self.max_attempts, last_error)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}: {exc.response.text[:500]}"
    return f"{type(exc).__name__}: {exc}"
