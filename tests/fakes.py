from __future__ import annotations

from typing import Callable, List

import httpx


class FakeClock:
    """Monotonic clock whose time only moves when ``sleep`` is awaited."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class Recorder:
    """httpx.MockTransport handler that replays canned responses in order."""

    def __init__(self, *responses: Callable[[httpx.Request], httpx.Response] | httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return item

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def song(id, **kw):
    data = {
        "id": id,
        "song_path": None,
        "error_code": None,
        "error_detail": None,
        "image_path": None,
        "lyrics": None,
        "title": f"title {id}",
        "tags": ["pop"],
        "created_at": "2024-05-01T12:34:56.789Z",
        "duration": 95.5,
    }
    data.update(kw)
    return data


def songs_response(*songs) -> httpx.Response:
    return httpx.Response(200, json={"songs": list(songs)})
