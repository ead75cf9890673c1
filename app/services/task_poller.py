import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from ..models import Song, TaskRequest
from .callback import CallbackSender
from .notification import all_failed, build_callback_payload
from .udio_client import UdioClient

logger = logging.getLogger(__name__)


class TaskOutcome(str, Enum):
    SUCCESS = "success"
    ALL_FAILED = "all_failed"
    TIMEOUT = "timeout"


@dataclass
class TaskResult:
    outcome: TaskOutcome
    callback_success: Optional[bool] = None
    songs: List[Song] = field(default_factory=list)


def all_finished(songs: List[Song]) -> bool:
    # An empty listing means upstream does not know the ids yet.
    return bool(songs) and all(s.is_finished for s in songs)


class TaskPoller:
    def __init__(
        self,
        client: UdioClient,
        sender: CallbackSender,
        interval: float = 10.0,
        timeout: float = 600.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.sender = sender
        self.interval = interval
        self.timeout = timeout
        self.sleep = sleep
        self.clock = clock

    async def run(self, task: TaskRequest) -> TaskResult:
        start = self.clock()
        polls = 0

        while self.clock() - start < self.timeout:
            songs = await self.client.fetch_songs(task.trackIds)
            polls += 1

            if all_finished(songs):
                return await self._complete(task, songs, polls)

            pending = sum(1 for s in songs if not s.is_finished)
            logger.debug("Task %s poll #%d: %d/%d songs pending", task.taskId, polls, pending, len(songs))

            if self.clock() - start >= self.timeout:
                break
            await self.sleep(self.interval)

        logger.warning("Task %s timed out after %d polls (%.0fs budget)", task.taskId, polls, self.timeout)
        return TaskResult(outcome=TaskOutcome.TIMEOUT)

    async def _complete(self, task: TaskRequest, songs: List[Song], polls: int) -> TaskResult:
        outcome = TaskOutcome.ALL_FAILED if all_failed(songs) else TaskOutcome.SUCCESS
        logger.info("Task %s finished after %d polls: %s", task.taskId, polls, outcome.value)

        payload = build_callback_payload(task.taskId, songs)
        delivered = await self.sender.send(task.callbackUrl, payload)
        return TaskResult(outcome=outcome, callback_success=delivered, songs=songs)
