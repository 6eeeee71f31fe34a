"""
Tick scheduling.

The engine never owns a clock. A host supplies a Scheduler that can run a
callback "soon" (next animation frame, next timer slot) and cancel it; the
TickLoop asks for one frame at a time and stops asking once the step
function reports there is nothing left to do.

Stopping is synchronous: after `stop()` returns, no previously scheduled
frame will run the step function, even if the host fires it anyway.
"""

import asyncio
import itertools
import logging
from collections import OrderedDict
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 1 / 60


class Scheduler(Protocol):
    """Host-provided frame/timer driver."""

    def call_soon(self, callback: Callable[[], None]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler:
    """
    Queue of pending frames, drained explicitly.

    Used by tests and by the headless CLI, where frames run as fast as the
    CPU allows.
    """

    def __init__(self):
        self._pending: "OrderedDict[int, Callable[[], None]]" = OrderedDict()
        self._ids = itertools.count()

    def call_soon(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the frames queued so far (not ones they schedule). Returns count run."""
        batch = list(self._pending.items())
        self._pending.clear()
        for _, callback in batch:
            callback()
        return len(batch)

    def drain(self, max_frames: int = 10_000) -> int:
        """Run frames until the queue is empty or max_frames is reached."""
        frames = 0
        while self._pending and frames < max_frames:
            frames += self.run_pending()
        return frames


class AsyncioScheduler:
    """Schedules frames on an asyncio event loop at a fixed interval."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None,
                 interval: float = FRAME_INTERVAL):
        self.loop = loop or asyncio.get_running_loop()
        self.interval = interval

    def call_soon(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(self.interval, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TickLoop:
    """
    Drives a step function one frame at a time.

    The step function returns True to be rescheduled. A generation counter
    turns frames scheduled before the last `stop()` into no-ops.
    """

    def __init__(self, scheduler: Scheduler, step: Callable[[], bool]):
        self.scheduler = scheduler
        self.step = step
        self.generation = 0
        self.running = False
        self._handle: Any = None

    def start(self) -> None:
        """Begin ticking. Does nothing if already running."""
        if self.running:
            return
        self.running = True
        self.generation += 1
        self._schedule()

    def stop(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        if self.running:
            logger.debug(f"Stopped tick loop (generation {self.generation})")
        self.running = False
        self.generation += 1

    def _schedule(self) -> None:
        generation = self.generation
        self._handle = self.scheduler.call_soon(lambda: self._frame(generation))

    def _frame(self, generation: int) -> None:
        if generation != self.generation or not self.running:
            return
        self._handle = None
        try:
            keep_going = self.step()
        except Exception:
            self.running = False
            raise
        if keep_going:
            self._schedule()
        else:
            self.running = False
