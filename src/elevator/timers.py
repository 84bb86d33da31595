"""Timer plumbing shared by the live server and offline scenarios.

``TimerSlots`` keeps at most one pending task per logical slot: scheduling
into an occupied slot cancels whatever was there. ``SimulatedClock`` is a
deterministic stand-in for an ``asyncio`` event loop so timelines can be
replayed without waiting on the wall clock.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimerSource(Protocol):
    """Anything that can run a callback later, e.g. ``asyncio.get_running_loop()``."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        ...

    def time(self) -> float:
        ...


class ScheduledCall:
    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self._when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def when(self) -> float:
        return self._when

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def run(self) -> None:
        self._callback(*self._args)


class SimulatedClock:
    """Manually advanced clock with an ``asyncio``-compatible ``call_later``."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._heap: List[Tuple[float, int, ScheduledCall]] = []
        self._sequence = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        call = ScheduledCall(self._now + max(0.0, delay), callback, args)
        heapq.heappush(self._heap, (call.when(), next(self._sequence), call))
        return call

    def pending(self) -> int:
        return sum(1 for _, _, call in self._heap if not call.cancelled())

    def next_deadline(self) -> Optional[float]:
        self._discard_cancelled()
        return self._heap[0][0] if self._heap else None

    def advance(self, seconds: float) -> int:
        """Move time forward, running every call due on the way. Returns how many ran."""

        horizon = self._now + seconds
        ran = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > horizon:
                break
            _, _, call = heapq.heappop(self._heap)
            self._now = deadline
            call.run()
            ran += 1
        self._now = horizon
        return ran

    def run_until_idle(self, limit: float = 3600.0) -> float:
        """Run calls until none remain or ``limit`` seconds have passed."""

        stop_at = self._now + limit
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > stop_at:
                break
            self.advance(deadline - self._now)
        return self._now

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled():
            heapq.heappop(self._heap)


class TimerSlots:
    """Named timer slots with supersession, plus untracked one-off tasks."""

    def __init__(self, source: TimerSource) -> None:
        self.source = source
        self._slots: Dict[str, TimerHandle] = {}
        self._deferred: Dict[int, TimerHandle] = {}
        self._deferred_ids = itertools.count()

    def schedule(self, slot: str, delay: float, callback: Callable[[], Any]) -> None:
        self.cancel(slot)
        self._slots[slot] = self.source.call_later(delay, self._fire_slot, slot, callback)
        logger.debug("Armed %s timer for %.2fs", slot, delay)

    def cancel(self, slot: str) -> None:
        handle = self._slots.pop(slot, None)
        if handle is not None:
            handle.cancel()
            logger.debug("Cancelled %s timer", slot)

    def active(self, slot: str) -> bool:
        return slot in self._slots

    def active_slots(self) -> List[str]:
        return sorted(self._slots)

    def defer(self, delay: float, callback: Callable[[], Any]) -> None:
        token = next(self._deferred_ids)
        self._deferred[token] = self.source.call_later(delay, self._fire_deferred, token, callback)

    def deferred_count(self) -> int:
        return len(self._deferred)

    def close(self) -> None:
        for slot in list(self._slots):
            self.cancel(slot)
        for handle in self._deferred.values():
            handle.cancel()
        self._deferred.clear()

    def _fire_slot(self, slot: str, callback: Callable[[], Any]) -> None:
        # Superseded handles are cancelled, so whatever fires owns the slot.
        self._slots.pop(slot, None)
        callback()

    def _fire_deferred(self, token: int, callback: Callable[[], Any]) -> None:
        self._deferred.pop(token, None)
        callback()
