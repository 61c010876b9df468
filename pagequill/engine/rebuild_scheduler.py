"""
Rebuild scheduler - debounced, cancellable pagination passes.

Single pending-timer model:
- a request arms a timer for the quiet interval; a newer request cancels and
  replaces it (last request wins, nothing is queued)
- a structural request (manual page break) cancels the pending timer and
  runs immediately on the caller's thread
- at most one pass runs at a time; a pass superseded by a newer request
  still completes but its result is not published
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_QUIET_INTERVAL = 0.2

P = TypeVar("P")
R = TypeVar("R")


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _thread_timer(interval: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class RebuildScheduler(Generic[P, R]):
    """
    Coalesces rebuild requests into single invocations of ``rebuild``.

    ``rebuild`` receives the payload of the winning request (typically a
    snapshot of the content) and returns the new result; ``on_result`` is
    called with every result that was not superseded.
    """

    def __init__(
        self,
        rebuild: Callable[[P], R],
        *,
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
        on_result: Optional[Callable[[R], Any]] = None,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        if quiet_interval < 0:
            raise ValueError("Quiet interval cannot be negative")
        self._rebuild = rebuild
        self.quiet_interval = quiet_interval
        self._on_result = on_result
        self._timer_factory = timer_factory or _thread_timer

        self._state_lock = threading.Lock()
        self._run_lock = threading.Lock()
        self._publish_lock = threading.RLock()
        self._timer: Optional[TimerHandle] = None
        self._pending_payload: Optional[P] = None
        self._pending_generation: Optional[int] = None
        self._generation = 0

        self.run_count = 0
        self.discarded_count = 0

    @property
    def pending(self) -> bool:
        with self._state_lock:
            return self._pending_generation is not None

    def request(self, payload: P) -> None:
        """Schedule a rebuild after the quiet interval, replacing any pending one."""
        with self._state_lock:
            self._cancel_pending_locked()
            self._generation += 1
            generation = self._generation
            self._pending_payload = payload
            self._pending_generation = generation
            timer = self._timer_factory(self.quiet_interval, lambda: self._fire(generation))
            self._timer = timer
        # Started outside the lock: a timer may fire synchronously.
        timer.start()

    def request_structural(self, payload: P) -> R:
        """Cancel any pending rebuild and run one now. Returns its result."""
        with self._state_lock:
            self._cancel_pending_locked()
            self._generation += 1
            generation = self._generation
        return self._execute(payload, generation)

    def flush(self) -> Optional[R]:
        """Run the pending rebuild immediately, if there is one."""
        with self._state_lock:
            if self._pending_generation is None:
                return None
            generation = self._pending_generation
            payload = self._pending_payload
            self._cancel_pending_locked()
        return self._execute(payload, generation)

    def cancel(self) -> None:
        """Drop the pending rebuild. A pass already running is not interrupted."""
        with self._state_lock:
            self._cancel_pending_locked()

    def close(self) -> None:
        self.cancel()

    def _cancel_pending_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending_payload = None
        self._pending_generation = None

    def _fire(self, generation: int) -> None:
        with self._state_lock:
            if self._pending_generation != generation:
                return
            payload = self._pending_payload
            self._timer = None
            self._pending_payload = None
            self._pending_generation = None
        try:
            self._execute(payload, generation)
        except Exception:
            logger.exception("Scheduled rebuild failed")

    def _execute(self, payload: P, generation: int) -> R:
        with self._run_lock:
            result = self._rebuild(payload)
            self.run_count += 1

        # Generation check and publication are atomic with respect to other passes.
        with self._publish_lock:
            with self._state_lock:
                latest = self._generation
            if generation != latest:
                self.discarded_count += 1
                logger.debug(f"Rebuild {generation} superseded by {latest}, result discarded")
                return result
            if self._on_result is not None:
                self._on_result(result)
        return result
