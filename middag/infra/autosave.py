"""Debounced autosave for shared plans.

Edits to a shared plan arrive in bursts (every lock click, every drag). Each
schedule() call replaces the pending state of that plan id and restarts its
timer, so only the latest state is written once the edits go quiet.

Timers run on background threads; a failed write is logged because there is
no caller left to report it to. An explicit save goes through supersede()
so it is never overwritten by an older autosave still in flight.
"""
from __future__ import annotations
import logging
from threading import Lock, Timer
from typing import Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

__all__ = ['AutosaveScheduler']

T = TypeVar('T')


class AutosaveScheduler:
    def __init__(self, writer: Callable[[str, dict], bool], delay: float = 1.0):
        self._writer = writer
        self.delay = delay
        self._lock = Lock()
        # Held across take + write so writes of one scheduler never interleave
        self._write_lock = Lock()
        self._pending: Dict[str, dict] = {}
        self._timers: Dict[str, Timer] = {}

    def schedule(self, plan_id: str, state: dict) -> None:
        with self._lock:
            self._pending[plan_id] = state
            old = self._timers.pop(plan_id, None)
            if old is not None:
                old.cancel()
            timer = Timer(self.delay, self._fire, args=(plan_id, ))
            timer.daemon = True
            self._timers[plan_id] = timer
            timer.start()

    def pending(self, plan_id: str) -> Optional[dict]:
        with self._lock:
            return self._pending.get(plan_id)

    def _take(self, plan_id: str) -> Optional[dict]:
        with self._lock:
            timer = self._timers.pop(plan_id, None)
            if timer is not None:
                timer.cancel()
            return self._pending.pop(plan_id, None)

    def discard(self, plan_id: str) -> bool:
        """Drop a queued state without writing it; True if one was queued."""
        return self._take(plan_id) is not None

    def _write(self, plan_id: str, state: dict) -> bool:
        try:
            ok = self._writer(plan_id, state)
        except Exception as e:
            logger.error("Autosave of shared plan %s failed: %s", plan_id, e)
            return False
        if not ok:
            logger.warning("Autosave skipped: shared plan %s no longer exists", plan_id)
        return bool(ok)

    def _take_and_write(self, plan_id: str) -> bool:
        with self._write_lock:
            state = self._take(plan_id)
            return state is not None and self._write(plan_id, state)

    def _fire(self, plan_id: str) -> None:
        self._take_and_write(plan_id)

    def supersede(self, plan_id: str, save: Callable[[], T]) -> T:
        """Drop any queued state for `plan_id` and run `save()` instead.

        Holds the write lock, so an autosave already being written finishes
        first and cannot land on top of the explicit save.
        """
        with self._write_lock:
            self.discard(plan_id)
            return save()

    def flush(self, plan_id: Optional[str] = None) -> int:
        """Write pending states now (one id or all); returns how many were written."""
        with self._lock:
            ids = [plan_id] if plan_id is not None else list(self._pending)
        return sum(1 for pid in ids if self._take_and_write(pid))

    def cancel_all(self) -> None:
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            self._pending.clear()
