from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScanResetScheduler:
    """Cancellable delayed reset after a check-in/out.

    At most one reset is pending; scheduling again or calling `cancel()`
    drops the previous one. Callers cancel before any action that changes
    the scanned site or the view mode.

    `action` must not call back into the scheduler.
    """

    def __init__(
        self,
        action: Callable[[], None],
        *,
        delay_seconds: float,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ):
        self._action = action
        self._delay = float(delay_seconds)
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            timer = self._timer_factory(self._delay, lambda: self._fire(generation))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        # the action runs under the lock so cancel() returns only after it finished
        with self._lock:
            # a timer cancelled after it already started running
            if generation != self._generation:
                return
            self._timer = None
            logger.debug("Scan reset fired")
            self._action()
