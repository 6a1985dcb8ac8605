"""Redraw throttling for the curve canvas."""

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class RedrawThrottler:
    """Coalesce redraw requests so repaints happen at most once per interval.

    Requests are never lost: a request that arrives too early stays
    pending until the next call to should_redraw() that is allowed through.
    """

    min_interval_ms: float = 16.0
    clock: Callable[[], float] = time.perf_counter
    _pending: bool = field(default=False, init=False)
    _last_redraw: float = field(default=0.0, init=False)

    def request(self) -> None:
        """Mark that the view is out of date."""
        self._pending = True

    def should_redraw(self) -> bool:
        """Return True (and clear the request) if a redraw may run now."""
        if not self._pending:
            return False
        now = self.clock()
        if now - self._last_redraw >= self.min_interval_ms / 1000.0:
            self._last_redraw = now
            self._pending = False
            return True
        return False

    def remaining_ms(self) -> float:
        """Milliseconds until a pending request may be served."""
        elapsed = (self.clock() - self._last_redraw) * 1000.0
        return max(0.0, self.min_interval_ms - elapsed)

    @property
    def pending(self) -> bool:
        return self._pending
