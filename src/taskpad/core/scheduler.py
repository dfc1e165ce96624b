"""Coalescing deferred writes."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

CallSoon = Callable[[Callable[[], None]], Any]


@dataclass(slots=True)
class PendingWrite:
    """Token for a scheduled write. Superseded tokens never fire."""

    token: int
    callback: Callable[[], None]
    cancelled: bool = False


class DeferredWriter:
    """Runs only the most recently scheduled write, on the next idle tick.

    Without ``call_soon`` the owner drives ticks through ``run_pending``.
    With it (for example ``asyncio.get_running_loop().call_soon``) the event
    loop fires the write itself.
    """

    def __init__(self, call_soon: CallSoon | None = None) -> None:
        self._call_soon = call_soon
        self._counter = itertools.count(1)
        self._pending: PendingWrite | None = None
        self.writes = 0

    def schedule(self, callback: Callable[[], None]) -> PendingWrite:
        if self._pending is not None:
            self._pending.cancelled = True
        pending = PendingWrite(token=next(self._counter), callback=callback)
        self._pending = pending
        if self._call_soon is not None:
            self._call_soon(lambda: self._fire(pending))
        return pending

    def run_pending(self) -> bool:
        """Idle tick: run the pending write if there is one."""
        pending = self._pending
        if pending is None:
            return False
        return self._fire(pending)

    def flush(self) -> bool:
        return self.run_pending()

    def cancel(self) -> bool:
        pending = self._pending
        if pending is None:
            return False
        pending.cancelled = True
        self._pending = None
        logger.debug("Cancelled pending write %s", pending.token)
        return True

    @property
    def pending(self) -> PendingWrite | None:
        return self._pending

    def _fire(self, pending: PendingWrite) -> bool:
        if pending.cancelled or pending is not self._pending:
            return False
        self._pending = None
        self.writes += 1
        pending.callback()
        return True


__all__ = ["CallSoon", "DeferredWriter", "PendingWrite"]
