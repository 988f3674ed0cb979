"""
Debouncer - coalesce rapid calls into one after a quiescence window.

Each call replaces the pending one (last write wins). With a running event
loop the callback fires `delay` seconds after the last call, via
`loop.call_later`. Without a running loop it fires immediately.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable


logger = logging.getLogger(__name__)


class Debouncer:

    def __init__(self, callback: Callable[..., Any], delay: float):
        self.callback = callback
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._pending: tuple[tuple, dict] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._pending = (args, kwargs)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        if self.delay <= 0:
            self.flush()
            return
        self._handle = loop.call_later(self.delay, self.flush)

    def flush(self) -> None:
        """Run the pending call now, if there is one."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is None:
            return
        args, kwargs = self._pending
        self._pending = None
        self.callback(*args, **kwargs)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = None
