"""
Cooperative deadline shared by every unit of work in one search
"""
import asyncio
import logging
from typing import Optional


class Deadline:
    """
    One-shot timer that flips ``expired`` when the time budget runs out

    Nothing in flight is cancelled. Work units check ``expired`` before they
    start and give up if it is set. A new Deadline is created for every
    search, so two searches never share the flag.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout and timeout > 0 else None
        self.expired = False
        self._handle: Optional[asyncio.TimerHandle] = None
        self.logger = logging.getLogger("Deadline")

    def start(self):
        """Arm the timer on the running event loop"""
        if self.timeout is None or self._handle is not None:
            return
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.timeout, self.expire)

    def expire(self):
        """Mark the deadline as passed"""
        if not self.expired:
            self.logger.warning(f"Search timed out after {self.timeout} seconds")
        self.expired = True
        self._handle = None

    def cancel(self):
        """Disarm the timer so it cannot fire after the search returns"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def __aenter__(self) -> "Deadline":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.cancel()
