"""
Session Lock Registry Module

Per-session asyncio locks so that two turns for the same interview never
read-modify-write the transcript at the same time inside one process. Turns on
different sessions use different locks and run in parallel. Cross-process
safety comes from the repository's version check.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from loguru import logger


class SessionLockRegistry:
    """Hands out one asyncio.Lock per session id."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        self._waiters[session_id] = self._waiters.get(session_id, 0) + 1
        if lock.locked():
            logger.debug(f"[Session {session_id}] Waiting for in-flight turn to finish")
        try:
            async with lock:
                yield
        finally:
            self._waiters[session_id] -= 1
            if self._waiters[session_id] == 0:
                # Idle, drop it
                del self._waiters[session_id]
                del self._locks[session_id]

    def is_held(self, session_id: str) -> bool:
        lock = self._locks.get(session_id)
        return lock is not None and lock.locked()


session_locks = SessionLockRegistry()
