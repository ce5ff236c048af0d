"""
Base agent class shared by the tracker agents.
"""

from typing import Awaitable, Optional, TypeVar

from storage.logs_manager import LogsManager
from storage.record_store import RecordStore, RecordStoreError

T = TypeVar('T')


class BaseAgent:
    """Holds the record store, settings and logs manager every agent needs."""

    def __init__(self, store: RecordStore, settings: Optional[dict] = None,
                 logs_manager: Optional[LogsManager] = None):
        """
        Args:
            store (RecordStore): Backend the agent reads from and writes to.
            settings (dict, optional): Result of config.settings.load_settings().
            logs_manager (LogsManager, optional): Falls back to silence when absent.
        """
        self.store = store
        self.settings = settings or {}
        self.logs_manager = logs_manager

    async def _log(self, level: str, message: str) -> None:
        """Log `message` prefixed with the agent's class name."""
        if not self.logs_manager:
            return
        log_method = getattr(self.logs_manager, level, self.logs_manager.info)
        await log_method(f"[{self.__class__.__name__}] {message}")

    async def _read(self, fetch: Awaitable[T], default: T, what: str) -> T:
        """
        Await a store read.

        Returns:
            The fetched value, or `default` when the backend cannot serve the
            read. The RecordStoreError is logged and never re-raised.
        """
        try:
            return await fetch
        except RecordStoreError as e:
            await self._log('error', f"Could not read {what}: {e}")
            return default

    async def _write(self, persist: Awaitable[bool], what: str) -> bool:
        """Await a store write; a RecordStoreError counts as a failed write."""
        try:
            return await persist
        except RecordStoreError as e:
            await self._log('error', f"Could not store {what}: {e}")
            return False
