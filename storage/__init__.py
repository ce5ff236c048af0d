"""
Storage Package

This package handles persistence and logging.

Components:
- RecordStore: Async interface to the record backend
- InMemoryRecordStore / JsonRecordStore: Backends
- IdentityProvider: Source of the signed-in identity
- CSVStorage: CSV exports
- LogsManager: Manages application logging
"""

from .record_store import RecordStore, RecordStoreError
from .memory_store import InMemoryRecordStore
from .json_store import JsonRecordStore
from .identity_provider import IdentityProvider, SettingsIdentityProvider, StaticIdentityProvider
from .csv_storage import CSVStorage
from .logs_manager import LogsManager

__all__ = [
    'RecordStore', 'RecordStoreError', 'InMemoryRecordStore', 'JsonRecordStore',
    'IdentityProvider', 'SettingsIdentityProvider', 'StaticIdentityProvider',
    'CSVStorage', 'LogsManager',
]
