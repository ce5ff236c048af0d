"""
Record Store Interface

The narrow, async interface the agents use to reach whatever backend holds
application, planned-application, settings and profile documents.

Reads return models (or None when absent). Writes return True/False so a
caller can report success per record; backends raise RecordStoreError only
for reads they cannot serve.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from models.application_models import ApplicationRecord
from models.planning_models import PlannedApplicationRecord, UserSettings
from models.user_models import UserProfile


class RecordStoreError(Exception):
    """Raised when a backend cannot serve a read."""


class RecordStore(ABC):

    # --- applications -------------------------------------------------------

    @abstractmethod
    async def fetch_records(self, owner_id: str) -> List[ApplicationRecord]:
        """All application records owned by `owner_id`."""

    @abstractmethod
    async def fetch_public_records(self) -> List[ApplicationRecord]:
        """Every record flagged public, whoever owns it."""

    @abstractmethod
    async def fetch_shared_with(self, viewer_id: str) -> List[ApplicationRecord]:
        """Records whose share list contains `viewer_id`."""

    @abstractmethod
    async def fetch_record(self, record_id: str) -> Optional[ApplicationRecord]:
        pass

    @abstractmethod
    async def persist_record(self, record: ApplicationRecord) -> bool:
        pass

    @abstractmethod
    async def delete_record(self, record_id: str) -> bool:
        pass

    # --- planned applications -----------------------------------------------

    @abstractmethod
    async def fetch_planned(self, owner_id: str) -> List[PlannedApplicationRecord]:
        pass

    @abstractmethod
    async def fetch_planned_record(self, record_id: str) -> Optional[PlannedApplicationRecord]:
        pass

    @abstractmethod
    async def persist_planned(self, record: PlannedApplicationRecord) -> bool:
        pass

    @abstractmethod
    async def persist_planned_date(self, record_id: str, new_date: datetime) -> bool:
        """Update only the planned date of one record."""

    # --- settings & profiles ------------------------------------------------

    @abstractmethod
    async def fetch_settings(self, owner_id: str) -> Optional[UserSettings]:
        pass

    @abstractmethod
    async def persist_settings(self, owner_id: str, settings: UserSettings) -> bool:
        pass

    @abstractmethod
    async def fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        pass

    @abstractmethod
    async def persist_profile(self, profile: UserProfile) -> bool:
        pass

    @abstractmethod
    async def list_profiles(self) -> List[UserProfile]:
        pass
