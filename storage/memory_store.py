"""
In-memory Record Store

Dict-backed RecordStore used by the test-suite and as a scratch backend.
Models are copied on the way in and out so callers never share state with the
store. Individual writes can be made to fail through `failing_ids` to exercise
partial-failure paths.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set

from models.application_models import ApplicationRecord
from models.planning_models import PlannedApplicationRecord, UserSettings
from models.user_models import UserProfile
from storage.record_store import RecordStore


class InMemoryRecordStore(RecordStore):
    def __init__(
        self,
        records: Iterable[ApplicationRecord] = (),
        planned: Iterable[PlannedApplicationRecord] = (),
        settings: Iterable[UserSettings] = (),
        profiles: Iterable[UserProfile] = (),
    ):
        self.records: Dict[str, ApplicationRecord] = {r.id: r.model_copy(deep=True) for r in records}
        self.planned: Dict[str, PlannedApplicationRecord] = {p.id: p.model_copy(deep=True) for p in planned}
        self.settings: Dict[str, UserSettings] = {s.owner_id: s.model_copy() for s in settings}
        self.profiles: Dict[str, UserProfile] = {p.user_id: p.model_copy(deep=True) for p in profiles}

        # Writes touching these ids report failure
        self.failing_ids: Set[str] = set()
        self.write_count = 0

    def _fails(self, key: str) -> bool:
        self.write_count += 1
        return key in self.failing_ids

    # --- applications -------------------------------------------------------

    async def fetch_records(self, owner_id: str) -> List[ApplicationRecord]:
        return [r.model_copy(deep=True) for r in self.records.values() if r.owner_id == owner_id]

    async def fetch_public_records(self) -> List[ApplicationRecord]:
        return [r.model_copy(deep=True) for r in self.records.values() if r.is_public]

    async def fetch_shared_with(self, viewer_id: str) -> List[ApplicationRecord]:
        return [r.model_copy(deep=True) for r in self.records.values() if viewer_id in r.shared_ids]

    async def fetch_record(self, record_id: str) -> Optional[ApplicationRecord]:
        record = self.records.get(record_id)
        return record.model_copy(deep=True) if record else None

    async def persist_record(self, record: ApplicationRecord) -> bool:
        if self._fails(record.id):
            return False
        self.records[record.id] = record.model_copy(deep=True)
        return True

    async def delete_record(self, record_id: str) -> bool:
        if self._fails(record_id):
            return False
        return self.records.pop(record_id, None) is not None

    # --- planned applications -----------------------------------------------

    async def fetch_planned(self, owner_id: str) -> List[PlannedApplicationRecord]:
        return [p.model_copy(deep=True) for p in self.planned.values() if p.owner_id == owner_id]

    async def fetch_planned_record(self, record_id: str) -> Optional[PlannedApplicationRecord]:
        record = self.planned.get(record_id)
        return record.model_copy(deep=True) if record else None

    async def persist_planned(self, record: PlannedApplicationRecord) -> bool:
        if self._fails(record.id):
            return False
        self.planned[record.id] = record.model_copy(deep=True)
        return True

    async def persist_planned_date(self, record_id: str, new_date: datetime) -> bool:
        if self._fails(record_id) or record_id not in self.planned:
            return False
        self.planned[record_id] = self.planned[record_id].model_copy(update={"planned_date": new_date})
        return True

    # --- settings & profiles ------------------------------------------------

    async def fetch_settings(self, owner_id: str) -> Optional[UserSettings]:
        settings = self.settings.get(owner_id)
        return settings.model_copy() if settings else None

    async def persist_settings(self, owner_id: str, settings: UserSettings) -> bool:
        if self._fails(owner_id):
            return False
        self.settings[owner_id] = settings.model_copy(update={"owner_id": owner_id})
        return True

    async def fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        profile = self.profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    async def persist_profile(self, profile: UserProfile) -> bool:
        if self._fails(profile.user_id):
            return False
        self.profiles[profile.user_id] = profile.model_copy(deep=True)
        return True

    async def list_profiles(self) -> List[UserProfile]:
        return [p.model_copy(deep=True) for p in self.profiles.values()]
