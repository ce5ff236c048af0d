"""
JSON Record Store

File-backed RecordStore: one JSON array per collection under `records_path`
  - applications.json
  - planned.json
  - settings.json
  - profiles.json

Files are read and written with aiofiles. An asyncio.Lock serialises
read-modify-write cycles inside one process; concurrent processes are not
coordinated (last writer wins).
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Type

import aiofiles
from pydantic import BaseModel, ValidationError

from models.application_models import ApplicationRecord
from models.planning_models import PlannedApplicationRecord, UserSettings
from models.user_models import UserProfile
from storage.logs_manager import LogsManager
from storage.record_store import RecordStore, RecordStoreError

COLLECTIONS = {
    "applications": ApplicationRecord,
    "planned": PlannedApplicationRecord,
    "settings": UserSettings,
    "profiles": UserProfile,
}


class JsonRecordStore(RecordStore):
    def __init__(self, settings: dict, logs_manager: LogsManager = None):
        """
        Args:
            settings (dict): Needs settings['storage']['records_path'], falling
                back to <system.data_dir>/records.
            logs_manager (LogsManager, optional): For load/save diagnostics.
        """
        storage_settings = settings.get('storage', {})
        data_dir = settings.get('system', {}).get('data_dir', './data')
        self.records_path = Path(storage_settings.get('records_path') or Path(data_dir) / 'records')
        self.records_path.mkdir(parents=True, exist_ok=True)

        self.logs_manager = logs_manager
        self._lock = asyncio.Lock()

    def _path(self, collection: str) -> Path:
        return self.records_path / f"{collection}.json"

    async def _load(self, collection: str) -> List[BaseModel]:
        model: Type[BaseModel] = COLLECTIONS[collection]
        path = self._path(collection)
        if not path.exists():
            return []

        try:
            async with aiofiles.open(path, 'r', encoding='utf-8') as f:
                raw = json.loads(await f.read() or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise RecordStoreError(f"Cannot read {path}: {e}") from e

        items = []
        for doc in raw:
            try:
                items.append(model.model_validate(doc))
            except ValidationError as e:
                if self.logs_manager:
                    await self.logs_manager.warning(
                        f"[JsonRecordStore] Skipping invalid {collection} document: {e.error_count()} errors"
                    )
        return items

    async def _save(self, collection: str, items: List[BaseModel]) -> bool:
        path = self._path(collection)
        payload = json.dumps([item.model_dump(mode="json") for item in items], indent=2)
        try:
            async with aiofiles.open(path, 'w', encoding='utf-8') as f:
                await f.write(payload)
            return True
        except OSError as e:
            if self.logs_manager:
                await self.logs_manager.error(f"[JsonRecordStore] Error writing {path}: {e}")
            return False

    async def _filter(self, collection: str, predicate: Callable) -> list:
        async with self._lock:
            return [item for item in await self._load(collection) if predicate(item)]

    async def _upsert(self, collection: str, key: Callable, item: BaseModel) -> bool:
        async with self._lock:
            try:
                items = await self._load(collection)
            except RecordStoreError as e:
                if self.logs_manager:
                    await self.logs_manager.error(f"[JsonRecordStore] {e}")
                return False
            for index, existing in enumerate(items):
                if key(existing) == key(item):
                    items[index] = item
                    break
            else:
                items.append(item)
            return await self._save(collection, items)

    async def _first(self, collection: str, predicate: Callable):
        matches = await self._filter(collection, predicate)
        return matches[0] if matches else None

    # --- applications -------------------------------------------------------

    async def fetch_records(self, owner_id: str) -> List[ApplicationRecord]:
        return await self._filter("applications", lambda r: r.owner_id == owner_id)

    async def fetch_public_records(self) -> List[ApplicationRecord]:
        return await self._filter("applications", lambda r: r.is_public)

    async def fetch_shared_with(self, viewer_id: str) -> List[ApplicationRecord]:
        return await self._filter("applications", lambda r: viewer_id in r.shared_ids)

    async def fetch_record(self, record_id: str) -> Optional[ApplicationRecord]:
        return await self._first("applications", lambda r: r.id == record_id)

    async def persist_record(self, record: ApplicationRecord) -> bool:
        return await self._upsert("applications", lambda r: r.id, record)

    async def delete_record(self, record_id: str) -> bool:
        async with self._lock:
            try:
                items = await self._load("applications")
            except RecordStoreError as e:
                if self.logs_manager:
                    await self.logs_manager.error(f"[JsonRecordStore] {e}")
                return False
            remaining = [r for r in items if r.id != record_id]
            if len(remaining) == len(items):
                return False
            return await self._save("applications", remaining)

    # --- planned applications -----------------------------------------------

    async def fetch_planned(self, owner_id: str) -> List[PlannedApplicationRecord]:
        return await self._filter("planned", lambda p: p.owner_id == owner_id)

    async def fetch_planned_record(self, record_id: str) -> Optional[PlannedApplicationRecord]:
        return await self._first("planned", lambda p: p.id == record_id)

    async def persist_planned(self, record: PlannedApplicationRecord) -> bool:
        return await self._upsert("planned", lambda p: p.id, record)

    async def persist_planned_date(self, record_id: str, new_date: datetime) -> bool:
        async with self._lock:
            try:
                items = await self._load("planned")
            except RecordStoreError as e:
                if self.logs_manager:
                    await self.logs_manager.error(f"[JsonRecordStore] {e}")
                return False
            found = False
            for index, item in enumerate(items):
                if item.id == record_id:
                    items[index] = item.model_copy(update={"planned_date": new_date})
                    found = True
            if not found:
                return False
            return await self._save("planned", items)

    # --- settings & profiles ------------------------------------------------

    async def fetch_settings(self, owner_id: str) -> Optional[UserSettings]:
        return await self._first("settings", lambda s: s.owner_id == owner_id)

    async def persist_settings(self, owner_id: str, settings: UserSettings) -> bool:
        settings = settings.model_copy(update={"owner_id": owner_id, "updated_at": datetime.now()})
        return await self._upsert("settings", lambda s: s.owner_id, settings)

    async def fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        return await self._first("profiles", lambda p: p.user_id == user_id)

    async def persist_profile(self, profile: UserProfile) -> bool:
        return await self._upsert("profiles", lambda p: p.user_id, profile)

    async def list_profiles(self) -> List[UserProfile]:
        return await self._filter("profiles", lambda p: True)
