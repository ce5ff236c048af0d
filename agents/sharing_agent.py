"""
Sharing Agent

Applies the visibility rules to individual records:
- view_application: GRANTED / NOT_FOUND / NOT_AUTHORIZED / UNAVAILABLE for one record
- update_status: owner or shared users may change the status text
- share_record / unshare_record / toggle_public / delete_record: owner only
- shared_with_me: every record other users shared with the viewer
"""

from typing import List, Optional

from agents.base_agent import BaseAgent
from constants import Messages
from models.application_models import ApplicationRecord, ApplicationStatus, SharedUser
from models.metrics_models import AccessOutcome, AccessResult
from storage.record_store import RecordStoreError
from utils.visibility_utils import can_edit, can_manage, check_access, shared_with


class SharingAgent(BaseAgent):

    async def view_application(self, record_id: str, viewer_id: Optional[str]) -> AccessResult:
        try:
            record = await self.store.fetch_record(record_id)
        except RecordStoreError as e:
            await self._log('error', f"Could not read record {record_id}: {e}")
            return AccessResult(AccessOutcome.UNAVAILABLE, message=Messages.STORE_UNAVAILABLE)

        result = check_access(record, viewer_id)
        if not result.granted:
            await self._log('info', f"{result.message}: {record_id} (viewer {viewer_id})")
        return result

    async def _fetch_record(self, record_id: str) -> Optional[ApplicationRecord]:
        return await self._read(self.store.fetch_record(record_id), None, f"record {record_id}")

    async def _managed_record(self, owner_id: str, record_id: str) -> Optional[ApplicationRecord]:
        record = await self._fetch_record(record_id)
        if record is None:
            await self._log('warning', f"{Messages.NOT_FOUND}: {record_id}")
            return None
        if not can_manage(record, owner_id):
            await self._log('warning', f"{owner_id} may not manage record {record_id}")
            return None
        return record

    async def _store_record(self, record: ApplicationRecord) -> bool:
        return await self._write(self.store.persist_record(record), f"record {record.id}")

    async def update_status(self, viewer_id: str, record_id: str, status: str) -> bool:
        """Change a record's status text. Accepts ApplicationStatus values or free text."""
        record = await self._fetch_record(record_id)
        if record is None or not can_edit(record, viewer_id):
            await self._log('warning', f"{viewer_id} may not edit record {record_id}")
            return False
        if isinstance(status, ApplicationStatus):
            status = status.value
        return await self._store_record(record.model_copy(update={"application_status": status}))

    async def share_record(self, owner_id: str, record_id: str, user: SharedUser) -> bool:
        """Add `user` to the share list; the owner and already-listed users are refused."""
        record = await self._managed_record(owner_id, record_id)
        if record is None:
            return False
        if user.id == record.owner_id or user.id in record.shared_ids:
            await self._log('info', f"Record {record_id} already visible to {user.id}")
            return False
        shared = record.shared_with + [user]
        return await self._store_record(record.model_copy(update={"shared_with": shared}))

    async def unshare_record(self, owner_id: str, record_id: str, user_id: str) -> bool:
        record = await self._managed_record(owner_id, record_id)
        if record is None or user_id not in record.shared_ids:
            return False
        shared = [u for u in record.shared_with if u.id != user_id]
        return await self._store_record(record.model_copy(update={"shared_with": shared}))

    async def toggle_public(self, owner_id: str, record_id: str) -> bool:
        record = await self._managed_record(owner_id, record_id)
        if record is None:
            return False
        success = await self._store_record(record.model_copy(update={"is_public": not record.is_public}))
        if success:
            await self._log('info', f"Record {record_id} is now {'public' if not record.is_public else 'private'}")
        return success

    async def delete_record(self, owner_id: str, record_id: str) -> bool:
        if await self._managed_record(owner_id, record_id) is None:
            return False
        return await self._write(self.store.delete_record(record_id), f"deletion of {record_id}")

    async def shared_with_me(self, viewer_id: str) -> List[ApplicationRecord]:
        records = await self._read(self.store.fetch_shared_with(viewer_id), [], f"records shared with {viewer_id}")
        return shared_with(records, viewer_id)
