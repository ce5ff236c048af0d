"""
Application Agent

Creates, edits and lists applications:
- add_application: builds a validated ApplicationRecord, dated now unless given
- edit_application: owner or shared users; visibility stays with the owner
- list_applications: the owner's applications, newest first, with an optional
  case-insensitive search over company, title and location

Validation is pydantic's: an invalid record is refused and never written.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from agents.base_agent import BaseAgent
from constants import Messages
from models.application_models import ApplicationRecord
from utils.metrics_utils import recent_applications
from utils.visibility_utils import can_edit, can_manage

# Set once, when the record is created
IMMUTABLE_FIELDS = frozenset({"id", "owner_id", "created_at"})
# Visibility; changed by the owner only
OWNER_ONLY_FIELDS = frozenset({"is_public", "shared_with"})

SEARCH_FIELDS = ("company_name", "job_title", "job_location")


def matches_search(record: ApplicationRecord, search: Optional[str]) -> bool:
    if not search or not search.strip():
        return True
    term = search.strip().lower()
    return any(term in (getattr(record, name) or "").lower() for name in SEARCH_FIELDS)


class ApplicationAgent(BaseAgent):

    async def add_application(
        self,
        owner_id: str,
        company_name: str,
        job_title: str,
        **fields,
    ) -> Optional[ApplicationRecord]:
        """
        Create and store an application for `owner_id`.

        Args:
            owner_id: Owner of the new record
            company_name / job_title: Required, must not be blank
            **fields: Any other ApplicationRecord field (status, dates, notes...)

        Returns:
            The stored record, or None if it is invalid or the write failed.
        """
        data = {"application_date": datetime.now(), **fields}
        for name in IMMUTABLE_FIELDS:
            data.pop(name, None)
        data.update(owner_id=owner_id, company_name=company_name, job_title=job_title)

        try:
            record = ApplicationRecord(**data)
        except ValidationError as e:
            await self._log('warning', Messages.APPLICATION_INVALID.format(errors=e.error_count()))
            return None

        if not await self._write(self.store.persist_record(record), f"record {record.id}"):
            await self._log('error', f"Failed to store application for {company_name}")
            return None
        await self._log('info', Messages.APPLICATION_ADDED.format(title=record.job_title, company=record.company_name))
        return record

    async def edit_application(self, viewer_id: str, record_id: str, **changes) -> Optional[ApplicationRecord]:
        """
        Apply `changes` to an existing record and store the re-validated result.

        Returns:
            The updated record, or None when the record is missing, the viewer may
            not edit it, the changes are invalid or the write failed.
        """
        blocked = IMMUTABLE_FIELDS & changes.keys()
        if blocked:
            await self._log('warning', f"Cannot change {', '.join(sorted(blocked))} of {record_id}")
            return None

        record = await self._read(self.store.fetch_record(record_id), None, f"record {record_id}")
        if record is None:
            await self._log('warning', f"{Messages.NOT_FOUND}: {record_id}")
            return None
        if not can_edit(record, viewer_id):
            await self._log('warning', f"{Messages.NOT_EDITABLE}: {record_id} (viewer {viewer_id})")
            return None
        restricted = OWNER_ONLY_FIELDS & changes.keys()
        if restricted and not can_manage(record, viewer_id):
            await self._log('warning', Messages.OWNER_ONLY_FIELDS.format(fields=', '.join(sorted(restricted))))
            return None

        try:
            updated = ApplicationRecord.model_validate({**record.model_dump(), **changes})
        except ValidationError as e:
            await self._log('warning', Messages.APPLICATION_INVALID.format(errors=e.error_count()))
            return None

        if not await self._write(self.store.persist_record(updated), f"record {record_id}"):
            return None
        await self._log('info', Messages.APPLICATION_UPDATED.format(record_id=record_id))
        return updated

    async def list_applications(self, owner_id: str, search: Optional[str] = None) -> List[ApplicationRecord]:
        records = await self._read(self.store.fetch_records(owner_id), [], f"applications of {owner_id}")
        records = [r for r in records if matches_search(r, search)]
        return recent_applications(records, limit=len(records))
