"""
Visibility & Sharing Rules

Per-record gates decide what a given viewer may see or change. Community
statistics use a coarser gate: only records marked public are ever counted,
whoever is asking.
"""

from typing import Iterable, List, Optional

from constants import Messages
from models.application_models import ApplicationRecord
from models.metrics_models import AccessOutcome, AccessResult
from models.user_models import UserProfile
from utils.metrics_utils import recent_applications


def can_view(record: ApplicationRecord, viewer_id: Optional[str]) -> bool:
    return (
        record.owner_id == viewer_id
        or record.is_public
        or (viewer_id is not None and viewer_id in record.shared_ids)
    )


def can_edit(record: ApplicationRecord, viewer_id: Optional[str]) -> bool:
    if viewer_id is None:
        return False
    return record.owner_id == viewer_id or viewer_id in record.shared_ids


def can_manage(record: ApplicationRecord, viewer_id: Optional[str]) -> bool:
    """Deleting, visibility and the share list are reserved for the owner."""
    return viewer_id is not None and record.owner_id == viewer_id


def can_view_stats(profile: UserProfile, viewer_id: Optional[str]) -> bool:
    return profile.user_id == viewer_id or profile.share_stats


def check_access(record: Optional[ApplicationRecord], viewer_id: Optional[str]) -> AccessResult:
    if record is None:
        return AccessResult(AccessOutcome.NOT_FOUND, message=Messages.NOT_FOUND)
    if not can_view(record, viewer_id):
        return AccessResult(AccessOutcome.NOT_AUTHORIZED, message=Messages.NOT_AUTHORIZED)
    return AccessResult(AccessOutcome.GRANTED, value=record)


def public_records(records: Iterable[ApplicationRecord]) -> List[ApplicationRecord]:
    return [r for r in records if r.is_public]


def shared_with(records: Iterable[ApplicationRecord], viewer_id: str) -> List[ApplicationRecord]:
    """Records explicitly shared with `viewer_id` (not their own), newest first."""
    shared = [r for r in records if r.owner_id != viewer_id and viewer_id in r.shared_ids]
    return recent_applications(shared, limit=len(shared))
