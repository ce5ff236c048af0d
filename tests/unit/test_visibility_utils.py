"""
Unit Tests for Visibility & Sharing Rules
"""

from datetime import datetime

from models.application_models import SharedUser
from models.metrics_models import AccessOutcome
from models.user_models import UserProfile
from utils.visibility_utils import (
    can_edit,
    can_manage,
    can_view,
    can_view_stats,
    check_access,
    public_records,
    shared_with,
)


def test_owner_always_sees_own_record(make_record):
    record = make_record(owner_id="alice", is_public=False)
    assert can_view(record, "alice")


def test_public_record_visible_to_everyone(make_record):
    record = make_record(owner_id="alice", is_public=True)
    assert can_view(record, "bob")
    assert can_view(record, None)


def test_private_record_visible_only_to_listed_ids(make_record):
    record = make_record(owner_id="alice", shared_with=[SharedUser(id="bob")])
    assert can_view(record, "bob")
    assert not can_view(record, "carol")
    assert not can_view(record, None)


def test_edit_and_manage(make_record):
    record = make_record(owner_id="alice", is_public=True, shared_with=[SharedUser(id="bob")])
    assert can_edit(record, "alice")
    assert can_edit(record, "bob")
    assert not can_edit(record, "carol")
    assert can_manage(record, "alice")
    assert not can_manage(record, "bob")
    assert not can_manage(record, None)


def test_check_access_outcomes(make_record):
    record = make_record(owner_id="alice")

    granted = check_access(record, "alice")
    assert granted.outcome is AccessOutcome.GRANTED
    assert granted.value is record

    denied = check_access(record, "bob")
    assert denied.outcome is AccessOutcome.NOT_AUTHORIZED
    assert denied.value is None

    missing = check_access(None, "alice")
    assert missing.outcome is AccessOutcome.NOT_FOUND


def test_can_view_stats():
    private = UserProfile(user_id="alice", share_stats=False)
    shared = UserProfile(user_id="bob", share_stats=True)
    assert can_view_stats(private, "alice")
    assert not can_view_stats(private, "bob")
    assert can_view_stats(shared, "alice")


def test_public_records(make_record):
    records = [make_record(id="p", is_public=True), make_record(id="x")]
    assert [r.id for r in public_records(records)] == ["p"]


def test_shared_with_newest_first(make_record):
    bob = SharedUser(id="bob")
    records = [
        make_record(id="old", shared_with=[bob], application_date=datetime(2024, 1, 1)),
        make_record(id="new", shared_with=[bob], application_date=datetime(2024, 3, 1)),
        make_record(id="other", shared_with=[SharedUser(id="carol")]),
        make_record(id="own", owner_id="bob", shared_with=[bob]),
    ]
    assert [r.id for r in shared_with(records, "bob")] == ["new", "old"]
