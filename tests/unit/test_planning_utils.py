"""
Unit Tests for the Planning Engine

Tests daily progress, the application history and auto-distribution planning.
"""

from datetime import datetime, timedelta

from models.planning_models import PlannedStatus, UserSettings
from utils.planning_utils import (
    aggregate_history,
    daily_progress,
    group_by_planned_date,
    is_eligible,
    plan_distribution,
    resolve_daily_goal,
)


def at(day, hour=0):
    return datetime.combine(day, datetime.min.time()).replace(hour=hour)


def test_resolve_daily_goal_defaults_to_five():
    assert resolve_daily_goal(None) == 5
    assert resolve_daily_goal(None, default=7) == 7
    assert resolve_daily_goal(UserSettings(owner_id="alice", daily_application_goal=2)) == 2


def test_daily_progress_counts_only_todays_applied(make_planned, today):
    records = [
        make_planned(planned_date=at(today, 9), status=PlannedStatus.APPLIED),
        make_planned(planned_date=at(today, 23), status=PlannedStatus.APPLIED),
        make_planned(planned_date=at(today, 1)),
        make_planned(planned_date=at(today - timedelta(days=1)), status=PlannedStatus.APPLIED),
        make_planned(),
    ]
    progress = daily_progress(records, goal=4, today=today)

    assert progress.planned_today == 3
    assert progress.completed_today == 2
    assert progress.progress_percent == 50.0
    assert progress.remaining == 2
    assert not progress.goal_met


def test_daily_progress_with_non_positive_goal(make_planned, today):
    records = [make_planned(planned_date=at(today), status=PlannedStatus.APPLIED)]
    assert daily_progress(records, goal=0, today=today).progress_percent == 0
    assert daily_progress(records, goal=-2, today=today).progress_percent == 0


def test_daily_progress_can_exceed_goal(make_planned, today):
    records = [make_planned(planned_date=at(today), status=PlannedStatus.APPLIED) for _ in range(3)]
    progress = daily_progress(records, goal=2, today=today)
    assert progress.progress_percent == 150.0
    assert progress.goal_met


def test_history_groups_by_applied_day(make_planned, today):
    yesterday = today - timedelta(days=1)
    records = [
        make_planned(id="y1", status=PlannedStatus.APPLIED, applied_date=at(yesterday, 9)),
        make_planned(id="t1", status=PlannedStatus.APPLIED, applied_date=at(today, 8)),
        make_planned(id="y2", status=PlannedStatus.APPLIED, applied_date=at(yesterday, 10)),
        make_planned(id="t2", status=PlannedStatus.APPLIED, applied_date=at(today, 11)),
        make_planned(id="y3", status=PlannedStatus.APPLIED, applied_date=at(yesterday, 15)),
        make_planned(id="y4", status=PlannedStatus.APPLIED, applied_date=at(yesterday, 17)),
        make_planned(id="planned"),
        make_planned(id="skipped", status=PlannedStatus.SKIPPED, applied_date=at(today)),
    ]
    history = aggregate_history(records)

    assert [d.day for d in history.days] == [today, yesterday]
    assert [d.count for d in history.days] == [2, 4]
    assert [r.id for r in history.days[0].records] == ["t2", "t1"]
    assert history.average_per_day == 3.0
    assert history.total_applied == 6
    assert history.is_on_track(3)
    assert not history.is_on_track(4)


def test_history_without_applied_records():
    history = aggregate_history([])
    assert history.days == []
    assert history.average_per_day == 0


def test_eligibility(make_planned, today):
    assert is_eligible(make_planned(), today)
    assert is_eligible(make_planned(planned_date=at(today - timedelta(days=1), 23)), today)
    assert not is_eligible(make_planned(planned_date=at(today)), today)
    assert not is_eligible(make_planned(planned_date=at(today + timedelta(days=2))), today)
    assert not is_eligible(make_planned(status=PlannedStatus.APPLIED), today)


def test_distribution_by_priority(make_planned, today):
    priorities = ["Low", "High", "Medium", "High", "Low", "Medium", "High"]
    records = [make_planned(id=f"r{i}", priority=p) for i, p in enumerate(priorities)]

    plan = plan_distribution(records, goal=3, today=today)

    assert plan.days_needed == 3
    assert plan.eligible_count == 7
    by_day = {}
    for assignment in plan.assignments:
        by_day.setdefault(assignment.day_index, []).append(assignment.record_id)
    assert by_day == {
        0: ["r1", "r3", "r6"],
        1: ["r2", "r5", "r0"],
        2: ["r4"],
    }
    assert plan.assignments[0].planned_date == at(today)
    assert plan.assignments[-1].planned_date == at(today + timedelta(days=2))


def test_distribution_skips_ineligible(make_planned, today):
    records = [
        make_planned(id="future", planned_date=at(today + timedelta(days=1))),
        make_planned(id="today", planned_date=at(today, 15)),
        make_planned(id="done", status=PlannedStatus.APPLIED),
        make_planned(id="overdue", planned_date=at(today - timedelta(days=4))),
    ]
    plan = plan_distribution(records, goal=5, today=today)
    assert [a.record_id for a in plan.assignments] == ["overdue"]
    assert plan.days_needed == 1


def test_distribution_with_nothing_eligible(make_planned, today):
    plan = plan_distribution([make_planned(planned_date=at(today))], goal=3, today=today)
    assert plan.is_noop
    assert plan.days_needed == 0
    assert plan.rejected_reason is None


def test_distribution_refuses_invalid_goal(make_planned, today):
    plan = plan_distribution([make_planned()], goal=0, today=today)
    assert plan.rejected_reason
    assert plan.assignments == []


def test_missing_priority_sorts_as_medium(make_planned, today):
    records = [
        make_planned(id="low", priority="Low"),
        make_planned(id="none", priority=None),
        make_planned(id="odd", priority="Urgent"),
        make_planned(id="medium", priority="Medium"),
    ]
    plan = plan_distribution(records, goal=10, today=today)
    assert [a.record_id for a in plan.assignments] == ["none", "odd", "medium", "low"]


def test_group_by_planned_date(make_planned, today):
    tomorrow = today + timedelta(days=1)
    records = [
        make_planned(id="t2", planned_date=at(tomorrow, 9)),
        make_planned(id="u"),
        make_planned(id="t1", planned_date=at(today, 9)),
        make_planned(id="t3", planned_date=at(tomorrow, 18)),
    ]
    groups = group_by_planned_date(records)
    assert [(day, [r.id for r in rs]) for day, rs in groups] == [
        (today, ["t1"]),
        (tomorrow, ["t2", "t3"]),
        (None, ["u"]),
    ]
