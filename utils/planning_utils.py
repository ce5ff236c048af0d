"""
Planning Engine

Pure routines over planned-application records:
- daily_progress: today's completed count against the daily goal
- aggregate_history: applied records grouped per local calendar day
- plan_distribution: priority-ordered spreading of overdue or undated planned
  jobs over the coming days, at most `goal` per day
- group_by_planned_date: the day-by-day plan listing

No writes happen here. Agents persist whatever a DistributionPlan assigns.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from constants import Messages, PlanningConstants
from models.metrics_models import (
    ApplicationHistory,
    DailyProgress,
    DistributionAssignment,
    DistributionPlan,
    HistoryDay,
)
from models.planning_models import PlannedApplicationRecord, PlannedStatus, UserSettings
from utils.date_utils import start_of_day, to_local_date, to_local_naive, today_local
from utils.metrics_utils import percentage


def resolve_daily_goal(
    settings: Optional[UserSettings],
    default: int = PlanningConstants.DEFAULT_DAILY_GOAL,
) -> int:
    if settings is None:
        return default
    return settings.daily_application_goal


def todays_records(
    records: Iterable[PlannedApplicationRecord],
    today: Optional[date] = None,
) -> List[PlannedApplicationRecord]:
    today = today or today_local()
    return [r for r in records if to_local_date(r.planned_date) == today]


def daily_progress(
    records: Iterable[PlannedApplicationRecord],
    goal: int,
    today: Optional[date] = None,
) -> DailyProgress:
    """Progress towards today's goal; a goal of 0 or less reports 0%."""
    today = today or today_local()
    planned_today = todays_records(records, today)
    completed = sum(1 for r in planned_today if r.status == PlannedStatus.APPLIED)
    return DailyProgress(
        day=today,
        goal=goal,
        planned_today=len(planned_today),
        completed_today=completed,
        progress_percent=percentage(completed, goal),
    )


def aggregate_history(records: Iterable[PlannedApplicationRecord]) -> ApplicationHistory:
    """Group applied records by the local date they were applied on, newest day first."""
    by_day = {}
    for record in records:
        if record.status != PlannedStatus.APPLIED or record.applied_date is None:
            continue
        by_day.setdefault(to_local_date(record.applied_date), []).append(record)

    days = []
    for day in sorted(by_day, reverse=True):
        day_records = sorted(by_day[day], key=lambda r: to_local_naive(r.applied_date), reverse=True)
        days.append(HistoryDay(day=day, records=day_records))

    total = sum(day.count for day in days)
    average = total / len(days) if days else 0.0
    return ApplicationHistory(days=days, average_per_day=average)


def is_eligible(record: PlannedApplicationRecord, today: date) -> bool:
    """Still planned, and either undated or dated before the start of today."""
    if record.status != PlannedStatus.PLANNED:
        return False
    planned_day = to_local_date(record.planned_date)
    return planned_day is None or planned_day < today


def plan_distribution(
    records: Iterable[PlannedApplicationRecord],
    goal: int,
    today: Optional[date] = None,
) -> DistributionPlan:
    """
    Assign every eligible record a day, starting today, at most `goal` per day.

    Records are ordered by priority (High, Medium, Low) with a stable sort so
    equal priorities keep their original order; position i lands on day i // goal.

    Args:
        records: The owner's planned records
        goal: Daily application goal, must be at least 1
        today: Day index 0 (defaults to the current local date)

    Returns:
        A DistributionPlan. A goal below 1 is refused via `rejected_reason`
        and no assignments; no eligible records gives an empty plan.
    """
    if goal < 1:
        return DistributionPlan(goal=goal, rejected_reason=Messages.INVALID_GOAL.format(goal=goal))

    today = today or today_local()
    eligible = [r for r in records if is_eligible(r, today)]
    ordered = sorted(eligible, key=lambda r: r.priority_rank)

    assignments = []
    for position, record in enumerate(ordered):
        day_index = position // goal
        assignments.append(DistributionAssignment(
            record_id=record.id,
            day_index=day_index,
            planned_date=start_of_day(today + timedelta(days=day_index)),
        ))

    days_needed = -(-len(ordered) // goal)
    return DistributionPlan(goal=goal, assignments=assignments, days_needed=days_needed)


def group_by_planned_date(
    records: Iterable[PlannedApplicationRecord],
) -> List[Tuple[Optional[date], List[PlannedApplicationRecord]]]:
    """Records per local planned date, earliest first, undated ones in a trailing group."""
    groups = {}
    undated = []
    for record in records:
        day = to_local_date(record.planned_date)
        if day is None:
            undated.append(record)
        else:
            groups.setdefault(day, []).append(record)

    result = [(day, groups[day]) for day in sorted(groups)]
    if undated:
        result.append((None, undated))
    return result
