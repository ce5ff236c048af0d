"""
Derived Metrics Structures

Plain dataclasses for everything the engine computes from fetched records.
None of these are persisted; they are rebuilt on every query.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from models.application_models import ApplicationRecord
from models.planning_models import PlannedApplicationRecord


@dataclass
class StatusCounts:
    """Mutually exclusive bucket counts for a collection of applications.

    Attributes:
        total: Number of records classified
        not_yet_applied / application_started / interview / offer / rejection:
            Records whose status text matched that bucket
        pending: Everything else (remainder, never negative)
        overlapping: Records whose status matched more than one bucket
    """
    total: int = 0
    not_yet_applied: int = 0
    application_started: int = 0
    interview: int = 0
    offer: int = 0
    rejection: int = 0
    pending: int = 0
    overlapping: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "notYetApplied": self.not_yet_applied,
            "applicationStarted": self.application_started,
            "interview": self.interview,
            "offer": self.offer,
            "rejection": self.rejection,
            "pending": self.pending,
        }


@dataclass
class DerivedMetrics:
    counts: StatusCounts
    responses: int
    interview_rate: float
    response_rate: float
    rejection_rate: float
    offer_rate: float
    interview_conversion_rate: float
    average_response_time_days: float

    @property
    def total(self) -> int:
        return self.counts.total


@dataclass
class ChartSlice:
    label: str
    count: int


@dataclass
class DailyProgress:
    day: date
    goal: int
    planned_today: int
    completed_today: int
    progress_percent: float

    @property
    def remaining(self) -> int:
        return max(0, self.goal - self.completed_today)

    @property
    def goal_met(self) -> bool:
        return self.goal > 0 and self.completed_today >= self.goal


@dataclass
class HistoryDay:
    day: date
    records: List[PlannedApplicationRecord]

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass
class ApplicationHistory:
    days: List[HistoryDay]
    average_per_day: float

    @property
    def total_applied(self) -> int:
        return sum(day.count for day in self.days)

    def is_on_track(self, goal: int) -> bool:
        return self.average_per_day >= goal


@dataclass
class DistributionAssignment:
    record_id: str
    day_index: int
    planned_date: datetime


@dataclass
class DistributionPlan:
    """Result of planning an auto-distribution (no writes performed yet)."""
    goal: int
    assignments: List[DistributionAssignment] = field(default_factory=list)
    days_needed: int = 0
    rejected_reason: Optional[str] = None

    @property
    def eligible_count(self) -> int:
        return len(self.assignments)

    @property
    def is_noop(self) -> bool:
        return not self.assignments


@dataclass
class DistributionReport:
    """Outcome of persisting a distribution plan, one write per record."""
    attempted: int = 0
    succeeded: int = 0
    failed_ids: List[str] = field(default_factory=list)
    days_needed: int = 0
    rejected_reason: Optional[str] = None

    @property
    def failed(self) -> int:
        return len(self.failed_ids)

    @property
    def is_partial(self) -> bool:
        return 0 < self.failed < self.attempted


class AccessOutcome(str, Enum):
    GRANTED = "granted"
    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"
    UNAVAILABLE = "unavailable"


@dataclass
class AccessResult:
    outcome: AccessOutcome
    value: Any = None
    message: str = ""

    @property
    def granted(self) -> bool:
        return self.outcome is AccessOutcome.GRANTED


@dataclass
class CompanyCount:
    company: str
    count: int


@dataclass
class LeaderboardEntry:
    owner_id: str
    display_name: str
    applications: int
    interviews: int
    offers: int


@dataclass
class TrendPoint:
    month: str
    applications: int
    interviews: int


@dataclass
class AnalyticsReport:
    timeframe: str
    personal: DerivedMetrics
    community: DerivedMetrics
    top_companies: List[CompanyCount]
    leaderboard: List[LeaderboardEntry]
    trends: List[TrendPoint]
    response_rate_delta: float
    conversion_rate_delta: float
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass
class DashboardSummary:
    metrics: DerivedMetrics
    breakdown: List[ChartSlice]
    recent: List[ApplicationRecord]
