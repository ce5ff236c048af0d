"""
Application Metrics

Rates, response times and the aggregate views built on top of the status
buckets. Everything here is a pure function over already-fetched records:
- calculate_metrics: counts, interview/response/offer/rejection rates,
  interview-to-offer conversion and average response time
- status_breakdown / recent_applications: dashboard helpers
- filter_by_timeframe, top_companies, build_leaderboard, monthly_trends:
  analytics helpers

Every percentage is rounded to one decimal and is 0 when its denominator is 0.
"""

import math
from collections import Counter, OrderedDict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from constants import AnalyticsConstants
from models.application_models import ApplicationRecord
from models.metrics_models import (
    ChartSlice,
    CompanyCount,
    DerivedMetrics,
    LeaderboardEntry,
    StatusCounts,
    TrendPoint,
)
from utils.date_utils import to_local_date, to_local_naive, years_before
from utils.status_utils import classify_status, count_statuses

RESPONDED_BUCKETS = {"interview", "offer", "rejection"}
SECONDS_PER_DAY = 86400


def percentage(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator * 100, 1)


def has_response(record: ApplicationRecord) -> bool:
    """A record is responded to once it reached an interview-ish or terminal status, or heard back."""
    if record.date_heard_back is not None:
        return True
    return classify_status(record.application_status) in RESPONDED_BUCKETS


def response_time_days(record: ApplicationRecord) -> Optional[int]:
    """Whole days (rounded up) between applying and hearing back; None if either date is missing."""
    if record.application_date is None or record.date_heard_back is None:
        return None
    delta = to_local_naive(record.date_heard_back) - to_local_naive(record.application_date)
    return math.ceil(abs(delta.total_seconds()) / SECONDS_PER_DAY)


def average_response_time(records: Iterable[ApplicationRecord]) -> float:
    days = [d for d in (response_time_days(r) for r in records) if d is not None]
    if not days:
        return 0.0
    return round(sum(days) / len(days), 1)


def calculate_metrics(records: Iterable[ApplicationRecord]) -> DerivedMetrics:
    """Compute DerivedMetrics for a collection of application records."""
    records = list(records)
    counts = count_statuses(records)
    responses = sum(1 for record in records if has_response(record))

    return DerivedMetrics(
        counts=counts,
        responses=responses,
        interview_rate=percentage(counts.interview, counts.total),
        response_rate=percentage(responses, counts.total),
        rejection_rate=percentage(counts.rejection, responses),
        offer_rate=percentage(counts.offer, counts.total),
        interview_conversion_rate=percentage(counts.offer, counts.interview),
        average_response_time_days=average_response_time(records),
    )


def status_breakdown(counts: StatusCounts) -> List[ChartSlice]:
    """Chart series for the dashboard pie; zero slices are dropped."""
    slices = [
        ChartSlice("Applied", counts.pending),
        ChartSlice("Interview", counts.interview),
        ChartSlice("Offer", counts.offer),
        ChartSlice("Rejected", counts.rejection),
    ]
    slices = [s for s in slices if s.count > 0]
    return slices or [ChartSlice(AnalyticsConstants.NO_DATA_LABEL, 1)]


def recent_applications(
    records: Iterable[ApplicationRecord],
    limit: int = AnalyticsConstants.RECENT_APPLICATIONS_LIMIT,
) -> List[ApplicationRecord]:
    """Newest applications first; records without an application date go last."""
    records = list(records)
    dated = [r for r in records if r.application_date is not None]
    undated = [r for r in records if r.application_date is None]
    dated.sort(key=lambda r: to_local_naive(r.application_date), reverse=True)
    return (dated + undated)[:max(0, limit)]


def filter_by_timeframe(
    records: Iterable[ApplicationRecord],
    timeframe: str,
    now: Optional[datetime] = None,
) -> List[ApplicationRecord]:
    """
    Keep records whose application date falls inside the timeframe window.

    Args:
        records: Records to filter
        timeframe: One of AnalyticsConstants.TIMEFRAMES
        now: Reference time (defaults to the current local time)

    Returns:
        Matching records. Bounded windows drop records without a date.

    Raises:
        ValueError: If the timeframe is unknown
    """
    if timeframe not in AnalyticsConstants.TIMEFRAMES:
        raise ValueError(f"Unknown timeframe: {timeframe}")
    if timeframe == AnalyticsConstants.ALL_TIMEFRAME:
        return list(records)

    now = to_local_naive(now or datetime.now())
    if timeframe == AnalyticsConstants.CALENDAR_YEAR_TIMEFRAME:
        cutoff = years_before(now)
    else:
        cutoff = now - timedelta(days=AnalyticsConstants.TIMEFRAME_DAYS[timeframe])
    return [
        r for r in records
        if r.application_date is not None and to_local_naive(r.application_date) >= cutoff
    ]


def top_companies(
    records: Iterable[ApplicationRecord],
    limit: int = AnalyticsConstants.TOP_COMPANIES_LIMIT,
) -> List[CompanyCount]:
    counter = Counter(
        r.company_name.strip() for r in records
        if r.company_name and r.company_name.strip()
    )
    # sorted() is stable and Counter keeps first-seen order, so ties stay in that order
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return [CompanyCount(company, count) for company, count in ranked[:max(0, limit)]]


def build_leaderboard(
    records: Iterable[ApplicationRecord],
    names: Optional[Dict[str, str]] = None,
) -> List[LeaderboardEntry]:
    """Per-owner application, interview and offer counts, most applications first."""
    names = names or {}
    by_owner: "OrderedDict[str, List[ApplicationRecord]]" = OrderedDict()
    for record in records:
        by_owner.setdefault(record.owner_id, []).append(record)

    entries = []
    for owner_id, owned in by_owner.items():
        counts = count_statuses(owned)
        entries.append(LeaderboardEntry(
            owner_id=owner_id,
            display_name=names.get(owner_id) or owner_id,
            applications=counts.total,
            interviews=counts.interview,
            offers=counts.offer,
        ))
    entries.sort(key=lambda e: e.applications, reverse=True)
    return entries


def monthly_trends(records: Iterable[ApplicationRecord]) -> List[TrendPoint]:
    """Applications and interviews per calendar month of application date, oldest first."""
    months: Dict[str, List[int]] = {}
    for record in records:
        day = to_local_date(record.application_date)
        if day is None:
            continue
        key = f"{day.year:04d}-{day.month:02d}"
        bucket = months.setdefault(key, [0, 0])
        bucket[0] += 1
        if classify_status(record.application_status) == "interview":
            bucket[1] += 1
    return [TrendPoint(month, apps, interviews) for month, (apps, interviews) in sorted(months.items())]
