"""
Metrics & Planning Engine.

Synchronous, side-effect free computations over fetched records.
"""

from .status_utils import classify_status, count_statuses, matching_buckets
from .metrics_utils import (
    average_response_time,
    build_leaderboard,
    calculate_metrics,
    filter_by_timeframe,
    monthly_trends,
    percentage,
    recent_applications,
    response_time_days,
    status_breakdown,
    top_companies,
)
from .planning_utils import (
    aggregate_history,
    daily_progress,
    group_by_planned_date,
    is_eligible,
    plan_distribution,
    resolve_daily_goal,
    todays_records,
)
from .visibility_utils import (
    can_edit,
    can_manage,
    can_view,
    can_view_stats,
    check_access,
    public_records,
    shared_with,
)

__all__ = [
    'classify_status', 'count_statuses', 'matching_buckets',
    'average_response_time', 'build_leaderboard', 'calculate_metrics',
    'filter_by_timeframe', 'monthly_trends', 'percentage', 'recent_applications',
    'response_time_days', 'status_breakdown', 'top_companies',
    'aggregate_history', 'daily_progress', 'group_by_planned_date', 'is_eligible',
    'plan_distribution', 'resolve_daily_goal', 'todays_records',
    'can_edit', 'can_manage', 'can_view', 'can_view_stats', 'check_access',
    'public_records', 'shared_with',
]
