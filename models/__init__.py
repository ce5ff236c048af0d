"""
Data Models Package

Pydantic models for stored documents and dataclasses for derived results.

Models:
- Application records and the canonical status enum
- Planned applications and user settings
- Identities and user profiles
- Derived metrics, planning and access results
"""

from .application_models import ApplicationRecord, ApplicationStatus, SharedUser, parse_status
from .planning_models import PlannedApplicationRecord, PlannedStatus, Priority, UserSettings
from .user_models import Identity, ResumeLink, UserProfile
from .metrics_models import (
    AccessOutcome,
    AccessResult,
    AnalyticsReport,
    ApplicationHistory,
    ChartSlice,
    CompanyCount,
    DailyProgress,
    DashboardSummary,
    DerivedMetrics,
    DistributionAssignment,
    DistributionPlan,
    DistributionReport,
    HistoryDay,
    LeaderboardEntry,
    StatusCounts,
    TrendPoint,
)

__all__ = [
    'ApplicationRecord', 'ApplicationStatus', 'SharedUser', 'parse_status',
    'PlannedApplicationRecord', 'PlannedStatus', 'Priority', 'UserSettings',
    'Identity', 'ResumeLink', 'UserProfile',
    'AccessOutcome', 'AccessResult', 'AnalyticsReport', 'ApplicationHistory',
    'ChartSlice', 'CompanyCount', 'DailyProgress', 'DashboardSummary',
    'DerivedMetrics', 'DistributionAssignment', 'DistributionPlan',
    'DistributionReport', 'HistoryDay', 'LeaderboardEntry', 'StatusCounts',
    'TrendPoint',
]
