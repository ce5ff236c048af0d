"""
Analytics Agent

Fetches application records through the store and builds the dashboard and
analytics views:
- dashboard: personal metrics, status breakdown and most recent applications
- analytics: personal metrics for a timeframe compared with community metrics,
  top companies, the leaderboard and monthly trends
- view_user_stats: another user's metrics, if their profile shares them

Community figures only ever use records marked public. An unreadable store
yields empty figures (logged as errors); view_user_stats reports it as
UNAVAILABLE instead.
"""

from datetime import datetime
from typing import List, Optional

from agents.base_agent import BaseAgent
from constants import AnalyticsConstants, Messages
from models.application_models import ApplicationRecord
from models.metrics_models import (
    AccessOutcome,
    AccessResult,
    AnalyticsReport,
    DashboardSummary,
    DerivedMetrics,
)
from storage.logs_manager import LogsManager
from storage.record_store import RecordStore, RecordStoreError
from utils.metrics_utils import (
    build_leaderboard,
    calculate_metrics,
    filter_by_timeframe,
    monthly_trends,
    recent_applications,
    status_breakdown,
    top_companies,
)
from utils.visibility_utils import can_view_stats, public_records


class AnalyticsAgent(BaseAgent):
    def __init__(self, store: RecordStore, settings: Optional[dict] = None,
                 logs_manager: Optional[LogsManager] = None):
        super().__init__(store, settings, logs_manager)
        analytics = self.settings.get('analytics', {})
        self.default_timeframe = analytics.get('default_timeframe', AnalyticsConstants.DEFAULT_TIMEFRAME)
        self.top_companies_limit = analytics.get('top_companies_limit', AnalyticsConstants.TOP_COMPANIES_LIMIT)
        self.recent_limit = analytics.get('recent_limit', AnalyticsConstants.RECENT_APPLICATIONS_LIMIT)

    async def _records(self, owner_id: str) -> List[ApplicationRecord]:
        return await self._read(self.store.fetch_records(owner_id), [], f"applications of {owner_id}")

    async def _public_records(self) -> List[ApplicationRecord]:
        return public_records(await self._read(self.store.fetch_public_records(), [], "public applications"))

    async def metrics(self, owner_id: str) -> DerivedMetrics:
        return calculate_metrics(await self._records(owner_id))

    async def dashboard(self, owner_id: str) -> DashboardSummary:
        records = await self._records(owner_id)
        metrics = calculate_metrics(records)
        if metrics.counts.overlapping:
            await self._log('warning', f"{metrics.counts.overlapping} records match several status buckets")
        return DashboardSummary(
            metrics=metrics,
            breakdown=status_breakdown(metrics.counts),
            recent=recent_applications(records, self.recent_limit),
        )

    async def community_metrics(self) -> DerivedMetrics:
        return calculate_metrics(await self._public_records())

    async def _display_names(self) -> dict:
        profiles = await self._read(self.store.list_profiles(), [], "profiles")
        return {profile.user_id: profile.name for profile in profiles}

    async def analytics(
        self,
        owner_id: str,
        timeframe: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AnalyticsReport:
        """
        Build the analytics report for one user.

        Args:
            owner_id: Whose personal metrics to compute
            timeframe: Window for personal records (defaults to the configured one)
            now: Reference time for the window

        Returns:
            AnalyticsReport comparing the personal window with all public records.

        Raises:
            ValueError: If the timeframe is unknown
        """
        timeframe = timeframe or self.default_timeframe
        own = filter_by_timeframe(await self._records(owner_id), timeframe, now)
        community_records = await self._public_records()

        personal = calculate_metrics(own)
        community = calculate_metrics(community_records)

        report = AnalyticsReport(
            timeframe=timeframe,
            personal=personal,
            community=community,
            top_companies=top_companies(community_records, self.top_companies_limit),
            leaderboard=build_leaderboard(community_records, await self._display_names()),
            trends=monthly_trends(own),
            response_rate_delta=round(personal.response_rate - community.response_rate, 1),
            conversion_rate_delta=round(
                personal.interview_conversion_rate - community.interview_conversion_rate, 1),
        )
        await self._log('debug', f"Analytics for {owner_id} ({timeframe}): "
                                 f"{personal.total} personal, {community.total} public records")
        return report

    async def view_user_stats(self, user_id: str, viewer_id: Optional[str]) -> AccessResult:
        """Another user's DerivedMetrics, only when they are the viewer or share their stats."""
        try:
            profile = await self.store.fetch_profile(user_id)
        except RecordStoreError as e:
            await self._log('error', f"Could not read profile {user_id}: {e}")
            return AccessResult(AccessOutcome.UNAVAILABLE, message=Messages.STORE_UNAVAILABLE)
        if profile is None:
            return AccessResult(AccessOutcome.NOT_FOUND, message=Messages.NOT_FOUND)
        if not can_view_stats(profile, viewer_id):
            await self._log('info', f"Stats of {user_id} not shared with {viewer_id}")
            return AccessResult(AccessOutcome.NOT_AUTHORIZED, message=Messages.STATS_NOT_SHARED)
        return AccessResult(AccessOutcome.GRANTED, value=await self.metrics(user_id))
