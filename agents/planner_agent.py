"""
Planner Agent

Async orchestration around the planning engine:
- Daily goal: read with a default fallback, validated updates
- Today's progress and the application history
- Planned job listing, creation and status transitions
- Auto-distribution of overdue/undated planned jobs

Distribution issues one persistence write per reassigned record. The writes are
not transactional: a failed write is recorded in the returned DistributionReport
and the remaining records are still attempted.

Reads that the store cannot serve are logged and give empty results, so
progress and history fall back to zero rather than raising.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import ValidationError

from agents.base_agent import BaseAgent
from constants import Messages, PlanningConstants
from models.metrics_models import ApplicationHistory, DailyProgress, DistributionReport
from models.planning_models import PlannedApplicationRecord, PlannedStatus, UserSettings
from storage.logs_manager import LogsManager
from storage.record_store import RecordStore, RecordStoreError
from utils.planning_utils import (
    aggregate_history,
    daily_progress,
    group_by_planned_date,
    plan_distribution,
    resolve_daily_goal,
)


class PlannerAgent(BaseAgent):
    def __init__(self, store: RecordStore, settings: Optional[dict] = None,
                 logs_manager: Optional[LogsManager] = None):
        super().__init__(store, settings, logs_manager)
        planning = self.settings.get('planning', {})
        self.default_goal = planning.get('default_daily_goal', PlanningConstants.DEFAULT_DAILY_GOAL)
        self.max_goal = planning.get('max_daily_goal', PlanningConstants.MAX_DAILY_GOAL)

    # --- daily goal ---------------------------------------------------------

    async def get_daily_goal(self, owner_id: str) -> int:
        """The persisted goal, or the configured default when none is stored."""
        try:
            settings = await self.store.fetch_settings(owner_id)
        except RecordStoreError as e:
            await self._log('warning', f"Could not read settings for {owner_id}, using default goal: {e}")
            settings = None
        return resolve_daily_goal(settings, self.default_goal)

    async def update_daily_goal(self, owner_id: str, goal: int) -> bool:
        """
        Persist a new daily goal.

        Args:
            owner_id: Whose settings to update
            goal: New goal, 1 <= goal <= max_daily_goal

        Returns:
            bool: True if stored; out-of-range goals are refused without writing.
        """
        if not isinstance(goal, int) or goal < 1 or goal > self.max_goal:
            await self._log('warning', Messages.GOAL_OUT_OF_RANGE.format(maximum=self.max_goal, goal=goal))
            return False

        success = await self._write(
            self.store.persist_settings(owner_id, UserSettings(owner_id=owner_id, daily_application_goal=goal)),
            f"settings of {owner_id}",
        )
        if success:
            await self._log('info', Messages.GOAL_UPDATED.format(goal=goal))
        else:
            await self._log('error', Messages.GOAL_UPDATE_FAILED)
        return success

    # --- progress & history -------------------------------------------------

    async def today_progress(self, owner_id: str, today: Optional[date] = None) -> DailyProgress:
        goal = await self.get_daily_goal(owner_id)
        return daily_progress(await self.planned_jobs(owner_id), goal, today)

    async def history(self, owner_id: str) -> ApplicationHistory:
        return aggregate_history(await self.planned_jobs(owner_id))

    # --- planned jobs -------------------------------------------------------

    async def planned_jobs(self, owner_id: str) -> List[PlannedApplicationRecord]:
        """The owner's planned jobs; empty when the store cannot be read."""
        return await self._read(self.store.fetch_planned(owner_id), [], f"planned jobs of {owner_id}")

    async def plan_by_day(self, owner_id: str) -> List[Tuple[Optional[date], List[PlannedApplicationRecord]]]:
        return group_by_planned_date(await self.planned_jobs(owner_id))

    async def add_planned(
        self,
        owner_id: str,
        company_name: str,
        job_title: str,
        priority: str = PlanningConstants.DEFAULT_PRIORITY,
        planned_date: Optional[datetime] = None,
        job_url: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[PlannedApplicationRecord]:
        """Create and store a planned job. Returns None if invalid or not stored."""
        try:
            record = PlannedApplicationRecord(
                owner_id=owner_id,
                company_name=company_name,
                job_title=job_title,
                priority=priority,
                planned_date=planned_date,
                job_url=job_url,
                notes=notes,
            )
        except ValidationError as e:
            await self._log('warning', f"Invalid planned job: {e.error_count()} errors")
            return None

        if not await self._write(self.store.persist_planned(record), f"planned job {record.id}"):
            await self._log('error', f"Failed to store planned job for {company_name}")
            return None
        await self._log('info', f"Planned {job_title} at {company_name}")
        return record

    async def mark_applied(self, owner_id: str, record_id: str, now: Optional[datetime] = None) -> bool:
        success = await self._transition(owner_id, record_id, PlannedStatus.APPLIED, now or datetime.now())
        if success:
            await self._log('info', Messages.MARKED_APPLIED)
        return success

    async def skip(self, owner_id: str, record_id: str) -> bool:
        return await self._transition(owner_id, record_id, PlannedStatus.SKIPPED)

    async def _transition(self, owner_id: str, record_id: str, new_status: PlannedStatus,
                          applied_at: Optional[datetime] = None) -> bool:
        record = await self._read(self.store.fetch_planned_record(record_id), None, f"planned job {record_id}")
        if record is None or record.owner_id != owner_id:
            await self._log('warning', f"{Messages.NOT_FOUND}: {record_id}")
            return False
        if not record.can_transition(new_status):
            await self._log('warning', Messages.TRANSITION_REFUSED.format(
                old=record.status.value, new=new_status.value))
            return False

        update = {"status": new_status}
        if new_status == PlannedStatus.APPLIED:
            update["applied_date"] = applied_at
        updated = record.model_copy(update=update)
        return await self._write(self.store.persist_planned(updated), f"planned job {record_id}")

    # --- auto-distribution --------------------------------------------------

    async def auto_distribute(self, owner_id: str, today: Optional[date] = None) -> DistributionReport:
        """
        Spread the owner's overdue and undated planned jobs over the coming days.

        Args:
            owner_id: Whose planned jobs to distribute
            today: Day index 0 (defaults to the current local date)

        Returns:
            DistributionReport with attempted/succeeded counts and the ids whose
            write failed. A refused goal or unreadable plan sets rejected_reason.
        """
        goal = await self.get_daily_goal(owner_id)
        try:
            planned = await self.store.fetch_planned(owner_id)
        except RecordStoreError as e:
            await self._log('error', f"Could not load planned jobs: {e}")
            return DistributionReport(rejected_reason=str(e))

        plan = plan_distribution(planned, goal, today)
        if plan.rejected_reason:
            await self._log('warning', plan.rejected_reason)
            return DistributionReport(rejected_reason=plan.rejected_reason)
        if plan.is_noop:
            await self._log('info', Messages.NO_JOBS_TO_DISTRIBUTE)
            return DistributionReport()

        report = DistributionReport(attempted=plan.eligible_count, days_needed=plan.days_needed)
        for assignment in plan.assignments:
            try:
                written = await self.store.persist_planned_date(assignment.record_id, assignment.planned_date)
            except RecordStoreError as e:
                await self._log('error', f"Error moving {assignment.record_id}: {e}")
                written = False
            if written:
                report.succeeded += 1
            else:
                report.failed_ids.append(assignment.record_id)

        if report.failed:
            await self._log('warning', Messages.PARTIAL_DISTRIBUTION.format(
                succeeded=report.succeeded, attempted=report.attempted, failed=report.failed))
        else:
            await self._log('info', Messages.DISTRIBUTED.format(
                count=report.succeeded, days=report.days_needed))
        return report
