"""
Command Line Interface Module (async)

Uses the built-in `cmd` module for input parsing. Commands are coroutines
(`async def do_*`), dispatched by `onecmd_async` and driven by `cmdloop_async`,
which reads input in an executor so the event loop keeps running.

Required Modules:
- cmd: For command-line interface base
- shlex: For argument splitting
- asyncio: To read input without blocking the loop
"""

import asyncio
import cmd
import inspect
import shlex
from typing import Any, Dict, List, Optional

from agents.analytics_agent import AnalyticsAgent
from agents.application_agent import ApplicationAgent
from agents.planner_agent import PlannerAgent
from agents.profile_agent import ProfileAgent
from agents.sharing_agent import SharingAgent
from constants import AnalyticsConstants, Messages
from models.user_models import Identity
from storage.csv_storage import CSVStorage
from storage.logs_manager import LogsManager


APPLICATION_FIELD_ALIASES = {
    "company": "company_name",
    "title": "job_title",
    "location": "job_location",
    "type": "job_type",
    "url": "job_posting_url",
    "status": "application_status",
    "applied": "application_date",
    "interview": "interview_date_time",
    "follow_up": "follow_up_date",
    "heard_back": "date_heard_back",
    "contact": "contact_person",
    "public": "is_public",
}

PROFILE_FIELD_ALIASES = {
    "name": "display_name",
    "photo": "photo_url",
}


def parse_fields(parts: List[str], aliases: Dict[str, str] = APPLICATION_FIELD_ALIASES) -> Optional[Dict[str, Any]]:
    """
    Turn `field=value` arguments into keyword arguments.

    Short names are mapped through `aliases`; an empty value clears the field.
    Returns None if any argument has no `=`.
    """
    fields = {}
    for part in parts:
        name, sep, value = part.partition('=')
        if not sep or not name:
            return None
        fields[aliases.get(name, name)] = value if value != '' else None
    return fields


class CLI(cmd.Cmd):
    intro = 'Welcome to the Job Application Tracker. Type help or ? to list commands.\n'
    prompt = '(tracker) '

    def __init__(
        self,
        planner: PlannerAgent,
        analytics: AnalyticsAgent,
        sharing: SharingAgent,
        identity: Optional[Identity],
        logs_manager: Optional[LogsManager] = None,
        csv_storage: Optional[CSVStorage] = None,
        applications: Optional[ApplicationAgent] = None,
        profiles: Optional[ProfileAgent] = None,
    ):
        super().__init__()
        self.planner = planner
        self.analytics = analytics
        self.sharing = sharing
        self.identity = identity
        self.logs_manager = logs_manager
        self.csv_storage = csv_storage
        self.applications = applications
        self.profiles = profiles

    # -------------------------------------------------------------------------
    # Async dispatch
    # -------------------------------------------------------------------------

    async def onecmd_async(self, line: str):
        """Interpret one line; returns True when the shell should stop."""
        command, arg, line = self.parseline(line)
        if not line:
            return None
        if command is None or command == '':
            return await self.default(line)
        self.lastcmd = line
        if command == 'help':
            self.do_help(arg)
            return None
        method = getattr(self, 'do_' + command, None)
        if method is None:
            return await self.default(line)
        result = method(arg)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def cmdloop_async(self):
        print(self.intro)
        loop = asyncio.get_running_loop()
        stop = None
        while not stop:
            try:
                line = await loop.run_in_executor(None, lambda: input(self.prompt))
            except EOFError:
                line = 'quit'
            stop = await self.onecmd_async(line.strip())

    async def _warn(self, message: str):
        if self.logs_manager:
            await self.logs_manager.warning(message)
        else:
            print(message)

    async def _owner_id(self) -> Optional[str]:
        if self.identity is None:
            await self._warn(Messages.NO_IDENTITY)
            return None
        return self.identity.id

    async def _configured(self, component, name: str) -> bool:
        if component is None:
            await self._warn(f"{name} is not configured.")
            return False
        return True

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def do_stats(self, arg):
        """Show your dashboard: counts, rates and recent applications."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        summary = await self.analytics.dashboard(owner_id)
        m = summary.metrics
        print(f"Total applications: {m.total}")
        for label, value in m.counts.as_dict().items():
            print(f"  {label:<20} {value}")
        print(f"Interview rate:      {m.interview_rate}%")
        print(f"Response rate:       {m.response_rate}%")
        print(f"Offer rate:          {m.offer_rate}%")
        print(f"Rejection rate:      {m.rejection_rate}%")
        print(f"Interview -> offer:  {m.interview_conversion_rate}%")
        print(f"Avg response time:   {m.average_response_time_days} days")
        print("Breakdown: " + ", ".join(f"{s.label}={s.count}" for s in summary.breakdown))
        if summary.recent:
            print("Recent applications:")
            for record in summary.recent:
                applied = record.application_date.strftime('%Y-%m-%d') if record.application_date else '-'
                print(f"  {applied}  {record.company_name} - {record.job_title} [{record.application_status}]")

    async def do_analytics(self, arg):
        """
        Compare your metrics with the community.
        Usage: analytics [7days|30days|90days|1year|all]
        """
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        timeframe = arg.strip() or None
        if timeframe and timeframe not in AnalyticsConstants.TIMEFRAMES:
            await self._warn(f"Unknown timeframe '{timeframe}'. "
                             f"Choose one of: {', '.join(AnalyticsConstants.TIMEFRAMES)}")
            return
        report = await self.analytics.analytics(owner_id, timeframe)
        print(f"Timeframe: {report.timeframe}")
        print(f"Response rate:   you {report.personal.response_rate}% / "
              f"community {report.community.response_rate}% ({report.response_rate_delta:+.1f})")
        print(f"Conversion rate: you {report.personal.interview_conversion_rate}% / "
              f"community {report.community.interview_conversion_rate}% ({report.conversion_rate_delta:+.1f})")
        if report.top_companies:
            print("Top companies: " + ", ".join(f"{c.company} ({c.count})" for c in report.top_companies))
        for rank, entry in enumerate(report.leaderboard, start=1):
            print(f"  {rank}. {entry.display_name}: {entry.applications} applications, "
                  f"{entry.interviews} interviews, {entry.offers} offers")
        for point in report.trends:
            print(f"  {point.month}: {point.applications} applications, {point.interviews} interviews")

    async def do_today(self, arg):
        """Show today's progress towards your daily goal."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        progress = await self.planner.today_progress(owner_id)
        print(f"{progress.day.isoformat()}: {progress.completed_today}/{progress.goal} applied "
              f"({progress.progress_percent}%), {progress.planned_today} planned today")
        if progress.goal_met:
            print("Daily goal reached!")

    async def do_history(self, arg):
        """Show applied jobs grouped by day."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        history = await self.planner.history(owner_id)
        if not history.days:
            print("No applications recorded yet.")
            return
        for day in history.days:
            print(f"{day.day.isoformat()} ({day.count})")
            for record in day.records:
                print(f"  {record.company_name} - {record.job_title}")
        print(f"Average per day: {history.average_per_day:.1f}")

    async def do_plan(self, arg):
        """List planned jobs by day."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        groups = await self.planner.plan_by_day(owner_id)
        if not groups:
            print("No planned jobs.")
            return
        for day, records in groups:
            print(day.isoformat() if day else "No date")
            for record in records:
                print(f"  [{record.status.value}] {record.id}  {record.company_name} - "
                      f"{record.job_title} ({record.priority or 'Medium'})")

    async def do_distribute(self, arg):
        """Spread overdue and undated planned jobs over the coming days."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        report = await self.planner.auto_distribute(owner_id)
        if report.rejected_reason:
            await self._warn(report.rejected_reason)
        elif report.attempted == 0:
            print(Messages.NO_JOBS_TO_DISTRIBUTE)
        elif report.failed:
            print(Messages.PARTIAL_DISTRIBUTION.format(
                succeeded=report.succeeded, attempted=report.attempted, failed=report.failed))
        else:
            print(Messages.DISTRIBUTED.format(count=report.succeeded, days=report.days_needed))

    async def do_goal(self, arg):
        """
        Show or set your daily application goal.
        Usage: goal [n]
        """
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        if not arg.strip():
            print(f"Daily goal: {await self.planner.get_daily_goal(owner_id)}")
            return
        try:
            goal = int(arg.strip())
        except ValueError:
            await self._warn('Usage: goal [n]')
            return
        if await self.planner.update_daily_goal(owner_id, goal):
            print(Messages.GOAL_UPDATED.format(goal=goal))
        else:
            print(Messages.GOAL_UPDATE_FAILED)

    async def do_applied(self, arg):
        """
        Mark a planned job as applied.
        Usage: applied <planned id>
        """
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        parts = shlex.split(arg)
        if not parts:
            await self._warn('Usage: applied <planned id>')
            return
        if await self.planner.mark_applied(owner_id, parts[0]):
            print(Messages.MARKED_APPLIED)
        else:
            print(f"Could not mark {parts[0]} as applied.")

    async def do_skip(self, arg):
        """
        Skip a planned job.
        Usage: skip <planned id>
        """
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        parts = shlex.split(arg)
        if not parts:
            await self._warn('Usage: skip <planned id>')
            return
        print("Job skipped." if await self.planner.skip(owner_id, parts[0]) else f"Could not skip {parts[0]}.")

    async def do_list(self, arg):
        """
        List your applications, newest first.
        Usage: list [search text]
        """
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.applications, "Application management"):
            return
        records = await self.applications.list_applications(owner_id, arg.strip() or None)
        if not records:
            print("No applications found.")
            return
        for record in records:
            applied = record.application_date.strftime('%Y-%m-%d') if record.application_date else '-'
            print(f"  {record.id}  {applied}  {record.company_name} - {record.job_title} "
                  f"[{record.application_status}]")

    async def do_add(self, arg):
        """
        Add an application.
        Usage: add <company> <title> [status] [field=value ...]
        """
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.applications, "Application management"):
            return
        try:
            parts = shlex.split(arg)
        except ValueError as e:
            await self._warn(f"Could not parse arguments: {e}")
            return
        if len(parts) < 2:
            await self._warn('Usage: add <company> <title> [status] [field=value ...]')
            return
        company, title, rest = parts[0], parts[1], parts[2:]
        if rest and '=' not in rest[0]:
            rest = [f"status={rest[0]}"] + rest[1:]
        fields = parse_fields(rest)
        if fields is None:
            await self._warn('Extra arguments must look like field=value')
            return
        record = await self.applications.add_application(owner_id, company, title, **fields)
        if record is None:
            print("Could not add the application.")
            return
        print(Messages.APPLICATION_ADDED.format(title=record.job_title, company=record.company_name)
              + f" ({record.id})")

    async def do_edit(self, arg):
        """
        Change fields of an application you own or that was shared with you.
        Usage: edit <application id> field=value [field=value ...]
        Fields: company, title, location, type, url, status, applied, interview,
        follow_up, heard_back, salary, contact, contact_email, notes, public
        """
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.applications, "Application management"):
            return
        try:
            parts = shlex.split(arg)
        except ValueError as e:
            await self._warn(f"Could not parse arguments: {e}")
            return
        fields = parse_fields(parts[1:]) if len(parts) > 1 else None
        if not fields:
            await self._warn('Usage: edit <application id> field=value [field=value ...]')
            return
        updated = await self.applications.edit_application(owner_id, parts[0], **fields)
        if updated is None:
            print(f"Could not update {parts[0]}.")
            return
        print(Messages.APPLICATION_UPDATED.format(record_id=updated.id))

    async def do_profile(self, arg):
        """
        Show your profile, or update it.
        Usage: profile [name=<display name>] [email=<address>] [bio=<text>]
        """
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.profiles, "Profiles"):
            return
        try:
            parts = shlex.split(arg)
        except ValueError as e:
            await self._warn(f"Could not parse arguments: {e}")
            return
        if not parts:
            profile = await self.profiles.get_profile(owner_id)
            if profile is None:
                print("No profile yet.")
                return
            print(f"{profile.name} <{profile.email or '-'}>")
            if profile.bio:
                print(f"  {profile.bio}")
            print(f"  Sharing statistics: {'on' if profile.share_stats else 'off'}")
            return
        updates = parse_fields(parts, PROFILE_FIELD_ALIASES)
        if updates is None:
            await self._warn('Usage: profile [name=<display name>] [email=<address>] [bio=<text>]')
            return
        if await self.profiles.update_profile(owner_id, **updates) is None:
            print(Messages.PROFILE_UPDATE_FAILED)
        else:
            print(Messages.PROFILE_UPDATED)

    async def do_sharestats(self, arg):
        """
        Let other users see your application statistics.
        Usage: sharestats on|off
        """
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.profiles, "Profiles"):
            return
        choice = arg.strip().lower()
        if choice not in ('on', 'off'):
            await self._warn('Usage: sharestats on|off')
            return
        if await self.profiles.set_share_stats(owner_id, choice == 'on'):
            print(f"Sharing statistics: {choice}")
        else:
            print(Messages.PROFILE_UPDATE_FAILED)

    async def do_view(self, arg):
        """
        Show one application if you may see it.
        Usage: view <application id>
        """
        parts = shlex.split(arg)
        if not parts:
            await self._warn('Usage: view <application id>')
            return
        viewer_id = self.identity.id if self.identity else None
        result = await self.sharing.view_application(parts[0], viewer_id)
        if not result.granted:
            print(result.message)
            return
        record = result.value
        print(f"{record.company_name} - {record.job_title}")
        print(f"  Status: {record.application_status}")
        if record.job_location:
            print(f"  Location: {record.job_location}")
        if record.application_date:
            print(f"  Applied: {record.application_date.strftime('%Y-%m-%d')}")
        if record.notes:
            print(f"  Notes: {record.notes}")

    async def do_userstats(self, arg):
        """
        Show another user's statistics if they share them.
        Usage: userstats <user id>
        """
        parts = shlex.split(arg)
        if not parts:
            await self._warn('Usage: userstats <user id>')
            return
        viewer_id = self.identity.id if self.identity else None
        result = await self.analytics.view_user_stats(parts[0], viewer_id)
        if not result.granted:
            print(result.message)
            return
        m = result.value
        print(f"{parts[0]}: {m.total} applications, {m.counts.interview} interviews, "
              f"{m.counts.offer} offers, response rate {m.response_rate}%")

    async def do_shared(self, arg):
        """List applications other users shared with you."""
        owner_id = await self._owner_id()
        if owner_id is None:
            return
        records = await self.sharing.shared_with_me(owner_id)
        if not records:
            print("Nothing has been shared with you yet.")
            return
        for record in records:
            print(f"  {record.id}  {record.company_name} - {record.job_title} "
                  f"[{record.application_status}] (from {record.owner_id})")

    async def do_export(self, arg):
        """Export your applications and history to CSV."""
        owner_id = await self._owner_id()
        if owner_id is None or not await self._configured(self.applications, "Application management"):
            return
        if not await self._configured(self.csv_storage, "CSV export"):
            return
        records = await self.applications.list_applications(owner_id)
        history = await self.planner.history(owner_id)
        applications_file = self.csv_storage.export_applications(records, file_id=owner_id)
        history_file = self.csv_storage.export_history(history, file_id=owner_id)
        print(f"Exported {len(records)} applications to {applications_file}")
        print(f"Exported history to {history_file}")

    async def do_quit(self, arg):
        """Exit the application."""
        if self.logs_manager:
            await self.logs_manager.info("Shutting down CLI...")
        return True

    async def default(self, line):
        await self._warn(f"Unknown command: {line}")
        print("Type 'help' or '?' for available commands.")
