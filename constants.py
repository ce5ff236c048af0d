"""
Global Constants Module

Single source of truth for the values the metrics and planning engine relies on:
status keywords used by the classifier, the priority ordering used by
auto-distribution, analytics timeframe windows, the default daily goal and the
standardized log messages shared by agents and the CLI.
"""


class StatusKeywords:
    """Case-insensitive substrings that place a status text into a bucket."""

    NOT_YET_APPLIED = ("not applied",)
    APPLICATION_STARTED = ("started",)
    INTERVIEW = ("interview", "phone screen")
    OFFER = ("offer", "accepted")
    REJECTION = ("reject", "declined")

    # Order used when a status text matches more than one bucket.
    PRECEDENCE = (
        ("offer", OFFER),
        ("rejection", REJECTION),
        ("interview", INTERVIEW),
        ("application_started", APPLICATION_STARTED),
        ("not_yet_applied", NOT_YET_APPLIED),
    )


class PlanningConstants:
    """Daily goal and distribution constants."""

    DEFAULT_DAILY_GOAL = 5
    MAX_DAILY_GOAL = 10

    # High(0) < Medium(1) < Low(2)
    PRIORITY_ORDER = {"High": 0, "Medium": 1, "Low": 2}
    DEFAULT_PRIORITY = "Medium"


class AnalyticsConstants:
    """Timeframe windows and list sizes for analytics views."""

    # Rolling windows, in days
    TIMEFRAME_DAYS = {
        "7days": 7,
        "30days": 30,
        "90days": 90,
    }
    # Same date one calendar year earlier
    CALENDAR_YEAR_TIMEFRAME = "1year"
    # No lower bound, undated records included
    ALL_TIMEFRAME = "all"
    TIMEFRAMES = ("7days", "30days", "90days", "1year", "all")
    DEFAULT_TIMEFRAME = "30days"
    TOP_COMPANIES_LIMIT = 5
    RECENT_APPLICATIONS_LIMIT = 5
    NO_DATA_LABEL = "No Data"


class Messages:
    """Standardized log and user-facing messages."""

    NO_JOBS_TO_DISTRIBUTE = "No jobs need to be distributed"
    DISTRIBUTED = "{count} jobs distributed over {days} days"
    PARTIAL_DISTRIBUTION = "{succeeded} of {attempted} jobs redistributed ({failed} failed)"
    INVALID_GOAL = "Daily goal must be at least 1 (got {goal})"
    GOAL_OUT_OF_RANGE = "Daily goal must be between 1 and {maximum} (got {goal})"
    GOAL_UPDATED = "Daily goal updated to {goal}"
    GOAL_UPDATE_FAILED = "Failed to update daily goal"
    MARKED_APPLIED = "Job marked as applied"
    TRANSITION_REFUSED = "Cannot move planned job from '{old}' to '{new}'"
    NOT_FOUND = "Record not found"
    NOT_AUTHORIZED = "You are not authorized to view this record"
    STATS_NOT_SHARED = "This user has not opted to share their application statistics"
    NO_IDENTITY = "Please log in to view analytics data."
    STATUS_OVERLAP = "Status '{status}' matches several buckets {buckets}; counted as '{chosen}'"
    STORE_UNAVAILABLE = "Records could not be loaded, please try again later"
    APPLICATION_ADDED = "Added {title} at {company}"
    APPLICATION_UPDATED = "Application {record_id} updated"
    APPLICATION_INVALID = "Invalid application: {errors}"
    NOT_EDITABLE = "You are not allowed to edit this record"
    OWNER_ONLY_FIELDS = "Only the owner may change {fields}"
    PROFILE_UPDATED = "Profile updated successfully"
    PROFILE_UPDATE_FAILED = "Failed to update profile"
