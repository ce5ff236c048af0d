"""
Planning Models

Pydantic models for planned (not yet submitted) applications and the per-user
settings that drive daily-goal tracking:
- Priority / PlannedStatus enums
- PlannedApplicationRecord: one job the user intends to apply to
- UserSettings: the persisted daily application goal

Planned status only moves forward: planned -> applied or planned -> skipped.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from constants import PlanningConstants


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PlannedStatus(str, Enum):
    PLANNED = "planned"
    APPLIED = "applied"
    SKIPPED = "skipped"


ALLOWED_TRANSITIONS = {
    PlannedStatus.PLANNED: {PlannedStatus.APPLIED, PlannedStatus.SKIPPED},
    PlannedStatus.APPLIED: set(),
    PlannedStatus.SKIPPED: set(),
}


class PlannedApplicationRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    owner_id: str
    company_name: str
    job_title: str
    job_url: Optional[str] = None
    # Free text so legacy values still load; unknown values rank as Medium.
    priority: Optional[str] = Priority.MEDIUM.value
    notes: Optional[str] = None

    planned_date: Optional[datetime] = None
    status: PlannedStatus = PlannedStatus.PLANNED
    applied_date: Optional[datetime] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("company_name", "job_title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_text(cls, value):
        if isinstance(value, Priority):
            return value.value
        return value

    @property
    def priority_rank(self) -> int:
        order = PlanningConstants.PRIORITY_ORDER
        return order.get(self.priority or "", order[PlanningConstants.DEFAULT_PRIORITY])

    def can_transition(self, new_status: PlannedStatus) -> bool:
        return PlannedStatus(new_status) in ALLOWED_TRANSITIONS[self.status]


class UserSettings(BaseModel):
    owner_id: str
    daily_application_goal: int = Field(default=PlanningConstants.DEFAULT_DAILY_GOAL, ge=1)
    updated_at: datetime = Field(default_factory=datetime.now)
