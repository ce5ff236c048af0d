"""
Application Record Models

Pydantic models for the job applications a user records:
- ApplicationStatus: the canonical status values offered for new data.
- SharedUser: an identity granted explicit access to one record.
- ApplicationRecord: one tracked application, owned by a single identity.

Stored documents may carry free-form legacy status text, so
`application_status` stays a plain string. `parse_status` is the adapter from
that text to the enum; bucket classification for metrics is done by substring
matching in utils.status_utils and never requires a canonical value.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_validator


class ApplicationStatus(str, Enum):
    NOT_APPLIED_YET = "Not Applied Yet"
    APPLICATION_STARTED = "Application Started"
    APPLIED = "Applied"
    PHONE_SCREEN = "Phone Screen"
    INTERVIEW = "Interview"
    TECHNICAL_INTERVIEW = "Technical Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"


def parse_status(text: Optional[str]) -> Optional[ApplicationStatus]:
    """Return the canonical status for `text` (case-insensitive exact match), else None."""
    if not text:
        return None
    wanted = text.strip().lower()
    for status in ApplicationStatus:
        if status.value.lower() == wanted:
            return status
    return None


class SharedUser(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class ApplicationRecord(BaseModel):
    # Identity
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    owner_id: str

    # Job details
    company_name: str
    job_title: str
    job_location: Optional[str] = None
    job_type: Optional[str] = None
    job_posting_url: Optional[str] = None

    # Status & timestamps
    application_status: str = ApplicationStatus.APPLIED.value
    application_date: Optional[datetime] = None
    interview_date_time: Optional[datetime] = None
    follow_up_date: Optional[datetime] = None
    date_heard_back: Optional[datetime] = None

    # Visibility
    is_public: bool = False
    shared_with: List[SharedUser] = Field(default_factory=list)

    # Descriptive text, no invariants
    salary: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    notes: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("company_name", "job_title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("application_status", mode="before")
    @classmethod
    def _status_text(cls, value):
        if isinstance(value, ApplicationStatus):
            return value.value
        return value or ""

    @property
    def status(self) -> Optional[ApplicationStatus]:
        return parse_status(self.application_status)

    @property
    def shared_ids(self) -> Set[str]:
        return {user.id for user in self.shared_with}

    class Config:
        json_schema_extra = {
            "example": {
                "id": "a123456",
                "owner_id": "u123456",
                "company_name": "Acme Corp",
                "job_title": "Backend Engineer",
                "application_status": "Phone Screen",
                "application_date": "2025-01-15T14:30:00",
                "date_heard_back": "2025-01-22T09:00:00",
                "is_public": True,
                "shared_with": [{"id": "u654321", "email": "friend@example.com"}],
            }
        }
