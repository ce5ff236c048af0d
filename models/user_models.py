"""
User Models

Pydantic models for the people behind the records:
- Identity: what the identity provider hands us for the signed-in user.
- UserProfile: the stored profile, including the opt-in to share statistics
  and links to resume/photo files kept by the blob store.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class Identity(BaseModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[EmailStr] = None


class ResumeLink(BaseModel):
    id: str
    title: str = "Untitled Resume"
    file_name: Optional[str] = None
    url: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=datetime.now)


class UserProfile(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None

    # Other users may see this profile's statistics only when opted in
    share_stats: bool = False

    photo_url: Optional[str] = None
    resumes: List[ResumeLink] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def name(self) -> str:
        return self.display_name or self.user_id

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "u123456",
                "display_name": "Jane Smith",
                "email": "user@example.com",
                "share_stats": True,
                "resumes": [{"id": "r1", "title": "Backend CV", "file_name": "cv.pdf"}],
            }
        }
