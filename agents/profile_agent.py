"""
Profile Agent

Reads and updates the signed-in user's profile, including the opt-in that lets
other users see their application statistics. A missing profile is created on
the first update.
"""

from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from agents.base_agent import BaseAgent
from constants import Messages
from models.user_models import UserProfile
from storage.record_store import RecordStoreError

EDITABLE_FIELDS = frozenset({"display_name", "email", "bio", "photo_url", "share_stats"})


class ProfileAgent(BaseAgent):

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return await self._read(self.store.fetch_profile(user_id), None, f"profile {user_id}")

    async def update_profile(self, user_id: str, **updates) -> Optional[UserProfile]:
        """
        Merge `updates` into the stored profile.

        Args:
            user_id: Whose profile to update
            **updates: Any of display_name, email, bio, photo_url, share_stats

        Returns:
            The stored profile, or None if the fields are unknown or invalid, the
            current profile cannot be read, or the write failed.
        """
        unknown = updates.keys() - EDITABLE_FIELDS
        if unknown:
            await self._log('warning', f"Unknown profile fields: {', '.join(sorted(unknown))}")
            return None

        try:
            existing = await self.store.fetch_profile(user_id)
        except RecordStoreError as e:
            # Never write over a profile that could not be read
            await self._log('error', f"Could not read profile {user_id}: {e}")
            return None

        data = existing.model_dump() if existing else {"user_id": user_id}
        data.update(updates)
        data["updated_at"] = datetime.now()

        try:
            profile = UserProfile(**data)
        except ValidationError as e:
            await self._log('warning', f"Invalid profile for {user_id}: {e.error_count()} errors")
            return None

        if not await self._write(self.store.persist_profile(profile), f"profile {user_id}"):
            await self._log('error', Messages.PROFILE_UPDATE_FAILED)
            return None
        await self._log('info', f"{Messages.PROFILE_UPDATED} ({user_id})")
        return profile

    async def set_share_stats(self, user_id: str, enabled: bool) -> bool:
        """Opt in to (or out of) sharing application statistics."""
        return await self.update_profile(user_id, share_stats=bool(enabled)) is not None
