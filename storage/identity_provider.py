"""
Identity Provider

Supplies the signed-in identity. Agents never read it implicitly: callers
resolve it once and pass explicit owner/viewer ids into every operation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from models.user_models import Identity


class IdentityProvider(ABC):
    @abstractmethod
    def current_identity(self) -> Optional[Identity]:
        """The authenticated identity, or None when nobody is signed in."""


class StaticIdentityProvider(IdentityProvider):
    def __init__(self, identity: Optional[Identity] = None):
        self._identity = identity

    def current_identity(self) -> Optional[Identity]:
        return self._identity

    def sign_in(self, identity: Identity):
        self._identity = identity

    def sign_out(self):
        self._identity = None


class SettingsIdentityProvider(IdentityProvider):
    """Reads the identity from settings['identity'] (see config.settings)."""

    def __init__(self, settings: dict):
        self.identity_settings = settings.get('identity', {})

    def current_identity(self) -> Optional[Identity]:
        user_id = (self.identity_settings.get('user_id') or '').strip()
        if not user_id:
            return None
        try:
            return Identity(
                id=user_id,
                display_name=self.identity_settings.get('display_name') or None,
                email=self.identity_settings.get('email') or None,
            )
        except ValidationError:
            # A malformed email still identifies the user
            return Identity(id=user_id, display_name=self.identity_settings.get('display_name') or None)
