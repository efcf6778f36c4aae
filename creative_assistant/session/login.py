"""
Login, logout and best-effort activity logging.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from creative_assistant.session.forms import LoginForm
from creative_assistant.session.storage import (
    KeyValueStore,
    UserProfile,
    clear_user,
    load_user,
    save_user,
)

logger = logging.getLogger(__name__)


class ActivityLogger:
    """
    Posts login events to an external endpoint.

    The call is best-effort: any failure is logged and swallowed, and
    log_login() never raises.

    Args:
        url: Endpoint receiving form-encoded timestamp/user/email; None disables logging
        timeout: Request timeout in seconds
    """

    def __init__(self, url: Optional[str], timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def _post(self, profile: UserProfile) -> None:
        data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "user": profile.user,
            "email": profile.email,
        }
        response = requests.post(self.url, data=data, timeout=self.timeout)
        response.raise_for_status()

    async def log_login(self, profile: UserProfile) -> bool:
        """
        Record a login.

        Returns:
            True if the endpoint accepted the event
        """
        if not self.url:
            return False
        try:
            await asyncio.to_thread(self._post, profile)
        except requests.RequestException as e:
            logger.warning("Activity log request failed: %s", e)
            return False
        logger.debug("Logged login for %s", profile.email)
        return True


class LoginManager:
    """Keeps the logged-in user in the local store."""

    def __init__(self, store: KeyValueStore, activity_logger: Optional[ActivityLogger] = None):
        self.store = store
        self.activity_logger = activity_logger or ActivityLogger(None)

    async def login(self, form: LoginForm) -> UserProfile:
        """
        Validate the form, persist the user and record the login.

        Raises:
            InputValidationError: If user or email is missing or malformed
        """
        form.validate()
        profile = UserProfile(user=form.user.strip(), email=form.email.strip())
        save_user(self.store, profile)
        logger.info("Logged in as %s", profile.user)
        await self.activity_logger.log_login(profile)
        return profile

    def logout(self) -> None:
        clear_user(self.store)
        logger.info("Logged out")

    def current_user(self) -> Optional[UserProfile]:
        return load_user(self.store)
