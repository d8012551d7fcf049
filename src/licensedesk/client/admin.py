"""
Admin Page State

SECURITY NOTE:
- The admin gate compares a typed password with ADMIN_PASSWORD on the
  client. Anyone holding the client configuration holds the password.
- It hides the admin controls; it does not protect the addSchool action,
  which the proxy forwards for any caller.
"""

import logging
import secrets

from licensedesk.client.api import IntakeClient
from licensedesk.client.forms import SchoolDirectory, SchoolRegistrationForm
from licensedesk.core.config import settings

logger = logging.getLogger(__name__)


class AdminGate:
    """Password gate in front of the admin controls."""

    def __init__(self, password: str | None = None):
        self._password = settings.admin_password if password is None else password
        self.authenticated = False

    def login(self, password: str) -> bool:
        """Unlock the admin controls if the password matches."""
        if not self._password:
            logger.warning("ADMIN_PASSWORD not set - admin login disabled")
            self.authenticated = False
            return False

        self.authenticated = secrets.compare_digest(password.encode(), self._password.encode())
        return self.authenticated

    def logout(self) -> None:
        self.authenticated = False


class AdminConsole:
    """
    Admin page: gate, school registration form, and school list.

    The school list is fetched fresh (no session cache) on login and after
    each successful registration.
    """

    def __init__(self, client: IntakeClient, gate: AdminGate | None = None):
        self._client = client
        self.gate = gate or AdminGate()
        self.form = SchoolRegistrationForm()
        self.directory = SchoolDirectory(client)

    @property
    def authenticated(self) -> bool:
        return self.gate.authenticated

    async def login(self, password: str) -> bool:
        if not self.gate.login(password):
            return False
        await self.directory.load()
        return True

    def logout(self) -> None:
        self.gate.logout()

    async def add_school(self) -> bool:
        """
        Submit the registration form.

        Returns:
            True if the school was added
        """
        if not self.authenticated:
            self.form.error = "Admin login required"
            return False

        added = await self.form.submit(self._client)
        if added:
            await self.directory.load()
        return added
