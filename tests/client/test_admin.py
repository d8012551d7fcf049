"""
Tests for the admin gate and admin console.
"""

import httpx
import pytest

from licensedesk.client import AdminConsole, AdminGate, IntakeClient
from licensedesk.core.config import settings


@pytest.fixture
def client(fake_peer):
    return IntakeClient(
        http=httpx.AsyncClient(transport=fake_peer.transport, base_url="http://proxy.local")
    )


class TestAdminGate:
    """Tests for AdminGate."""

    def test_correct_password(self):
        gate = AdminGate("s3cret")

        assert gate.login("s3cret") is True
        assert gate.authenticated is True

    def test_wrong_password(self):
        gate = AdminGate("s3cret")

        assert gate.login("guess") is False
        assert gate.authenticated is False

    def test_no_password_configured(self):
        """An unset password never unlocks, even with an empty guess."""
        gate = AdminGate("")

        assert gate.login("") is False

    def test_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "admin_password", "from-env")

        assert AdminGate().login("from-env") is True

    def test_logout(self):
        gate = AdminGate("s3cret")
        gate.login("s3cret")

        gate.logout()

        assert gate.authenticated is False


class TestAdminConsole:
    """Tests for AdminConsole."""

    @pytest.mark.asyncio
    async def test_login_loads_schools(self, client, fake_peer):
        fake_peer.respond_with(200, json=[{"code": "ABC123", "name": "Premier"}])
        console = AdminConsole(client, AdminGate("s3cret"))

        assert await console.login("s3cret") is True

        assert [s.code for s in console.directory.schools] == ["ABC123"]
        assert fake_peer.last_request.url.params["action"] == "getSchools"

    @pytest.mark.asyncio
    async def test_failed_login_makes_no_request(self, client, fake_peer):
        console = AdminConsole(client, AdminGate("s3cret"))

        assert await console.login("nope") is False
        assert fake_peer.requests == []

    @pytest.mark.asyncio
    async def test_add_school_requires_login(self, client, fake_peer):
        console = AdminConsole(client, AdminGate("s3cret"))

        assert await console.add_school() is False
        assert console.form.error == "Admin login required"
        assert fake_peer.requests == []

    @pytest.mark.asyncio
    async def test_add_school_reloads_list(self, client, fake_peer):
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.params["action"] == "getSchools":
                return httpx.Response(200, json=[{"code": "ABC123", "name": "Premier"}])
            return httpx.Response(200, json={"success": True})

        fake_peer.responder = respond
        console = AdminConsole(client, AdminGate("s3cret"))
        await console.login("s3cret")
        console.form.set("code", "abc123")
        console.form.set("name", "Premier")
        console.form.set("email", "contact@school.com")
        console.form.set("drive_folder_id", "folder1")
        console.form.set("place", "Kochi")

        assert await console.add_school() is True

        actions = [r.url.params["action"] for r in fake_peer.requests]
        assert actions == ["getSchools", "addSchool", "getSchools"]
        assert console.form.success == "School added successfully!"
