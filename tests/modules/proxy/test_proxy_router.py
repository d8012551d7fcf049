"""
Tests for the /api proxy route.

The script endpoint is replaced by a fake peer through dependency
overrides; the application lifespan is not run.
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from licensedesk.core.config import settings
from licensedesk.core.http import get_http_client
from licensedesk.main import app
from licensedesk.modules.proxy.router import UNEXPECTED_ERROR_MESSAGE
from licensedesk.modules.proxy.service import (
    DirectMediaUpload,
    ScriptRelayUpload,
    get_upload_strategy,
)

SCRIPT_URL = "https://script.test/macros/s/abc/exec"


@pytest.fixture
def strategy():
    """Upload strategy installed for a test; relay unless a test swaps it."""
    return {"current": ScriptRelayUpload()}


@pytest.fixture
def api(fake_peer, strategy, monkeypatch):
    monkeypatch.setattr(settings, "apps_script_url", SCRIPT_URL)
    app.dependency_overrides[get_http_client] = lambda: httpx.AsyncClient(
        transport=fake_peer.transport
    )
    app.dependency_overrides[get_upload_strategy] = lambda: strategy["current"]
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestProxyGet:
    """Tests for GET /api."""

    def test_relays_schools(self, api, fake_peer):
        schools = [{"code": "ABC123", "name": "Premier", "place": "Kochi", "active": True}]
        fake_peer.respond_with(200, json=schools)

        response = api.get("/api", params={"action": "getSchools", "extra": "dropped"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == schools
        assert dict(fake_peer.last_request.url.params) == {"action": "getSchools"}

    def test_relays_upstream_error_status(self, api, fake_peer):
        fake_peer.respond_with(500, content=b'{"error": "Sheet missing"}')

        response = api.get("/api", params={"action": "getSchools"})

        assert response.status_code == 500
        assert response.json() == {"error": "Sheet missing"}

    def test_unreachable_upstream_returns_502(self, api, fake_peer):
        fake_peer.fail_with(httpx.ConnectError("connection refused"))

        response = api.get("/api", params={"action": "getSchools"})

        assert response.status_code == 502
        assert response.json() == {"error": "Upstream request failed"}


class TestProxyPostJson:
    """Tests for JSON POST /api."""

    def test_forwards_add_school(self, api, fake_peer):
        body = {
            "code": "ABC123",
            "name": "Premier Driving Academy",
            "email": "contact@school.com",
            "driveFolderId": "1a2b3c",
            "place": "Kochi",
        }

        response = api.post("/api", params={"action": "addSchool"}, json=body)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert json.loads(fake_peer.last_request.content) == body
        assert fake_peer.last_request.url.params["action"] == "addSchool"

    def test_relays_upstream_error_body(self, api, fake_peer):
        fake_peer.respond_with(200, json={"error": "Duplicate code"})

        response = api.post("/api", params={"action": "addSchool"}, json={"code": "ABC123"})

        assert response.status_code == 200
        assert response.json() == {"error": "Duplicate code"}

    def test_invalid_json_returns_400(self, api, fake_peer):
        response = api.post(
            "/api",
            params={"action": "addSchool"},
            content=b"{oops",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}
        assert fake_peer.requests == []

    def test_direct_upload_response(self, api, fake_peer, strategy):
        strategy["current"] = DirectMediaUpload()
        body = {"file": "iVBORw0KGgo=", "mimeType": "image/png", "type": "photo", "institutionCode": "ABC123"}

        with patch(
            "licensedesk.modules.proxy.service.upload_base64",
            new_callable=AsyncMock,
            return_value={
                "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/x.png",
                "format": "png",
                "resource_type": "image",
            },
        ):
            response = api.post("/api", params={"action": "uploadFile"}, json=body)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "url": "https://res.cloudinary.com/demo/image/upload/v1/x.png",
            "format": "png",
            "resourceType": "image",
        }
        assert fake_peer.requests == []

    def test_direct_upload_failure_returns_500(self, api, strategy):
        strategy["current"] = DirectMediaUpload()
        body = {"file": "AAAA", "type": "photo", "institutionCode": "ABC123"}

        with patch(
            "licensedesk.modules.proxy.service.upload_base64",
            new_callable=AsyncMock,
            side_effect=Exception("Invalid image file"),
        ):
            response = api.post("/api", params={"action": "uploadFile"}, json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Upload failed: Invalid image file"}

    def test_direct_upload_without_url_returns_500(self, api, strategy):
        strategy["current"] = DirectMediaUpload()
        body = {"file": "AAAA", "type": "photo", "institutionCode": "ABC123"}

        with patch(
            "licensedesk.modules.proxy.service.upload_base64",
            new_callable=AsyncMock,
            return_value={"public_id": "x"},
        ):
            response = api.post("/api", params={"action": "uploadFile"}, json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Upload failed: No URL returned"}

    def test_unexpected_error_returns_generic_500(self, api, strategy):
        failing = AsyncMock()
        failing.upload.side_effect = RuntimeError("boom")
        strategy["current"] = failing
        body = {"file": "AAAA", "type": "photo", "institutionCode": "ABC123"}

        response = api.post("/api", params={"action": "uploadFile"}, json=body)

        assert response.status_code == 500
        assert response.json() == {"error": UNEXPECTED_ERROR_MESSAGE}


class TestProxyPostMultipart:
    """Tests for multipart POST /api."""

    def test_repackages_file_and_mirrors_fields(self, api, fake_peer):
        fake_peer.respond_with(200, json={"success": True, "url": "https://drive/x"})

        response = api.post(
            "/api",
            params={"action": "uploadFile"},
            files={"file": ("license.pdf", b"%PDF-1.4 test", "application/pdf")},
            data={"type": "license", "side": "front", "institutionCode": "ABC123"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "url": "https://drive/x"}

        request = fake_peer.last_request
        assert dict(request.url.params) == {
            "action": "uploadFile",
            "institutionCode": "ABC123",
            "type": "license",
            "side": "front",
        }
        assert b'filename="license.pdf"' in request.content
        assert b"%PDF-1.4 test" in request.content

    def test_missing_file_part_returns_400(self, api, fake_peer):
        response = api.post(
            "/api",
            params={"action": "uploadFile"},
            files={"other": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing file"}
        assert fake_peer.requests == []


class TestHealth:
    def test_health(self):
        response = TestClient(app).get("/health")
        assert response.json() == {"status": "healthy"}

    def test_ready(self):
        response = TestClient(app).get("/ready")
        assert response.json() == {"status": "ready"}
