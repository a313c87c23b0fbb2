import json
import os
import re
from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import httpx
import pytest
from typer.testing import CliRunner

from manageadmins.domain.interfaces.dashboard_api import DashboardApi
from manageadmins.domain.interfaces.user_interface import UserInterface
from manageadmins.infrastructure.config.settings import DashboardConfig

TEST_BASE_URL = "https://dashboard.test/api/v1"


class FakeDashboard:
    """In-memory stand-in for the dashboard API, served through httpx.MockTransport.

    ``organizations`` maps org id -> {'name': ..., 'admins': [...]}. Responses can
    be scripted per (method, path) with ``queue_response``; scripted responses are
    consumed before the default behaviour applies.
    """

    def __init__(self, organizations: Optional[Dict[str, dict]] = None):
        self.organizations = organizations or {}
        self.requests: List[httpx.Request] = []
        self._scripted: Dict[Tuple[str, str], List[httpx.Response]] = {}
        self._next_admin_id = 1000

    def queue_response(self, method: str, path: str, response: httpx.Response) -> None:
        self._scripted.setdefault((method, path), []).append(response)

    def calls(self, method: Optional[str] = None) -> List[Tuple[str, str]]:
        made = [(r.method, r.url.path) for r in self.requests]
        return [c for c in made if method is None or c[0] == method]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/api/v1", "", 1)
        scripted = self._scripted.get((request.method, path))
        if scripted:
            return scripted.pop(0)

        if request.method == "GET" and path == "/organizations":
            return httpx.Response(200, json=[{"id": oid, "name": o["name"]} for oid, o in self.organizations.items()])

        match = re.fullmatch(r"/organizations/([^/]+)/admins(?:/([^/]+))?", path)
        if not match or match.group(1) not in self.organizations:
            return httpx.Response(404, json={"errors": ["Not found"]})
        admins = self.organizations[match.group(1)]["admins"]
        admin_id = match.group(2)

        if request.method == "GET" and admin_id is None:
            return httpx.Response(200, json=admins)
        if request.method == "POST" and admin_id is None:
            body = json.loads(request.content)
            self._next_admin_id += 1
            created = {"id": str(self._next_admin_id), **body}
            admins.append(created)
            return httpx.Response(201, json=created)

        found = next((a for a in admins if a["id"] == admin_id), None)
        if found is None:
            return httpx.Response(404, json={"errors": ["Admin not found"]})
        if request.method == "PUT":
            found.update(json.loads(request.content))
            return httpx.Response(200, json=found)
        if request.method == "DELETE":
            admins.remove(found)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def dashboard_config() -> DashboardConfig:
    return DashboardConfig(api_key="test-key", base_url=TEST_BASE_URL, connect_timeout_s=5.0, transmit_timeout_s=5.0)


@pytest.fixture
def fake_dashboard() -> FakeDashboard:
    return FakeDashboard({
        "101": {"name": "Acme Retail", "admins": [
            {"id": "a1", "name": "Alice", "email": "alice@acme.test", "orgAccess": "full"},
        ]},
        "102": {"name": "Acme Labs", "admins": [
            {"id": "b1", "name": "Bob", "email": "bob@acme.test", "orgAccess": "read-only"},
        ]},
        "103": {"name": "Globex", "admins": []},
    })


@pytest.fixture
def mock_dashboard() -> MagicMock:
    """DashboardApi mock; its async methods are AsyncMocks."""
    return MagicMock(spec=DashboardApi)


@pytest.fixture
def mock_ui() -> MagicMock:
    return MagicMock(spec=UserInterface)


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keeps tests independent of the developer's key, config file and .env."""
    monkeypatch.delenv("MERAKI_DASHBOARD_API_KEY", raising=False)
    for name in list(os.environ):
        if name.startswith("MANAGEADMINS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("manageadmins.main.DEFAULT_CONFIG_FILE", tmp_path / "missing.yaml")
