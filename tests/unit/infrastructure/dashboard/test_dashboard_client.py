from unittest.mock import AsyncMock, MagicMock

import pytest

from manageadmins.domain.models.outcome import Failure, FailureReason, Success
from manageadmins.infrastructure.dashboard.dashboard_client import DashboardClient
from manageadmins.infrastructure.resilience.api_retry import RetryingRequestExecutor


@pytest.fixture
def mock_executor():
    executor = MagicMock(spec=RetryingRequestExecutor)
    executor.execute = AsyncMock(return_value=Success([]))
    return executor


@pytest.fixture
def client(mock_executor):
    return DashboardClient(mock_executor)


@pytest.mark.asyncio
async def test_get_organizations(client, mock_executor):
    await client.get_organizations()
    mock_executor.execute.assert_awaited_once_with("GET", "/organizations")


@pytest.mark.asyncio
async def test_get_organization_admins(client, mock_executor):
    await client.get_organization_admins("549236")
    mock_executor.execute.assert_awaited_once_with("GET", "/organizations/549236/admins")


@pytest.mark.asyncio
async def test_create_organization_admin_body(client, mock_executor):
    await client.create_organization_admin("549236", "jane@example.com", "Jane", "read-only")
    mock_executor.execute.assert_awaited_once_with(
        "POST",
        "/organizations/549236/admins",
        {"email": "jane@example.com", "name": "Jane", "orgAccess": "read-only"},
    )


@pytest.mark.asyncio
async def test_update_organization_admin_body(client, mock_executor):
    await client.update_organization_admin("549236", "212406", "full")
    mock_executor.execute.assert_awaited_once_with(
        "PUT", "/organizations/549236/admins/212406", {"orgAccess": "full"}
    )


@pytest.mark.asyncio
async def test_delete_organization_admin(client, mock_executor):
    await client.delete_organization_admin("549236", "212406")
    mock_executor.execute.assert_awaited_once_with("DELETE", "/organizations/549236/admins/212406")


@pytest.mark.asyncio
async def test_path_segments_are_quoted(client, mock_executor):
    await client.delete_organization_admin("a/b", "c d")
    mock_executor.execute.assert_awaited_once_with("DELETE", "/organizations/a%2Fb/admins/c%20d")


@pytest.mark.asyncio
async def test_outcome_is_returned_unchanged(client, mock_executor):
    failure = Failure(FailureReason.HTTP_STATUS, "HTTP 500", status_code=500)
    mock_executor.execute.return_value = failure
    assert await client.get_organizations() is failure
