"""Concrete implementation of the DashboardApi interface.

Translates each administration action into one executor call with the
verb, path and body shape the Meraki dashboard API v1 expects.
"""

import logging
from urllib.parse import quote

from manageadmins.domain.interfaces.dashboard_api import DashboardApi
from manageadmins.domain.models.common import AdminId, EmailAddress, OrganizationId, PrivilegeLevel
from manageadmins.domain.models.outcome import RequestOutcome
from manageadmins.infrastructure.resilience.api_retry import RetryingRequestExecutor

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class DashboardClient(DashboardApi):
    """Dashboard API operations built on the RetryingRequestExecutor."""

    def __init__(self, executor: RetryingRequestExecutor):
        self.executor = executor

    async def get_organizations(self) -> RequestOutcome:
        return await self.executor.execute("GET", "/organizations")

    async def get_organization_admins(self, organization_id: OrganizationId) -> RequestOutcome:
        return await self.executor.execute("GET", f"/organizations/{_segment(organization_id)}/admins")

    async def create_organization_admin(
        self,
        organization_id: OrganizationId,
        email: EmailAddress,
        name: str,
        privilege: PrivilegeLevel,
    ) -> RequestOutcome:
        body = {"email": email, "name": name, "orgAccess": privilege}
        logger.debug(f"Creating admin {email} in organization {organization_id} with '{privilege}' access")
        return await self.executor.execute("POST", f"/organizations/{_segment(organization_id)}/admins", body)

    async def update_organization_admin(
        self,
        organization_id: OrganizationId,
        admin_id: AdminId,
        privilege: PrivilegeLevel,
    ) -> RequestOutcome:
        body = {"orgAccess": privilege}
        path = f"/organizations/{_segment(organization_id)}/admins/{_segment(admin_id)}"
        return await self.executor.execute("PUT", path, body)

    async def delete_organization_admin(self, organization_id: OrganizationId, admin_id: AdminId) -> RequestOutcome:
        path = f"/organizations/{_segment(organization_id)}/admins/{_segment(admin_id)}"
        return await self.executor.execute("DELETE", path)
