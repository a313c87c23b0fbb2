"""Interface for the dashboard administration operations.

Each operation maps to exactly one REST call and returns a RequestOutcome;
no operation raises for network or HTTP problems.
"""

import abc

from manageadmins.domain.models.common import AdminId, EmailAddress, OrganizationId, PrivilegeLevel
from manageadmins.domain.models.outcome import RequestOutcome


class DashboardApi(abc.ABC):
    """Abstract Base Class for the organization and administrator endpoints."""

    @abc.abstractmethod
    async def get_organizations(self) -> RequestOutcome:
        """Lists the organizations the API key has access to.

        Returns:
            Success with a list of Organization mappings, or Failure.
        """
        pass

    @abc.abstractmethod
    async def get_organization_admins(self, organization_id: OrganizationId) -> RequestOutcome:
        """Lists the administrators of one organization.

        Returns:
            Success with a list of Administrator mappings, or Failure.
        """
        pass

    @abc.abstractmethod
    async def create_organization_admin(
        self,
        organization_id: OrganizationId,
        email: EmailAddress,
        name: str,
        privilege: PrivilegeLevel,
    ) -> RequestOutcome:
        """Creates an administrator with organization-wide access."""
        pass

    @abc.abstractmethod
    async def update_organization_admin(
        self,
        organization_id: OrganizationId,
        admin_id: AdminId,
        privilege: PrivilegeLevel,
    ) -> RequestOutcome:
        """Changes the organization privilege of an existing administrator."""
        pass

    @abc.abstractmethod
    async def delete_organization_admin(self, organization_id: OrganizationId, admin_id: AdminId) -> RequestOutcome:
        """Revokes all access for an administrator in an organization."""
        pass
