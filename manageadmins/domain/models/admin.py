"""Entities returned by the dashboard API and the parameters of one command."""

from dataclasses import dataclass
from typing import Optional, TypedDict

from manageadmins.domain.models.common import (
    AdminId,
    EmailAddress,
    OrganizationFilter,
    OrganizationId,
    PrivilegeLevel,
    DEFAULT_PRIVILEGE,
)


class Organization(TypedDict):
    """A dashboard tenant, as returned by GET /organizations."""
    id: OrganizationId
    name: str


class Administrator(TypedDict):
    """An administrator account scoped to one organization.

    Keys follow the API's JSON field names, hence ``orgAccess``.
    """
    id: AdminId
    name: str
    email: EmailAddress
    orgAccess: PrivilegeLevel


@dataclass(frozen=True)
class CommandRequest:
    """Parameters of a single CLI invocation, after parsing."""
    command: str
    org_filter: OrganizationFilter
    admin_email: Optional[EmailAddress] = None
    admin_name: Optional[str] = None
    privilege: Optional[PrivilegeLevel] = DEFAULT_PRIVILEGE
