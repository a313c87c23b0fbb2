"""Pure helpers for selecting organizations and resolving administrators."""

from typing import List, Optional, Sequence

from manageadmins.domain.models.admin import Administrator, Organization
from manageadmins.domain.models.common import ALL_ORGANIZATIONS, AdminId, EmailAddress, OrganizationFilter


def filter_organizations(organizations: List[Organization], org_filter: OrganizationFilter) -> List[Organization]:
    """Selects the organizations in scope.

    '/all' returns the input list unchanged; any other value keeps the
    organizations whose name contains it (case-sensitive), in API order.
    """
    if org_filter == ALL_ORGANIZATIONS:
        return organizations
    return [org for org in organizations if org_filter in org.get("name", "")]


def admin_id_for_email(admins: Sequence[Administrator], email: EmailAddress) -> Optional[AdminId]:
    """Returns the id of the first admin whose email equals ``email`` exactly."""
    for admin in admins:
        if admin.get("email") == email:
            return admin.get("id")
    return None
