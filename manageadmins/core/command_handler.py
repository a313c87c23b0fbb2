"""Command Handler: Orchestrates the administrator management commands.

Receives a validated CommandRequest from the main entry point (main.py),
loads and filters the organization list, then runs one of the add, delete,
find, list or update commands. Organizations are processed one at a time,
in the order the API returned them.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from manageadmins.core.services.lookup import admin_id_for_email, filter_organizations
from manageadmins.domain.interfaces.dashboard_api import DashboardApi
from manageadmins.domain.interfaces.user_interface import UserInterface
from manageadmins.domain.models.admin import Administrator, CommandRequest, Organization
from manageadmins.domain.models.common import (
    SUPPORTED_ADD_PRIVILEGES,
    EmailAddress,
    OrganizationFilter,
    PrivilegeLevel,
)
from manageadmins.domain.models.errors import CommandValidationError
from manageadmins.domain.models.outcome import RequestOutcome

logger = logging.getLogger(__name__)

COMMANDS = ("add", "delete", "find", "list", "update")

EXIT_OK = 0
EXIT_FAILURE = 1


def validate_command_request(request: CommandRequest) -> None:
    """Checks that a command has everything it needs before any network call.

    Raises:
        CommandValidationError: For an unknown command, a missing parameter,
            or an unsupported privilege level on 'add'.
    """
    command = request.command
    if command not in COMMANDS:
        raise CommandValidationError(f'Invalid command "{command}"')

    if command == "add":
        if not request.admin_email or not request.admin_name:
            raise CommandValidationError('Command "add" needs parameters --admin-email and --admin-name')
        if request.privilege not in SUPPORTED_ADD_PRIVILEGES:
            raise CommandValidationError(f'Unsupported privilege level "{request.privilege}"')
    elif command in ("delete", "find"):
        if not request.admin_email:
            raise CommandValidationError(f'Command "{command}" needs parameter --admin-email')
    elif command == "update":
        if not request.admin_email or not request.privilege:
            raise CommandValidationError('Command "update" needs parameters --admin-email and --privilege-level')


class CommandHandler:
    """Runs administrator commands against every organization in scope."""

    def __init__(self, dashboard: DashboardApi, ui: UserInterface):
        self.dashboard = dashboard
        self.ui = ui

    async def dispatch(self, request: CommandRequest) -> int:
        """Validates the request, loads the organizations and runs the command.

        Returns:
            The process exit code.
        """
        try:
            validate_command_request(request)
        except CommandValidationError as e:
            self.ui.display_error(str(e))
            return EXIT_FAILURE

        organizations = await self.load_organizations(request.org_filter)
        if organizations is None:
            return EXIT_FAILURE

        handlers: Dict[str, Callable[[], Awaitable[object]]] = {
            "add": lambda: self.handle_add(organizations, request.admin_email, request.admin_name, request.privilege),
            "delete": lambda: self.handle_delete(organizations, request.admin_email),
            "find": lambda: self.handle_find(organizations, request.admin_email),
            "list": lambda: self.handle_list(organizations),
            "update": lambda: self.handle_update(organizations, request.admin_email, request.privilege),
        }
        logger.info(f"Running '{request.command}' on {len(organizations)} organization(s)")
        await handlers[request.command]()
        return EXIT_OK

    async def load_organizations(self, org_filter: OrganizationFilter) -> Optional[List[Organization]]:
        """Fetches the organization list and applies the name filter.

        Returns:
            The organizations in scope (possibly empty), or None when the
            list could not be retrieved.
        """
        outcome = await self.dashboard.get_organizations()
        if not outcome.ok or not isinstance(outcome.payload, list):
            logger.error(f"Organization list unavailable: {getattr(outcome, 'message', outcome)}")
            self.ui.display_error("Error retrieving organization list")
            return None

        organizations = filter_organizations(outcome.payload, org_filter)
        if not organizations:
            self.ui.display_info(f'No organizations match "{org_filter}"')
        return organizations

    async def _fetch_admins(self, org: Organization) -> Optional[List[Administrator]]:
        outcome = await self.dashboard.get_organization_admins(org["id"])
        if outcome.ok and isinstance(outcome.payload, list):
            return outcome.payload
        logger.warning(f"Admin list unavailable for organization {org['id']}")
        return None

    async def _resolve_admins(self, org: Organization) -> Optional[List[Administrator]]:
        """Like _fetch_admins, but tells the user when the list is missing."""
        admins = await self._fetch_admins(org)
        if admins is None:
            self.ui.display_error(f'Could not retrieve administrators for org "{org["name"]}"')
        return admins

    def _report(self, org: Organization, outcome: RequestOutcome) -> None:
        if outcome.ok:
            self.ui.display_output(f"Operation successful for org : {org['name']}")
        else:
            self.ui.display_error(f"Operation failed for org : {org['name']}")

    async def handle_add(
        self,
        organizations: List[Organization],
        email: EmailAddress,
        name: str,
        privilege: PrivilegeLevel,
    ) -> None:
        """Creates the admin in every organization where the email is not present yet."""
        if privilege not in SUPPORTED_ADD_PRIVILEGES:
            raise CommandValidationError(f'Unsupported privilege level "{privilege}"')

        for org in organizations:
            admins = await self._resolve_admins(org)
            if admins is None:
                continue
            if admin_id_for_email(admins, email) is not None:
                self.ui.display_info(f'Skipping org "{org["name"]}". Admin already exists')
                continue
            outcome = await self.dashboard.create_organization_admin(org["id"], email, name, privilege)
            self._report(org, outcome)

    async def handle_delete(self, organizations: List[Organization], email: EmailAddress) -> None:
        """Deletes the admin from every organization where the email is present."""
        for org in organizations:
            admins = await self._resolve_admins(org)
            if admins is None:
                continue
            admin_id = admin_id_for_email(admins, email)
            if admin_id is None:
                self.ui.display_info(f'Skipping org "{org["name"]}". Admin "{email}" not found')
                continue
            outcome = await self.dashboard.delete_organization_admin(org["id"], admin_id)
            self._report(org, outcome)

    async def handle_update(
        self,
        organizations: List[Organization],
        email: EmailAddress,
        privilege: PrivilegeLevel,
    ) -> None:
        """Sets the org privilege of the admin in every organization where the email is present."""
        for org in organizations:
            admins = await self._resolve_admins(org)
            if admins is None:
                continue
            admin_id = admin_id_for_email(admins, email)
            if admin_id is None:
                self.ui.display_info(f'Skipping org "{org["name"]}". Admin "{email}" not found')
                continue
            outcome = await self.dashboard.update_organization_admin(org["id"], admin_id, privilege)
            self._report(org, outcome)

    async def handle_find(self, organizations: List[Organization], email: EmailAddress) -> int:
        """Reports the organizations that have an admin with this email.

        Returns:
            The number of matching organizations.
        """
        matches: List[str] = []
        for org in organizations:
            admins = await self._resolve_admins(org)
            if admins is not None and admin_id_for_email(admins, email) is not None:
                matches.append(org["name"])

        self.ui.display_output(f"{len(matches)} matches")
        for org_name in matches:
            self.ui.display_output(f'Found admin "{email}" in org "{org_name}"')
        return len(matches)

    async def handle_list(self, organizations: List[Organization]) -> None:
        """Shows a table of administrators for every organization whose list is retrievable."""
        for org in organizations:
            admins = await self._fetch_admins(org)
            if admins is None:
                continue
            self.ui.display_admin_table(org["name"], admins)
