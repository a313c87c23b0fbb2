import logging
from typing import Any, Optional, Sequence

from rich.box import SIMPLE
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from manageadmins.domain.interfaces.user_interface import UserInterface
from manageadmins.domain.models.admin import Administrator

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console.

        Args:
            console: Optional pre-built Console, e.g. one recording to a buffer.
        """
        self._console = console or Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Prints a result line without markup interpretation."""
        self.console.print(output, markup=False, highlight=False, soft_wrap=True)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(error_message)}", highlight=False, soft_wrap=True)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        self.console.print(f"[yellow]Warning:[/yellow] {escape(warning_message)}", highlight=False, soft_wrap=True)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {escape(info_message)}", highlight=False, soft_wrap=True)

    def display_admin_table(self, organization_name: str, admins: Sequence[Administrator]) -> None:
        """Displays the administrators of one organization.

        Args:
            organization_name: Shown in the heading above the table.
            admins: One row per admin with name, email and org privilege.
        """
        table = Table(box=SIMPLE, header_style="bold cyan")
        table.add_column("Name", overflow="fold")
        table.add_column("Email", overflow="fold")
        table.add_column("Org Privilege", overflow="fold")
        for admin in admins:
            table.add_row(
                Text(str(admin.get("name", ""))),
                Text(str(admin.get("email", ""))),
                Text(str(admin.get("orgAccess", ""))),
            )
        self.console.print("")
        self.console.print(Text(f'Administrators for org "{organization_name}"', style="bold"))
        self.console.print(table)
