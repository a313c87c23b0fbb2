"""Interface for presenting command results to the user.

Defines the contract for displaying information, errors, warnings and
administrator tables, allowing different UI implementations (e.g. a rich
console, or a mock in tests).
"""

import abc
from typing import Any, Sequence

from manageadmins.domain.models.admin import Administrator


class UserInterface(abc.ABC):
    """Abstract Base Class for user output."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The text to display.
            **kwargs: Additional arguments for formatting (e.g., style).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user.

        Args:
            warning_message: The warning message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_admin_table(self, organization_name: str, admins: Sequence[Administrator]) -> None:
        """Displays the administrators of one organization as a table.

        Args:
            organization_name: Shown in the table title.
            admins: Rows to display, in the order given.
        """
        pass
