"""Main entry point for the manageadmins application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from typing_extensions import Annotated

# --- Core Layer ---
from manageadmins.core.command_handler import EXIT_FAILURE, CommandHandler, validate_command_request

# --- Domain Layer ---
from manageadmins.domain.interfaces.user_interface import UserInterface
from manageadmins.domain.models.admin import CommandRequest
from manageadmins.domain.models.common import DEFAULT_PRIVILEGE, EmailAddress, OrganizationFilter, PrivilegeLevel
from manageadmins.domain.models.errors import CommandValidationError, ConfigurationError

# --- Infrastructure Layer ---
# Config
from manageadmins.infrastructure.config.settings import (
    API_KEY_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DashboardConfig,
    build_dashboard_config,
    get_setting,
    load_environment,
    load_settings,
)
# UI
from manageadmins.infrastructure.cli.display import ConsoleDisplay
# API access
from manageadmins.infrastructure.http.transport import TransportClient
from manageadmins.infrastructure.resilience.api_retry import RetryingRequestExecutor
from manageadmins.infrastructure.dashboard.dashboard_client import DashboardClient
# Monitoring
from manageadmins.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, resolve_log_level, setup_logging

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


async def run_command(
    config: DashboardConfig,
    ui: UserInterface,
    request: CommandRequest,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Wires the API stack for one invocation and runs the command.

    This acts as the Composition Root. The HTTP client is closed when the
    command finishes.
    """
    async with TransportClient(config, transport=transport) as client:
        executor = RetryingRequestExecutor(
            client,
            max_retries=config.max_retries,
            rate_limit_status=config.rate_limit_status,
            max_retry_after_s=config.max_retry_after_s,
        )
        handler = CommandHandler(dashboard=DashboardClient(executor), ui=ui)
        return await handler.dispatch(request)


# --- Typer App Definition ---
app = typer.Typer(
    name="manageadmins",
    help="Add, delete, find, list and update administrators across Meraki dashboard organizations.",
    add_completion=False,
)


@app.command()
def manage(
    api_key: Annotated[str, typer.Option(
        "--api-key", "-k", envvar=API_KEY_ENV_VAR, show_envvar=True,
        help="Your Meraki Dashboard API key.")],
    organization: Annotated[str, typer.Option(
        "--organization", "-o",
        help="Organizations in scope: '/all', or a case-sensitive substring of the organization name.")],
    command: Annotated[str, typer.Option(
        "--command", "-c",
        help="Command to execute: add, delete, find, list or update.")],
    admin_email: Annotated[Optional[str], typer.Option(
        "--admin-email", "-a",
        help="Email of the admin account to be added/deleted/updated/found.")] = None,
    admin_name: Annotated[Optional[str], typer.Option(
        "--admin-name", "-n",
        help="Name for the admin to be added by the 'add' command.")] = None,
    privilege_level: Annotated[str, typer.Option(
        "--privilege-level", "-p",
        help="Org privilege for 'add' (full or read-only) and 'update'.")] = DEFAULT_PRIVILEGE,
    config_file: Annotated[Optional[Path], typer.Option(
        "--config",
        dir_okay=False,
        help=f"YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE}.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """Manage administrator accounts in every organization matching the filter."""
    ui = ConsoleDisplay()

    try:
        settings = load_settings(config_file or DEFAULT_CONFIG_FILE)
    except ConfigurationError as e:
        ui.display_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE)

    setup_logging(
        log_level=resolve_log_level(get_setting(settings, 'logging.level'), verbose=verbose),
        log_format=get_setting(settings, 'logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_setting(settings, 'logging.file'),
    )

    request = CommandRequest(
        command=command.strip().lower(),
        org_filter=OrganizationFilter(organization),
        admin_email=EmailAddress(admin_email) if admin_email else None,
        admin_name=admin_name,
        privilege=PrivilegeLevel(privilege_level),
    )

    try:
        validate_command_request(request)
        config = build_dashboard_config(api_key, settings)
    except (CommandValidationError, ConfigurationError) as e:
        logger.debug(f"Rejected invocation: {e}")
        ui.display_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        exit_code = asyncio.run(run_command(config, ui, request))
    except KeyboardInterrupt:
        ui.display_warning("Interrupted")
        raise typer.Exit(code=EXIT_INTERRUPTED)

    if exit_code:
        raise typer.Exit(code=exit_code)


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    # The API key may come from a .env file, which must be loaded before Typer parses options.
    load_environment()
    app()


if __name__ == "__main__":
    cli_entry_point()
