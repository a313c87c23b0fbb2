"""manageadmins: bulk administrator management for Meraki dashboard organizations."""

__version__ = "1.0.0"
