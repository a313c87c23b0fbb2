"""HTTP transport for the dashboard REST API."""
