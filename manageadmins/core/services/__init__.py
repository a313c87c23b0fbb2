"""Application services shared by the command handlers."""
