"""Domain Layer: models, interfaces and events for dashboard administration."""
