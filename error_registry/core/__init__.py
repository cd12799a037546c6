"""Core building blocks: settings, database, pagination, services."""
