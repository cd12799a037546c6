"""Infrastructure: database engine and logging."""
