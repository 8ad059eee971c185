"""Infrastructure adapters for storage, settings and logging."""
