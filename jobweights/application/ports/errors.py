"""Errors raised by persistence adapters across the port boundary."""


class PersistenceConflictError(Exception):
    """The store refused a write (uniqueness, constraint, or budget re-check)."""

    def __init__(self, message: str, max_allowed: int | None = None):
        super().__init__(message)
        self.max_allowed = max_allowed


class MalformedRecordError(ValueError):
    """A backend row did not match the expected assignment schema."""
