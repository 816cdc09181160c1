"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class BulkMode(str, Enum):
    BEST_EFFORT = "best_effort"
    ALL_OR_NOTHING = "all_or_nothing"


class ItemStatus(str, Enum):
    """Outcome of a single assignment attempt inside a bulk or import run."""

    ASSIGNED = "assigned"
    IMPORTED = "imported"
    INVALID = "invalid"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SKIPPED = "skipped"
    MALFORMED = "malformed"
