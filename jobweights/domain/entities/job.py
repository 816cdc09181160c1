"""Job entity — the owner of responsibility assignments."""

from dataclasses import dataclass


@dataclass
class Job:
    id: str | None
    code: str
    name: str
    is_active: bool = True
