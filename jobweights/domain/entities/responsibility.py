"""Responsibility entity — a duty from the responsibilities registry."""

from dataclasses import dataclass


@dataclass
class Responsibility:
    id: str | None
    code: str
    name: str
    description: str | None = None
    is_active: bool = True
