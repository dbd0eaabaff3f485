"""DTOs for roles."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleResult:
    id: int
    name: str
    level: int
    description: str | None = None
