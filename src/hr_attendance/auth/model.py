from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated caller: account identity plus role."""

    user_id: int
    role: Role

    @property
    def is_hr(self) -> bool:
        return self.role == Role.HR
