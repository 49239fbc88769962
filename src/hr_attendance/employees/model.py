from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Employee directory entry.

    ``user_id`` is the account identity the employee logs in with; ``employee_id``
    is the employee-record identity attendance rows reference.
    """

    employee_id: int
    user_id: int
    name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None

    def to_display(self) -> dict:
        return {"employeeId": self.employee_id, "name": self.name, "email": self.email}
