from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Read-only view of the employee directory.

    Note: the directory is owned by the employee management feature; attendance only looks things up.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Iterable[int]) -> Mapping[int, Employee]:
        raise NotImplementedError
