from __future__ import annotations

import logging

from ..core.enums import IdSpace
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Actor

logger = logging.getLogger(__name__)


class AccessResolver:
    """Decides whether an actor may read or write a target employee's attendance.

    Two identifier spaces coexist: the account id carried by the session and the
    employee-record id attendance rows reference. Every authorization check goes
    through ``resolve_actor_employee`` so the account-to-employee bridge lives in
    one place.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve_actor_employee(self, actor: Actor) -> Employee:
        employee = self._employees.get_by_user_id(actor.user_id)
        if not employee:
            raise NotFoundError("No employee record is linked to this account")
        return employee

    def require_hr(self, actor: Actor) -> None:
        if not actor.is_hr:
            logger.warning("Denied HR-only action for account %s", actor.user_id)
            raise AuthorizationError("Access denied, HR only")

    def resolve_target(self, actor: Actor, target_id: int, *, id_space: IdSpace = IdSpace.EMPLOYEE) -> int:
        """Return the employee-record id the caller may access for ``target_id``.

        ``id_space`` says whether ``target_id`` is an employee-record id or an account id;
        the two spaces overlap numerically, so a target is only ever looked up in one of them.
        """
        target_id = int(target_id)
        if id_space == IdSpace.ACCOUNT:
            target = self._employees.get_by_user_id(target_id)
        else:
            target = self._employees.get_by_id(target_id)

        if actor.is_hr:
            if not target:
                raise NotFoundError("Employee not found")
            return target.employee_id

        try:
            own = self.resolve_actor_employee(actor)
        except NotFoundError:
            own = None
        if own and target and target.employee_id == own.employee_id:
            return own.employee_id

        logger.warning(
            "Denied attendance access: account %s -> %s %s", actor.user_id, id_space.value, target_id
        )
        raise AuthorizationError("Access denied")
