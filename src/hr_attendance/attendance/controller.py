from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..auth.model import Actor
from ..core.enums import IdSpace, Role
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateRecordError,
    NoCheckInError,
    NotFoundError,
    ValidationError,
)
from ..container import Container
from .service import UNSET

logger = logging.getLogger(__name__)

# Most specific first; subclasses must precede their bases.
_STATUS_CODES = (
    (AlreadyCheckedInError, 409),
    (DuplicateRecordError, 409),
    (AlreadyCheckedOutError, 409),
    (NoCheckInError, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def _status_for(error: DomainError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(error, exc_type):
            return code
    return 400


def current_actor() -> Actor:
    """Build the caller from the Flask session written by the login feature."""
    user_id = session.get("user_id")
    role = session.get("role")
    if user_id is None or not role:
        raise AuthenticationError("Please log in to continue")
    try:
        return Actor(user_id=int(user_id), role=Role(str(role).lower()))
    except ValueError:
        raise AuthorizationError("Unknown role") from None


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    queries = container.attendance_query_service

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return jsonify({"kind": error.kind, "message": str(error)}), _status_for(error)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"kind": "server_error", "message": "Internal server error"}), 500

    def _body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    def check_in():
        result = attendance.check_in(current_actor())
        return jsonify({
            "message": result.message,
            "time": result.attendance.record.check_in.isoformat(),
            "status": result.attendance.record.status.value,
            "attendance": result.attendance.to_dict(),
        })

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    def check_out():
        result = attendance.check_out(current_actor())
        return jsonify({
            "message": result.message,
            "time": result.attendance.record.check_out.isoformat(),
            "workHours": float(result.work_hours),
            "attendance": result.attendance.to_dict(),
        })

    @app.route("/api/attendance/me/today", methods=["GET"], endpoint="attendance_today")
    def today():
        view = queries.today(current_actor())
        return jsonify(view.to_dict() if view else None)

    def _list_for(target_id: int, id_space: IdSpace):
        views = queries.list_for_employee(
            current_actor(),
            target_id,
            month=request.args.get("month"),
            year=request.args.get("year"),
            day=request.args.get("date"),
            id_space=id_space,
        )
        return jsonify([v.to_dict() for v in views])

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_for_employee")
    def list_for_employee(employee_id: int):
        return _list_for(employee_id, IdSpace.EMPLOYEE)

    @app.route("/api/attendance/account/<int:user_id>", methods=["GET"], endpoint="attendance_for_account")
    def list_for_account(user_id: int):
        return _list_for(user_id, IdSpace.ACCOUNT)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list_all")
    def list_all():
        views = queries.list_all(
            current_actor(),
            month=request.args.get("month"),
            year=request.args.get("year"),
            employee_id=request.args.get("employee"),
            status=request.args.get("status"),
        )
        return jsonify([v.to_dict() for v in views])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def summary():
        result = queries.summarize(
            current_actor(),
            month=request.args.get("month"),
            year=request.args.get("year"),
            employee_id=request.args.get("employee"),
            status=request.args.get("status"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    def create():
        data = _body()
        actor = current_actor()
        # "employee" is an employee-record id, "account" an account id.
        if "employee" in data and "account" in data:
            raise ValidationError("Provide either employee or account, not both")
        id_space = IdSpace.ACCOUNT if "account" in data else IdSpace.EMPLOYEE
        view = attendance.create_record(
            actor,
            employee_id=data.get(id_space.value),
            id_space=id_space,
            work_date=data.get("date"),
            check_in=data.get("checkIn"),
            check_out=data.get("checkOut"),
            status=data.get("status"),
        )
        return jsonify(view.to_dict()), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    def update(attendance_id: int):
        data = _body()
        view = attendance.update_record(
            current_actor(),
            attendance_id,
            status=data.get("status", UNSET),
            check_in=data.get("checkIn", UNSET),
            check_out=data.get("checkOut", UNSET),
            work_hours_override=data.get("workHours", UNSET),
        )
        return jsonify(view.to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    def delete(attendance_id: int):
        view = attendance.delete_record(current_actor(), attendance_id)
        return jsonify({"message": "Attendance record deleted", "attendance": view.to_dict()})
