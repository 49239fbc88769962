from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from hr_attendance.attendance.query import build_filter
from hr_attendance.core.enums import AttendanceStatus, IdSpace
from hr_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def seeded(attendance_repo):
    attendance_repo.seed(10, date(2024, 2, 29), AttendanceStatus.PRESENT, work_hours=Decimal("8.00"))
    attendance_repo.seed(10, date(2024, 3, 1), AttendanceStatus.LATE, work_hours=Decimal("7.50"))
    attendance_repo.seed(10, date(2024, 3, 31), AttendanceStatus.PRESENT, work_hours=Decimal("8.25"))
    attendance_repo.seed(10, date(2024, 4, 1), AttendanceStatus.HALF_DAY)
    attendance_repo.seed(20, date(2024, 3, 15), AttendanceStatus.ABSENT)
    return attendance_repo


def _dates(views):
    return [v.record.work_date for v in views]


def test_build_filter_month_range():
    criteria = build_filter(employee_id=10, month="3", year="2024", status="all")
    assert criteria.start_date == date(2024, 3, 1)
    assert criteria.end_date == date(2024, 4, 1)
    assert criteria.status is None


def test_build_filter_december_rolls_over():
    criteria = build_filter(month=12, year=2023)
    assert (criteria.start_date, criteria.end_date) == (date(2023, 12, 1), date(2024, 1, 1))


def test_build_filter_single_day():
    criteria = build_filter(day="2024-03-04", status="Late")
    assert (criteria.start_date, criteria.end_date) == (date(2024, 3, 4), date(2024, 3, 5))
    assert criteria.status == AttendanceStatus.LATE


@pytest.mark.parametrize(
    "params",
    [
        {"month": 3},
        {"year": 2024},
        {"month": 13, "year": 2024},
        {"month": "x", "year": 2024},
        {"month": 3, "year": 2024, "day": "2024-03-04"},
        {"day": "2024-3-4x"},
        {"status": "Sick"},
    ],
)
def test_build_filter_rejects_invalid_params(params):
    with pytest.raises(ValidationError):
        build_filter(**params)


def test_employee_lists_own_month_most_recent_first(queries, seeded, alice):
    views = queries.list_for_employee(alice, 10, month=3, year=2024)
    assert _dates(views) == [date(2024, 3, 31), date(2024, 3, 1)]
    assert views[0].employee.name == "Alice Nguyen"


def test_employee_id_and_account_id_give_identical_results(queries, seeded, alice):
    by_employee_id = queries.list_for_employee(alice, 10)
    by_account_id = queries.list_for_employee(alice, 1, id_space=IdSpace.ACCOUNT)
    assert by_employee_id == by_account_id
    assert len(by_employee_id) == 4


def test_employee_cannot_read_someone_else(queries, seeded, alice):
    with pytest.raises(AuthorizationError):
        queries.list_for_employee(alice, 20)
    with pytest.raises(AuthorizationError):
        queries.list_for_employee(alice, 2, id_space=IdSpace.ACCOUNT)
    # Carl's employee id, numerically equal to Alice's account id.
    with pytest.raises(AuthorizationError):
        queries.list_for_employee(alice, 1)


def test_hr_reads_any_employee_by_either_identifier(queries, seeded, hr):
    assert _dates(queries.list_for_employee(hr, 20)) == [date(2024, 3, 15)]
    assert _dates(queries.list_for_employee(hr, 2, id_space=IdSpace.ACCOUNT)) == [date(2024, 3, 15)]
    with pytest.raises(NotFoundError):
        queries.list_for_employee(hr, 404)


def test_hr_overlapping_id_reads_the_record_named_by_its_space(queries, seeded, attendance_repo, hr):
    attendance_repo.seed(1, date(2024, 3, 20), AttendanceStatus.ABSENT)
    carl_rows = queries.list_for_employee(hr, 1)
    assert [v.employee.name for v in carl_rows] == ["Carl Le"]
    alice_rows = queries.list_for_employee(hr, 1, id_space=IdSpace.ACCOUNT)
    assert {v.employee.name for v in alice_rows} == {"Alice Nguyen"}
    assert len(alice_rows) == 4


def test_list_for_employee_single_date(queries, seeded, alice):
    assert _dates(queries.list_for_employee(alice, 10, day="2024-03-01")) == [date(2024, 3, 1)]


def test_list_all_requires_hr(queries, seeded, alice):
    with pytest.raises(AuthorizationError):
        queries.list_all(alice)


def test_list_all_filters(queries, seeded, hr):
    march = queries.list_all(hr, month=3, year=2024)
    assert _dates(march) == [date(2024, 3, 31), date(2024, 3, 15), date(2024, 3, 1)]

    present = queries.list_all(hr, month=3, year=2024, status="Present", employee_id="all")
    assert _dates(present) == [date(2024, 3, 31)]

    bob_only = queries.list_all(hr, employee_id="20", status="all")
    assert [v.employee.name for v in bob_only] == ["Bob Tran"]

    assert len(queries.list_all(hr)) == 5


def test_today_lookup(queries, service, alice, clock):
    assert queries.today(alice) is None
    service.check_in(alice)
    view = queries.today(alice)
    assert view.record.check_in == datetime(2024, 3, 4, 9, 30)
    assert view.record.status == AttendanceStatus.LATE


def test_summary_counts_and_hours(queries, seeded, hr):
    summary = queries.summarize(hr, month=3, year=2024)
    assert summary.total_records == 3
    assert summary.total_work_hours == Decimal("15.75")
    assert summary.to_dict()["byStatus"] == {"Present": 1, "Absent": 1, "Late": 1, "Half-day": 0}


def test_summary_requires_hr(queries, bob):
    with pytest.raises(AuthorizationError):
        queries.summarize(bob)
