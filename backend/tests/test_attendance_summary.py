"""Attendance counts, payable days and dashboard figures."""
from datetime import date, datetime
from types import SimpleNamespace

from hrms.services.attendance_summary import attendance_export_rows, attendance_report, summarize
from hrms.services.dashboard import dashboard_stats, personal_stats
from hrms.services.periods import report_period

MAY = report_period("month", year=2024, month=5)


def mark(day: int, status: str = "present", employee_id: int = 1, month: int = 5, check_in=None):
    return SimpleNamespace(
        employee_id=employee_id,
        date=date(2024, month, day),
        status=status,
        check_in_time=check_in,
        check_out_time=None,
    )


def approved_leave(start: date, employee_id: int = 1, status: str = "approved", end: date | None = None):
    return SimpleNamespace(employee_id=employee_id, start_date=start, end_date=end or start, status=status)


def test_summarize_counts_marks_and_leaves() -> None:
    records = [
        mark(1),
        mark(2),
        mark(3, check_in=datetime(2024, 5, 3, 9, 5)),
        mark(6, "halfday"),
        mark(7, "absent"),
        mark(8, "late"),
        mark(30, month=4),
        mark(2, employee_id=2),
    ]
    leaves = [
        approved_leave(date(2024, 5, 9)),
        approved_leave(date(2024, 4, 29), end=date(2024, 5, 2)),
        approved_leave(date(2024, 5, 10), status="pending"),
    ]
    summary = summarize(records, leaves, 1, MAY)

    assert (summary.present, summary.halfday, summary.absent, summary.late) == (3, 1, 1, 1)
    assert summary.total == 6
    assert summary.leaves == 1
    assert summary.payable_days == 3
    assert summary.last_check_in is None  # latest mark is the 8th


def test_payable_days_never_negative() -> None:
    leaves = [approved_leave(date(2024, 5, 9)), approved_leave(date(2024, 5, 13))]
    assert summarize([], leaves, 1, MAY).payable_days == 0


def test_attendance_report_rows() -> None:
    employees = [
        SimpleNamespace(id=1, code="E-001", full_name="Asha Patil", department_name="Ops", unit_name="Pune"),
        SimpleNamespace(id=2, code="E-002", full_name="Ravi Rao", department_name="Unassigned", unit_name="Unassigned"),
    ]
    rows = attendance_report(employees, [mark(2), mark(3, employee_id=2)], [], MAY)
    assert [r["employee_code"] for r in rows] == ["E-001", "E-002"]
    assert rows[0]["present"] == 1

    export = attendance_export_rows(rows)
    assert export[0]["Payable Days"] == 1
    assert export[0]["Check In"] == "-"


def test_dashboard_stats() -> None:
    today = date(2024, 5, 15)
    employees = [SimpleNamespace(id=i, is_active=True) for i in range(1, 5)] + [SimpleNamespace(id=5, is_active=False)]
    records = [
        SimpleNamespace(employee_id=2, date=today, status="present"),
        SimpleNamespace(employee_id=3, date=today, status="late"),
        SimpleNamespace(employee_id=4, date=today, status="absent"),
        SimpleNamespace(employee_id=5, date=today, status="present"),
    ]
    leaves = [
        approved_leave(date(2024, 5, 14), end=date(2024, 5, 16)),
        approved_leave(date(2024, 5, 20)),
        approved_leave(date(2024, 5, 15), status="pending"),
        approved_leave(date(2024, 5, 15), employee_id=5),
        approved_leave(date(2024, 5, 15), employee_id=99),
    ]
    holidays = [
        SimpleNamespace(id=i, name=name, date=day)
        for i, (name, day) in enumerate(
            [
                ("Republic Day", date(2024, 1, 26)),
                ("Diwali", date(2024, 11, 1)),
                ("Independence Day", date(2024, 8, 15)),
                ("Christmas", date(2024, 12, 25)),
                ("Gandhi Jayanti", date(2024, 10, 2)),
            ]
        )
    ]
    stats = dashboard_stats(employees, records, leaves, holidays, today)

    assert stats["total_employees"] == 4
    assert stats["present_today"] == 2
    assert stats["on_leave"] == 1
    assert stats["absent_today"] == 1
    assert stats["pending_approvals"] == 1
    assert [h["name"] for h in stats["upcoming_holidays"]] == ["Independence Day", "Gandhi Jayanti", "Diwali"]


def test_dashboard_absent_is_clamped() -> None:
    today = date(2024, 5, 15)
    stats = dashboard_stats(
        [SimpleNamespace(id=1, is_active=True)],
        [SimpleNamespace(employee_id=1, date=today, status="present")],
        [approved_leave(today)],
        [],
        today,
    )
    assert stats["absent_today"] == 0


def test_personal_stats_current_month_only() -> None:
    records = [mark(2), mark(3, "late"), mark(6, "absent"), mark(30, month=4)]
    assert personal_stats(records, date(2024, 5, 20)) == {"present": 1, "absent": 1, "late": 1}
