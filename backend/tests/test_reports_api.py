"""Reports, statutory registers, dashboard, settings and attendance endpoints."""
from urllib.parse import quote

import pytest
from httpx import AsyncClient

from conftest import create_employee, linked_employee_headers
from hrms.exports.responses import content_disposition

MAY_2024 = {"period": "month", "year": 2024, "month": 5}


async def seed_may(client: AsyncClient, headers: dict) -> dict:
    """One Pune/Operations employee with two marks and an approved leave in May 2024."""

    unit = (await client.post("/api/masters/units/", json={"name": "Pune"}, headers=headers)).json()
    dept = (
        await client.post("/api/departments/", json={"name": "Operations", "unit_id": unit["id"]}, headers=headers)
    ).json()
    employee = await create_employee(
        client, headers, department_id=dept["id"], join_date="2024-01-10", position="Operator"
    )
    for day, status in (("2024-05-06", "present"), ("2024-05-07", "halfday")):
        response = await client.post(
            "/api/attendance/", json={"employee_id": employee["id"], "date": day, "status": status}, headers=headers
        )
        assert response.status_code == 201, response.text
    leave = await client.post(
        "/api/leave-requests/",
        json={"employee_id": employee["id"], "type": "sick", "start_date": "2024-05-08", "end_date": "2024-05-08"},
        headers=headers,
    )
    await client.put(f"/api/leave-requests/{leave.json()['id']}", json={"status": "approved"}, headers=headers)
    return {"unit": unit, "department": dept, "employee": employee}


@pytest.mark.asyncio
async def test_attendance_report_json_and_downloads(client: AsyncClient, admin_headers: dict) -> None:
    seeded = await seed_may(client, admin_headers)

    report = await client.get("/api/reports/attendance", params=MAY_2024, headers=admin_headers)
    assert report.status_code == 200
    body = report.json()
    assert body["period"] == {"kind": "month", "start": "2024-05-01", "end": "2024-05-31", "label": "May 2024"}
    row = body["rows"][0]
    assert (row["present"], row["halfday"], row["leaves"], row["payable_days"]) == (1, 1, 1, 1)
    assert row["unit"] == "Pune"

    csv_resp = await client.get("/api/reports/attendance", params={**MAY_2024, "format": "csv"}, headers=admin_headers)
    assert csv_resp.headers["content-type"].startswith("text/csv")
    assert csv_resp.headers["content-disposition"] == 'attachment; filename="attendance_report_20240501_20240531.csv"'
    assert csv_resp.text.splitlines()[0].startswith('"Employee ID","Name","Department"')

    pdf_resp = await client.get("/api/reports/attendance", params={**MAY_2024, "format": "pdf"}, headers=admin_headers)
    assert pdf_resp.content.startswith(b"%PDF")

    other_unit = await client.get(
        "/api/reports/attendance", params={**MAY_2024, "unit_id": seeded["unit"]["id"] + 1}, headers=admin_headers
    )
    assert other_unit.json()["rows"] == []

    individual = await client.get(
        f"/api/reports/attendance/{seeded['employee']['id']}", params=MAY_2024, headers=admin_headers
    )
    assert individual.json()["name"] == "Asha Patil"
    assert individual.json()["payable_days"] == 1


@pytest.mark.asyncio
async def test_individual_export_with_non_ascii_name(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers, code="E-007", first_name="राम", last_name="शर्मा")

    for fmt in ("csv", "xlsx", "txt", "pdf"):
        response = await client.get(
            f"/api/reports/attendance/{employee['id']}", params={**MAY_2024, "format": fmt}, headers=admin_headers
        )
        assert response.status_code == 200, fmt
        disposition = response.headers["content-disposition"]
        assert disposition.startswith(f'attachment; filename="attendance_E-007.{fmt}"; filename*=UTF-8\'\'')
        assert quote(f"attendance_राम_शर्मा.{fmt}", safe="") in disposition


def test_quoted_names_do_not_break_the_header() -> None:
    header = content_disposition('attendance_Asha_"Ace".csv')
    assert header.startswith('attachment; filename="attendance_Asha__Ace_.csv"; filename*=')
    assert header.count('"') == 2
    assert content_disposition("report.csv") == 'attachment; filename="report.csv"'


@pytest.mark.asyncio
async def test_employee_sees_only_own_report(client: AsyncClient, admin_headers: dict) -> None:
    seeded = await seed_may(client, admin_headers)
    staff = await linked_employee_headers(client, admin_headers, "asha", seeded["employee"]["id"])

    own = await client.get(f"/api/reports/attendance/{seeded['employee']['id']}", params=MAY_2024, headers=staff)
    assert own.status_code == 200
    assert (await client.get("/api/reports/attendance", params=MAY_2024, headers=staff)).status_code == 403
    assert (await client.get("/api/compliance/mlwf", params=MAY_2024, headers=staff)).status_code == 403


@pytest.mark.asyncio
async def test_mlwf_statement(client: AsyncClient, admin_headers: dict) -> None:
    await seed_may(client, admin_headers)

    statement = await client.get("/api/compliance/mlwf", params=MAY_2024, headers=admin_headers)
    body = statement.json()
    row = body["groups"]["Pune"]["Operations"][0]
    assert row["gross_salary"] == 30000
    assert (row["employee_contrib"], row["employer_contrib"], row["total"]) == (25, 75, 100)
    assert body["totals"]["total"] == 100

    xlsx = await client.get("/api/compliance/mlwf", params={**MAY_2024, "format": "xlsx"}, headers=admin_headers)
    assert xlsx.content.startswith(b"PK")
    assert xlsx.headers["content-disposition"] == 'attachment; filename="MLWF-Statement-May-2024.xlsx"'

    template = await client.get("/api/compliance/mlwf/template", headers=admin_headers)
    assert template.headers["content-disposition"] == 'attachment; filename="MLWF_Template.xlsx"'


@pytest.mark.asyncio
async def test_bonus_register(client: AsyncClient, admin_headers: dict) -> None:
    await seed_may(client, admin_headers)

    register = await client.get("/api/compliance/bonus", params={"year": 2024}, headers=admin_headers)
    body = register.json()
    assert body["fiscal_year"] == "1st April 2024 to 31st March 2025"
    assert body["total_bonus"] == 6996
    assert body["eligible_employees"] == 1
    row = body["groups"]["Pune"]["Operations"][0]
    assert row["designation"] == "Operator"
    assert row["months"][0] == {"month": "April", "wages": 15000, "bonus": 583}

    txt = await client.get("/api/compliance/bonus", params={"year": 2024, "format": "txt"}, headers=admin_headers)
    assert txt.text.startswith("Bonus Register 1st April 2024 to 31st March 2025")
    assert txt.headers["content-disposition"] == 'attachment; filename="Bonus-Register-2024-2025.txt"'


@pytest.mark.asyncio
async def test_dashboard_and_holidays(client: AsyncClient, admin_headers: dict) -> None:
    await create_employee(client, admin_headers)
    holiday = await client.post(
        "/api/holidays/", json={"name": "Republic Day", "date": "2099-01-26"}, headers=admin_headers
    )
    assert holiday.status_code == 201
    duplicate = await client.post(
        "/api/holidays/", json={"name": "Republic Day", "date": "2099-01-26"}, headers=admin_headers
    )
    assert duplicate.status_code == 409
    assert len((await client.get("/api/holidays/", params={"year": 2099}, headers=admin_headers)).json()) == 1

    stats = (await client.get("/api/dashboard/", headers=admin_headers)).json()
    assert stats["total_employees"] == 1
    assert stats["present_today"] == 0
    assert stats["pending_approvals"] == 0
    assert stats["upcoming_holidays"][0]["name"] == "Republic Day"
    assert "personal" not in stats


@pytest.mark.asyncio
async def test_system_settings_drive_salary_structure(client: AsyncClient, admin_headers: dict) -> None:
    defaults = (await client.get("/api/settings/system", headers=admin_headers)).json()
    assert defaults["hra_percentage"] == 20

    updated = await client.put(
        "/api/settings/system", json={**defaults, "hra_percentage": 25}, headers=admin_headers
    )
    assert updated.status_code == 200
    structure = (await client.get("/api/payroll/structure", headers=admin_headers)).json()
    hra = next(c for c in structure if c["name"].startswith("House Rent"))
    assert hra["value"] == "25%"

    invalid = await client.put("/api/settings/system", json={"hra_percentage": 120}, headers=admin_headers)
    assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_ctc_calculator(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.post("/api/payroll/ctc", json={"amount": 50000, "month": 6}, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["net_monthly"] == 47975
    assert body["deductions"]["mlwf"] == 25
    assert body["tax_regime"] == "new"

    too_much = await client.post(
        "/api/payroll/ctc",
        json={"amount": 50000, "percentages": {"basic": 80, "hra": 30}},
        headers=admin_headers,
    )
    assert too_much.status_code == 422


@pytest.mark.asyncio
async def test_check_in_and_out(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers)
    staff = await linked_employee_headers(client, admin_headers, "asha", employee["id"])

    assert (await client.post("/api/attendance/check-out", headers=staff)).status_code == 409
    first = await client.post("/api/attendance/check-in", headers=staff)
    assert first.status_code == 201
    assert first.json()["status"] == "present"
    assert (await client.post("/api/attendance/check-in", headers=staff)).status_code == 409

    out = await client.post("/api/attendance/check-out", headers=staff)
    assert out.status_code == 200
    assert out.json()["check_out_time"] is not None
    assert (await client.post("/api/attendance/check-out", headers=staff)).status_code == 409

    mine = await client.get("/api/attendance/", headers=staff)
    assert len(mine.json()) == 1
    duplicate = await client.post(
        "/api/attendance/",
        json={"employee_id": employee["id"], "date": first.json()["date"]},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    stats = (await client.get("/api/dashboard/", headers=staff)).json()
    assert stats["present_today"] == 1
    assert "pending_approvals" not in stats
    assert stats["personal"]["present"] == 1


@pytest.mark.asyncio
async def test_health_is_public(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
