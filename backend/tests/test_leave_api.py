"""Leave application, approval and cancellation over HTTP."""
import pytest
from httpx import AsyncClient

from conftest import create_employee, linked_employee_headers, login_headers

MONDAY = "2030-01-07"


async def file_leave(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"type": "annual", "start_date": MONDAY, "end_date": MONDAY, "reason": "Family function"}
    payload.update(fields)
    response = await client.post("/api/leave-requests/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_employee_files_and_admin_decides(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers)
    staff = await linked_employee_headers(client, admin_headers, "asha", employee["id"])

    request = await file_leave(client, staff)
    assert request["employee_id"] == employee["id"]
    assert request["status"] == "pending"
    assert request["paid"] is True

    denied = await client.put(f"/api/leave-requests/{request['id']}", json={"status": "approved"}, headers=staff)
    assert denied.status_code == 403

    approved = await client.put(
        f"/api/leave-requests/{request['id']}", json={"status": "approved"}, headers=admin_headers
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["approved_by_id"] is not None
    assert approved.json()["decided_at"] is not None

    again = await client.put(
        f"/api/leave-requests/{request['id']}", json={"status": "rejected"}, headers=admin_headers
    )
    assert again.status_code == 409
    assert again.json()["detail"] == "Leave request is already approved"


@pytest.mark.asyncio
async def test_paid_flag_follows_monthly_cap(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers)
    first = await file_leave(client, admin_headers, employee_id=employee["id"])
    await client.put(f"/api/leave-requests/{first['id']}", json={"status": "approved"}, headers=admin_headers)

    second = await file_leave(
        client, admin_headers, employee_id=employee["id"], start_date="2030-01-08", end_date="2030-01-09"
    )
    assert second["paid"] is False
    wfh = await file_leave(client, admin_headers, employee_id=employee["id"], type="workfromhome", start_date="2030-01-14", end_date="2030-01-14")
    assert wfh["paid"] is False

    usage = await client.get(
        "/api/leave-requests/paid-usage",
        params={"employee_id": employee["id"], "month": "2030-01-15"},
        headers=admin_headers,
    )
    assert usage.status_code == 200
    assert usage.json()["used"] == 1
    assert usage.json()["limit"] == 1.5

    balance = await client.get(
        f"/api/employees/{employee['id']}/leave-balance", params={"year": 2030}, headers=admin_headers
    )
    assert balance.json()["annual"] == {"total": 20, "used": 1, "remaining": 19}
    next_year = await client.get(
        f"/api/employees/{employee['id']}/leave-balance", params={"year": 2031}, headers=admin_headers
    )
    assert next_year.json()["annual"]["used"] == 0

    pending = await client.get("/api/leave-requests/", params={"status": "pending"}, headers=admin_headers)
    assert len(pending.json()) == 2

    analytics = await client.get("/api/leave-requests/analytics", headers=admin_headers)
    stats = analytics.json()
    assert (stats["total"], stats["pending"], stats["approved"], stats["work_from_home"]) == (3, 2, 1, 1)


@pytest.mark.asyncio
async def test_invalid_requests_are_rejected(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers)
    halfday = await client.post(
        "/api/leave-requests/",
        json={"employee_id": employee["id"], "type": "halfday", "start_date": MONDAY, "end_date": "2030-01-08"},
        headers=admin_headers,
    )
    assert halfday.status_code == 422

    backwards = await client.post(
        "/api/leave-requests/",
        json={"employee_id": employee["id"], "type": "sick", "start_date": "2030-01-09", "end_date": MONDAY},
        headers=admin_headers,
    )
    assert backwards.status_code == 422

    unlinked = await login_headers(client, "ravi")
    response = await client.post(
        "/api/leave-requests/", json={"type": "sick", "start_date": MONDAY, "end_date": MONDAY}, headers=unlinked
    )
    assert response.status_code == 403
    assert (await client.get("/api/leave-requests/", headers=unlinked)).json() == []


@pytest.mark.asyncio
async def test_cancellation_rules(client: AsyncClient, admin_headers: dict) -> None:
    employee = await create_employee(client, admin_headers)
    staff = await linked_employee_headers(client, admin_headers, "asha", employee["id"])
    other = await create_employee(client, admin_headers, code="E-002", first_name="Ravi")
    other_staff = await linked_employee_headers(client, admin_headers, "ravi", other["id"])

    pending = await file_leave(client, staff)
    assert (await client.delete(f"/api/leave-requests/{pending['id']}", headers=other_staff)).status_code == 403
    assert (await client.delete(f"/api/leave-requests/{pending['id']}", headers=staff)).status_code == 204

    decided = await file_leave(client, staff, start_date="2030-01-10", end_date="2030-01-10")
    await client.put(f"/api/leave-requests/{decided['id']}", json={"status": "approved"}, headers=admin_headers)
    assert (await client.delete(f"/api/leave-requests/{decided['id']}", headers=staff)).status_code == 409
    assert (await client.delete(f"/api/leave-requests/{decided['id']}", headers=admin_headers)).status_code == 204

    own = await client.get("/api/leave-requests/", headers=staff)
    assert own.json() == []
