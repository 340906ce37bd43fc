"""HTTP surface tests: status codes, error bodies and the notification socket."""

import time
from unittest.mock import patch

from fastapi.testclient import TestClient
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.main import create_app
from hr_api.models.dto.notification import HubEvent
from hr_api.repositories.employee_repository import EmployeeRepository


async def create_employee(client: AsyncClient, **overrides) -> dict:
    payload = {"full_name": "Jane Doe", "email": "jane@example.com"}
    payload.update(overrides)
    response = await client.post("/api/employees", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_contract(client: AsyncClient, employee_id: int, **overrides) -> dict:
    payload = {
        "employee_id": employee_id,
        "start_date": "2024-01-01",
        "end_date": "2099-12-31",
        "employment_type": "full_time",
        "base_salary": "52000.00",
    }
    payload.update(overrides)
    return (await client.post(f"/api/employees/{employee_id}/contracts", json=payload)).json()


class TestEmployeesApi:
    """Employee endpoints."""

    async def test_create_and_get(self, client, notifications) -> None:
        created = await create_employee(client, phone="+49 30 123456")

        assert created["status"] == "active"
        response = await client.get(f"/api/employees/{created['id']}")
        assert response.status_code == 200
        assert response.json()["email"] == "jane@example.com"
        assert notifications.of(HubEvent.EMPLOYEE_UPDATED)[0]["change_type"] == "created"

    async def test_missing_employee_returns_404(self, client) -> None:
        response = await client.get("/api/employees/999")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Employee with ID 999 not found",
            "error_code": "EMPLOYEE_NOT_FOUND",
        }

    async def test_duplicate_email_returns_409(self, client) -> None:
        await create_employee(client)

        response = await client.post(
            "/api/employees", json={"full_name": "Other", "email": "JANE@example.com"}
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "EMAIL_ALREADY_EXISTS"

    async def test_duplicate_email_rejected_by_unique_index_returns_409(self, client) -> None:
        await create_employee(client)

        # Both requests pass the lookup, as when two creates race
        with patch.object(EmployeeRepository, "get_by_email", return_value=None):
            response = await client.post(
                "/api/employees", json={"full_name": "Other", "email": "jane@example.com"}
            )

        assert response.status_code == 409
        assert response.json()["error_code"] == "EMAIL_ALREADY_EXISTS"
        listed = (await client.get("/api/employees")).json()
        assert listed["total"] == 1

    async def test_unknown_department_returns_400(self, client) -> None:
        response = await client.post(
            "/api/employees",
            json={"full_name": "Jane", "email": "j@example.com", "department_id": 5},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DEPARTMENT_NOT_FOUND"

    async def test_invalid_payload_returns_422(self, client) -> None:
        response = await client.post("/api/employees", json={"full_name": "", "email": "nope"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list_with_filters(self, client) -> None:
        await create_employee(client, full_name="Alice Smith", email="alice@example.com")
        bob = await create_employee(client, full_name="Bob Jones", email="bob@example.com")
        await client.post(f"/api/employees/{bob['id']}/set-on-leave")

        everyone = (await client.get("/api/employees")).json()
        on_leave = (await client.get("/api/employees", params={"status": "on_leave"})).json()
        searched = (await client.get("/api/employees", params={"search": "alice"})).json()

        assert everyone["total"] == 2
        assert [e["full_name"] for e in everyone["items"]] == ["Alice Smith", "Bob Jones"]
        assert [e["id"] for e in on_leave["items"]] == [bob["id"]]
        assert searched["total"] == 1

    async def test_status_actions(self, client, notifications) -> None:
        employee = await create_employee(client)

        response = await client.post(f"/api/employees/{employee['id']}/set-on-leave")
        assert response.status_code == 204
        assert (await client.get(f"/api/employees/{employee['id']}")).json()["status"] == "on_leave"

        response = await client.post(f"/api/employees/{employee['id']}/set-active")
        assert response.status_code == 204
        assert (await client.get(f"/api/employees/{employee['id']}")).json()["status"] == "active"
        changes = [e["change_type"] for e in notifications.of(HubEvent.EMPLOYEE_UPDATED)]
        assert changes == ["created", "status_changed", "status_changed"]

    async def test_delete_manager_returns_409(self, client) -> None:
        employee = await create_employee(client)
        await client.post("/api/departments", json={"name": "R&D", "manager_id": employee["id"]})

        response = await client.delete(f"/api/employees/{employee['id']}")

        assert response.status_code == 409
        assert response.json()["error_code"] == "EMPLOYEE_IS_MANAGER"

    async def test_delete_removes_contracts(self, client) -> None:
        employee = await create_employee(client)
        contract = await create_contract(client, employee["id"])

        response = await client.delete(f"/api/employees/{employee['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/api/contracts/{contract['id']}")).status_code == 404


class TestOrganizationApi:
    """Department and position endpoints."""

    async def test_department_with_manager_and_headcount(self, client) -> None:
        manager = await create_employee(client, full_name="Mia Manager", email="mia@example.com")
        response = await client.post(
            "/api/departments", json={"name": "Sales", "manager_id": manager["id"]}
        )
        department = response.json()
        await create_employee(client, email="rep@example.com", department_id=department["id"])

        response = await client.get(f"/api/departments/{department['id']}")

        assert response.json() == {
            "id": department["id"],
            "name": "Sales",
            "manager_id": manager["id"],
            "manager_name": "Mia Manager",
            "employee_count": 1,
        }

    async def test_unknown_manager_returns_400(self, client) -> None:
        response = await client.post("/api/departments", json={"name": "Ops", "manager_id": 77})

        assert response.status_code == 400
        assert response.json()["error_code"] == "MANAGER_NOT_FOUND"

    async def test_positions_filtered_by_department(self, client) -> None:
        sales = (await client.post("/api/departments", json={"name": "Sales"})).json()
        ops = (await client.post("/api/departments", json={"name": "Ops"})).json()
        await client.post("/api/positions", json={"title": "Rep", "department_id": sales["id"]})
        await client.post("/api/positions", json={"title": "SRE", "department_id": ops["id"]})

        response = await client.get("/api/positions", params={"department_id": ops["id"]})

        assert [p["title"] for p in response.json()] == ["SRE"]
        assert response.json()[0]["department_name"] == "Ops"

    async def test_deleting_department_removes_positions(self, client) -> None:
        department = (await client.post("/api/departments", json={"name": "Temp"})).json()
        position = (
            await client.post(
                "/api/positions", json={"title": "Intern", "department_id": department["id"]}
            )
        ).json()

        assert (await client.delete(f"/api/departments/{department['id']}")).status_code == 204
        assert (await client.get(f"/api/positions/{position['id']}")).status_code == 404


class TestContractsApi:
    """Contract endpoints."""

    async def test_create_and_list(self, client) -> None:
        employee = await create_employee(client)

        response = await client.post(
            f"/api/employees/{employee['id']}/contracts",
            json={
                "employee_id": employee["id"],
                "start_date": "2024-01-01",
                "end_date": None,
                "employment_type": "part_time",
                "base_salary": "30000",
            },
        )

        assert response.status_code == 201
        assert response.json()["status"] == "active"
        listed = (await client.get(f"/api/employees/{employee['id']}/contracts")).json()
        assert [c["id"] for c in listed] == [response.json()["id"]]

    async def test_route_and_body_mismatch_returns_400(self, client) -> None:
        employee = await create_employee(client)

        response = await client.post(
            f"/api/employees/{employee['id']}/contracts",
            json={
                "employee_id": employee["id"] + 1,
                "start_date": "2024-01-01",
                "employment_type": "full_time",
                "base_salary": "1000",
            },
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Employee ID mismatch between route and body"}

    async def test_overlap_returns_409(self, client) -> None:
        employee = await create_employee(client)
        await create_contract(client, employee["id"])

        response = await client.post(
            f"/api/employees/{employee['id']}/contracts",
            json={
                "employee_id": employee["id"],
                "start_date": "2025-01-01",
                "employment_type": "full_time",
                "base_salary": "1000",
            },
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "OVERLAPPING_CONTRACT"

    async def test_invalid_range_returns_422(self, client) -> None:
        employee = await create_employee(client)

        response = await client.post(
            f"/api/employees/{employee['id']}/contracts",
            json={
                "employee_id": employee["id"],
                "start_date": "2024-06-01",
                "end_date": "2024-05-01",
                "employment_type": "full_time",
                "base_salary": "1000",
            },
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_DATE_RANGE"

    async def test_negative_salary_returns_422(self, client) -> None:
        employee = await create_employee(client)

        response = await client.post(
            f"/api/employees/{employee['id']}/contracts",
            json={
                "employee_id": employee["id"],
                "start_date": "2024-01-01",
                "employment_type": "full_time",
                "base_salary": "-1",
            },
        )

        assert response.status_code == 422


class TestLeaveRequestsApi:
    """Leave request endpoints."""

    async def test_workflow(self, client) -> None:
        employee = await create_employee(client)
        await create_contract(client, employee["id"])
        base = f"/api/employees/{employee['id']}/leave-requests"

        draft = await client.post(
            base,
            json={
                "employee_id": employee["id"],
                "leave_type": "sick",
                "start_date": "2025-03-03",
                "end_date": "2025-03-04",
            },
        )
        assert draft.status_code == 201
        leave_id = draft.json()["id"]

        edited = await client.put(f"/api/leave-requests/{leave_id}", json={"reason": "Flu"})
        assert edited.json()["reason"] == "Flu"
        assert edited.json()["end_date"] == "2025-03-04"

        assert (await client.post(f"/api/leave-requests/{leave_id}/submit")).status_code == 200
        again = await client.post(f"/api/leave-requests/{leave_id}/submit")
        assert again.status_code == 409
        assert again.json()["error_code"] == "INVALID_STATUS_TRANSITION"

        approved = await client.post(
            f"/api/leave-requests/{leave_id}/approve", json={"approver_name": "Jane"}
        )
        assert approved.json()["status"] == "approved"
        assert approved.json()["approver_name"] == "Jane"

        listed = (await client.get(base)).json()
        assert [lr["id"] for lr in listed] == [leave_id]

    async def test_approve_requires_approver_name(self, client) -> None:
        response = await client.post("/api/leave-requests/1/approve", json={"approver_name": ""})

        assert response.status_code == 422

    async def test_no_contract_returns_422(self, client) -> None:
        employee = await create_employee(client)

        response = await client.post(
            f"/api/employees/{employee['id']}/leave-requests",
            json={
                "employee_id": employee["id"],
                "leave_type": "annual",
                "start_date": "2025-03-03",
                "end_date": "2025-03-04",
            },
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "NO_VALID_CONTRACT"

    async def test_mismatched_employee_returns_400(self, client) -> None:
        response = await client.post(
            "/api/employees/1/leave-requests",
            json={
                "employee_id": 2,
                "leave_type": "annual",
                "start_date": "2025-03-03",
                "end_date": "2025-03-04",
            },
        )

        assert response.status_code == 400

    async def test_missing_leave_request_returns_404(self, client) -> None:
        response = await client.post("/api/leave-requests/31/cancel")

        assert response.status_code == 404
        assert response.json()["error_code"] == "LEAVE_REQUEST_NOT_FOUND"


class TestPersistenceFailures:
    """Rejected commits surface as a generic 500."""

    async def test_rejected_commit_returns_500_without_details(
        self, client, notifications
    ) -> None:
        rejected = OperationalError("COMMIT", {}, Exception("could not write to /var/lib/pg"))

        with patch.object(AsyncSession, "commit", side_effect=rejected):
            response = await client.post(
                "/api/employees", json={"full_name": "Jane Doe", "email": "jane@example.com"}
            )

        assert response.status_code == 500
        assert response.json() == {"detail": "An error occurred processing your request."}
        assert notifications.events == []
        listed = (await client.get("/api/employees")).json()
        assert listed["total"] == 0


async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.json() == {"status": "healthy"}


def test_notification_socket_receives_broadcast() -> None:
    app = create_app()
    hub = app.state.hub

    with TestClient(app) as test_client:
        with test_client.websocket_connect("/hubs/notifications") as websocket:
            deadline = time.monotonic() + 2
            while hub.connection_count == 0 and time.monotonic() < deadline:
                time.sleep(0.01)

            delivered = test_client.portal.call(
                hub.broadcast, "EmployeeUpdated", {"employee_id": 1}
            )

            assert delivered == 1
            assert websocket.receive_json() == {
                "event": "EmployeeUpdated",
                "data": {"employee_id": 1},
            }
