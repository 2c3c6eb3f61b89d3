import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select

from travelflow.core.config import settings
from travelflow.models import Budget


async def create_request(client: AsyncClient, headers: dict, payload: dict) -> dict:
    response = await client.post("/api/requests", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


async def approve_travel(client: AsyncClient, headers: dict, request_id: str) -> dict:
    response = await client.patch(
        f"/api/requests/{request_id}", json={"status": "approved", "comments": "Go ahead"}, headers=headers
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()


async def submit_expenses(client: AsyncClient, headers: dict, request_id: str, advance: int = 2000):
    body = {
        "expenses": [
            {"category": "accommodation", "amount": 9000, "description": "Hotel, two nights"},
            {"category": "per-diem", "amount": 6000, "description": "Meals"},
        ],
        "previousOutstandingAdvance": advance,
    }
    return await client.patch(f"/api/requests/{request_id}/expenses", json=body, headers=headers)


@pytest.mark.asyncio
class TestTravelRequestSubmission:

    async def test_create_request_starts_pending(self, client: AsyncClient, auth_headers, travel_payload, users):
        """New requests start in phase 1 with nothing claimed yet"""
        data = await create_request(client, auth_headers("employee"), travel_payload())

        assert data["status"] == "pending"
        assert data["phase"] == 1
        assert data["totalAmount"] == 0
        assert data["employeeId"] == users["employee"].id
        assert data["travelDateFrom"] == "2024-01-10"
        assert data["transportMode"] == "bus"
        assert data["travelDetailsApprovedAt"] is None

    async def test_return_before_departure_rejected(self, client: AsyncClient, auth_headers, travel_payload):
        response = await client.post(
            "/api/requests",
            json=travel_payload(travelDateFrom="2024-01-12", travelDateTo="2024-01-10"),
            headers=auth_headers("employee"),
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "Validation error"
        assert response.json()["details"]

    async def test_other_project_requires_detail(self, client: AsyncClient, auth_headers, travel_payload):
        response = await client.post(
            "/api/requests", json=travel_payload(project="other"), headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = await client.post(
            "/api/requests",
            json=travel_payload(project="other", projectOther="Flood relief"),
            headers=auth_headers("employee"),
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["projectOther"] == "Flood relief"

    async def test_emergency_requires_reason(self, client: AsyncClient, auth_headers, travel_payload):
        response = await client.post(
            "/api/requests", json=travel_payload(requestType="emergency"), headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_group_travel_keeps_members(self, client: AsyncClient, auth_headers, travel_payload, users):
        members = [users["employee"].id, users["approver"].id]
        data = await create_request(client, auth_headers("employee"), travel_payload(
            requestType="group", isGroupTravel=True, isGroupCaptain=True, groupSize=2, groupMembers=members,
        ))
        assert data["groupMembers"] == members
        assert data["groupSize"] == 2

        response = await client.post(
            "/api/requests",
            json=travel_payload(requestType="group", groupSize=1, groupMembers=members),
            headers=auth_headers("employee"),
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_in_valley_type_not_accepted_here(self, client: AsyncClient, auth_headers, travel_payload):
        response = await client.post(
            "/api/requests", json=travel_payload(requestType="in-valley"), headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_approver_must_be_an_approver(self, client: AsyncClient, auth_headers, travel_payload, users):
        response = await client.post(
            "/api/requests",
            json=travel_payload(approverId=users["checker"].id),
            headers=auth_headers("employee"),
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "Selected user is not an approver"

        data = await create_request(
            client, auth_headers("employee"), travel_payload(approverId=users["approver"].id)
        )
        assert data["approverId"] == users["approver"].id


@pytest.mark.asyncio
class TestTravelRequestVisibility:

    async def test_employee_sees_only_own_requests(
        self, client: AsyncClient, auth_headers, travel_payload, users
    ):
        await create_request(client, auth_headers("employee"), travel_payload())
        await create_request(client, auth_headers("approver"), travel_payload(employeeName="Default Approver"))

        response = await client.get(
            "/api/requests", params={"employeeId": users["approver"].id}, headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["employeeId"] == users["employee"].id

        response = await client.get("/api/requests", headers=auth_headers("checker"))
        assert len(response.json()) == 2

        response = await client.get(
            "/api/requests", params={"employeeId": users["approver"].id}, headers=auth_headers("checker")
        )
        assert [r["employeeId"] for r in response.json()] == [users["approver"].id]

    async def test_status_filter(self, client: AsyncClient, auth_headers, travel_payload):
        first = await create_request(client, auth_headers("employee"), travel_payload())
        await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), first["id"])

        response = await client.get(
            "/api/requests", params={"status": "travel_approved"}, headers=auth_headers("approver")
        )
        assert [r["id"] for r in response.json()] == [first["id"]]

    async def test_employee_cannot_read_someone_elses_request(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        other = await create_request(client, auth_headers("approver"), travel_payload())

        response = await client.get(f"/api/requests/{other['id']}", headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_unknown_request_is_not_found(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/requests/does-not-exist", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Travel request not found"}


@pytest.mark.asyncio
class TestTravelRequestLifecycle:

    async def test_full_lifecycle_charges_budget(
        self, client: AsyncClient, auth_headers, travel_payload, funded_project, session_maker
    ):
        """Submit, approve, claim 15000 with a 2000 advance, verify against a 50000 budget"""
        created = await create_request(client, auth_headers("employee"), travel_payload())
        request_id = created["id"]

        approved = await approve_travel(client, auth_headers("approver"), request_id)
        assert approved["status"] == "travel_approved"
        assert approved["phase"] == 1
        assert approved["approverComments"] == "Go ahead"
        assert approved["travelDetailsApprovedAt"] is not None

        response = await submit_expenses(client, auth_headers("employee"), request_id)
        assert response.status_code == status.HTTP_200_OK, response.text
        submitted = response.json()
        assert submitted["status"] == "pending_verification"
        assert submitted["phase"] == 2
        assert submitted["totalAmount"] == 15000
        assert submitted["previousOutstandingAdvance"] == 2000
        assert submitted["expensesSubmittedAt"] is not None

        response = await client.patch(f"/api/requests/{request_id}", json={
            "status": "approved",
            "comments": "Receipts verified",
            "projectId": funded_project["project_id"],
            "includeOutstandingBalance": True,
        }, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK, response.text
        verified = response.json()
        assert verified["status"] == "approved"
        assert verified["checkerComments"] == "Receipts verified"
        assert verified["projectId"] == funded_project["project_id"]
        assert verified["budgetDeductedAmount"] == 17000

        async with session_maker() as session:
            budget = await session.get(Budget, funded_project["budget_id"])
            assert budget.amount == 33000
            assert budget.version == 2

        response = await client.get(f"/api/requests/{request_id}", headers=auth_headers("employee"))
        detail = response.json()
        assert detail["status"] == "approved"
        assert sorted(e["amount"] for e in detail["expenses"]) == [6000, 9000]

    async def test_checker_approval_without_outstanding_balance(
        self, client: AsyncClient, auth_headers, travel_payload, funded_project, session_maker
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await submit_expenses(client, auth_headers("employee"), created["id"])

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "approved", "projectId": funded_project["project_id"],
        }, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK

        async with session_maker() as session:
            result = await session.execute(
                select(Budget.amount).where(Budget.id == funded_project["budget_id"])
            )
            assert result.scalar_one() == 35000

    async def test_checker_approval_requires_project(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await submit_expenses(client, auth_headers("employee"), created["id"])

        response = await client.patch(
            f"/api/requests/{created['id']}", json={"status": "approved"}, headers=auth_headers("checker")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = await client.get(f"/api/requests/{created['id']}", headers=auth_headers("checker"))
        assert response.json()["status"] == "pending_verification"

    async def test_insufficient_budget_leaves_request_unchanged(
        self, client: AsyncClient, auth_headers, travel_payload, funded_project, session_maker
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await client.patch(f"/api/requests/{created['id']}/expenses", json={
            "expenses": [{"category": "vehicle-hiring", "amount": 60000}],
        }, headers=auth_headers("employee"))

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "approved", "projectId": funded_project["project_id"],
        }, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Insufficient budget" in response.json()["error"]

        response = await client.get(f"/api/requests/{created['id']}", headers=auth_headers("checker"))
        assert response.json()["status"] == "pending_verification"
        async with session_maker() as session:
            budget = await session.get(Budget, funded_project["budget_id"])
            assert budget.amount == 50000
            assert budget.version == 1

    async def test_checker_rejection(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await submit_expenses(client, auth_headers("employee"), created["id"])

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "rejected", "comments": "Missing hotel bill",
        }, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "rejected_by_checker"
        assert response.json()["checkerComments"] == "Missing hotel bill"

    async def test_approver_rejection_is_terminal(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "rejected", "comments": "Not in plan",
        }, headers=auth_headers("approver"))
        assert response.json()["status"] == "rejected"

        response = await client.patch(
            f"/api/requests/{created['id']}", json={"status": "approved"}, headers=auth_headers("approver")
        )
        assert response.status_code == status.HTTP_409_CONFLICT

        response = await submit_expenses(client, auth_headers("employee"), created["id"])
        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.asyncio
class TestTransitionAuthority:

    async def test_client_supplied_role_is_ignored(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        """An approver claiming to be a checker cannot skip verification"""
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "approved", "role": "checker",
        }, headers=auth_headers("approver"))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "travel_approved"

    async def test_employee_cannot_decide(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "approved", "role": "approver",
        }, headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_checker_cannot_approve_pending_request(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.patch(
            f"/api/requests/{created['id']}", json={"status": "approved"}, headers=auth_headers("checker")
        )
        assert response.status_code == status.HTTP_409_CONFLICT

        response = await client.get(f"/api/requests/{created['id']}", headers=auth_headers("checker"))
        assert response.json()["status"] == "pending"

    async def test_approver_cannot_verify_expenses(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await submit_expenses(client, auth_headers("employee"), created["id"])

        response = await client.patch(
            f"/api/requests/{created['id']}", json={"status": "approved"}, headers=auth_headers("approver")
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_admin_acts_as_approver_then_checker(
        self, client: AsyncClient, auth_headers, travel_payload, funded_project
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.patch(
            f"/api/requests/{created['id']}", json={"status": "approved"}, headers=auth_headers("admin")
        )
        assert response.json()["status"] == "travel_approved"

        await submit_expenses(client, auth_headers("employee"), created["id"])
        response = await client.patch(f"/api/requests/{created['id']}", json={
            "status": "approved", "projectId": funded_project["project_id"], "fiscalYear": 2024,
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "approved"


@pytest.mark.asyncio
class TestExpenseSubmissionGate:

    async def test_expenses_wait_for_travel_approval(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await submit_expenses(client, auth_headers("employee"), created["id"])
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_gate_can_be_disabled(self, client: AsyncClient, auth_headers, travel_payload, monkeypatch):
        monkeypatch.setattr(settings, "ENFORCE_EXPENSE_SUBMISSION_GATE", False)
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await submit_expenses(client, auth_headers("employee"), created["id"])
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "pending_verification"

    async def test_only_owner_submits_expenses(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])

        response = await submit_expenses(client, auth_headers("checker"), created["id"])
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_total_falls_back_to_supplied_amount(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])

        response = await client.patch(
            f"/api/requests/{created['id']}/expenses", json={"totalAmount": 4200}, headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["totalAmount"] == 4200


@pytest.mark.asyncio
class TestFinanceCommentsAndDeletion:

    async def test_finance_comment_notifies_with_preview(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        comment = "Please attach the original bus tickets for both legs of the journey before we can verify."

        response = await client.post(
            f"/api/requests/{created['id']}/finance-comment", json={"comment": comment}, headers=auth_headers("checker")
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["financeComments"] == comment

        response = await client.get("/api/notifications", headers=auth_headers("employee"))
        latest = response.json()[0]
        assert latest["message"].endswith(f"{comment[:50]}...")

    async def test_finance_comment_is_checker_only(self, client: AsyncClient, auth_headers, travel_payload):
        created = await create_request(client, auth_headers("employee"), travel_payload())

        response = await client.post(
            f"/api/requests/{created['id']}/finance-comment", json={"comment": "x"}, headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_admin_deletes_request_with_dependents(
        self, client: AsyncClient, auth_headers, travel_payload
    ):
        created = await create_request(client, auth_headers("employee"), travel_payload())
        await approve_travel(client, auth_headers("approver"), created["id"])
        await submit_expenses(client, auth_headers("employee"), created["id"])

        response = await client.delete(f"/api/requests/{created['id']}", headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await client.delete(f"/api/requests/{created['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK

        response = await client.get(f"/api/requests/{created['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_404_NOT_FOUND

        response = await client.get("/api/notifications", headers=auth_headers("employee"))
        assert all(n["requestId"] != created["id"] for n in response.json())
