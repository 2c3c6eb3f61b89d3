from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from fastapi import status


async def make_request(client: AsyncClient, headers: dict, payload: dict, path: str = "/api/requests") -> dict:
    response = await client.post(path, json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


@pytest.mark.asyncio
class TestAdminUsers:

    async def test_list_users_with_filters(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/admin/users", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 4

        response = await client.get("/api/admin/users", params={"role": "checker"}, headers=auth_headers("admin"))
        assert [u["email"] for u in response.json()] == ["checker@company.com"]

        response = await client.get("/api/admin/users", params={"search": "finance"}, headers=auth_headers("admin"))
        assert [u["role"] for u in response.json()] == ["checker"]

    async def test_admin_only(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/admin/users", headers=auth_headers("approver"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_create_update_delete_user(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/admin/users", json={
            "email": "New.Hire@company.com",
            "name": "New Hire",
            "password": "secret123",
            "role": "employee",
            "department": "Health",
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_201_CREATED
        created = response.json()
        assert created["email"] == "new.hire@company.com"

        response = await client.post(
            "/api/auth/login", json={"email": "new.hire@company.com", "password": "secret123"}
        )
        assert response.status_code == status.HTTP_200_OK

        response = await client.patch(f"/api/admin/users/{created['id']}", json={
            "role": "approver", "designation": "Team Lead",
        }, headers=auth_headers("admin"))
        assert response.json()["role"] == "approver"
        assert response.json()["designation"] == "Team Lead"

        response = await client.delete(f"/api/admin/users/{created['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK

        response = await client.get("/api/admin/users", headers=auth_headers("admin"))
        assert created["id"] not in [u["id"] for u in response.json()]

    async def test_duplicate_email_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/admin/users", json={
            "email": "EMPLOYEE@company.com", "name": "Copy", "password": "secret123",
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "A user with this email already exists"

    async def test_short_password_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/admin/users", json={
            "email": "short@company.com", "name": "Short", "password": "123",
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_users_with_requests_are_kept(
        self, client: AsyncClient, auth_headers, travel_payload, users
    ):
        await make_request(client, auth_headers("employee"), travel_payload())

        response = await client.delete(f"/api/admin/users/{users['employee'].id}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_admin_cannot_delete_self(self, client: AsyncClient, auth_headers, users):
        response = await client.delete(f"/api/admin/users/{users['admin'].id}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
class TestAdminStats:

    async def test_stats_aggregate_both_request_kinds(
        self, client: AsyncClient, auth_headers, travel_payload, valley_payload, funded_project
    ):
        first = await make_request(client, auth_headers("employee"), travel_payload())
        second = await make_request(client, auth_headers("employee"), travel_payload())
        valley = await make_request(client, auth_headers("employee"), valley_payload(), "/api/valley-requests")

        await client.patch(f"/api/requests/{first['id']}", json={"status": "approved"}, headers=auth_headers("approver"))
        await client.patch(f"/api/requests/{first['id']}/expenses", json={
            "expenses": [{"category": "accommodation", "amount": 5000}],
        }, headers=auth_headers("employee"))
        await client.patch(f"/api/requests/{first['id']}", json={
            "status": "approved", "projectId": funded_project["project_id"],
        }, headers=auth_headers("checker"))
        await client.patch(f"/api/requests/{second['id']}", json={"status": "rejected"}, headers=auth_headers("approver"))
        await client.patch(f"/api/valley-requests/{valley['id']}/expenses", json={
            "expenses": [{"category": "taxi", "amount": 700}],
        }, headers=auth_headers("employee"))

        response = await client.get("/api/admin/stats", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK
        stats = response.json()

        assert stats["totalUsers"] == 4
        assert stats["usersByRole"] == {"employee": 1, "approver": 1, "checker": 1, "admin": 1}
        assert stats["totalRequests"] == 3
        assert stats["pending"] == 1
        assert stats["approved"] == 1
        assert stats["rejected"] == 1
        assert stats["totalAmount"] == 5700
        assert stats["requestsByStatus"]["pending_verification"] == 1

        months = stats["requestsByMonth"]
        assert len(months) == 6
        current = datetime.now(timezone.utc).strftime("%Y-%m")
        assert months[-1]["month"] == current
        assert (months[-1]["pending"], months[-1]["approved"], months[-1]["rejected"]) == (1, 1, 1)

        departments = {d["department"]: d for d in stats["departmentData"]}
        assert departments["Programs"]["requests"] == 3

        projects = {p["project"]: p for p in stats["projectData"]}
        assert projects["Clean Water"]["requests"] == 3
        assert projects["Clean Water"]["remainingBudget"] == 45000

    async def test_stats_admin_only(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/admin/stats", headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
class TestAdminRequestListing:

    async def test_combined_listing_paginates(
        self, client: AsyncClient, auth_headers, travel_payload, valley_payload
    ):
        for _ in range(3):
            await make_request(client, auth_headers("employee"), travel_payload())
        for _ in range(2):
            await make_request(client, auth_headers("employee"), valley_payload(), "/api/valley-requests")

        response = await client.get(
            "/api/admin/requests", params={"pageIndex": 2, "pageSize": 2}, headers=auth_headers("admin")
        )
        assert response.status_code == status.HTTP_200_OK
        page = response.json()
        assert page["pageIndex"] == 2
        assert page["pageSize"] == 2
        assert page["count"] == 5
        assert len(page["data"]) == 2

        response = await client.get(
            "/api/admin/requests", params={"kind": "valley"}, headers=auth_headers("admin")
        )
        assert response.json()["count"] == 2
        assert all(r["kind"] == "valley" for r in response.json()["data"])

        response = await client.get(
            "/api/admin/requests", params={"requestType": "in-valley"}, headers=auth_headers("admin")
        )
        assert response.json()["count"] == 2

    async def test_filters_and_sorting(self, client: AsyncClient, auth_headers, travel_payload, users):
        await make_request(client, auth_headers("employee"), travel_payload(
            employeeName="Zara Khan", department="Health", purpose="Clinic audit",
        ))
        await make_request(client, auth_headers("employee"), travel_payload(employeeName="Amir Rai"))

        response = await client.get("/api/admin/requests", params={
            "sortBy": "employeeName", "sortOrder": "asc",
        }, headers=auth_headers("admin"))
        assert [r["employeeName"] for r in response.json()["data"]] == ["Amir Rai", "Zara Khan"]

        response = await client.get(
            "/api/admin/requests", params={"department": "health"}, headers=auth_headers("admin")
        )
        assert [r["employeeName"] for r in response.json()["data"]] == ["Zara Khan"]

        response = await client.get(
            "/api/admin/requests", params={"search": "clinic"}, headers=auth_headers("admin")
        )
        assert response.json()["count"] == 1

        response = await client.get(
            "/api/admin/requests", params={"status": "approved"}, headers=auth_headers("admin")
        )
        assert response.json() == {"pageIndex": 1, "pageSize": 10, "count": 0, "data": []}

    async def test_invalid_sort_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/admin/requests", params={"sortBy": "hashedPassword"}, headers=auth_headers("admin")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = await client.get(
            "/api/admin/requests", params={"sortOrder": "sideways"}, headers=auth_headers("admin")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_page_index_starts_at_one(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/admin/requests", params={"pageIndex": 0}, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
