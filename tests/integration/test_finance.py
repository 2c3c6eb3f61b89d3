import pytest
from httpx import AsyncClient
from fastapi import status


@pytest.mark.asyncio
class TestProjects:

    async def test_admin_manages_projects(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/projects", json={
            "name": "School Meals", "description": "Nutrition programme",
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_201_CREATED
        project = response.json()
        assert project["active"] is True

        response = await client.patch(
            f"/api/projects/{project['id']}", json={"active": False}, headers=auth_headers("admin")
        )
        assert response.json()["active"] is False

        response = await client.get("/api/projects", headers=auth_headers("employee"))
        assert response.json() == []

        response = await client.get(
            "/api/projects", params={"includeInactive": True}, headers=auth_headers("employee")
        )
        assert [p["name"] for p in response.json()] == ["School Meals"]

        response = await client.delete(f"/api/projects/{project['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK

        response = await client.get(f"/api/projects/{project['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_duplicate_project_name(self, client: AsyncClient, auth_headers, funded_project):
        response = await client.post("/api/projects", json={"name": "clean water"}, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_only_admin_creates_projects(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/projects", json={"name": "Side Project"}, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
class TestBudgets:

    async def test_list_budgets_with_project_name(self, client: AsyncClient, auth_headers, funded_project):
        response = await client.get(
            "/api/budgets", params={"project_id": funded_project["project_id"], "fiscal_year": 2024},
            headers=auth_headers("employee"),
        )
        assert response.status_code == status.HTTP_200_OK
        budgets = response.json()
        assert len(budgets) == 1
        assert budgets[0]["projectName"] == "Clean Water"
        assert budgets[0]["amount"] == 50000
        assert budgets[0]["version"] == 1

    async def test_checker_sets_budget(self, client: AsyncClient, auth_headers, funded_project):
        response = await client.post("/api/budgets", json={
            "projectId": funded_project["project_id"], "amount": 65000, "fiscalYear": 2024,
        }, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["amount"] == 65000
        assert response.json()["version"] == 2

        response = await client.post("/api/budgets", json={
            "projectId": funded_project["project_id"], "amount": 12000, "fiscalYear": 2025,
        }, headers=auth_headers("checker"))
        assert response.json()["fiscalYear"] == 2025
        assert response.json()["version"] == 1

    async def test_conditional_write_with_stale_version(self, client: AsyncClient, auth_headers, funded_project):
        body = {"projectId": funded_project["project_id"], "amount": 1000, "fiscalYear": 2024, "version": 1}
        response = await client.post("/api/budgets", json=body, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK

        response = await client.post("/api/budgets", json=body, headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_employee_cannot_set_budget(self, client: AsyncClient, auth_headers, funded_project):
        response = await client.post("/api/budgets", json={
            "projectId": funded_project["project_id"], "amount": 1, "fiscalYear": 2024,
        }, headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_admin_budget_lifecycle(self, client: AsyncClient, auth_headers, funded_project):
        response = await client.post("/api/admin/budgets", json={
            "projectId": funded_project["project_id"], "amount": 20000, "fiscalYear": 2026,
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_201_CREATED
        budget = response.json()

        response = await client.post("/api/admin/budgets", json={
            "projectId": funded_project["project_id"], "amount": 1, "fiscalYear": 2026,
        }, headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = await client.patch(f"/api/admin/budgets/{budget['id']}", json={
            "amount": 25000, "description": "Revised",
        }, headers=auth_headers("admin"))
        assert response.json()["amount"] == 25000
        assert response.json()["description"] == "Revised"
        assert response.json()["version"] == 2

        response = await client.patch(
            f"/api/admin/budgets/{budget['id']}", json={"fiscalYear": 2024}, headers=auth_headers("admin")
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        response = await client.delete(f"/api/admin/budgets/{budget['id']}", headers=auth_headers("admin"))
        assert response.status_code == status.HTTP_200_OK

        response = await client.get(
            "/api/admin/budgets", params={"projectId": funded_project["project_id"]}, headers=auth_headers("admin")
        )
        assert [b["fiscalYear"] for b in response.json()] == [2024]


@pytest.mark.asyncio
class TestDirectory:

    async def test_approver_and_employee_pickers(self, client: AsyncClient, auth_headers, users):
        response = await client.get("/api/approvers", headers=auth_headers("employee"))
        assert [u["id"] for u in response.json()] == [users["approver"].id]

        response = await client.get("/api/users/employees", headers=auth_headers("employee"))
        assert [u["email"] for u in response.json()] == ["employee@company.com"]

    async def test_users_by_ids(self, client: AsyncClient, auth_headers, users):
        ids = [users["checker"].id, users["admin"].id, "missing"]
        response = await client.post("/api/users/by-ids", json={"userIds": ids}, headers=auth_headers("employee"))
        assert sorted(u["id"] for u in response.json()) == sorted(ids[:2])

    async def test_profile_access(self, client: AsyncClient, auth_headers, users):
        response = await client.get(f"/api/user/{users['employee'].id}/profile", headers=auth_headers("employee"))
        assert response.json()["email"] == "employee@company.com"

        response = await client.get(f"/api/user/{users['approver'].id}/profile", headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await client.get(f"/api/user/{users['employee'].id}/profile", headers=auth_headers("checker"))
        assert response.status_code == status.HTTP_200_OK

    async def test_update_own_name(self, client: AsyncClient, auth_headers):
        response = await client.patch(
            "/api/user/update-name", json={"name": "  Asha Gurung  "}, headers=auth_headers("employee")
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Asha Gurung"

        response = await client.patch("/api/user/update-name", json={"name": "   "}, headers=auth_headers("employee"))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
