"""HTTP tests for user lookups and edits and for branch CRUD."""

import pytest
from fastapi.testclient import TestClient

from storefront.domain.model.user import Role
from storefront.infrastructure.api.app import create_app
from tests.builders import make_branch, make_user
from tests.fakes import make_container


@pytest.fixture
def office():
    client_user = make_user("+998901234567")
    staff = make_user("+998907654321", role=Role.STAFF)
    branches = [make_branch(f"Branch {i}") for i in range(1, 4)]
    container = make_container(users=[client_user, staff], branches=branches)
    return TestClient(create_app(container)), container, client_user, staff, branches


class TestUserRoutes:

    def test_by_role(self, office):
        client, _, _, staff, _ = office
        res = client.get("/api/user/role", params={"role": "staff"})

        assert res.status_code == 200
        assert [u["id"] for u in res.json()["data"]] == [staff.id]

    def test_role_required(self, office):
        client, _, _, _, _ = office
        res = client.get("/api/user/role")
        assert res.status_code == 400
        assert res.json() == {"message": "Role is required"}

    def test_by_phone(self, office):
        client, _, client_user, _, _ = office
        res = client.get("/api/user/phone", params={"phoneNumber": "1234567"})

        assert res.status_code == 200
        assert [u["phoneNumber"] for u in res.json()["data"]] == [client_user.phone_number]

    def test_phone_without_match_is_404(self, office):
        client, _, _, _, _ = office
        res = client.get("/api/user/phone", params={"phoneNumber": "000000"})
        assert res.status_code == 404
        assert res.json() == {"message": "User not found"}

    def test_get_update_delete(self, office):
        client, container, client_user, _, _ = office
        res = client.get(f"/api/user/{client_user.id}")
        assert res.status_code == 200
        assert res.json()["data"]["firstName"] == "Aziz"

        res = client.put(f"/api/user/{client_user.id}", json={"lastName": "Tursunov", "password": "pw2"})
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["lastName"] == "Tursunov"
        assert "password" not in data and "passwordHash" not in data
        assert container.users.get_by_id(client_user.id).password_hash == "hashed:pw2"

        res = client.delete(f"/api/user/{client_user.id}")
        assert res.status_code == 200
        assert client.get(f"/api/user/{client_user.id}").status_code == 404

    def test_update_to_taken_phone_is_409(self, office):
        client, _, client_user, staff, _ = office
        res = client.put(f"/api/user/{client_user.id}", json={"phoneNumber": staff.phone_number})
        assert res.status_code == 409

    def test_delete_missing_is_404(self, office):
        client, _, _, _, _ = office
        assert client.delete("/api/user/ffffffffffffffffffffffff").status_code == 404


class TestBranchRoutes:

    def test_list(self, office):
        client, _, _, _, _ = office
        res = client.get("/api/branch", params={"pageNum": 2, "pageSize": 2})

        assert res.status_code == 200
        body = res.json()
        assert body["total"] == 3
        assert body["totalPages"] == 2
        assert [b["name"] for b in body["branches"]] == ["Branch 3"]

    def test_list_bad_pagination_is_400(self, office):
        client, _, _, _, _ = office
        res = client.get("/api/branch", params={"pageSize": "many"})
        assert res.status_code == 400
        assert res.json() == {"message": "Invalid pagination parameters"}

    def test_get_missing_is_404(self, office):
        client, _, _, _, _ = office
        res = client.get("/api/branch/ffffffffffffffffffffffff")
        assert res.status_code == 404
        assert res.json() == {"message": "Branch not found"}

    def test_update_and_delete(self, office):
        client, container, _, _, branches = office
        branch = branches[0]
        res = client.put(f"/api/branch/{branch.id}", json={
            "phoneNumber": "+998719999999", "worktime": {"from": "08:00"},
        })
        assert res.status_code == 200
        assert res.json()["message"] == "Branch updated successfully"
        data = res.json()["data"]
        assert data["phoneNumber"] == "+998719999999"
        assert data["worktime"] == {"from": "08:00", "to": "21:00"}

        assert client.get(f"/api/branch/{branch.id}").json()["data"]["name"] == "Branch 1"

        res = client.delete(f"/api/branch/{branch.id}")
        assert res.json() == {"message": "Branch deleted successfully"}
        assert container.branches.count() == 2
        assert client.delete(f"/api/branch/{branch.id}").status_code == 404
