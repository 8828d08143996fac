import pytest

from tests.conftest import DEFAULT_PASSWORD


@pytest.fixture
def admin(register_user):
    return register_user("root@its.test", "ADMIN")


def test_admin_lists_users(client, admin, register_user):
    headers, _ = admin
    register_user("kid@its.test")
    register_user("instructor@its.test", "INSTRUCTOR")

    response = client.get("/users", headers=headers)
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {
        "root@its.test", "kid@its.test", "instructor@its.test"
    }
    assert "password" not in response.text

    students = client.get("/users", params={"role": "STUDENT"}, headers=headers).json()
    assert [u["email"] for u in students] == ["kid@its.test"]


def test_non_admin_cannot_manage_users(client, register_user):
    headers, user = register_user("instructor@its.test", "INSTRUCTOR")
    assert client.get("/users", headers=headers).status_code == 403
    assert client.put(f"/users/{user['id']}/deactivate", headers=headers).status_code == 403


def test_deactivated_user_is_locked_out(client, admin, register_user):
    admin_headers, _ = admin
    headers, user = register_user("kid@its.test")

    response = client.put(f"/users/{user['id']}/deactivate", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["active"] is False

    assert client.get("/auth/me", headers=headers).status_code == 401
    login = client.post("/auth/login", json={"email": "kid@its.test", "password": DEFAULT_PASSWORD})
    assert login.status_code == 400
    assert login.json()["detail"] == "Invalid credentials"

    client.put(f"/users/{user['id']}/activate", headers=admin_headers)
    assert client.get("/auth/me", headers=headers).status_code == 200


def test_unknown_user_is_404(client, admin):
    headers, _ = admin
    assert client.get("/users/missing", headers=headers).status_code == 404
