from src.jupiter_hr.jupiter_hr.core.enums import Role


def _new_user(client, **overrides):
    payload = {"username": "newbie", "password": "pass123", "email": "newbie@jupiter.edu", "fullName": "New Bie"}
    payload.update(overrides)
    return client.post("/api/admin/users", json=payload)


def test_only_admin_manages_users(client, login):
    assert client.get("/api/admin/users").status_code == 401
    login(Role.HR)
    assert client.get("/api/admin/users").status_code == 403
    assert _new_user(client).status_code == 403


def test_create_list_and_filter(client, login):
    login(Role.ADMIN)

    resp = _new_user(client, role="hr")
    body = resp.get_json()
    assert resp.status_code == 201
    assert body["data"]["role"] == "HR"
    assert body["data"]["full_name"] == "New Bie"
    assert "password_hash" not in body["data"]

    listing = client.get("/api/admin/users?role=HR").get_json()
    assert listing["count"] == 2
    assert {u["username"] for u in listing["data"]} == {"hr", "newbie"}


def test_create_duplicate_is_409(client, login):
    login(Role.ADMIN)
    _new_user(client)
    resp = _new_user(client, email="other@jupiter.edu")
    assert resp.status_code == 409
    assert resp.get_json()["success"] is False


def test_create_invalid_role_is_400(client, login):
    login(Role.ADMIN)
    resp = _new_user(client, role="janitor")
    assert resp.status_code == 400
    assert "Invalid role" in resp.get_json()["message"]


def test_deactivate_blocks_login_and_activate_restores(client, login, accounts):
    login(Role.ADMIN)
    student_id = accounts[Role.STUDENT].id

    assert client.patch(f"/api/admin/users/{student_id}/deactivate").get_json()["data"]["is_active"] is False
    client.get("/logout")
    assert client.post("/login", json={"username": "student", "password": "secret1"}).status_code == 401

    login(Role.ADMIN)
    assert client.patch(f"/api/admin/users/{student_id}/activate").status_code == 200
    assert client.post("/login", json={"username": "student", "password": "secret1"}).status_code == 200


def test_password_change_and_delete(client, login, accounts):
    login(Role.ADMIN)
    hr_id = accounts[Role.HR].id

    assert client.patch(f"/api/admin/users/{hr_id}/password", json={"password": "brandnew"}).status_code == 200
    assert client.patch(f"/api/admin/users/{hr_id}/password", json={"password": "x"}).status_code == 400
    assert client.patch("/api/admin/users/missing/password", json={"password": "brandnew"}).status_code == 404

    assert client.delete(f"/api/admin/users/{hr_id}").status_code == 200
    assert client.delete(f"/api/admin/users/{hr_id}").status_code == 404


def test_admin_cannot_remove_self(client, login):
    admin = login(Role.ADMIN)
    assert client.delete(f"/api/admin/users/{admin.id}").status_code == 400
    assert client.patch(f"/api/admin/users/{admin.id}/deactivate").status_code == 400
