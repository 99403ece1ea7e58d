from app.models.audit_log import AuditLog
from app.models.value import Value
from app.services.audit_log import CATEGORY_FAILED_ATTEMPT


def test_login_and_me(client, admin_user):
    r = client.post("/auth/login", json={"username": "admin", "password": "secret-pass"})
    assert r.status_code == 200
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["rank"] == "ADMIN"

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert r.status_code == 200
    assert r.json()["username"] == "admin"
    assert r.json()["is_admin"] is True


def test_login_failure_is_audited(client, admin_user, db):
    r = client.post("/auth/login", json={"username": "admin", "password": "wrong"})
    assert r.status_code == 401
    entry = db.query(AuditLog).one()
    assert entry.category == CATEGORY_FAILED_ATTEMPT
    assert entry.actor_username == "admin"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_mutations_require_authentication(client, db):
    assert client.post("/admin/values/gender", json={"value": "Male"}).status_code == 401
    assert client.delete("/admin/values/gender/abc").status_code == 401
    assert client.patch("/admin/values/gender/abc", json={"value": "Male"}).status_code == 401
    assert client.put("/admin/values/gender/positions", json={"ids": []}).status_code == 401
    assert db.query(Value).count() == 0


def test_mutations_require_admin(client, user_headers, create, db):
    gender = create("gender", {"value": "Male"})

    r = client.post("/admin/values/gender", json={"value": "Female"}, headers=user_headers)
    assert r.status_code == 403
    r = client.delete(f"/admin/values/gender/{gender['id']}", headers=user_headers)
    assert r.status_code == 403
    r = client.patch(f"/admin/values/gender/{gender['id']}", json={"value": "X"}, headers=user_headers)
    assert r.status_code == 403
    r = client.put("/admin/values/gender/positions", json={"ids": [gender["id"]]}, headers=user_headers)
    assert r.status_code == 403

    db.expire_all()
    [value] = db.query(Value).all()
    assert value.value == "Male"
    assert value.position is None


def test_listing_is_public(client, user_headers):
    assert client.get("/admin/values/vehicle").status_code == 200
    assert client.get("/admin/values/vehicle", headers=user_headers).status_code == 200


def test_audit_logs_require_admin(client, user_headers):
    assert client.get("/admin/audit-logs", headers=user_headers).status_code == 403
