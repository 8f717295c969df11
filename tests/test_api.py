"""End-to-end tests through the HTTP layer."""

import datetime as dt
import logging
import time

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from app import create_app
from core.config import Settings
from core.security import TokenCodec
from conftest import SECRET

EXPENSE = {
    "description": "Groceries",
    "category": "Food",
    "amount": 42.5,
    "date": "2024-03-01",
    "paymentMode": "UPI",
}

PAYLOADS = {
    "expense": EXPENSE,
    "income": {
        "source": "Salary",
        "description": "March salary",
        "category": "Job",
        "amount": 85000,
        "date": "2024-03-31",
    },
    "investment": {
        "type": "Mutual Fund",
        "institution": "Vanguard",
        "description": "Index fund SIP",
        "amount": 5000,
        "date": "2024-03-05",
    },
    "loan": {
        "type": "Home",
        "lender": "HDFC",
        "description": "Flat",
        "principal": 2500000,
        "interestRate": 8.5,
        "emi": 21000,
        "startDate": "2023-01-01",
        "endDate": "2043-01-01",
    },
}


class TestAuthEndpoints:

    def test_register_returns_201_with_token(self, client):
        resp = client.post(
            "/auth/register",
            json={"email": "alice@example.com", "password": "secret123", "fullName": "Alice"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["type"] == "Bearer"
        assert data["email"] == "alice@example.com"
        assert data["fullName"] == "Alice"
        assert data["access_token"] == data["token"]
        assert jwt.decode(data["token"], SECRET, algorithms=["HS256"])["id"] == data["id"]

    def test_duplicate_register_is_409(self, client, register_user):
        register_user()
        resp = client.post(
            "/auth/register",
            json={"email": "alice@example.com", "password": "secret123", "fullName": "Alice"},
        )
        assert resp.status_code == 409
        assert resp.json()["error"] == "Conflict"

    def test_register_rejects_bad_email(self, client):
        resp = client.post(
            "/auth/register",
            json={"email": "not-an-email", "password": "secret123", "fullName": "Alice"},
        )
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "email"

    def test_login(self, client, register_user):
        registered, _ = register_user()
        resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "secret123"})
        assert resp.status_code == 200
        claims = jwt.decode(resp.json()["token"], SECRET, algorithms=["HS256"])
        assert claims["id"] == registered["id"]
        assert claims["sub"] == "alice@example.com"

    def test_login_with_wrong_password_is_401(self, client, register_user):
        register_user()
        resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"
        assert "token" not in resp.json()


class TestProfileEndpoints:

    def test_me_with_token(self, client, register_user):
        registered, headers = register_user()
        resp = client.get("/api/users/me", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {
            "id": registered["id"],
            "email": "alice@example.com",
            "fullName": "Alice",
            "phone": None,
        }

    @pytest.mark.parametrize("headers", [
        {"Authorization": "Bearer garbage"},
        {"Authorization": "Basic YWxpY2U6c2VjcmV0"},
        {},
    ])
    def test_me_without_valid_token_is_401(self, client, register_user, headers):
        register_user()
        resp = client.get("/api/users/me", headers=headers)
        assert resp.status_code == 401
        assert resp.json()["status"] == 401

    def test_expired_token_is_401(self, client, register_user):
        registered, _ = register_user()
        stale = TokenCodec(SECRET, expiration_ms=1000, clock=lambda: time.time() - 7200)
        token = stale.mint(registered["id"], registered["email"])
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token has expired"

    def test_token_for_deleted_user_is_404(self, client):
        token = client.app.state.token_codec.mint(999, "ghost@example.com")
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 404

    def test_update_profile(self, client, register_user):
        _, headers = register_user()
        resp = client.put("/api/users/me", headers=headers, json={"fullName": "Alice Smith", "phone": "555-0100"})
        assert resp.status_code == 200
        assert resp.json()["fullName"] == "Alice Smith"
        assert resp.json()["phone"] == "555-0100"

        resp = client.put("/api/users/me", headers=headers, json={"fullName": ""})
        assert resp.json()["fullName"] == "Alice Smith"


class TestExpenseEndpoints:

    def test_create_and_list_is_scoped_to_owner(self, client, register_user):
        alice, alice_headers = register_user()
        bob, _ = register_user(email="bob@example.com", full_name="Bob")

        resp = client.post("/api/expense", json=EXPENSE, headers=alice_headers)
        assert resp.status_code == 201
        created = resp.json()
        assert created["userId"] == alice["id"]
        assert created["paymentMode"] == "UPI"

        resp = client.get(f"/api/expense/user/{alice['id']}/all", headers=alice_headers)
        assert resp.status_code == 200
        assert resp.json() == [created]

        resp = client.get(f"/api/expense/user/{bob['id']}/all", headers=alice_headers)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_foreign_record_is_404(self, client, register_user):
        _, alice_headers = register_user()
        _, bob_headers = register_user(email="bob@example.com", full_name="Bob")
        record_id = client.post("/api/expense", json=EXPENSE, headers=alice_headers).json()["id"]

        assert client.get(f"/api/expense/{record_id}", headers=bob_headers).status_code == 404
        assert client.put(f"/api/expense/{record_id}", json={"amount": 1}, headers=bob_headers).status_code == 404
        assert client.delete(f"/api/expense/{record_id}", headers=bob_headers).status_code == 404
        assert client.get(f"/api/expense/{record_id}", headers=alice_headers).status_code == 200

    def test_partial_update(self, client, register_user):
        _, headers = register_user()
        record_id = client.post("/api/expense", json=EXPENSE, headers=headers).json()["id"]

        resp = client.put(
            f"/api/expense/{record_id}",
            json={"amount": 10.25, "category": None},
            headers=headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["amount"] == 10.25
        assert body["category"] == "Food"
        assert body["description"] == "Groceries"

    def test_delete_then_404(self, client, register_user):
        _, headers = register_user()
        record_id = client.post("/api/expense", json=EXPENSE, headers=headers).json()["id"]

        resp = client.delete(f"/api/expense/{record_id}", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "message": "Expense deleted successfully"}
        assert client.delete(f"/api/expense/{record_id}", headers=headers).status_code == 404
        assert client.get(f"/api/expense/{record_id}", headers=headers).status_code == 404

    @pytest.mark.parametrize("overrides", [
        {"amount": -5},
        {"amount": 0},
        {"date": (dt.date.today() + dt.timedelta(days=3)).isoformat()},
        {"description": ""},
        {"paymentMode": "x" * 51},
        {"amount": 0.001},
        {"amount": 100_000_000_000_000},
    ])
    def test_invalid_input_is_400(self, client, register_user, overrides):
        _, headers = register_user()
        resp = client.post("/api/expense", json={**EXPENSE, **overrides}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid Input"

    def test_amount_with_cents_is_kept(self, client, register_user):
        _, headers = register_user()
        resp = client.post("/api/expense", json={**EXPENSE, "amount": 19.99}, headers=headers)
        assert resp.status_code == 201
        assert resp.json()["amount"] == 19.99

    def test_update_rejects_sub_cent_amount(self, client, register_user):
        _, headers = register_user()
        record_id = client.post("/api/expense", json=EXPENSE, headers=headers).json()["id"]
        resp = client.put(f"/api/expense/{record_id}", json={"amount": 0.001}, headers=headers)
        assert resp.status_code == 400
        assert client.get(f"/api/expense/{record_id}", headers=headers).json()["amount"] == 42.5

    def test_requires_token(self, client):
        assert client.post("/api/expense", json=EXPENSE).status_code == 401
        assert client.get("/api/expense/user/1/all").status_code == 401


@pytest.mark.parametrize("kind", ["expense", "income", "investment", "loan"])
def test_crud_for_every_kind(client, register_user, kind):
    user, headers = register_user()
    payload = PAYLOADS[kind]

    resp = client.post(f"/api/{kind}", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["userId"] == user["id"]
    for key, value in payload.items():
        assert created[key] == value

    listed = client.get(f"/api/{kind}/user/{user['id']}/all", headers=headers).json()
    assert [r["id"] for r in listed] == [created["id"]]

    resp = client.put(f"/api/{kind}/{created['id']}", json={"description": "edited"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["description"] == "edited"

    assert client.delete(f"/api/{kind}/{created['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/{kind}/user/{user['id']}/all", headers=headers).json() == []


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_root_banner_needs_no_token(client):
    assert client.get("/").json() == {"name": "Manage Money API", "ok": True}


@pytest.mark.parametrize("overrides", [
    {"interestRate": 10_000},
    {"interestRate": 8.12345},
    {"principal": 0.005},
])
def test_loan_rejects_values_the_columns_cannot_hold(client, register_user, overrides):
    _, headers = register_user()
    resp = client.post("/api/loan", json={**PAYLOADS["loan"], **overrides}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid Input"


def test_lowercase_bearer_scheme_is_accepted(client, register_user):
    registered, _ = register_user()
    resp = client.get("/api/users/me", headers={"Authorization": f"bearer {registered['token']}"})
    assert resp.status_code == 200


class TestServerErrors:

    @pytest.fixture
    def failing_client(self, settings):
        app = create_app(settings)

        @app.get("/boom/db")
        def boom_db():
            raise SQLAlchemyError("password=hunter2 host=db.internal")

        @app.get("/boom/other")
        def boom_other():
            raise RuntimeError("stack detail hunter2")

        with TestClient(app, raise_server_exceptions=False) as c:
            yield c

    def test_database_error_is_sanitized_500(self, failing_client):
        resp = failing_client.get("/boom/db")
        assert resp.status_code == 500
        assert resp.json() == {
            "status": 500,
            "error": "Internal Server Error",
            "detail": "An error occurred while accessing the database",
        }
        assert "hunter2" not in resp.text

    def test_unexpected_error_is_sanitized_500(self, failing_client):
        resp = failing_client.get("/boom/other")
        assert resp.status_code == 500
        assert resp.json() == {
            "status": 500,
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
        }
        assert "hunter2" not in resp.text


def test_building_an_app_leaves_logger_level_alone():
    logger = logging.getLogger("uvicorn.error")
    before = logger.level
    create_app(Settings(jwt_secret=SECRET, database_url="sqlite://", log_level="DEBUG"))
    assert logger.level == before
