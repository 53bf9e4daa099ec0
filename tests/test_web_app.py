"""Mini README: HTTP-level tests for the FastAPI application.

Drives the public routes through ``TestClient`` to confirm status codes,
JSON shapes, and the ``{"error": ...}`` envelope used for failures.
"""

from __future__ import annotations

import logging
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ConfigurationError

from finvault.accounts import TokenIssuer
from finvault.configuration import FinvaultSettings
from finvault.errors import InternalError
from finvault.interface import create_application
from finvault.models import UserRecord
from finvault.storage import InMemoryUserStore


def _signup(client: TestClient, username: str = "alice", password: str = "pw1"):
    return client.post("/signup", json={"username": username, "password": password})


def test_end_to_end_scenario(client: TestClient, tokens: TokenIssuer) -> None:
    """Signup, login, add an entry, and read it back."""

    response = _signup(client)
    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully!"}

    response = client.post("/login", json={"username": "alice", "password": "pw1"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful!"
    assert tokens.decode(body["token"])["username"] == "alice"

    response = client.post("/login", json={"username": "alice", "password": "wrong"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid username or password."}

    response = client.post(
        "/add-finance",
        json={"username": "alice", "month": "Feb", "income": 2000, "expenses": 1200},
    )
    assert response.status_code == 201
    assert response.json() == {"message": "Finance data added successfully!"}

    response = client.get("/getfinancedata", params={"username": "alice"})
    assert response.status_code == 200
    assert response.json() == [
        {"month": "Feb", "income": 2000, "expenses": 1200, "savings": 800}
    ]


def test_signup_conflict_and_validation(client: TestClient) -> None:
    _signup(client)

    duplicate = _signup(client)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Username is already taken."}

    missing = client.post("/signup", json={"username": "bob"})
    assert missing.status_code == 400
    assert missing.json() == {"error": "Username and password are required."}


def test_signup_without_body_is_a_validation_error(client: TestClient) -> None:
    response = client.post("/signup")

    assert response.status_code == 400
    assert response.json() == {"error": "Username and password are required."}


def test_login_unknown_user_matches_wrong_password(client: TestClient) -> None:
    _signup(client)

    unknown = client.post("/login", json={"username": "nobody", "password": "pw1"})
    wrong = client.post("/login", json={"username": "alice", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json()


def test_malformed_payload_returns_400(client: TestClient) -> None:
    _signup(client)

    response = client.post(
        "/add-finance",
        json={"username": "alice", "month": "Jan", "income": "lots", "expenses": 1},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_add_finance_errors(client: TestClient) -> None:
    _signup(client)
    payload = {"username": "alice", "month": "Jan", "income": 1000, "expenses": 400}
    client.post("/add-finance", json=payload)

    duplicate = client.post("/add-finance", json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Data for this month already exists."}

    missing = client.post("/add-finance", json={"username": "alice", "month": "Feb"})
    assert missing.json() == {"error": "All fields are required except savings."}

    unknown = client.post("/add-finance", json={**payload, "username": "ghost"})
    assert unknown.status_code == 400
    assert unknown.json() == {"error": "User not found."}


def test_getfinancedata_requires_username(client: TestClient) -> None:
    response = client.get("/getfinancedata")

    assert response.status_code == 400
    assert response.json() == {"error": "Username is required."}


def test_update_finance_recomputes_savings(client: TestClient) -> None:
    _signup(client)
    client.post(
        "/add-finance",
        json={"username": "alice", "month": "Jan", "income": 1000, "expenses": 400, "savings": 500},
    )

    response = client.put(
        "/update-finance",
        json={"username": "alice", "month": "Jan", "income": 1200, "expenses": 400, "savings": 500},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Finance data updated successfully!"}
    entries = client.get("/getfinancedata", params={"username": "alice"}).json()
    assert entries == [{"month": "Jan", "income": 1200, "expenses": 400, "savings": 800}]


def test_update_finance_unknown_month(client: TestClient) -> None:
    _signup(client)

    response = client.put(
        "/update-finance",
        json={"username": "alice", "month": "Dec", "income": 1, "expenses": 1},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Data for this month not found."}


def test_delete_finance_is_idempotent(client: TestClient) -> None:
    _signup(client)
    client.post(
        "/add-finance",
        json={"username": "alice", "month": "Jan", "income": 10, "expenses": 5},
    )

    for _ in range(2):
        response = client.request(
            "DELETE", "/delete-finance", json={"username": "alice", "month": "Jan"}
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Finance data deleted successfully!"}

    assert client.get("/getfinancedata", params={"username": "alice"}).json() == []

    unknown = client.request("DELETE", "/delete-finance", json={"username": "ghost", "month": "Jan"})
    assert unknown.status_code == 400
    assert unknown.json() == {"error": "User not found."}


class _UnavailableStore(InMemoryUserStore):
    """Store double simulating a database that cannot be reached."""

    def ping(self) -> None:
        raise InternalError()

    def find_user(self, username: str) -> Optional[UserRecord]:
        raise InternalError()


def test_store_failure_returns_500(settings: FinvaultSettings) -> None:
    client = TestClient(create_application(settings=settings, store=_UnavailableStore()))

    response = client.post("/login", json={"username": "alice", "password": "pw1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error. Please try again later."}


def test_health_reports_store_state(settings: FinvaultSettings) -> None:
    healthy = TestClient(create_application(settings=settings, store=InMemoryUserStore()))
    broken = TestClient(create_application(settings=settings, store=_UnavailableStore()))

    assert healthy.get("/health").json() == {"status": "ok", "store": "ok"}
    assert broken.get("/health").json() == {"status": "ok", "store": "unavailable"}


def test_factory_builds_and_checks_its_own_store(settings: FinvaultSettings) -> None:
    """With no injected store the app runs its startup checks via lifespan."""

    with TestClient(create_application(settings=settings)) as client:
        assert _signup(client).status_code == 201
        assert client.get("/health").json()["store"] == "ok"


def test_unbuildable_mongo_store_does_not_stop_the_app(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A client rejected at construction leaves the app serving 500s."""

    def refuse(*args, **kwargs):
        raise ConfigurationError("The DNS query name does not exist")

    monkeypatch.setattr("finvault.storage.mongo_store.MongoClient", refuse)
    settings = FinvaultSettings(
        store_backend="mongodb",
        mongo_uri="mongodb+srv://cluster0.nonexistent-host.invalid",
        jwt_secret="test-signing-secret",
        bcrypt_rounds=4,
    )

    with caplog.at_level(logging.ERROR):
        app = create_application(settings=settings)
        with TestClient(app) as client:
            login = client.post("/login", json={"username": "alice", "password": "pw1"})
            health = client.get("/health").json()

    assert login.status_code == 500
    assert login.json() == {"error": "Internal server error. Please try again later."}
    assert health == {"status": "ok", "store": "unavailable"}
    messages = [record.getMessage() for record in caplog.records]
    assert sum("Store connection error" in message for message in messages) == 2


class _BrokenStore(InMemoryUserStore):
    """Store double failing with an error outside the domain taxonomy."""

    def find_user(self, username: str) -> Optional[UserRecord]:
        raise RuntimeError("driver exploded")


def test_unexpected_error_returns_500_with_cors_headers(settings: FinvaultSettings) -> None:
    client = TestClient(create_application(settings=settings, store=_BrokenStore()))

    response = client.post(
        "/login",
        json={"username": "alice", "password": "pw1"},
        headers={"Origin": "http://frontend.test"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error. Please try again later."}
    assert response.headers["access-control-allow-origin"] == "*"
