"""Mini README: Shared fixtures for the Finvault test-suite.

Fixtures build services and applications over ``InMemoryUserStore`` with a
low bcrypt work factor so hashing stays fast.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from finvault.accounts import AccountService, PasswordHasher, TokenIssuer
from finvault.configuration import FinvaultSettings
from finvault.finance import FinanceRecordService
from finvault.interface import create_application
from finvault.storage import InMemoryUserStore

TEST_SECRET = "test-signing-secret"


@pytest.fixture()
def settings() -> FinvaultSettings:
    return FinvaultSettings(
        store_backend="memory",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def tokens() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


@pytest.fixture()
def accounts(store: InMemoryUserStore, tokens: TokenIssuer) -> AccountService:
    return AccountService(store, PasswordHasher(rounds=4), tokens)


@pytest.fixture()
def finance(store: InMemoryUserStore) -> FinanceRecordService:
    return FinanceRecordService(store)


@pytest.fixture()
def client(settings: FinvaultSettings, store: InMemoryUserStore) -> TestClient:
    return TestClient(create_application(settings=settings, store=store))
