"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

# Add repo root for imports - do this before other imports
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

import pytest

from accounts.config import reset_settings
from accounts.models.domain import Address, Card
from accounts.repositories.memory_store import MemoryStore
from accounts.services.account_service import AccountService


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Re-read settings from a clean environment for every test."""
    for name in (
        "ACCOUNTS_SERVICE_NAME",
        "ACCOUNTS_HOST",
        "ACCOUNTS_PORT",
        "ACCOUNTS_LOG_LEVEL",
        "ACCOUNTS_LOG_FILE",
        "ACCOUNTS_TRACING",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def service(store):
    """Account service over the in-memory store."""
    return AccountService(store)


@pytest.fixture
def seeded(store, service):
    """Store with three users; only the first has an address and a card."""
    ids = [
        service.register(f"user{i}", "secret", f"user{i}@example.com", f"First{i}", f"Last{i}")
        for i in range(3)
    ]
    address_id = store.create_address(
        Address(street="Main St", number="1", country="UK", city="London", postcode="N1"),
        ids[0],
    )
    card_id = store.create_card(
        Card(long_num="4111111111111111", expires="08/29", ccv="123"),
        ids[0],
    )
    return {"user_ids": ids, "address_id": address_id, "card_id": card_id}

