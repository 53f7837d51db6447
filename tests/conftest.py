from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from auth import security
from auth.schemas import Caller
from core.config import Settings

from .fakes import FakePlaces, FakeStore, place_details

TEST_SECRET = "test-secret"
QUEUE_PIN = "4321"


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, queue_pin=QUEUE_PIN)


@pytest.fixture
def caller() -> Caller:
    return Caller(uid="admin-1", email="admin@example.com")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        {
            "users": [{"id": "admin-1", "email": "admin@example.com", "is_active": True}],
            "verifications": [
                {
                    "id": "v1",
                    "place_id": "p1",
                    "auth_id": "u1",
                    "verification_email": "a@x.com",
                    "verification_mode": "phone",
                    "connection_type": "admin",
                },
            ],
            "businesses": [],
            "profiles": [],
            "business_connections": [],
            "donations": [{"id": "d1", "claimed_by": "u9"}],
            "items": [],
        }
    )


@pytest.fixture
def places() -> FakePlaces:
    return FakePlaces(place_details("p1"))


@pytest.fixture
def client(settings: Settings, store: FakeStore, places: FakePlaces):
    from main import create_app

    app = create_app(settings)
    app.state.store = store
    app.state.places = places
    # Not used as a context manager: the lifespan (DB pool) never runs.
    yield TestClient(app)


@pytest.fixture
def auth_headers(caller: Caller) -> dict[str, str]:
    token = security.build_access_token(uid=caller.uid, email=caller.email, secret=TEST_SECRET)
    return {"Authorization": f"Bearer {token}"}
