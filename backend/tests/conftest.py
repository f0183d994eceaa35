import os
import random

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.pop("JWT_SECRET_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from matchday.database import get_session  # noqa: E402
from matchday.main import app  # noqa: E402
from matchday.models.team import Team  # noqa: E402
from matchday.routes.deps import get_rng  # noqa: E402
from tests.helpers import HOST_ID, OTHER_ID, auth_headers  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_SEED = 20261019

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Tables are dropped after every test so catalog rows never leak
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on fresh tables"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Test client with overridden database session and a seeded random source

    Overrides MUST be set BEFORE TestClient() and stay in place for the
    entire duration.
    """
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_rng] = lambda: random.Random(TEST_SEED)

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def host_headers():
    return auth_headers(HOST_ID)


@pytest.fixture
def other_headers():
    return auth_headers(OTHER_ID)


@pytest.fixture
def catalog(session: Session):
    """Eight teams: stars 1..5, three countries"""
    rows = [
        ("Arsenal", "ARS", "England", 5),
        ("Brentford", "BRE", "England", 3),
        ("Luton", "LUT", "England", 1),
        ("Real Madrid", "RMA", "Spain", 5),
        ("Getafe", "GET", "Spain", 3),
        ("Cadiz", "CAD", "Spain", 2),
        ("Bayern", "FCB", "Germany", 5),
        ("Bochum", "BOC", "Germany", 2),
    ]
    teams = [Team(name=n, short_name=s, country=c, stars=st, icon_url=f"https://img.test/{s}.png") for n, s, c, st in rows]
    for t in teams:
        session.add(t)
    session.commit()
    for t in teams:
        session.refresh(t)
    return teams
