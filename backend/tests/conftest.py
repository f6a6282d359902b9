"""Pytest fixtures for the benefits catalog tests."""

from datetime import datetime, timedelta, timezone
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.core.rate_limiting import limiter
from catalog.db.database import get_db
from catalog.db.fixtures import build_sample_benefits
from catalog.db.models import Base
from catalog.db.repositories import BenefitRepository
from catalog.main import app
from catalog.schemas.benefit import Benefit

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)

API_BASE = "http://testserver/api/v1"


def make_benefit(
    id: str,
    title: str = "Sample benefit",
    discount: str = "10% OFF",
    category: str = "Comida",
    description: str = "",
    valid_days=("Lun",),
    expires_at: datetime = NOW + timedelta(days=10),
) -> Benefit:
    return Benefit(
        id=id,
        title=title,
        discount=discount,
        category=category,
        description=description,
        valid_days=list(valid_days),
        expires_at=expires_at,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def three_benefits() -> List[Benefit]:
    """Pizza Hut (active), Burger King (expired), Spotify (active)."""
    return [
        make_benefit("1", "Pizza Hut", "20% OFF", "Comida", valid_days=["Lun", "Mar"],
                     expires_at=NOW + timedelta(days=5)),
        make_benefit("2", "Burger King", "$5 OFF", "Comida", valid_days=["Mié"],
                     expires_at=NOW - timedelta(days=5)),
        make_benefit("3", "Spotify", "30% OFF", "Entretenimiento", valid_days=["Dom"],
                     expires_at=NOW + timedelta(days=5)),
    ]


@pytest.fixture
def hundred_benefits() -> List[Benefit]:
    return [make_benefit(str(i), f"Benefit {i:03d}") for i in range(100)]


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """In-memory SQLite database with the schema created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def sample_catalog(db_session) -> List[Benefit]:
    """The 140-benefit sample catalog, stored in the test database."""
    benefits = build_sample_benefits(140)
    BenefitRepository(db_session).add_benefits(benefits)
    return benefits


@pytest.fixture
def api(db_session, sample_catalog) -> Generator[TestClient, None, None]:
    """TestClient bound to the seeded in-memory database."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
    limiter.enabled = True
