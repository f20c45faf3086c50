"""Shared test fixtures."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from fieldstock.config.database import build_engine, get_db
from fieldstock.core.events import event_bus
from fieldstock.modules.item_types.service import ItemTypesService
from fieldstock.shared.database.models import Base


@pytest.fixture
def db_path(tmp_path):
    """Provide a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def engine(db_path):
    """Provide an engine with every table created."""
    engine = build_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Provide a session bound to the temporary database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    """Session with the default catalog loaded."""
    asyncio.run(ItemTypesService(db).seed_defaults())
    return db


@pytest.fixture(autouse=True)
def clean_event_bus():
    event_bus.clear()
    yield
    event_bus.clear()


@pytest.fixture
def client(session_factory):
    """HTTP client whose requests use the temporary database."""
    from fieldstock.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def actor():
    """Headers identifying the acting user."""
    return {"X-Actor-Id": "admin-1"}
