import os
from typing import Generator
from unittest.mock import patch

patch.dict(
    os.environ,
    {
        "DATABASE_URL": "sqlite://",
        "ONLINE_TIMEOUT_SECONDS": "180",
        "STATS_TIMEZONE": "UTC",
        "CORS_ORIGIN": "http://localhost:3000",
    },
).start()  # noqa

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402


def _memory_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


def _client_for(factory: sessionmaker) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    yield from _client_for(session_factory)


@pytest.fixture
def broken_client() -> Generator[TestClient, None, None]:
    """Cliente cuya base de datos no tiene tablas: toda consulta falla."""
    engine = _memory_engine()
    yield from _client_for(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()
