"""Shared test fixtures."""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from synapse.core.engine import SynapseEngine
from synapse.db.database import get_db, get_session_factory
from synapse.db.models import Base
from synapse.main import app

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db
app.dependency_overrides[get_session_factory] = lambda: TestSession


class FixedRandom(random.Random):
    """random()이 항상 같은 값을 돌려주는 난수 (확률 분기 고정용)"""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture()
def tables():
    """save_slots 테이블 생성/삭제"""
    Base.metadata.create_all(TEST_ENGINE)
    yield
    Base.metadata.drop_all(TEST_ENGINE)


@pytest.fixture()
def client(tables) -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    app.state.sessions.clear()
    yield TestClient(app)
    app.state.sessions.clear()


@pytest.fixture()
def db_session(tables) -> Session:
    """Raw database session for direct DB assertions."""
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def session_factory(tables) -> sessionmaker:
    return TestSession


@pytest.fixture()
def engine() -> SynapseEngine:
    """환경음이 나오지 않는 고정 난수 세션 (random() == 0.99)"""
    return SynapseEngine(player_name="Tester", rng=FixedRandom(0.99), auto_save_interval=0)
