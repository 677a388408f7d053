"""Test fixtures for blogcore."""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import blogcore.models  # noqa: F401  registers the blogs table
from blogcore.models.blog import BlogCategory


TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def blog_payload():
    def _make(**overrides):
        payload = {
            "title": "Scaling a Startup in 2024!",
            "description": "What changes between ten customers and a thousand.",
            "category": BlogCategory.STRATEGY,
            "thumbnail": "photo.png",
            "content": "Growth exposes every shortcut.",
        }
        payload.update(overrides)
        return payload

    return _make
