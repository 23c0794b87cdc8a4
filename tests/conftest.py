"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["REDIS_URL"] = "redis://localhost:6399/0"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from dataclasses import dataclass, field  # noqa: E402
from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from atelier.celery_app import celery_app  # noqa: E402
from atelier.database import Base, get_db  # noqa: E402
from atelier.main import app  # noqa: E402
from atelier.services.artist_service import create_artist  # noqa: E402
from atelier.services.compositor import BaseCompositor, CompositorError, CompositorResult  # noqa: E402


@pytest.fixture
def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db(session_factory):
    """Create a test database session."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_db):
    """Create a test client sharing the test database session."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class DispatchRecorder:
    """Stands in for the broker; records every task sent."""

    def __init__(self):
        self.calls = []
        self.fail = False

    def __call__(self, name, args=None, kwargs=None, **options):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.calls.append((name, list(args or [])))

    @property
    def task_ids(self) -> List[int]:
        return [args[0] for _, args in self.calls]


@pytest.fixture(autouse=True)
def dispatched(monkeypatch):
    """Capture Celery dispatches instead of talking to a broker."""
    recorder = DispatchRecorder()
    monkeypatch.setattr(celery_app, "send_task", recorder)
    return recorder


@dataclass
class FakeCompositor(BaseCompositor):
    """Compositor double returning canned URLs or failing on demand."""

    fail: bool = False
    watermarked_image_url: Optional[str] = "https://cdn.example.com/wm.jpg"
    visualization_image_url: Optional[str] = "https://cdn.example.com/room.jpg"
    calls: list = field(default_factory=list)

    def generate(self, artwork_id, force_watermark=False, force_visualization=False):
        self.calls.append((artwork_id, force_watermark, force_visualization))
        if self.fail:
            raise CompositorError("compositor exploded")
        return CompositorResult(
            watermarked_image_url=self.watermarked_image_url if force_watermark else None,
            visualization_image_url=self.visualization_image_url if force_visualization else None,
        )


@pytest.fixture
def compositor():
    return FakeCompositor()


@pytest.fixture
def artist(test_db):
    """Artist with its system catalogue."""
    return create_artist(test_db, "Jane Doe")


@pytest.fixture
def other_artist(test_db):
    return create_artist(test_db, "John Roe")


@pytest.fixture
def headers(artist):
    return {"X-Artist-ID": artist.id}


@pytest.fixture
def complete_artwork_payload():
    return {
        "title": "Blue Harbour",
        "description": "Boats at anchor in the morning fog",
        "medium": "Oil on canvas",
        "dimensions": {"width": 50, "height": 70, "unit": "cm"},
        "pricing": {"mode": "fixed", "price": "1200.00"},
    }
