from __future__ import annotations

import base64
import io
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from radarcheck import app
from radarcheck import models  # noqa: F401
from radarcheck.api.deps import get_db
from radarcheck.services.notifications import NOTIFICATIONS


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(session: Session) -> Iterator[TestClient]:
    def _override() -> Iterator[Session]:
        yield session

    app.dependency_overrides[get_db] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _clear_notifications() -> Iterator[None]:
    NOTIFICATIONS.clear()
    yield
    NOTIFICATIONS.clear()


@pytest.fixture()
def png_photo() -> dict[str, str]:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 6), color=(200, 30, 30)).save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return {"data": f"data:image/png;base64,{encoded}", "name": "placa.png"}
