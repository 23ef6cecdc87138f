# backend/tests/conftest.py
from __future__ import annotations

import os

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite:///./test_hostel_accounts.db"
os.environ["REDIS_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from app.db import Base, SessionLocal, engine
from app.main import create_app
from app.services.report_cache import report_cache


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    report_cache.clear()
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(create_app())
