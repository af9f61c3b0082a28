from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  (registers every table)
from database.db import Base, build_engine, get_db
from main import app
from services.clock import FixedClock, get_clock


@pytest.fixture
def engine():
    # one shared in-memory connection, foreign keys on
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 1, 9, 30, 0))


@pytest.fixture
def client(engine, clock):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==========================================================
# [helpers shared by the HTTP tests]
# ==========================================================

@pytest.fixture
def make_school(client):
    def _make(name="Oak Hill", region="North"):
        resp = client.post("/api/schools", json={"name": name, "region": region})
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest.fixture
def make_teacher(client):
    def _make(school_id, name="J. Smith"):
        resp = client.post("/api/teachers", json={"name": name, "schoolId": school_id})
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest.fixture
def make_record(client):
    def _make(school_id, teacher_id, **overrides):
        payload = {
            "schoolId": school_id,
            "teacherId": teacher_id,
            "grade": "Primary",
            "studentCount": 25,
            "date": "2024-03-01",
        }
        payload.update(overrides)
        resp = client.post("/api/attendance", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make
