"""
Point the app at an in-memory SQLite database before anything imports
``liftboard``, and give every test a fresh schema with the global exercise
catalog seeded.
"""
import os
import uuid

os.environ["DB_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from liftboard.db import Base, SessionLocal, engine
from liftboard import models  # noqa: F401  # registers tables
from liftboard.main import app
from liftboard.repositories.exercise_repo import ExerciseRepository
from liftboard.repositories.team_repo import TeamRepository

PWD = "StrongPassw0rd!"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    ExerciseRepository(db).seed_globals()
    db.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def uniq_email():
    return f"u_{uuid.uuid4().hex[:10]}@example.com"


@pytest.fixture
def signup(client):
    """Register + login; returns (auth headers, user json)."""
    def _signup(role="athlete", team_id=None, email=None):
        email = email or uniq_email()
        body = {"email": email, "name": role.title(), "password": PWD, "role": role}
        if team_id is not None:
            body["team_id"] = team_id
        r = client.post("/auth/register", json=body)
        assert r.status_code == 201, r.text
        tok = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
        return {"Authorization": f"Bearer {tok}"}, r.json()
    return _signup


@pytest.fixture
def make_team(db):
    def _make_team(coach_id, team_name="Varsity", sport="football"):
        return TeamRepository(db).create(team_name=team_name, coach_id=coach_id, sport=sport).id
    return _make_team


@pytest.fixture
def squad(signup, make_team):
    """A coach with one team and one athlete on it."""
    coach_h, coach = signup("coach")
    team_id = make_team(coach["id"])
    athlete_h, athlete = signup("athlete", team_id=team_id)
    return {
        "coach_h": coach_h,
        "coach": coach,
        "team_id": team_id,
        "athlete_h": athlete_h,
        "athlete": athlete,
    }
