from liftboard.models import UserRole
from liftboard.repositories.team_repo import TeamRepository
from liftboard.repositories.user_repo import UserRepository
from liftboard.security import hash_password
from conftest import uniq_email
import pytest

def test_user_repo_create_and_get(db):
    repo = UserRepository(db)
    email = uniq_email()
    u = repo.create(email=email, name="Repo", password_hash=hash_password("StrongPassw0rd!"))
    assert u.id and u.email == email
    assert u.role == UserRole.athlete
    assert repo.get(u.id).email == email
    assert repo.get_by_email(email.upper()).id == u.id

def test_user_repo_unique_email_violation(db):
    repo = UserRepository(db)
    email = uniq_email()
    repo.create(email=email, name="A", password_hash="x")
    with pytest.raises(ValueError):
        repo.create(email=email, name="B", password_hash="x")

def test_get_athlete_ignores_coaches(db):
    repo = UserRepository(db)
    coach = repo.create(email=uniq_email(), name="C", password_hash="x", role="coach")
    athlete = repo.create(email=uniq_email(), name="A", password_hash="x")
    assert repo.get_athlete(coach.id) is None
    assert repo.get_athlete(athlete.id).id == athlete.id

def test_athletes_on_teams(db):
    users = UserRepository(db)
    teams = TeamRepository(db)
    coach = users.create(email=uniq_email(), name="C", password_hash="x", role="coach")
    mine = teams.create(team_name="Mine", coach_id=coach.id)
    other = teams.create(team_name="Other", coach_id=coach.id + 100)
    a1 = users.create(email=uniq_email(), name="A1", password_hash="x", team_id=mine.id)
    users.create(email=uniq_email(), name="A2", password_hash="x", team_id=other.id)

    assert [t.id for t in teams.list_for_coach(coach.id)] == [mine.id]
    assert teams.get_for_coach(other.id, coach.id) is None
    assert [u.id for u in users.list_athletes_on_teams([mine.id])] == [a1.id]
    assert users.list_athletes_on_teams([]) == []
