import pytest

from league_site.auth import Session
from league_site.database import LeagueDatabase


@pytest.fixture
def db(tmp_path):
    return LeagueDatabase(str(tmp_path / "league_test.db"))


@pytest.fixture
def admin():
    return Session(user_email="commish@example.com", is_admin=True)


@pytest.fixture
def visitor():
    return Session(user_email="fan@example.com", is_admin=False)


@pytest.fixture
def teams(db):
    return [
        db.teams.create({'name': f"Team {n}", 'owner_name': f"Owner {n}"})
        for n in range(1, 11)
    ]
