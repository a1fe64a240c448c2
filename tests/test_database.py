import pytest

from league_site.database import TABLE_COLUMNS
from league_site.errors import NotFoundError, ValidationError


def test_create_assigns_id_and_timestamps(db):
    team = db.teams.create({'name': "The Chicago Dawgs", 'owner_name': "Will Hobart"})
    assert team['id']
    assert team['created_at'] == team['updated_at']
    assert db.teams.get_by_id(team['id'])['name'] == "The Chicago Dawgs"


def test_update_is_partial(db):
    team = db.teams.create({'name': "Old Name", 'owner_name': "Carlos Evans"})
    updated = db.teams.update(team['id'], {'name': "The Franklin Fanatics"})
    assert updated['name'] == "The Franklin Fanatics"
    assert updated['owner_name'] == "Carlos Evans"


def test_delete(db):
    team = db.teams.create({'name': "Gone"})
    db.teams.delete(team['id'])
    with pytest.raises(NotFoundError):
        db.teams.get_by_id(team['id'])


@pytest.mark.parametrize("operation", [
    lambda api: api.get_by_id("missing"),
    lambda api: api.update("missing", {'name': "x"}),
    lambda api: api.delete("missing"),
])
def test_missing_ids_raise_not_found(db, operation):
    with pytest.raises(NotFoundError):
        operation(db.teams)


def test_unknown_columns_rejected(db):
    with pytest.raises(ValidationError):
        db.teams.create({'name': "x", 'mascot': "dog"})


def test_get_by_season(db, teams):
    s1 = db.seasons.create({'year': 2024})
    s2 = db.seasons.create({'year': 2025})
    db.standings.create({'season_id': s1['id'], 'team_id': teams[0]['id'], 'rank': 1})
    db.standings.create({'season_id': s2['id'], 'team_id': teams[0]['id'], 'rank': 2})

    rows = db.standings.get_by_season(s2['id'])
    assert [r['rank'] for r in rows] == [2]


def test_get_by_season_requires_season_scope(db):
    with pytest.raises(ValidationError):
        db.teams.get_by_season("anything")


def test_filter_handles_null(db, teams):
    db.draft_picks.create({'draft_year': 2026, 'round': 1, 'pick_number': 1, 'team_id': teams[0]['id']})
    db.draft_picks.create({'draft_year': 2026, 'round': 1, 'pick_number': 2})
    assert len(db.draft_picks.filter(team_id=None)) == 1
    assert len(db.draft_picks.filter(draft_year=2026)) == 2


def test_storage_errors_propagate(db):
    import sqlite3

    db.teams.create({'name': "Unique"})
    with pytest.raises(sqlite3.IntegrityError):
        db.teams.create({'name': "Unique"})


def test_active_season(db):
    with pytest.raises(NotFoundError):
        db.seasons.get_active()

    s1 = db.seasons.create({'year': 2024, 'is_active': True})
    s2 = db.seasons.create({'year': 2025})
    db.seasons.set_active(s2['id'])

    assert db.seasons.get_active()['year'] == 2025
    assert not db.seasons.get_by_id(s1['id'])['is_active']
    assert db.season_id_for(2024) == s1['id']
    assert db.season_id_for(1999) is None


def test_every_table_has_an_api(db):
    assert {api.table for api in db.tables()} == set(TABLE_COLUMNS)
    assert db.table('rookie_pool') is db.rookie_pool
    with pytest.raises(NotFoundError):
        db.table('nope')


def test_to_frame(db, teams):
    df = db.teams.to_frame()
    assert len(df) == 10
    assert db.count('teams') == 10
