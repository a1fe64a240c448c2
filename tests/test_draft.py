import pytest

from league_site.draft import (
    DRAFT_ROUNDS, PICKS_PER_ROUND, assign_player, available_players, clear_pick,
    initial_picks, initialize_draft, pick_label, picks_by_round, set_pick_team,
)
from league_site.errors import AuthorizationError, ValidationError
from league_site.models import DraftPick, RookiePlayer


@pytest.fixture
def rookies(db):
    return [
        db.rookie_pool.create({'draft_year': 2026, 'player_name': name, 'position': pos})
        for name, pos in [("Arch Manning", "QB"), ("Jeremiyah Love", "RB"), ("Carnell Tate", "WR")]
    ]


def test_initial_picks():
    picks = initial_picks(2026)
    assert len(picks) == DRAFT_ROUNDS * PICKS_PER_ROUND == 30
    assert picks[0]['round'] == 1 and picks[0]['pick_number'] == 1
    assert picks[-1]['round'] == 3 and picks[-1]['pick_number'] == 10
    assert all(p['team_id'] is None for p in picks)


def test_initialize_draft_is_idempotent(db):
    assert initialize_draft(db, 2026) == 30
    assert initialize_draft(db, 2026) == 0
    assert len(db.draft_picks.filter(draft_year=2026)) == 30


def test_available_players_excludes_drafted():
    pool = [RookiePlayer(id=str(n), draft_year=2026, player_name=f"P{n}", position=pos)
            for n, pos in enumerate(["QB", "RB", "RB"])]
    picks = [DraftPick(id='p1', draft_year=2026, round=1, pick_number=1, selected_player_id='1')]
    assert [p.id for p in available_players(pool, picks)] == ['0', '2']
    assert [p.id for p in available_players(pool, picks, position="QB")] == ['0']


def test_picks_by_round():
    picks = [DraftPick(id=str(n), draft_year=2026, round=r, pick_number=p)
             for n, (r, p) in enumerate([(2, 1), (1, 2), (1, 1)])]
    grouped = picks_by_round(picks)
    assert list(grouped) == [1, 2]
    assert [p.pick_number for p in grouped[1]] == [1, 2]


def test_assign_player(db, admin, rookies):
    initialize_draft(db, 2026)
    pick = db.draft_picks.filter(draft_year=2026, round=1, pick_number=1)[0]

    updated = assign_player(db, admin, pick['id'], rookies[0]['id'])
    assert updated['selected_player_id'] == rookies[0]['id']


def test_player_cannot_be_drafted_twice(db, admin, rookies):
    initialize_draft(db, 2026)
    first = db.draft_picks.filter(draft_year=2026, round=1, pick_number=1)[0]
    second = db.draft_picks.filter(draft_year=2026, round=1, pick_number=2)[0]

    assign_player(db, admin, first['id'], rookies[0]['id'])
    with pytest.raises(ValidationError):
        assign_player(db, admin, second['id'], rookies[0]['id'])
    with pytest.raises(ValidationError):
        assign_player(db, admin, first['id'], rookies[1]['id'])


def test_clear_and_set_team(db, admin, rookies, teams):
    initialize_draft(db, 2026)
    pick = db.draft_picks.filter(draft_year=2026, round=2, pick_number=5)[0]
    assign_player(db, admin, pick['id'], rookies[2]['id'])

    assert clear_pick(db, admin, pick['id'])['selected_player_id'] is None
    assert set_pick_team(db, admin, pick['id'], teams[3]['id'])['team_id'] == teams[3]['id']


def test_draft_changes_require_admin(db, visitor, rookies):
    initialize_draft(db, 2026)
    pick = db.draft_picks.filter(draft_year=2026, round=1, pick_number=1)[0]
    with pytest.raises(AuthorizationError):
        assign_player(db, visitor, pick['id'], rookies[0]['id'])
    with pytest.raises(AuthorizationError):
        clear_pick(db, visitor, pick['id'])
    with pytest.raises(AuthorizationError):
        set_pick_team(db, visitor, pick['id'], None)


def test_pick_label():
    pick = DraftPick(id='p1', draft_year=2026, round=1, pick_number=3, team_id='t1',
                     selected_player_id='r1')
    rookie = RookiePlayer(id='r1', draft_year=2026, player_name="Arch Manning", position="QB")
    assert pick_label(pick, {'t1': "Kats"}) == "1.03 Kats"
    assert pick_label(pick, {}, {'r1': rookie}) == "1.03 TBD: Arch Manning"
