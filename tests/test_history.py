from dataclasses import replace

import pytest

from league_site.history import (
    HistoryModule, OwnerRecord, governor_stats, hdi, hdi_leaderboard, league_owners,
    points_for_leaders,
)


def _owner(**overrides):
    base = OwnerRecord(
        name="Base",
        total_wins=60,
        total_losses=50,
        championships=1,
        playoff_wins=3,
        avg_finish=4.0,
    )
    return replace(base, **overrides)


def test_hdi_formula():
    owner = OwnerRecord(name="Ben Holcomb", total_wins=92, total_losses=24, championships=4,
                        playoff_wins=10, avg_finish=1.78)
    expected = 4 * 40 + 10 * 5 + (92 / 116) * 30 + ((11 - 1.78) / 10) * 25
    assert hdi(owner) == pytest.approx(expected)


def test_hdi_with_no_games():
    owner = OwnerRecord(name="New", avg_finish=10.0)
    assert hdi(owner) == pytest.approx(2.5)


@pytest.mark.parametrize("better", [
    {'championships': 2},
    {'playoff_wins': 4},
    {'total_wins': 61},
    {'avg_finish': 3.5},
])
def test_hdi_is_monotonic(better):
    assert hdi(_owner(**better)) > hdi(_owner())


def test_hdi_leaderboard_is_ranked_and_rounded():
    board = hdi_leaderboard(league_owners())
    assert [row['rank'] for row in board] == list(range(1, len(board) + 1))
    assert board[0]['name'] == "Ben Holcomb"
    scores = [row['hdi'] for row in board]
    assert scores == sorted(scores, reverse=True)
    assert all(round(score, 1) == score for score in scores)


def test_points_for_leaders():
    leaders = points_for_leaders(league_owners())
    assert leaders[0].name == "Ben Holcomb"
    assert leaders[-1].avg_points_per_year == min(o.avg_points_per_year for o in leaders)


def test_governor_stats():
    teams = [
        {'id': 't1', 'name': 'Forresters', 'owner_name': 'Ben'},
        {'id': 't2', 'name': 'Fire Ants', 'owner_name': 'Dino'},
        {'id': 't3', 'name': 'Fanatics', 'owner_name': 'Carlos'},
    ]
    standings = [
        {'season_id': 's1', 'team_id': 't1', 'rank': 1, 'wins': 10, 'losses': 3, 'total_points_for': 1800},
        {'season_id': 's1', 'team_id': 't2', 'rank': 2, 'wins': 8, 'losses': 5, 'total_points_for': 1700},
        {'season_id': 's1', 'team_id': 't3', 'rank': 6, 'wins': 5, 'losses': 8, 'total_points_for': 1500},
        {'season_id': 's2', 'team_id': 't3', 'rank': 3, 'wins': 9, 'losses': 4, 'total_points_for': 1650},
    ]
    playoffs = [
        {'season_id': 's1', 'team_id': 't1', 'rank': 1, 'is_finalist': 1},
        {'season_id': 's1', 'team_id': 't2', 'rank': 2, 'is_finalist': 1},
        {'season_id': 's2', 'team_id': 't3', 'rank': 3, 'is_finalist': 0},
    ]

    stats = {s['owner']: s for s in governor_stats(teams, standings, playoffs)}

    assert stats['Ben']['championships'] == 1
    assert stats['Ben']['playoff_wins'] == 1
    assert stats['Ben']['finals_appearances'] == 1
    assert stats['Dino']['playoff_wins'] == 1
    assert stats['Dino']['playoff_losses'] == 1
    assert stats['Carlos']['playoff_losses'] == 1
    assert stats['Carlos']['years_active'] == 2
    assert stats['Carlos']['best_finish'] == 3
    assert stats['Carlos']['worst_finish'] == 6
    assert stats['Carlos']['avg_finish'] == 4.5
    assert stats['Carlos']['total_wins'] == 14

    ordered = [s['owner'] for s in governor_stats(teams, standings, playoffs)]
    assert ordered[0] == 'Ben'


def test_history_module_stats_from_database(db, teams):
    season = db.seasons.create({'year': 2024})
    for rank, team in enumerate(teams[:5], start=1):
        db.standings.create({'season_id': season['id'], 'team_id': team['id'], 'rank': rank,
                             'wins': 10 - rank, 'losses': 3 + rank, 'total_points_for': 1500.0})
        db.playoffs.create({'season_id': season['id'], 'team_id': team['id'], 'rank': rank,
                            'is_finalist': rank <= 2})

    stats = {s['owner']: s for s in HistoryModule(db).get_governor_stats()}
    assert stats['Owner 1']['championships'] == 1
    assert stats['Owner 4']['playoff_appearances'] == 1
    # fifth place sits out the playoffs
    assert stats['Owner 5']['playoff_appearances'] == 0
    assert stats['Owner 5']['playoff_losses'] == 0


def test_history_module_without_database():
    assert HistoryModule().get_governor_stats() == []
