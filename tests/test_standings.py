import warnings

import pytest

from league_site.errors import DataIntegrityWarning, ValidationError
from league_site.standings import (
    PlayoffTier, StandingEntry, StandingsModule, entries_from_rows, rank_standings,
    standings_frame, tier, tiered_standings,
)


TOTALS = [172, 160, 155, 150, 140, 130, 120, 110, 100, 90]


def _entries(totals, points_for=None):
    points_for = points_for or [1500.0] * len(totals)
    return [
        StandingEntry(team_id=f"t{index:02d}", total_points=total, points_for=pf)
        for index, (total, pf) in enumerate(zip(totals, points_for))
    ]


@pytest.mark.parametrize("rank,expected", [
    (1, PlayoffTier.PLAYOFF),
    (4, PlayoffTier.PLAYOFF),
    (5, PlayoffTier.PURGATORY),
    (6, PlayoffTier.TOILET),
    (10, PlayoffTier.TOILET),
])
def test_tier(rank, expected):
    assert tier(rank) == expected


def test_tier_rejects_out_of_range_ranks():
    with pytest.raises(ValidationError):
        tier(0)
    with pytest.raises(ValidationError):
        tier(11, league_size=10)


def test_ten_team_season():
    ranked = rank_standings(reversed(_entries(TOTALS)))

    assert [r.rank for r in ranked] == list(range(1, 11))
    assert [r.entry.total_points for r in ranked] == TOTALS
    assert [r.tier for r in ranked[:4]] == [PlayoffTier.PLAYOFF] * 4
    assert ranked[4].tier == PlayoffTier.PURGATORY
    assert all(r.tier == PlayoffTier.TOILET for r in ranked[5:])
    assert not any(r.tied for r in ranked)


def test_ranks_are_a_permutation():
    ranked = rank_standings(_entries([50, 50, 40, 90, 10]))
    assert sorted(r.rank for r in ranked) == [1, 2, 3, 4, 5]


def test_standings_points_ties_break_on_points_for():
    entries = _entries([100, 100, 80], points_for=[1400.0, 1600.0, 1700.0])
    with pytest.warns(DataIntegrityWarning):
        ranked = rank_standings(entries)

    assert [r.team_id for r in ranked] == ['t01', 't00', 't02']
    assert [r.tied for r in ranked] == [True, True, False]


def test_full_tie_breaks_on_team_id():
    entries = [
        StandingEntry(team_id='b', total_points=50, points_for=1000.0),
        StandingEntry(team_id='a', total_points=50, points_for=1000.0),
    ]
    with pytest.warns(DataIntegrityWarning):
        first = rank_standings(entries)
    with pytest.warns(DataIntegrityWarning):
        second = rank_standings(list(reversed(entries)))

    assert [r.team_id for r in first] == ['a', 'b']
    assert [r.team_id for r in second] == ['a', 'b']


def test_duplicate_team_rejected():
    entries = [StandingEntry(team_id='a', total_points=10), StandingEntry(team_id='a', total_points=5)]
    with pytest.raises(ValidationError):
        rank_standings(entries)


def test_empty_season():
    assert rank_standings([]) == []


def test_no_warning_without_ties():
    with warnings.catch_warnings():
        warnings.simplefilter('error', DataIntegrityWarning)
        rank_standings(_entries(TOTALS))


def test_standings_frame_columns():
    df = standings_frame(rank_standings(_entries(TOTALS[:5])))
    assert list(df['Rank']) == [1, 2, 3, 4, 5]
    assert df.iloc[4]['Tier'] == "Purgatory"


def test_standings_from_database(db, teams):
    season = db.seasons.create({'year': 2025, 'is_active': True})
    for team, total in zip(teams, TOTALS):
        db.standings.create({
            'season_id': season['id'],
            'team_id': team['id'],
            'rank': 0,
            'points_accumulated': total,
            'total_points_for': 1500.0,
            'wins': 6,
            'losses': 7,
        })

    rows = db.standings.get_by_season(season['id'])
    teams_by_id = {t['id']: t for t in teams}
    ranked = rank_standings(entries_from_rows(rows, teams_by_id))
    assert ranked[0].entry.name == "Team 1"
    assert ranked[-1].entry.owner == "Owner 10"

    module_ranked = StandingsModule(db).get_standings_data(season['id'])
    assert [r.team_id for r in module_ranked] == [r.team_id for r in ranked]


def test_tiered_standings():
    groups = tiered_standings(_entries(TOTALS))
    assert [len(groups[t]) for t in PlayoffTier] == [4, 1, 5]
    assert groups[PlayoffTier.PURGATORY][0].entry.total_points == 140


def test_tiered_standings_small_league():
    groups = tiered_standings(_entries([30, 20, 10]))
    assert len(groups[PlayoffTier.PLAYOFF]) == 3
    assert groups[PlayoffTier.PURGATORY] == []
    assert groups[PlayoffTier.TOILET] == []


def test_missing_standings_points_are_not_ranked_as_zero(db, teams):
    season = db.seasons.create({'year': 2025, 'is_active': True})
    for team, total in zip(teams[:3], [50, None, 10]):
        db.standings.create({
            'season_id': season['id'],
            'team_id': team['id'],
            'rank': 0,
            'points_accumulated': total,
            'total_points_for': 1200.0,
        })

    rows = db.standings.get_by_season(season['id'])
    teams_by_id = {t['id']: t for t in teams}
    with pytest.raises(ValidationError, match="Team 2"):
        entries_from_rows(rows, teams_by_id)
    with pytest.raises(ValidationError):
        StandingsModule(db).get_standings_data(season['id'])
