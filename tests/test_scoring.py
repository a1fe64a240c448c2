import pytest

from league_site.errors import ValidationError
from league_site.league_data import SEASON_2025_WEEKS
from league_site.scoring import (
    RANKING_POINTS, WeekResult, accumulate_season, completed_weeks, movement,
    points_for, rank_week,
)


def test_ranking_points_table():
    assert [points_for(rank) for rank in range(1, 11)] == [20, 18, 16, 14, 12, 5, 4, 3, 2, 1]


def test_ranking_points_strictly_decrease():
    values = [RANKING_POINTS[rank] for rank in sorted(RANKING_POINTS)]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_big_drop_between_fifth_and_sixth():
    assert points_for(5) - points_for(6) == 7


@pytest.mark.parametrize("rank", [0, 11, -1, 2.0, "1", True])
def test_points_for_rejects_bad_ranks(rank):
    with pytest.raises(ValidationError):
        points_for(rank)


def test_rank_week_orders_by_score():
    rankings = rank_week({'a': 90.0, 'b': 120.5, 'c': 101.2})
    assert [r.team_id for r in rankings] == ['b', 'c', 'a']
    assert [r.ranking_points for r in rankings] == [20, 18, 16]


def test_rank_week_breaks_score_ties_by_team_id():
    # week 1 of 2025: teams 1 and 8 both scored 124.83
    rankings = {r.team_id: r for r in rank_week(SEASON_2025_WEEKS[0].scores)}
    assert rankings['1'].rank < rankings['8'].rank
    assert rankings['9'].rank == 2
    assert rankings['4'].rank == 1


def test_rank_week_rejects_oversized_league():
    scores = {str(n): float(n) for n in range(11)}
    with pytest.raises(ValidationError):
        rank_week(scores)


def test_accumulate_season_skips_incomplete_weeks():
    weeks = [
        WeekResult(week=1, scores={'a': 100.0, 'b': 90.0}),
        WeekResult(week=2, scores={'a': 80.0, 'b': 95.0}),
        WeekResult(week=3, scores={}, completed=False),
    ]
    totals = accumulate_season(weeks)
    assert totals['a']['total_points'] == 38
    assert totals['b']['total_points'] == 38
    assert totals['a']['points_for'] == pytest.approx(180.0)
    assert totals['b']['avg_ppw'] == pytest.approx(92.5)
    assert completed_weeks(weeks) == 2


def test_accumulate_season_through_week():
    totals = accumulate_season(SEASON_2025_WEEKS, through_week=1)
    assert totals['4']['total_points'] == 20
    assert totals['4']['weeks_played'] == 1


def test_accumulate_season_empty():
    assert accumulate_season([]) == {}


def test_movement():
    trends = movement({'a': 2, 'b': 1, 'c': 3}, {'a': 1, 'b': 2, 'c': 3, 'd': 4})
    assert trends == {'a': 'up', 'b': 'down', 'c': None, 'd': None}
