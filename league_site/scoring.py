"""
Weekly ranking points.

The league does not score head-to-head. Every week each team is ranked by
raw fantasy points and awarded standings points from RANKING_POINTS; the
season standings are the running sum of those awards.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from league_site.errors import ValidationError

logger = logging.getLogger(__name__)


# Weekly finish position -> standings points
RANKING_POINTS: Dict[int, int] = {
    1: 20,
    2: 18,
    3: 16,
    4: 14,
    5: 12,
    6: 5,
    7: 4,
    8: 3,
    9: 2,
    10: 1,
}

REGULAR_SEASON_WEEKS = 13


def points_for(rank: int) -> int:
    """Standings points awarded for a weekly finish position"""
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise ValidationError(f"Weekly finish must be an integer, got {rank!r}")
    try:
        return RANKING_POINTS[rank]
    except KeyError:
        raise ValidationError(
            f"Weekly finish {rank} is outside 1-{len(RANKING_POINTS)}"
        ) from None


@dataclass
class WeeklyRanking:
    team_id: str
    score: float
    rank: int
    ranking_points: int


@dataclass
class WeekResult:
    week: int
    scores: Dict[str, float]
    completed: bool = True


def rank_week(scores: Mapping[str, float]) -> List[WeeklyRanking]:
    """Rank one week's raw scores and attach ranking points.

    Equal scores are ordered by team id so the same week always ranks the
    same way.
    """
    if len(scores) > len(RANKING_POINTS):
        raise ValidationError(
            f"{len(scores)} teams scored but only {len(RANKING_POINTS)} finishes award points"
        )

    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    rankings = []
    for index, (team_id, score) in enumerate(ordered):
        rank = index + 1
        rankings.append(WeeklyRanking(
            team_id=team_id,
            score=score,
            rank=rank,
            ranking_points=points_for(rank),
        ))
    return rankings


def accumulate_season(weeks: Iterable[WeekResult],
                      through_week: Optional[int] = None) -> Dict[str, Dict[str, float]]:
    """Sum ranking points and raw points over completed weeks"""
    played = [w for w in weeks if w.completed]
    if through_week is not None:
        played = [w for w in played if w.week <= through_week]

    totals: Dict[str, Dict[str, float]] = {}
    for week in sorted(played, key=lambda w: w.week):
        for ranking in rank_week(week.scores):
            team = totals.setdefault(ranking.team_id, {
                'total_points': 0,
                'points_for': 0.0,
                'weeks_played': 0,
            })
            team['total_points'] += ranking.ranking_points
            team['points_for'] += ranking.score
            team['weeks_played'] += 1

    for team in totals.values():
        weeks_played = team['weeks_played']
        team['avg_ppw'] = team['points_for'] / weeks_played if weeks_played > 0 else 0.0

    logger.debug(f"Accumulated {len(played)} weeks for {len(totals)} teams")
    return totals


def completed_weeks(weeks: Iterable[WeekResult]) -> int:
    return sum(1 for w in weeks if w.completed)


def movement(previous_ranks: Mapping[str, int],
             current_ranks: Mapping[str, int]) -> Dict[str, Optional[str]]:
    """'up' / 'down' / None per team, comparing two weeks of standings"""
    trends = {}
    for team_id, rank in current_ranks.items():
        before = previous_ranks.get(team_id)
        if before is None or before == rank:
            trends[team_id] = None
        elif before > rank:
            trends[team_id] = 'up'
        else:
            trends[team_id] = 'down'
    return trends
