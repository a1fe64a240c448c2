"""
Postseason results derived from playoff_outcomes rows.

Champion, runner-up, third and fourth place are never stored. They are
re-derived from the finalist flag and the two-week finals scores every time
a page needs them.
"""
import logging
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from league_site.errors import DataIntegrityWarning, ValidationError
from league_site.models import PlayoffOutcome

logger = logging.getLogger(__name__)


EXPECTED_FINALISTS = 2


class FinalsStatus(str, Enum):
    PENDING = 'pending'   # no data yet, or finals not scored
    DECIDED = 'decided'
    TIED = 'tied'         # equal finals scores, undecided


@dataclass
class FinalsResult:
    status: FinalsStatus
    champion: Optional[PlayoffOutcome] = None
    runner_up: Optional[PlayoffOutcome] = None
    finalists: Tuple[PlayoffOutcome, ...] = ()

    @property
    def decided(self) -> bool:
        return self.status == FinalsStatus.DECIDED


@dataclass
class ConsolationResult:
    third: Optional[PlayoffOutcome] = None
    fourth: Optional[PlayoffOutcome] = None
    tied: bool = False

    @property
    def has_data(self) -> bool:
        return self.third is not None or self.tied


@dataclass
class PlayoffBracket:
    finals: FinalsResult
    consolation: ConsolationResult


def derive_finals(outcomes: Iterable[PlayoffOutcome]) -> FinalsResult:
    """Champion and runner-up from a season's outcome rows.

    An empty season is pending. Any other season must have exactly two
    finalists; once both have a finals score the higher one is champion,
    and an exact tie comes back as TIED rather than a guess.
    """
    outcomes = list(outcomes)
    if not outcomes:
        return FinalsResult(status=FinalsStatus.PENDING)

    finalists = [o for o in outcomes if o.is_finalist]
    if len(finalists) != EXPECTED_FINALISTS:
        raise ValidationError(
            f"Expected {EXPECTED_FINALISTS} finalists, found {len(finalists)}"
        )

    first, second = finalists
    if first.finals_score is None or second.finals_score is None:
        return FinalsResult(status=FinalsStatus.PENDING, finalists=(first, second))

    if first.finals_score == second.finals_score:
        message = (f"Finals score tied at {first.finals_score} between "
                   f"{first.team_id} and {second.team_id}")
        logger.warning(message)
        warnings.warn(message, DataIntegrityWarning, stacklevel=2)
        return FinalsResult(status=FinalsStatus.TIED, finalists=(first, second))

    champion, runner_up = sorted(finalists, key=lambda o: o.finals_score, reverse=True)
    return FinalsResult(
        status=FinalsStatus.DECIDED,
        champion=champion,
        runner_up=runner_up,
        finalists=(first, second),
    )


def derive_consolation(outcomes: Iterable[PlayoffOutcome]) -> ConsolationResult:
    """Third and fourth place from the non-finalists who played for third.

    Fewer than two such rows means the game has not been played, which is
    not an error.
    """
    played = [o for o in outcomes if not o.is_finalist and o.finals_score is not None]
    if len(played) < 2:
        return ConsolationResult()

    played.sort(key=lambda o: o.finals_score, reverse=True)
    if len(played) > 2:
        logger.warning(f"{len(played)} non-finalists have a finals score, using the top two")

    third, fourth = played[0], played[1]
    if third.finals_score == fourth.finals_score:
        message = f"Third place game tied at {third.finals_score}"
        logger.warning(message)
        warnings.warn(message, DataIntegrityWarning, stacklevel=2)
        return ConsolationResult(tied=True)

    return ConsolationResult(third=third, fourth=fourth)


def derive_bracket(outcomes: Iterable[PlayoffOutcome]) -> PlayoffBracket:
    outcomes = list(outcomes)
    return PlayoffBracket(
        finals=derive_finals(outcomes),
        consolation=derive_consolation(outcomes),
    )


def seed_matchups(ranked_team_ids: Sequence[str]) -> Dict[str, List[Tuple[str, str]]]:
    """
    First-round pairings from final regular season order.

    Championship semifinals are 1v4 and 2v3, the consolation bracket plays
    6v7 and 8v9, and purgatory (5) meets last place (10) in the toilet bowl.
    Pairings whose seeds don't exist in a smaller league are left out.
    """
    seeds = {index + 1: team_id for index, team_id in enumerate(ranked_team_ids)}
    layout = {
        'championship': [(1, 4), (2, 3)],
        'consolation': [(6, 7), (8, 9)],
        'toilet_bowl': [(5, 10)],
    }

    bracket = {}
    for name, pairs in layout.items():
        bracket[name] = [
            (seeds[a], seeds[b]) for a, b in pairs if a in seeds and b in seeds
        ]
    return bracket


def outcomes_from_rows(rows: Iterable[Dict]) -> List[PlayoffOutcome]:
    return [PlayoffOutcome.from_row(row) for row in rows]


class PlayoffsModule:
    def __init__(self, db):
        self.db = db

    def get_bracket(self, season_id: str) -> PlayoffBracket:
        rows = self.db.playoffs.get_by_season(season_id)
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataIntegrityWarning)
            return derive_bracket(outcomes_from_rows(rows))

    def render_podium(self, bracket: PlayoffBracket, team_names: Dict[str, str]):
        """Render champion / runner-up / third / fourth"""
        finals = bracket.finals

        def name(outcome: Optional[PlayoffOutcome]) -> str:
            if outcome is None:
                return "TBD"
            return team_names.get(outcome.team_id, outcome.team_id)

        col1, col2, col3, col4 = st.columns(4)

        if finals.status == FinalsStatus.PENDING:
            with col1:
                st.metric("Champion", "TBD")
            if finals.finalists:
                st.caption("Finalists: " + " vs ".join(name(f) for f in finals.finalists))
        elif finals.status == FinalsStatus.TIED:
            with col1:
                st.metric("Champion", "Undecided")
            st.warning("The finals ended in an exact tie. The commissioner must rule.")
        else:
            with col1:
                st.metric("Champion", name(finals.champion), f"{finals.champion.finals_score:.1f}")
            with col2:
                st.metric("Runner-Up", name(finals.runner_up), f"{finals.runner_up.finals_score:.1f}")

        consolation = bracket.consolation
        if consolation.tied:
            with col3:
                st.metric("3rd Place", "Tied")
        elif consolation.has_data:
            with col3:
                st.metric("3rd Place", name(consolation.third))
            with col4:
                st.metric("4th Place", name(consolation.fourth))
        else:
            st.caption("No third place game data yet.")

    def render_outcomes_table(self, season_id: str, team_names: Dict[str, str]):
        rows = self.db.playoffs.get_by_season(season_id)
        if not rows:
            st.info("No playoff outcomes recorded for this season yet.")
            return

        df = pd.DataFrame(rows)
        df['Team'] = df['team_id'].map(team_names)
        df = df[['rank', 'Team', 'is_finalist', 'semifinal_score', 'finals_score']]
        df.columns = ['Place', 'Team', 'Finalist', 'Semifinal Score', 'Finals Score']
        df['Finalist'] = df['Finalist'].astype(bool)
        st.dataframe(df, use_container_width=True, hide_index=True)

    def render(self, season_id: str, season_year: int):
        """Main render function for playoffs module"""
        st.subheader(f"{season_year} Playoffs")
        team_names = {t['id']: t['name'] for t in self.db.teams.get_all()}

        try:
            bracket = self.get_bracket(season_id)
        except ValidationError as e:
            st.error(f"Playoff data needs attention: {str(e)}")
            return

        self.render_podium(bracket, team_names)
        self.render_outcomes_table(season_id, team_names)
