import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from league_site.content import page_intro
from league_site.models import PlayoffOutcome, RegularSeasonStanding, Team
from league_site.standings import PLAYOFF_CUTOFF

logger = logging.getLogger(__name__)


DEFAULT_INTRO = "Career numbers and season-by-season results for every franchise."


@dataclass
class TeamSeason:
    year: int
    wins: int
    losses: int
    rank: int
    points: float
    playoff_place: Optional[int] = None

    @property
    def win_pct(self) -> float:
        games = self.wins + self.losses
        return self.wins / games * 100 if games > 0 else 0.0


@dataclass
class TeamProfile:
    team: Team
    seasons: List[TeamSeason] = field(default_factory=list)
    playoff_appearances: int = 0
    finals_appearances: int = 0
    championships: int = 0

    @property
    def total_wins(self) -> int:
        return sum(s.wins for s in self.seasons)

    @property
    def total_losses(self) -> int:
        return sum(s.losses for s in self.seasons)

    @property
    def total_points(self) -> float:
        return sum(s.points for s in self.seasons)

    @property
    def win_pct(self) -> float:
        games = self.total_wins + self.total_losses
        return self.total_wins / games * 100 if games > 0 else 0.0

    @property
    def avg_points_per_week(self) -> float:
        games = self.total_wins + self.total_losses
        return self.total_points / games if games > 0 else 0.0

    @property
    def best_finish(self) -> Optional[int]:
        return min((s.rank for s in self.seasons), default=None)

    @property
    def worst_finish(self) -> Optional[int]:
        return max((s.rank for s in self.seasons), default=None)


def team_profile(team: Team, standings: List[RegularSeasonStanding],
                 playoff_outcomes: List[PlayoffOutcome],
                 season_years: Dict[str, int]) -> TeamProfile:
    """
    One franchise's career from its stored season rows.

    ``standings`` and ``playoff_outcomes`` may cover the whole league; only
    rows for ``team`` are used. Playoff place is the final postseason rank.
    """
    places = {
        o.season_id: o for o in playoff_outcomes
        if o.team_id == team.id and o.season_id is not None
    }

    profile = TeamProfile(team=team)
    for standing in standings:
        if standing.team_id != team.id:
            continue
        if standing.season_id not in season_years:
            logger.warning(f"Standing {standing.id} references unknown season {standing.season_id}")
            continue
        outcome = places.get(standing.season_id)
        profile.seasons.append(TeamSeason(
            year=season_years[standing.season_id],
            wins=standing.wins,
            losses=standing.losses,
            rank=standing.rank,
            points=standing.total_points_for or 0.0,
            playoff_place=outcome.rank if outcome else None,
        ))
    profile.seasons.sort(key=lambda s: s.year)

    for outcome in places.values():
        if outcome.rank <= PLAYOFF_CUTOFF:
            profile.playoff_appearances += 1
        if outcome.is_finalist:
            profile.finals_appearances += 1
        if outcome.rank == 1:
            profile.championships += 1

    return profile


class TeamProfileModule:
    def __init__(self, db):
        self.db = db

    def get_profile(self, team_id: str) -> TeamProfile:
        team = Team.from_row(self.db.teams.get_by_id(team_id))
        standings = [RegularSeasonStanding.from_row(r) for r in self.db.standings.filter(team_id=team_id)]
        outcomes = [PlayoffOutcome.from_row(r) for r in self.db.playoffs.filter(team_id=team_id)]
        season_years = {s['id']: s['year'] for s in self.db.seasons.get_all()}
        return team_profile(team, standings, outcomes, season_years)

    def render_summary(self, profile: TeamProfile):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Career Record", f"{profile.total_wins}-{profile.total_losses}",
                      f"{profile.win_pct:.1f}% win rate", delta_color="off")
        with col2:
            st.metric("Championships", profile.championships,
                      f"{profile.playoff_appearances} playoff appearances", delta_color="off")
        with col3:
            best = f"#{profile.best_finish}" if profile.best_finish else "-"
            worst = f"#{profile.worst_finish}" if profile.worst_finish else "-"
            st.metric("Best Finish", best, f"Worst: {worst}", delta_color="off")
        with col4:
            st.metric("Avg Points/Week", f"{profile.avg_points_per_week:.1f}",
                      f"{profile.total_points:,.1f} total", delta_color="off")

    def render_seasons(self, profile: TeamProfile):
        st.subheader("Season by Season")
        df = pd.DataFrame([{
            'Season': s.year,
            'Record': f"{s.wins}-{s.losses}",
            'Win %': f"{s.win_pct:.1f}%",
            'Finish': s.rank,
            'Playoff Place': s.playoff_place,
            'Points': round(s.points, 1),
        } for s in profile.seasons])
        st.dataframe(df, use_container_width=True, hide_index=True)

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[s.year for s in profile.seasons],
            y=[s.rank for s in profile.seasons],
            mode='lines+markers',
            name='Finish',
        ))
        fig.update_layout(
            height=350,
            title="Regular Season Finish",
            xaxis_title="Season",
            yaxis_title="Rank",
            yaxis_autorange='reversed',
        )
        st.plotly_chart(fig, use_container_width=True)

    def render(self):
        """Main render function for team profiles"""
        st.title("Team Profiles")
        st.caption(page_intro(self.db, 'team-profiles', DEFAULT_INTRO))

        teams = self.db.teams.get_all()
        if not teams:
            st.info("No teams loaded.")
            return

        team_names = {t['id']: t['name'] for t in teams}
        team_id = st.selectbox("Team", list(team_names), format_func=team_names.get)

        try:
            profile = self.get_profile(team_id)
        except Exception as e:
            st.error(f"Error loading team profile: {str(e)}")
            return

        st.header(profile.team.name)
        if profile.team.owner_name:
            st.caption(f"Governor: {profile.team.owner_name}")

        self.render_summary(profile)
        if profile.seasons:
            st.markdown("---")
            self.render_seasons(profile)
        else:
            st.info("No stored seasons for this team yet.")
