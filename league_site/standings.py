import logging
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from league_site.errors import DataIntegrityWarning, ValidationError
from league_site.models import RegularSeasonStanding, Team
from league_site.scoring import RANKING_POINTS

logger = logging.getLogger(__name__)


# Tier cut points: ranks 1..PLAYOFF_CUTOFF make the playoffs, PURGATORY_RANK
# sits out, everything below plays in the toilet bowl.
PLAYOFF_CUTOFF = 4
PURGATORY_RANK = 5


class PlayoffTier(str, Enum):
    PLAYOFF = 'playoff'
    PURGATORY = 'purgatory'
    TOILET = 'toilet'


TIER_LABELS = {
    PlayoffTier.PLAYOFF: "If Playoffs Started Tomorrow",
    PlayoffTier.PURGATORY: "Purgatory",
    PlayoffTier.TOILET: "The Toilet Bowl",
}

TIER_COLORS = {
    PlayoffTier.PLAYOFF: 'gold',
    PlayoffTier.PURGATORY: 'orange',
    PlayoffTier.TOILET: 'firebrick',
}


@dataclass
class StandingEntry:
    team_id: str
    total_points: float
    points_for: float = 0.0
    wins: int = 0
    losses: int = 0
    name: Optional[str] = None
    owner: Optional[str] = None
    avg_ppw: Optional[float] = None


@dataclass
class RankedStanding:
    entry: StandingEntry
    rank: int
    tier: PlayoffTier
    tied: bool = False  # shares total_points with another team

    @property
    def team_id(self) -> str:
        return self.entry.team_id


def tier(rank: int, league_size: Optional[int] = None) -> PlayoffTier:
    """Playoff tier for a 1-indexed standings rank"""
    if rank < 1:
        raise ValidationError(f"Rank must be 1 or greater, got {rank}")
    if league_size is not None and rank > league_size:
        raise ValidationError(f"Rank {rank} is outside a {league_size}-team league")

    if rank <= PLAYOFF_CUTOFF:
        return PlayoffTier.PLAYOFF
    if rank <= PURGATORY_RANK:
        return PlayoffTier.PURGATORY
    return PlayoffTier.TOILET


def _sort_key(entry: StandingEntry):
    return (-entry.total_points, -entry.points_for, entry.team_id)


def rank_standings(entries: Iterable[StandingEntry]) -> List[RankedStanding]:
    """
    Sort a season's teams into ranks 1..N.

    Order is standings points descending. Ties on standings points are broken
    by points for descending, then team id ascending, so the output is the
    same on every call. Teams sharing a standings-points total are flagged
    ``tied`` and a DataIntegrityWarning is emitted.
    """
    entries = list(entries)
    seen = set()
    for entry in entries:
        if entry.team_id in seen:
            raise ValidationError(f"Team {entry.team_id} appears twice in one season")
        seen.add(entry.team_id)

    ordered = sorted(entries, key=_sort_key)

    counts: Dict[float, int] = {}
    for entry in ordered:
        counts[entry.total_points] = counts.get(entry.total_points, 0) + 1

    league_size = len(ordered)
    ranked = []
    for index, entry in enumerate(ordered):
        rank = index + 1
        ranked.append(RankedStanding(
            entry=entry,
            rank=rank,
            tier=tier(rank, league_size),
            tied=counts[entry.total_points] > 1,
        ))

    tied_teams = [r.team_id for r in ranked if r.tied]
    if tied_teams:
        message = f"Standings points tied for teams {', '.join(tied_teams)}; broken by points for"
        logger.warning(message)
        warnings.warn(message, DataIntegrityWarning, stacklevel=2)

    return ranked


def tiered_standings(entries: Iterable[StandingEntry]) -> Dict[PlayoffTier, List[RankedStanding]]:
    """Ranked standings grouped by tier, every tier present even when empty"""
    groups: Dict[PlayoffTier, List[RankedStanding]] = {t: [] for t in PlayoffTier}
    for ranked in rank_standings(entries):
        groups[ranked.tier].append(ranked)
    return groups


def standings_frame(ranked: List[RankedStanding]) -> pd.DataFrame:
    """Display table for ranked standings"""
    rows = []
    for r in ranked:
        e = r.entry
        rows.append({
            'Rank': r.rank,
            'Team': e.name or e.team_id,
            'Governor': e.owner or '',
            'Standings Pts': e.total_points,
            'Total PF': round(e.points_for, 1),
            'W-L': f"{e.wins}-{e.losses}",
            'Avg PPW': round(e.avg_ppw, 1) if e.avg_ppw is not None else None,
            'Tier': TIER_LABELS[r.tier],
            'Tied': r.tied,
        })
    return pd.DataFrame(rows)


def entries_from_rows(standing_rows: List[Dict], teams_by_id: Dict[str, Dict]) -> List[StandingEntry]:
    """
    Build entries from regular_season_standings rows joined to teams.

    Every row must carry points_accumulated; a row without it raises
    ValidationError naming the team instead of ranking it on zero points.
    """
    standings = [RegularSeasonStanding.from_row(row) for row in standing_rows]
    missing = [s.team_id for s in standings if s.points_accumulated is None]
    if missing:
        names = [teams_by_id.get(team_id, {}).get('name', team_id) for team_id in missing]
        raise ValidationError(f"Standings points not entered for: {', '.join(names)}")

    entries = []
    for standing in standings:
        team = Team.from_row(teams_by_id[standing.team_id]) if standing.team_id in teams_by_id else None
        entries.append(StandingEntry(
            team_id=standing.team_id,
            total_points=standing.points_accumulated,
            points_for=standing.total_points_for or 0.0,
            wins=standing.wins,
            losses=standing.losses,
            name=team.name if team else None,
            owner=team.owner_name if team else None,
            avg_ppw=standing.average_ppw,
        ))
    return entries


class StandingsModule:
    def __init__(self, db):
        self.db = db

    def get_standings_data(self, season_id: str) -> List[RankedStanding]:
        """Fetch a season's standings and rank them"""
        rows = self.db.standings.get_by_season(season_id)
        teams_by_id = {t['id']: t for t in self.db.teams.get_all()}
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataIntegrityWarning)
            return rank_standings(entries_from_rows(rows, teams_by_id))

    def render_points_system(self):
        """Render the weekly points legend"""
        st.markdown("**Weekly Points System**")
        cols = st.columns(len(RANKING_POINTS))
        for col, (rank, points) in zip(cols, RANKING_POINTS.items()):
            with col:
                st.metric(f"{rank}", f"{points} pts", TIER_LABELS[tier(rank)], delta_color="off")

    def render_standings_table(self, ranked: List[RankedStanding]):
        """Render the main standings table"""
        if not ranked:
            st.warning("No standings data available")
            return

        st.subheader("League Standings")
        display_df = standings_frame(ranked)
        st.dataframe(display_df.drop(columns=['Tied']), use_container_width=True, hide_index=True)

        tied = display_df[display_df['Tied']]
        if not tied.empty:
            st.caption(
                f"Tied on standings points: {', '.join(tied['Team'])}. "
                "Ordered by total points for."
            )

    def render_recorded_order(self, rows: List[Dict]):
        """Seasons entered before standings points were tracked keep their stored rank"""
        st.caption("Standings points were not recorded for this season. Showing final order.")
        teams_by_id = {t['id']: t for t in self.db.teams.get_all()}
        df = pd.DataFrame([{
            'Rank': row['rank'],
            'Team': teams_by_id.get(row['team_id'], {}).get('name', row['team_id']),
            'W-L': f"{row.get('wins') or 0}-{row.get('losses') or 0}",
            'Total PF': row.get('total_points_for'),
            'Tier': TIER_LABELS[tier(row['rank'])],
        } for row in sorted(rows, key=lambda r: r['rank'])])
        st.dataframe(df, use_container_width=True, hide_index=True)

    def render_tiers(self, ranked: List[RankedStanding]):
        """One column per tier, teams in rank order"""
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataIntegrityWarning)
            groups = tiered_standings(r.entry for r in ranked)

        cols = st.columns(len(groups))
        for col, (playoff_tier, members) in zip(cols, groups.items()):
            with col:
                st.markdown(f"**{TIER_LABELS[playoff_tier]}**")
                for r in members:
                    st.write(f"{r.rank}. {r.entry.name or r.team_id}")

    def render_tier_chart(self, ranked: List[RankedStanding]):
        """Render standings points coloured by tier"""
        if not ranked:
            return

        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=[r.entry.name or r.team_id for r in ranked],
            y=[r.entry.total_points for r in ranked],
            marker_color=[TIER_COLORS[r.tier] for r in ranked],
            text=[r.entry.total_points for r in ranked],
            textposition='auto',
        ))
        fig.update_layout(
            height=450,
            title="Standings Points by Tier",
            xaxis_title="Team",
            yaxis_title="Standings Points",
            xaxis_tickangle=45,
            showlegend=False
        )
        st.plotly_chart(fig, use_container_width=True)

    def render(self, season_id: str, season_year: int):
        """Main render function for standings module"""
        st.title("League Standings")
        st.caption(f"Points-based ranking system, {season_year} season. "
                   "Earn standings points based on weekly finish.")

        try:
            rows = self.db.standings.get_by_season(season_id)
            if rows and all(row.get('points_accumulated') is None for row in rows):
                self.render_recorded_order(rows)
                return
            ranked = self.get_standings_data(season_id)
        except Exception as e:
            st.error(f"Error loading standings: {str(e)}")
            return

        self.render_points_system()

        st.markdown("---")
        self.render_standings_table(ranked)

        st.markdown("---")
        self.render_tiers(ranked)
        self.render_tier_chart(ranked)
