"""
League history: owner career records and the Historical Dominance Index.

HDI is a fixed weighted blend used only for the leaderboard:

    championships * 40 + playoff_wins * 5 + win_pct * 30
        + ((11 - avg_finish) / 10) * 25
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import plotly.express as px
import streamlit as st

from league_site.league_data import CHAMPIONSHIP_LEADERS, OWNERS, SEASON_STANDINGS
from league_site.standings import PLAYOFF_CUTOFF

logger = logging.getLogger(__name__)


CHAMPIONSHIP_WEIGHT = 40
PLAYOFF_WIN_WEIGHT = 5
WIN_PCT_WEIGHT = 30
FINISH_WEIGHT = 25
WORST_FINISH = 10


@dataclass
class OwnerRecord:
    name: str
    total_wins: int = 0
    total_losses: int = 0
    championships: int = 0
    playoff_wins: int = 0
    playoff_losses: int = 0
    playoff_appearances: int = 0
    avg_finish: float = float(WORST_FINISH)
    avg_points_per_year: float = 0.0
    years_active: int = 0
    team_name: Optional[str] = None

    @property
    def win_pct(self) -> float:
        games = self.total_wins + self.total_losses
        return self.total_wins / games if games > 0 else 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OwnerRecord":
        return cls(
            name=data['name'],
            total_wins=data.get('total_wins', 0),
            total_losses=data.get('total_losses', 0),
            championships=data.get('championships', 0),
            playoff_wins=data.get('playoff_wins', 0),
            playoff_losses=data.get('playoff_losses', 0),
            playoff_appearances=data.get('playoff_appearances', 0),
            avg_finish=data.get('avg_finish', float(WORST_FINISH)),
            avg_points_per_year=data.get('avg_points_per_year', 0.0),
            years_active=data.get('years_active', 0),
            team_name=data.get('team_name'),
        )


def hdi(owner: OwnerRecord) -> float:
    """Historical Dominance Index, unrounded"""
    return (
        owner.championships * CHAMPIONSHIP_WEIGHT
        + owner.playoff_wins * PLAYOFF_WIN_WEIGHT
        + owner.win_pct * WIN_PCT_WEIGHT
        + ((WORST_FINISH + 1 - owner.avg_finish) / WORST_FINISH) * FINISH_WEIGHT
    )


def hdi_leaderboard(owners: Iterable[OwnerRecord]) -> List[Dict[str, Any]]:
    """Owners ranked by HDI, highest first, scores rounded to one decimal"""
    scored = [(owner, round(hdi(owner), 1)) for owner in owners]
    scored.sort(key=lambda item: (-item[1], item[0].name))
    return [
        {
            'rank': index + 1,
            'name': owner.name,
            'hdi': score,
            'championships': owner.championships,
            'playoff_wins': owner.playoff_wins,
            'win_pct': round(owner.win_pct * 100, 1),
            'avg_finish': owner.avg_finish,
        }
        for index, (owner, score) in enumerate(scored)
    ]


def points_for_leaders(owners: Iterable[OwnerRecord]) -> List[OwnerRecord]:
    return sorted(owners, key=lambda o: o.avg_points_per_year, reverse=True)


def _empty_stats(owner: str) -> Dict[str, Any]:
    return {
        'owner': owner,
        'teams': set(),
        'seasons': set(),
        'total_wins': 0,
        'total_losses': 0,
        'total_points': 0.0,
        'finishes': [],
        'best_finish': WORST_FINISH,
        'worst_finish': 1,
        'playoff_appearances': 0,
        'championships': 0,
        'finals_appearances': 0,
        'playoff_wins': 0,
        'playoff_losses': 0,
    }


def governor_stats(teams: List[Dict], standings: List[Dict],
                   playoff_outcomes: List[Dict]) -> List[Dict[str, Any]]:
    """
    Career aggregates per owner from stored season rows.

    A postseason rank within PLAYOFF_CUTOFF is a playoff appearance and rank 1 is
    a championship. A losing finalist is credited a semifinal win and a
    finals loss; a losing semifinalist is credited one loss.
    """
    owner_by_team = {t['id']: t.get('owner_name') or t['name'] for t in teams}
    stats: Dict[str, Dict[str, Any]] = {}

    for row in standings:
        owner = owner_by_team.get(row['team_id'])
        if owner is None:
            logger.warning(f"Standing {row.get('id')} references unknown team {row['team_id']}")
            continue
        s = stats.setdefault(owner, _empty_stats(owner))
        s['teams'].add(row['team_id'])
        s['seasons'].add(row['season_id'])
        s['total_wins'] += row.get('wins') or 0
        s['total_losses'] += row.get('losses') or 0
        s['total_points'] += row.get('total_points_for') or 0.0
        rank = row['rank']
        s['finishes'].append(rank)
        s['best_finish'] = min(s['best_finish'], rank)
        s['worst_finish'] = max(s['worst_finish'], rank)

    for row in playoff_outcomes:
        owner = owner_by_team.get(row['team_id'])
        if owner is None:
            continue
        s = stats.setdefault(owner, _empty_stats(owner))
        rank = row['rank']
        finalist = bool(row.get('is_finalist'))

        if rank <= PLAYOFF_CUTOFF:
            s['playoff_appearances'] += 1
        if rank == 1:
            s['championships'] += 1
            s['playoff_wins'] += 1
        if finalist:
            s['finals_appearances'] += 1
            if rank != 1:
                s['playoff_wins'] += 1
                s['playoff_losses'] += 1
        elif rank <= PLAYOFF_CUTOFF and rank != 1:
            s['playoff_losses'] += 1

    results = []
    for s in stats.values():
        finishes = s.pop('finishes')
        years = len(s['seasons'])
        s['years_active'] = years
        s['avg_finish'] = round(sum(finishes) / len(finishes), 2) if finishes else None
        s['avg_points_per_year'] = round(s['total_points'] / years, 1) if years else 0.0
        s['teams'] = len(s['teams'])
        s['seasons'] = sorted(s['seasons'])
        results.append(s)

    results.sort(
        key=lambda s: (s['championships'], s['playoff_appearances'], s['total_wins']),
        reverse=True,
    )
    return results


def league_owners() -> List[OwnerRecord]:
    return [OwnerRecord.from_dict(data) for data in OWNERS]


class HistoryModule:
    def __init__(self, db=None, owners: Optional[List[OwnerRecord]] = None):
        self.db = db
        self.owners = owners if owners is not None else league_owners()

    def get_governor_stats(self) -> List[Dict[str, Any]]:
        """Career aggregates over every stored season"""
        if self.db is None:
            return []
        return governor_stats(
            self.db.teams.get_all(),
            self.db.standings.get_all(),
            self.db.playoffs.get_all(),
        )

    def render_hdi_leaderboard(self):
        """Render HDI leaderboard and chart"""
        st.subheader("Historical Dominance Index")
        st.caption("Championships x40, playoff wins x5, win% x30, average finish x25")

        board = pd.DataFrame(hdi_leaderboard(self.owners))
        board.columns = ['Rank', 'Governor', 'HDI', 'Titles', 'Playoff Wins', 'Win %', 'Avg Finish']
        st.dataframe(board, use_container_width=True, hide_index=True)

        fig = px.bar(
            board,
            x='Governor',
            y='HDI',
            color='HDI',
            color_continuous_scale='Viridis',
            title="HDI by Governor",
        )
        fig.update_layout(height=450, xaxis_tickangle=45)
        st.plotly_chart(fig, use_container_width=True)

    def render_owner_records(self):
        st.subheader("Career Records")
        rows = [{
            'Governor': o.name,
            'Years': o.years_active,
            'Record': f"{o.total_wins}-{o.total_losses}",
            'Win %': f"{o.win_pct * 100:.1f}%",
            'Titles': o.championships,
            'Playoff Apps': o.playoff_appearances,
            'Playoff Record': f"{o.playoff_wins}-{o.playoff_losses}",
            'Avg Finish': o.avg_finish,
        } for o in self.owners]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    def render_points_leaders(self):
        st.subheader("Points For Leaders")
        leaders = points_for_leaders(self.owners)
        fig = px.bar(
            x=[o.name for o in leaders],
            y=[o.avg_points_per_year for o in leaders],
            labels={'x': 'Governor', 'y': 'Avg Points / Year'},
        )
        fig.update_layout(height=400, xaxis_tickangle=45)
        st.plotly_chart(fig, use_container_width=True)

    def render_governor_stats(self):
        st.subheader("Stored Season Stats")
        try:
            stats = self.get_governor_stats()
        except Exception as e:
            st.error(f"Error loading season stats: {str(e)}")
            return

        if not stats:
            st.info("No seasons stored yet. Run `python seed_league_db.py` to load them.")
            return

        df = pd.DataFrame([{
            'Governor': s['owner'],
            'Seasons': s['years_active'],
            'Record': f"{s['total_wins']}-{s['total_losses']}",
            'Points For': round(s['total_points'], 1),
            'Avg PF / Yr': s['avg_points_per_year'],
            'Best': s['best_finish'],
            'Worst': s['worst_finish'],
            'Avg Finish': s['avg_finish'],
            'Playoffs': s['playoff_appearances'],
            'Finals': s['finals_appearances'],
            'Titles': s['championships'],
            'Playoff Record': f"{s['playoff_wins']}-{s['playoff_losses']}",
        } for s in stats])
        st.dataframe(df, use_container_width=True, hide_index=True)

    def render_past_seasons(self):
        st.subheader("Past Seasons")
        years = sorted(SEASON_STANDINGS, reverse=True)
        year = st.selectbox("Season", years)
        df = pd.DataFrame(
            SEASON_STANDINGS[year],
            columns=['Rank', 'Team', 'Governor', 'W', 'L', 'Points For', 'Result'],
        )
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.markdown("**Championship Leaders**")
        for name, titles, seasons in CHAMPIONSHIP_LEADERS:
            st.write(f"{name}: {titles} ({seasons})")

    def render(self):
        """Main render function for history module"""
        st.title("League History")

        tab1, tab2, tab3, tab4 = st.tabs(["Dominance Index", "Career Records", "Season Stats", "Past Seasons"])
        with tab1:
            self.render_hdi_leaderboard()
        with tab2:
            self.render_owner_records()
            self.render_points_leaders()
        with tab3:
            self.render_governor_stats()
        with tab4:
            self.render_past_seasons()
