import logging
import warnings
from typing import Dict, List, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from league_site.errors import DataIntegrityWarning
from league_site.league_data import SEASON_2025_WEEKS, TEAMS
from league_site.playoffs import seed_matchups
from league_site.scoring import (
    WeekResult, accumulate_season, completed_weeks, movement, rank_week,
)
from league_site.standings import (
    RankedStanding, StandingEntry, TIER_LABELS, rank_standings, standings_frame,
)

logger = logging.getLogger(__name__)


def season_standings(weeks: List[WeekResult], teams: List[Dict],
                     through_week: Optional[int] = None) -> List[RankedStanding]:
    """Rank teams on ranking points accumulated through a given week"""
    totals = accumulate_season(weeks, through_week)
    teams_by_id = {t['id']: t for t in teams}

    entries = []
    for team_id, total in totals.items():
        team = teams_by_id.get(team_id, {})
        entries.append(StandingEntry(
            team_id=team_id,
            total_points=total['total_points'],
            points_for=total['points_for'],
            name=team.get('name'),
            owner=team.get('owner_name'),
            avg_ppw=total['avg_ppw'],
        ))
    return rank_standings(entries)


def standings_with_movement(weeks: List[WeekResult], teams: List[Dict]) -> pd.DataFrame:
    """Current standings table with a trend column against the previous week"""
    played = completed_weeks(weeks)
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', DataIntegrityWarning)
        current = season_standings(weeks, teams)
        previous = season_standings(weeks, teams, played - 1) if played > 1 else []

    trends = movement(
        {r.team_id: r.rank for r in previous},
        {r.team_id: r.rank for r in current},
    )
    df = standings_frame(current)
    arrows = {'up': '▲', 'down': '▼', None: ''}
    df['Trend'] = [arrows[trends.get(r.team_id)] for r in current]
    return df


def weekly_points_frame(weeks: List[WeekResult], teams: List[Dict]) -> pd.DataFrame:
    """One row per team, one column of ranking points per completed week"""
    names = {t['id']: t['name'] for t in teams}
    data: Dict[str, Dict[str, int]] = {}
    for week in weeks:
        if not week.completed:
            continue
        for ranking in rank_week(week.scores):
            data.setdefault(names.get(ranking.team_id, ranking.team_id), {})[f"Wk {week.week}"] = ranking.ranking_points
    return pd.DataFrame.from_dict(data, orient='index').fillna(0).astype(int)


class SeasonModule:
    def __init__(self, weeks: Optional[List[WeekResult]] = None, teams: Optional[List[Dict]] = None,
                 season_year: int = 2025):
        self.weeks = weeks if weeks is not None else SEASON_2025_WEEKS
        self.teams = teams if teams is not None else TEAMS
        self.season_year = season_year

    def render_week_detail(self):
        played = [w for w in self.weeks if w.completed]
        if not played:
            st.info("No weeks have been played yet.")
            return

        week_numbers = [w.week for w in played]
        selected = st.selectbox("Week", week_numbers, index=len(week_numbers) - 1)
        week = next(w for w in played if w.week == selected)
        names = {t['id']: t['name'] for t in self.teams}

        rows = [{
            'Finish': r.rank,
            'Team': names.get(r.team_id, r.team_id),
            'Score': r.score,
            'Ranking Pts': r.ranking_points,
        } for r in rank_week(week.scores)]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    def render_race_chart(self):
        """Cumulative standings points by week"""
        played = completed_weeks(self.weeks)
        if played == 0:
            return

        names = {t['id']: t['name'] for t in self.teams}
        fig = go.Figure()
        history: Dict[str, List[int]] = {}
        for week_number in range(1, played + 1):
            totals = accumulate_season(self.weeks, week_number)
            for team_id, total in totals.items():
                history.setdefault(team_id, []).append(total['total_points'])

        for team_id, points in history.items():
            fig.add_trace(go.Scatter(
                x=list(range(1, len(points) + 1)),
                y=points,
                mode='lines+markers',
                name=names.get(team_id, team_id),
            ))
        fig.update_layout(
            height=500,
            title="Standings Points Race",
            xaxis_title="Week",
            yaxis_title="Standings Points",
            hovermode='x unified',
        )
        st.plotly_chart(fig, use_container_width=True)

    def render_bracket_preview(self):
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataIntegrityWarning)
            ranked = season_standings(self.weeks, self.teams)
        if not ranked:
            return

        names = {t['id']: t['name'] for t in self.teams}
        bracket = seed_matchups([r.team_id for r in ranked])
        titles = {
            'championship': TIER_LABELS[ranked[0].tier],
            'consolation': "Consolation Bracket",
            'toilet_bowl': "The Toilet Bowl",
        }
        cols = st.columns(len(bracket))
        for col, (key, pairs) in zip(cols, bracket.items()):
            with col:
                st.markdown(f"**{titles[key]}**")
                for a, b in pairs:
                    st.write(f"{names.get(a, a)} vs {names.get(b, b)}")

    def render(self):
        """Main render function for the current season page"""
        st.title(f"{self.season_year} Season")
        played = completed_weeks(self.weeks)
        st.caption(f"Through week {played}")

        try:
            df = standings_with_movement(self.weeks, self.teams)
        except Exception as e:
            st.error(f"Error building season standings: {str(e)}")
            return

        st.dataframe(df.drop(columns=['Tied']), use_container_width=True, hide_index=True)

        st.markdown("---")
        self.render_bracket_preview()

        st.markdown("---")
        tab1, tab2, tab3 = st.tabs(["Week Detail", "Points Race", "Points Grid"])
        with tab1:
            self.render_week_detail()
        with tab2:
            self.render_race_chart()
        with tab3:
            st.dataframe(weekly_points_frame(self.weeks, self.teams), use_container_width=True)
