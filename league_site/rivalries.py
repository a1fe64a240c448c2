import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from league_site.models import Rivalry, RivalryMatchup

logger = logging.getLogger(__name__)


def head_to_head(rivalry: Rivalry) -> Tuple[int, int]:
    """(team1 wins, team2 wins) counted from matchup winners"""
    team1_wins = sum(1 for m in rivalry.matchups if m.winner == 'team1')
    team2_wins = sum(1 for m in rivalry.matchups if m.winner == 'team2')
    return team1_wins, team2_wins


def leader(rivalry: Rivalry) -> Optional[str]:
    """Governor leading the series, None when even"""
    team1_wins, team2_wins = head_to_head(rivalry)
    if team1_wins > team2_wins:
        return rivalry.team1_governor
    if team2_wins > team1_wins:
        return rivalry.team2_governor
    return None


def attach_matchups(rivalries: Iterable[Rivalry],
                    matchups: Iterable[RivalryMatchup]) -> List[Rivalry]:
    """Group matchups under their rivalry, newest season first"""
    by_rivalry: Dict[str, List[RivalryMatchup]] = {}
    for matchup in matchups:
        by_rivalry.setdefault(matchup.rivalry_id, []).append(matchup)

    rivalries = list(rivalries)
    known = {r.id for r in rivalries}
    orphans = [rid for rid in by_rivalry if rid not in known]
    if orphans:
        logger.warning(f"Matchups reference unknown rivalries: {', '.join(map(str, orphans))}")

    for rivalry in rivalries:
        rivalry.matchups = sorted(by_rivalry.get(rivalry.id, []), key=lambda m: m.season, reverse=True)
    return rivalries


class RivalriesModule:
    def __init__(self, db):
        self.db = db

    def get_rivalries(self) -> List[Rivalry]:
        rivalries = [Rivalry.from_row(row) for row in self.db.rivalries.get_all()]
        matchups = [RivalryMatchup.from_row(row) for row in self.db.rivalry_matchups.get_all()]
        return attach_matchups(rivalries, matchups)

    def render_rivalry(self, rivalry: Rivalry):
        st.header(rivalry.game_name)
        if rivalry.slogan:
            st.markdown(f"*{rivalry.slogan}*")

        team1_wins, team2_wins = head_to_head(rivalry)
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric(rivalry.team1_governor, team1_wins)
        with col2:
            st.metric("Trophy", rivalry.trophy_name or "-")
        with col3:
            st.metric(rivalry.team2_governor, team2_wins)

        lead = leader(rivalry)
        st.caption(f"{lead} leads the series" if lead else "Series is even")

        for paragraph in rivalry.origin_story:
            st.write(paragraph)

        if not rivalry.matchups:
            st.info("No matchups played yet.")
            return

        df = pd.DataFrame([{
            'Season': m.season,
            rivalry.team1_governor: m.team1_score,
            rivalry.team2_governor: m.team2_score,
            'Winner': rivalry.team1_governor if m.winner == 'team1' else rivalry.team2_governor,
        } for m in rivalry.matchups])
        st.dataframe(df, use_container_width=True, hide_index=True)

        seasons = [m.season for m in reversed(rivalry.matchups)]
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=seasons, y=[m.team1_score for m in reversed(rivalry.matchups)],
            mode='lines+markers', name=rivalry.team1_governor,
        ))
        fig.add_trace(go.Scatter(
            x=seasons, y=[m.team2_score for m in reversed(rivalry.matchups)],
            mode='lines+markers', name=rivalry.team2_governor,
        ))
        fig.update_layout(height=350, xaxis_title="Season", yaxis_title="Points")
        st.plotly_chart(fig, use_container_width=True)

    def render(self):
        """Main render function for rivalry week"""
        st.title("Rivalry Week")
        try:
            rivalries = self.get_rivalries()
        except Exception as e:
            st.error(f"Error loading rivalries: {str(e)}")
            return

        if not rivalries:
            st.info("No rivalries have been set up yet.")
            return

        for rivalry in rivalries:
            self.render_rivalry(rivalry)
            st.markdown("---")
