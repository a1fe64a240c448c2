import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

import pandas as pd
import streamlit as st

from league_site.content import page_intro
from league_site.models import Coach

logger = logging.getLogger(__name__)


DEFAULT_INTRO = "The complete head coaching history for every franchise."


@dataclass
class TeamCoaches:
    team_id: str
    team_name: str
    coaches: List[Coach]


def coaches_by_team(coaches: Iterable[Coach], team_names: Dict[str, str]) -> List[TeamCoaches]:
    """
    Group coaches under their franchise, teams sorted by name.

    Coaches keep their display order within a team. Coaches with no team,
    or a team that no longer exists, are left out.
    """
    grouped: Dict[str, List[Coach]] = {}
    for coach in sorted(coaches, key=lambda c: (c.display_order, c.tenure_start)):
        if coach.team_id is None or coach.team_id not in team_names:
            continue
        grouped.setdefault(coach.team_id, []).append(coach)

    result = [TeamCoaches(team_id, team_names[team_id], members) for team_id, members in grouped.items()]
    result.sort(key=lambda t: t.team_name)
    return result


def coach_rows(coaches: Iterable[Coach]) -> List[Dict]:
    rows = []
    for coach in coaches:
        playoff_games = coach.playoff_wins + coach.playoff_losses
        rows.append({
            'Coach': coach.name,
            'Tenure': coach.tenure,
            'Record': f"{coach.wins}-{coach.losses}",
            'Win %': f"{coach.win_pct * 100:.1f}%",
            'Playoffs': f"{coach.playoff_wins}-{coach.playoff_losses}" if playoff_games else '-',
            'Titles': coach.championships,
        })
    return rows


class CoachingModule:
    def __init__(self, db):
        self.db = db

    def get_team_coaches(self) -> List[TeamCoaches]:
        team_names = {t['id']: t['name'] for t in self.db.teams.get_all()}
        coaches = [Coach.from_row(row) for row in self.db.coaches.get_all()]
        return coaches_by_team(coaches, team_names)

    def render(self):
        """Main render function for the coaching carousel"""
        st.title("Coaching Carousel")
        st.caption(page_intro(self.db, 'coaching-carousel', DEFAULT_INTRO))

        try:
            teams = self.get_team_coaches()
        except Exception as e:
            st.error(f"Error loading coaching data: {str(e)}")
            return

        if not teams:
            st.info("No coaching data yet. Coaches can be added from the Admin page.")
            return

        for team in teams:
            st.subheader(team.team_name)
            current = [c for c in team.coaches if c.is_current]
            if current:
                st.caption(f"Current: {', '.join(c.name for c in current)}")
            st.dataframe(pd.DataFrame(coach_rows(team.coaches)), use_container_width=True, hide_index=True)
            for coach in team.coaches:
                if coach.tenure_summary:
                    st.markdown(f"**{coach.name}**: \"{coach.tenure_summary}\"")
