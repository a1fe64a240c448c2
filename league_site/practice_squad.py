import logging
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from league_site.auth import ANONYMOUS, Session, require_admin
from league_site.errors import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


MAX_PRACTICE_SQUAD = 3


def add_player(roster: List[Dict], name: str, salary: Optional[int]) -> List[Dict]:
    """Return a new roster with the player appended"""
    if len(roster) >= MAX_PRACTICE_SQUAD:
        raise ValidationError(f"Practice squad is full ({MAX_PRACTICE_SQUAD} players)")
    if not name or not name.strip():
        raise ValidationError("Player name is required")
    if salary is None:
        raise ValidationError("Salary is required")
    if salary < 0:
        raise ValidationError(f"Salary cannot be negative, got {salary}")
    return roster + [{'player_name': name.strip(), 'salary': int(salary)}]


def remove_player(roster: List[Dict], index: int) -> List[Dict]:
    if index < 0 or index >= len(roster):
        raise ValidationError(f"No practice squad slot {index}")
    return roster[:index] + roster[index + 1:]


def total_salary(roster: List[Dict]) -> int:
    return sum(p.get('salary') or 0 for p in roster)


def roster_rows(rosters: Dict[str, List[Dict]], team_names: Optional[Dict[str, str]] = None) -> List[Dict]:
    """Flatten team rosters to one display row per player"""
    team_names = team_names or {}
    rows = []
    for team_id, roster in rosters.items():
        for player in roster:
            rows.append({
                'Team': team_names.get(team_id, team_id),
                'Player': player['player_name'],
                'Salary': f"${player.get('salary') or 0}",
            })
    return rows


class PracticeSquadModule:
    def __init__(self, db):
        self.db = db

    def get_rosters(self) -> Dict[str, List[Dict]]:
        rosters: Dict[str, List[Dict]] = {}
        for row in self.db.practice_squad.get_all():
            rosters.setdefault(row['team_id'], []).append(row)
        return rosters

    def add(self, session: Session, team_id: str, name: str, salary: Optional[int]) -> Dict:
        require_admin(session)
        roster = self.get_rosters().get(team_id, [])
        # raises before anything is written
        add_player(roster, name, salary)
        logger.info(f"{session.user_email} added {name.strip()} to practice squad {team_id}")
        return self.db.practice_squad.create({
            'team_id': team_id,
            'player_name': name.strip(),
            'salary': int(salary),
        })

    def drop(self, session: Session, team_id: str, player_name: str) -> None:
        """Remove a player from a team's squad, matching the name case-insensitively"""
        require_admin(session)
        roster = self.get_rosters().get(team_id, [])
        wanted = (player_name or '').strip().lower()
        for index, player in enumerate(roster):
            if player['player_name'].lower() == wanted:
                remove_player(roster, index)
                self.db.practice_squad.delete(player['id'])
                logger.info(f"{session.user_email} dropped {player['player_name']} from practice squad {team_id}")
                return
        raise NotFoundError('practice_squad', player_name)

    def render_add_form(self, session: Session, team_names: Dict[str, str]):
        st.subheader("Add Player")
        with st.form("practice_squad_add"):
            team_id = st.selectbox("Team", list(team_names), format_func=team_names.get)
            name = st.text_input("Player name")
            salary = st.number_input("Salary", min_value=0, value=1, step=1)
            submitted = st.form_submit_button("Add")

        if submitted:
            try:
                self.add(session, team_id, name, int(salary))
                st.success(f"Added {name}")
                st.rerun()
            except (ValidationError, AuthorizationError) as e:
                st.error(str(e))

    def render_drop_form(self, session: Session, rosters: Dict[str, List[Dict]], team_names: Dict[str, str]):
        st.subheader("Drop Player")
        with st.form("practice_squad_drop"):
            team_id = st.selectbox("Team", list(rosters), format_func=lambda t: team_names.get(t, t))
            name = st.text_input("Player name", key="practice_squad_drop_name")
            submitted = st.form_submit_button("Drop")

        if submitted:
            try:
                self.drop(session, team_id, name)
                st.success(f"Dropped {name}")
                st.rerun()
            except NotFoundError:
                st.error(f"{name} is not on that practice squad")
            except AuthorizationError as e:
                st.error(str(e))

    def render(self, session: Session = ANONYMOUS):
        """Main render function for practice squads"""
        st.title("Practice Squads")
        st.caption(f"Each team may stash up to {MAX_PRACTICE_SQUAD} players.")

        teams = self.db.teams.get_all()
        team_names = {t['id']: t['name'] for t in teams}
        rosters = self.get_rosters()

        rows = roster_rows(rosters, team_names)
        if rows:
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
        else:
            st.info("No practice squad players yet.")

        for team_id, roster in rosters.items():
            st.caption(f"{team_names.get(team_id, team_id)}: {len(roster)}/{MAX_PRACTICE_SQUAD} "
                       f"players, ${total_salary(roster)}")

        if not session.is_admin or not teams:
            return

        st.markdown("---")
        col1, col2 = st.columns(2)
        with col1:
            self.render_add_form(session, team_names)
        with col2:
            if rosters:
                self.render_drop_form(session, rosters, team_names)
