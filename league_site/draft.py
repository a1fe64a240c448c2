import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd
import streamlit as st

from league_site.auth import Session, require_admin
from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.models import DraftPick, RookiePlayer

logger = logging.getLogger(__name__)


DRAFT_ROUNDS = 3
PICKS_PER_ROUND = 10


def initial_picks(draft_year: int) -> List[Dict]:
    """Empty pick rows, every round and slot, no team or player yet"""
    return [
        {
            'draft_year': draft_year,
            'round': round_number,
            'pick_number': pick_number,
            'team_id': None,
            'selected_player_id': None,
        }
        for round_number in range(1, DRAFT_ROUNDS + 1)
        for pick_number in range(1, PICKS_PER_ROUND + 1)
    ]


def initialize_draft(db, draft_year: int) -> int:
    """Create the year's picks unless they already exist. Returns picks created."""
    existing = db.draft_picks.filter(draft_year=draft_year)
    if existing:
        logger.info(f"Draft {draft_year} already has {len(existing)} picks")
        return 0

    picks = initial_picks(draft_year)
    for pick in picks:
        db.draft_picks.create(pick)
    logger.info(f"Initialized {len(picks)} picks for the {draft_year} draft")
    return len(picks)


def available_players(pool: Iterable[RookiePlayer], picks: Iterable[DraftPick],
                      position: Optional[str] = None) -> List[RookiePlayer]:
    taken = {p.selected_player_id for p in picks if p.selected_player_id}
    players = [p for p in pool if p.id not in taken]
    if position:
        players = [p for p in players if p.position == position]
    return players


def picks_by_round(picks: Iterable[DraftPick]) -> Dict[int, List[DraftPick]]:
    rounds: Dict[int, List[DraftPick]] = {}
    for pick in sorted(picks, key=lambda p: (p.round, p.pick_number)):
        rounds.setdefault(pick.round, []).append(pick)
    return rounds


def pick_label(pick: DraftPick, team_names: Dict[str, str],
               players: Optional[Dict[str, RookiePlayer]] = None) -> str:
    """'1.03 Team Name', plus the selected player when there is one"""
    label = f"{pick.round}.{pick.pick_number:02d} {team_names.get(pick.team_id, 'TBD')}"
    player = (players or {}).get(pick.selected_player_id)
    return f"{label}: {player.player_name}" if player else label


def assign_player(db, session: Session, pick_id: str, player_id: str) -> Dict:
    require_admin(session)
    pick = DraftPick.from_row(db.draft_picks.get_by_id(pick_id))
    player = RookiePlayer.from_row(db.rookie_pool.get_by_id(player_id))

    if pick.selected_player_id:
        raise ValidationError(f"Round {pick.round} pick {pick.pick_number} is already used")
    if db.draft_picks.filter(selected_player_id=player_id):
        raise ValidationError(f"{player.player_name} has already been drafted")

    logger.info(f"{session.user_email} drafted {player.player_name} at {pick.round}.{pick.pick_number}")
    return db.draft_picks.update(pick_id, {'selected_player_id': player_id})


def clear_pick(db, session: Session, pick_id: str) -> Dict:
    require_admin(session)
    return db.draft_picks.update(pick_id, {'selected_player_id': None})


def set_pick_team(db, session: Session, pick_id: str, team_id: Optional[str]) -> Dict:
    require_admin(session)
    if team_id is not None:
        db.teams.get_by_id(team_id)
    return db.draft_picks.update(pick_id, {'team_id': team_id})


class DraftBoardModule:
    def __init__(self, db, draft_year: int):
        self.db = db
        self.draft_year = draft_year

    def get_board(self):
        picks = [DraftPick.from_row(row) for row in self.db.draft_picks.filter(draft_year=self.draft_year)]
        pool = [RookiePlayer.from_row(row) for row in self.db.rookie_pool.filter(draft_year=self.draft_year)]
        return picks, pool

    def render_board(self, picks: List[DraftPick], pool: List[RookiePlayer], team_names: Dict[str, str]):
        players = {p.id: p for p in pool}
        for round_number, round_picks in picks_by_round(picks).items():
            st.subheader(f"Round {round_number}")
            rows = []
            for pick in round_picks:
                player = players.get(pick.selected_player_id)
                rows.append({
                    'Pick': f"{pick.round}.{pick.pick_number:02d}",
                    'Team': team_names.get(pick.team_id, 'TBD'),
                    'Player': player.player_name if player else '',
                    'Pos': player.position if player else '',
                    'College': (player.college or '') if player else '',
                })
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    def render_admin_controls(self, session: Session, picks: List[DraftPick],
                              pool: List[RookiePlayer], team_names: Dict[str, str]):
        st.subheader("Commissioner Controls")
        players = {p.id: p for p in pool}

        def label(p: DraftPick) -> str:
            return pick_label(p, team_names, players)

        open_picks = [p for p in picks if not p.selected_player_id]
        remaining = available_players(pool, picks)
        if open_picks and remaining:
            with st.form("draft_assign"):
                pick = st.selectbox("Pick", open_picks, format_func=label)
                player = st.selectbox(
                    "Player", remaining,
                    format_func=lambda p: f"{p.player_name} ({p.position})",
                )
                submitted = st.form_submit_button("Make Pick")

            if submitted:
                try:
                    assign_player(self.db, session, pick.id, player.id)
                    st.success(f"{player.player_name} selected")
                    st.rerun()
                except (ValidationError, AuthorizationError) as e:
                    st.error(str(e))
        else:
            st.caption("No open picks or no players left.")

        col1, col2 = st.columns(2)
        with col1:
            with st.form("draft_set_team"):
                pick = st.selectbox("Pick", picks, format_func=label, key="draft_set_team_pick")
                team_id = st.selectbox("Owned by", [None] + list(team_names),
                                       format_func=lambda t: team_names.get(t, 'TBD'))
                submitted = st.form_submit_button("Set Team")
            if submitted:
                try:
                    set_pick_team(self.db, session, pick.id, team_id)
                    st.rerun()
                except (NotFoundError, AuthorizationError) as e:
                    st.error(str(e))

        used_picks = [p for p in picks if p.selected_player_id]
        with col2:
            if not used_picks:
                return
            with st.form("draft_clear"):
                pick = st.selectbox("Pick", used_picks, format_func=label, key="draft_clear_pick")
                submitted = st.form_submit_button("Clear Selection")
            if submitted:
                try:
                    clear_pick(self.db, session, pick.id)
                    st.rerun()
                except AuthorizationError as e:
                    st.error(str(e))

    def render(self, session: Session):
        """Main render function for the rookie draft board"""
        st.title(f"{self.draft_year} Rookie Draft")
        team_names = {t['id']: t['name'] for t in self.db.teams.get_all()}

        picks, pool = self.get_board()
        if not picks:
            st.info("The draft board has not been set up yet.")
            if session.is_admin and st.button("Initialize Draft"):
                initialize_draft(self.db, self.draft_year)
                st.rerun()
            return

        tab1, tab2 = st.tabs(["Board", "Available Players"])
        with tab1:
            self.render_board(picks, pool, team_names)
        with tab2:
            positions = sorted({p.position for p in pool if p.position})
            position = st.selectbox("Position", ["All"] + positions)
            remaining = available_players(pool, picks, None if position == "All" else position)
            st.dataframe(pd.DataFrame([{
                'Player': p.player_name,
                'Pos': p.position,
                'College': p.college or '',
                'Notes': p.notes or '',
            } for p in remaining]), use_container_width=True, hide_index=True)

        if session.is_admin:
            st.markdown("---")
            self.render_admin_controls(session, picks, pool, team_names)
