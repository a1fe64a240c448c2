import logging
from typing import Any, Dict, Optional

import streamlit as st

from league_site.auth import Session, require_admin
from league_site.content import render_page_copy_editor
from league_site.database import TABLE_COLUMNS
from league_site.errors import LeagueError

logger = logging.getLogger(__name__)


def coerce_value(raw: Optional[str]) -> Any:
    """Form text to a storable value: blank -> None, numeric text -> number"""
    if raw is None:
        return None
    text = raw.strip()
    if text == "":
        return None
    if text.lower() in ("true", "false"):
        return text.lower() == "true"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def form_fields(raw: Dict[str, str], keep_blank: bool = False) -> Dict[str, Any]:
    """Coerce submitted form values, dropping blanks unless asked to keep them"""
    fields = {}
    for column, value in raw.items():
        coerced = coerce_value(value)
        if coerced is None and not keep_blank:
            continue
        fields[column] = coerced
    return fields


def create_record(db, session: Session, table: str, raw: Dict[str, str]) -> Dict:
    require_admin(session)
    return db.table(table).create(form_fields(raw, keep_blank=True))


def update_record(db, session: Session, table: str, record_id: str, raw: Dict[str, str]) -> Dict:
    require_admin(session)
    return db.table(table).update(record_id, form_fields(raw))


def delete_record(db, session: Session, table: str, record_id: str) -> None:
    require_admin(session)
    db.table(table).delete(record_id)


class AdminModule:
    def __init__(self, db):
        self.db = db

    def render_create(self, session: Session, table: str):
        with st.form(f"create_{table}"):
            raw = {column: st.text_input(column, key=f"create_{table}_{column}")
                   for column in TABLE_COLUMNS[table]}
            submitted = st.form_submit_button("Create")
        if submitted:
            try:
                record = create_record(self.db, session, table, raw)
                st.success(f"Created {record['id']}")
            except LeagueError as e:
                st.error(str(e))

    def render_update(self, session: Session, table: str, record_ids):
        record_id = st.selectbox("Record", record_ids, key=f"update_{table}_id")
        with st.form(f"update_{table}"):
            st.caption("Blank fields are left unchanged.")
            raw = {column: st.text_input(column, key=f"update_{table}_{column}")
                   for column in TABLE_COLUMNS[table]}
            submitted = st.form_submit_button("Update")
        if submitted:
            try:
                update_record(self.db, session, table, record_id, raw)
                st.success(f"Updated {record_id}")
            except LeagueError as e:
                st.error(str(e))

    def render_delete(self, session: Session, table: str, record_ids):
        record_id = st.selectbox("Record", record_ids, key=f"delete_{table}_id")
        if st.button("Delete", key=f"delete_{table}"):
            try:
                delete_record(self.db, session, table, record_id)
                st.success(f"Deleted {record_id}")
                st.rerun()
            except LeagueError as e:
                st.error(str(e))

    def render_tables(self, session: Session):
        table = st.selectbox("Table", sorted(TABLE_COLUMNS))

        df = self.db.table(table).to_frame()
        st.metric("Records", len(df))
        st.dataframe(df, use_container_width=True, hide_index=True)

        record_ids = df['id'].tolist() if not df.empty else []
        tab1, tab2, tab3 = st.tabs(["Create", "Update", "Delete"])
        with tab1:
            self.render_create(session, table)
        with tab2:
            if record_ids:
                self.render_update(session, table, record_ids)
            else:
                st.info("Nothing to update.")
        with tab3:
            if record_ids:
                self.render_delete(session, table, record_ids)
            else:
                st.info("Nothing to delete.")

    def render(self, session: Session):
        """Main render function for the admin panel"""
        st.title("Admin")
        if not session.is_admin:
            st.warning("Sign in with an admin account to manage league data.")
            return

        st.caption(f"Signed in as {session.user_email}")
        mode = st.radio("Manage", ["Tables", "Page Copy"], horizontal=True)
        if mode == "Page Copy":
            render_page_copy_editor(self.db, session)
        else:
            self.render_tables(session)
