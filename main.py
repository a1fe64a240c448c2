import logging

import streamlit as st

from league_site import rulebook
from league_site.admin import AdminModule
from league_site.auth import ANONYMOUS, Session, check_site_password, sign_in
from league_site.coaches import CoachingModule
from league_site.config import LeagueConfig
from league_site.content import DynamicPageModule, published_pages
from league_site.database import LeagueDatabase
from league_site.draft import DraftBoardModule
from league_site.errors import AuthorizationError
from league_site.history import HistoryModule
from league_site.models import Season
from league_site.playoffs import PlayoffsModule
from league_site.practice_squad import PracticeSquadModule
from league_site.recaps import RecapsModule
from league_site.rivalries import RivalriesModule
from league_site.salaries import SalariesModule
from league_site.season import SeasonModule
from league_site.standings import StandingsModule
from league_site.team_profile import TeamProfileModule

# Page configuration
st.set_page_config(
    page_title="Men's League Fantasy Football",
    page_icon="🏈",
    layout="wide",
    initial_sidebar_state="expanded"
)

logger = logging.getLogger(__name__)

PAGES = [
    "🏆 Standings",
    "📅 Current Season",
    "📜 History",
    "🏈 Team Profiles",
    "📰 Recaps",
    "🎖️ Coaching Carousel",
    "⚔️ Rivalry Week",
    "💰 Salaries",
    "🧢 Practice Squads",
    "🎓 Rookie Draft",
    "📚 Constitution",
    "🔧 Admin",
]


class LeagueSite:
    def __init__(self, config: LeagueConfig):
        self.config = config
        self.db = LeagueDatabase(config.db_path)
        self.init_session_state()

    def init_session_state(self):
        """Initialize session state variables"""
        if 'unlocked' not in st.session_state:
            st.session_state.unlocked = False
        if 'session' not in st.session_state:
            st.session_state.session = ANONYMOUS

    @property
    def session(self) -> Session:
        return st.session_state.session

    def render_password_gate(self) -> bool:
        """Shared site password. Returns True once unlocked."""
        if st.session_state.unlocked:
            return True

        st.title("🏈 Men's League")
        with st.form("site_password"):
            password = st.text_input("League password", type="password")
            submitted = st.form_submit_button("Enter")

        if submitted:
            if check_site_password(self.config, password):
                st.session_state.unlocked = True
                st.rerun()
            else:
                st.error("Wrong password")
        return False

    def render_sign_in(self):
        with st.sidebar.expander("🔐 Commissioner Sign-In"):
            if self.session.signed_in:
                st.write(self.session.user_email)
                if st.button("Sign out"):
                    st.session_state.session = ANONYMOUS
                    st.rerun()
                return

            with st.form("sign_in"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                submitted = st.form_submit_button("Sign in")

            if submitted:
                try:
                    st.session_state.session = sign_in(self.db, self.config, email, password)
                    st.rerun()
                except AuthorizationError as e:
                    st.error(str(e))

    def select_season(self):
        """Season picker, defaulting to the active season"""
        seasons = [Season.from_row(row) for row in self.db.seasons.get_all()]
        if not seasons:
            return None, self.config.current_season

        years = [s.year for s in seasons]
        active = next((s for s in seasons if s.is_active), seasons[0])

        year = st.sidebar.selectbox("📅 Season", years, index=years.index(active.year))
        season = next(s for s in seasons if s.year == year)
        return season.id, year

    def render_sidebar(self):
        st.sidebar.title("🏈 Men's League")

        extra_pages = {f"📄 {p.title}": p.slug for p in published_pages(DynamicPageModule(self.db).get_pages())}
        page = st.sidebar.radio("Page", PAGES + list(extra_pages))
        season_id, season_year = self.select_season()
        self.render_sign_in()

        with st.sidebar.expander("📊 Database Info"):
            for table in ('teams', 'seasons', 'regular_season_standings', 'playoff_outcomes',
                          'player_salaries', 'rivalries'):
                st.info(f"**{table.replace('_', ' ').title()}**: {self.db.count(table):,}")

        return page, extra_pages.get(page), season_id, season_year

    def render_constitution(self):
        st.subheader("League Constitution")
        st.markdown(rulebook.RULEBOOK)

        st.markdown("### 📥 Download Constitution")
        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                label="📄 Download as DOCX",
                data=rulebook.rulebook_docx(),
                file_name="league_constitution.docx",
                mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document"
            )
        with col2:
            st.download_button(
                label="📕 Download as PDF",
                data=rulebook.rulebook_pdf(),
                file_name="league_constitution.pdf",
                mime="application/pdf"
            )

    def run(self):
        """Main site execution"""
        if not self.render_password_gate():
            return

        page, slug, season_id, season_year = self.render_sidebar()

        if slug is not None:
            DynamicPageModule(self.db).render(slug, self.session)
        elif page == "🏆 Standings":
            if season_id is None:
                st.warning("No seasons loaded. Run `python seed_league_db.py` first.")
                return
            StandingsModule(self.db).render(season_id, season_year)
            st.markdown("---")
            PlayoffsModule(self.db).render(season_id, season_year)
        elif page == "📅 Current Season":
            SeasonModule(season_year=self.config.current_season).render()
        elif page == "📜 History":
            HistoryModule(self.db).render()
        elif page == "🏈 Team Profiles":
            TeamProfileModule(self.db).render()
        elif page == "📰 Recaps":
            RecapsModule(self.db).render(self.session)
        elif page == "🎖️ Coaching Carousel":
            CoachingModule(self.db).render()
        elif page == "⚔️ Rivalry Week":
            RivalriesModule(self.db).render()
        elif page == "💰 Salaries":
            SalariesModule(self.db).render()
        elif page == "🧢 Practice Squads":
            PracticeSquadModule(self.db).render(self.session)
        elif page == "🎓 Rookie Draft":
            DraftBoardModule(self.db, self.config.draft_year).render(self.session)
        elif page == "📚 Constitution":
            self.render_constitution()
        elif page == "🔧 Admin":
            AdminModule(self.db).render(self.session)


def main():
    """Main entry point"""
    config = LeagueConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    site = LeagueSite(config)
    site.run()


if __name__ == "__main__":
    main()
