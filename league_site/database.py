import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd

from league_site.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


# Column lists per table. id/created_at/updated_at are managed here.
TABLE_COLUMNS = {
    'teams': ['name', 'owner_name'],
    'seasons': ['year', 'is_active'],
    'regular_season_standings': [
        'season_id', 'team_id', 'rank', 'points_accumulated', 'wins', 'losses',
        'winning_percentage', 'total_points_for', 'average_ppw', 'median_ppw',
        'average_finish'
    ],
    'playoff_outcomes': [
        'season_id', 'team_id', 'rank', 'semifinal_score', 'is_finalist', 'finals_score'
    ],
    'players': ['first_name', 'last_name', 'full_name', 'position'],
    'player_salaries': [
        'player_id', 'team_id', 'number', 'franchise_tag', 'contract_year',
        'rookie_draft_round', 'acquired_via_waivers', 'salary_2025', 'salary_2026',
        'salary_2027', 'salary_2028', 'salary_2029'
    ],
    'media': [
        'filename', 'original_filename', 'mime_type', 'size_bytes', 'url',
        'alt_text', 'uploaded_by'
    ],
    'page_content': ['page_slug', 'section_key', 'content', 'content_type', 'display_order'],
    'pages': ['slug', 'title', 'content', 'template', 'published'],
    'rivalries': [
        'game_name', 'slogan', 'trophy_name', 'team1_governor', 'team2_governor',
        'origin_story'
    ],
    'rivalry_matchups': ['rivalry_id', 'season', 'team1_score', 'team2_score', 'winner'],
    'rookie_pool': ['draft_year', 'player_name', 'position', 'college', 'notes'],
    'draft_picks': ['draft_year', 'round', 'pick_number', 'team_id', 'selected_player_id'],
    'practice_squad': ['team_id', 'player_name', 'salary'],
    'user_roles': ['user_email', 'role'],
    'blog_posts': [
        'title', 'slug', 'content', 'excerpt', 'season_year', 'week_number', 'published',
        'published_at', 'author_email'
    ],
    'coaches': [
        'team_id', 'name', 'photo_url', 'tenure_start', 'tenure_end', 'tenure_summary', 'wins',
        'losses', 'playoff_wins', 'playoff_losses', 'championships', 'is_current', 'display_order'
    ],
}

DEFAULT_ORDER = {
    'teams': 'name',
    'seasons': 'year DESC',
    'regular_season_standings': '"rank"',
    'playoff_outcomes': '"rank"',
    'players': 'last_name',
    'player_salaries': 'number',
    'media': 'created_at DESC',
    'page_content': 'display_order',
    'pages': 'title',
    'rivalries': 'game_name',
    'rivalry_matchups': 'season DESC',
    'rookie_pool': 'position, player_name',
    'draft_picks': 'round, pick_number',
    'practice_squad': 'created_at',
    'user_roles': 'user_email',
    'blog_posts': 'created_at DESC',
    'coaches': 'display_order, tenure_start',
}

SCHEMA = [
    '''
    CREATE TABLE IF NOT EXISTS teams (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        owner_name TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS seasons (
        id TEXT PRIMARY KEY,
        year INTEGER NOT NULL UNIQUE,
        is_active BOOLEAN DEFAULT 0,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS regular_season_standings (
        id TEXT PRIMARY KEY,
        season_id TEXT NOT NULL,
        team_id TEXT NOT NULL,
        "rank" INTEGER NOT NULL,
        points_accumulated REAL,
        wins INTEGER,
        losses INTEGER,
        winning_percentage REAL,
        total_points_for REAL,
        average_ppw REAL,
        median_ppw REAL,
        average_finish REAL,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (season_id) REFERENCES seasons(id),
        FOREIGN KEY (team_id) REFERENCES teams(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS playoff_outcomes (
        id TEXT PRIMARY KEY,
        season_id TEXT NOT NULL,
        team_id TEXT NOT NULL,
        "rank" INTEGER NOT NULL,
        semifinal_score REAL,
        is_finalist BOOLEAN DEFAULT 0,
        finals_score REAL,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (season_id) REFERENCES seasons(id),
        FOREIGN KEY (team_id) REFERENCES teams(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS players (
        id TEXT PRIMARY KEY,
        first_name TEXT,
        last_name TEXT,
        full_name TEXT,
        position TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS player_salaries (
        id TEXT PRIMARY KEY,
        player_id TEXT NOT NULL,
        team_id TEXT, -- NULL means free agent
        number INTEGER,
        franchise_tag BOOLEAN DEFAULT 0,
        contract_year TEXT,
        rookie_draft_round TEXT,
        acquired_via_waivers BOOLEAN DEFAULT 0,
        salary_2025 TEXT,
        salary_2026 TEXT,
        salary_2027 TEXT,
        salary_2028 TEXT,
        salary_2029 TEXT,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (player_id) REFERENCES players(id),
        FOREIGN KEY (team_id) REFERENCES teams(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS media (
        id TEXT PRIMARY KEY,
        filename TEXT NOT NULL,
        original_filename TEXT,
        mime_type TEXT,
        size_bytes INTEGER,
        url TEXT,
        alt_text TEXT,
        uploaded_by TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS page_content (
        id TEXT PRIMARY KEY,
        page_slug TEXT NOT NULL,
        section_key TEXT NOT NULL,
        content TEXT,
        content_type TEXT DEFAULT 'text', -- text, html, list
        display_order INTEGER DEFAULT 0,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS pages (
        id TEXT PRIMARY KEY,
        slug TEXT NOT NULL UNIQUE,
        title TEXT NOT NULL,
        content TEXT,
        template TEXT,
        published BOOLEAN DEFAULT 0,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS rivalries (
        id TEXT PRIMARY KEY,
        game_name TEXT NOT NULL,
        slogan TEXT,
        trophy_name TEXT,
        team1_governor TEXT NOT NULL,
        team2_governor TEXT NOT NULL,
        origin_story TEXT, -- paragraphs separated by blank lines
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS rivalry_matchups (
        id TEXT PRIMARY KEY,
        rivalry_id TEXT NOT NULL,
        season INTEGER NOT NULL,
        team1_score REAL,
        team2_score REAL,
        winner TEXT CHECK (winner IN ('team1', 'team2')),
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (rivalry_id) REFERENCES rivalries(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS rookie_pool (
        id TEXT PRIMARY KEY,
        draft_year INTEGER NOT NULL,
        player_name TEXT NOT NULL,
        position TEXT,
        college TEXT,
        notes TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS draft_picks (
        id TEXT PRIMARY KEY,
        draft_year INTEGER NOT NULL,
        round INTEGER NOT NULL,
        pick_number INTEGER NOT NULL,
        team_id TEXT,
        selected_player_id TEXT UNIQUE,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (team_id) REFERENCES teams(id),
        FOREIGN KEY (selected_player_id) REFERENCES rookie_pool(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS practice_squad (
        id TEXT PRIMARY KEY,
        team_id TEXT NOT NULL,
        player_name TEXT NOT NULL,
        salary INTEGER,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (team_id) REFERENCES teams(id)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS user_roles (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        role TEXT NOT NULL,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS blog_posts (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        slug TEXT NOT NULL UNIQUE,
        content TEXT,
        excerpt TEXT,
        season_year INTEGER,
        week_number INTEGER,
        published BOOLEAN DEFAULT 0,
        published_at TEXT,
        author_email TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS coaches (
        id TEXT PRIMARY KEY,
        team_id TEXT,
        name TEXT NOT NULL,
        photo_url TEXT,
        tenure_start INTEGER NOT NULL,
        tenure_end INTEGER, -- NULL while still coaching
        tenure_summary TEXT,
        wins INTEGER DEFAULT 0,
        losses INTEGER DEFAULT 0,
        playoff_wins INTEGER DEFAULT 0,
        playoff_losses INTEGER DEFAULT 0,
        championships INTEGER DEFAULT 0,
        is_current BOOLEAN DEFAULT 0,
        display_order INTEGER DEFAULT 0,
        created_at TEXT,
        updated_at TEXT,
        FOREIGN KEY (team_id) REFERENCES teams(id)
    )
    ''',
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_standings_season ON regular_season_standings(season_id)",
    "CREATE INDEX IF NOT EXISTS idx_standings_team ON regular_season_standings(team_id)",
    "CREATE INDEX IF NOT EXISTS idx_playoffs_season ON playoff_outcomes(season_id)",
    "CREATE INDEX IF NOT EXISTS idx_salaries_team ON player_salaries(team_id)",
    "CREATE INDEX IF NOT EXISTS idx_page_content_slug ON page_content(page_slug)",
    "CREATE INDEX IF NOT EXISTS idx_matchups_rivalry ON rivalry_matchups(rivalry_id)",
    "CREATE INDEX IF NOT EXISTS idx_draft_picks_year ON draft_picks(draft_year)",
    "CREATE INDEX IF NOT EXISTS idx_rookie_pool_year ON rookie_pool(draft_year)",
    "CREATE INDEX IF NOT EXISTS idx_coaches_team ON coaches(team_id)",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TableApi:
    """CRUD wrapper around a single table"""

    def __init__(self, db: "LeagueDatabase", table: str):
        self.db = db
        self.table = table
        self.columns = TABLE_COLUMNS[table]
        self.order_by = DEFAULT_ORDER.get(table, 'created_at')

    def _check_columns(self, names):
        unknown = [name for name in names if name not in self.columns]
        if unknown:
            raise ValidationError(f"Unknown column(s) for {self.table}: {', '.join(unknown)}")

    def _select(self, where: str = "", params: tuple = ()) -> List[Dict[str, Any]]:
        query = f"SELECT * FROM {self.table} {where} ORDER BY {self.order_by}"
        with self.db.transaction() as conn:
            rows = conn.execute(query, params).fetchall()
        return [dict(row) for row in rows]

    def get_all(self) -> List[Dict[str, Any]]:
        return self._select()

    def get_by_id(self, record_id: str) -> Dict[str, Any]:
        rows = self._select("WHERE id = ?", (record_id,))
        if not rows:
            raise NotFoundError(self.table, record_id)
        return rows[0]

    def get_by_season(self, season_id: str) -> List[Dict[str, Any]]:
        if 'season_id' not in self.columns:
            raise ValidationError(f"{self.table} is not scoped by season")
        return self._select("WHERE season_id = ?", (season_id,))

    def filter(self, **equals) -> List[Dict[str, Any]]:
        """Equality filter on known columns"""
        if not equals:
            return self.get_all()
        self._check_columns(equals.keys())
        clauses = []
        params = []
        for column, value in equals.items():
            if value is None:
                clauses.append(f'"{column}" IS NULL')
            else:
                clauses.append(f'"{column}" = ?')
                params.append(value)
        return self._select("WHERE " + " AND ".join(clauses), tuple(params))

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._check_columns(fields.keys())
        record_id = uuid.uuid4().hex
        now = _now()
        values = dict(fields, id=record_id, created_at=now, updated_at=now)
        columns = ", ".join(f'"{name}"' for name in values)
        placeholders = ", ".join("?" for _ in values)

        with self.db.transaction() as conn:
            conn.execute(
                f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                tuple(values.values())
            )
        logger.info(f"Created {self.table} record {record_id}")
        return self.get_by_id(record_id)

    def update(self, record_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        self._check_columns(partial.keys())
        values = dict(partial, updated_at=_now())
        assignments = ", ".join(f'"{name}" = ?' for name in values)

        with self.db.transaction() as conn:
            cursor = conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                tuple(values.values()) + (record_id,)
            )
            if cursor.rowcount == 0:
                raise NotFoundError(self.table, record_id)
        logger.info(f"Updated {self.table} record {record_id}")
        return self.get_by_id(record_id)

    def delete(self, record_id: str) -> None:
        with self.db.transaction() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(self.table, record_id)
        logger.info(f"Deleted {self.table} record {record_id}")

    def to_frame(self) -> pd.DataFrame:
        """Whole table as a DataFrame, for display"""
        conn = self.db.connect()
        try:
            return pd.read_sql_query(
                f"SELECT * FROM {self.table} ORDER BY {self.order_by}", conn
            )
        finally:
            conn.close()


class SeasonsApi(TableApi):

    def get_active(self) -> Dict[str, Any]:
        rows = self._select("WHERE is_active = 1")
        if not rows:
            raise NotFoundError(self.table)
        if len(rows) > 1:
            logger.warning(f"{len(rows)} seasons are flagged active, using {rows[0]['year']}")
        return rows[0]

    def get_by_year(self, year: int) -> Dict[str, Any]:
        rows = self._select("WHERE year = ?", (year,))
        if not rows:
            raise NotFoundError(self.table, str(year))
        return rows[0]

    def set_active(self, season_id: str) -> Dict[str, Any]:
        """Flag one season active and clear the flag on every other season"""
        self.get_by_id(season_id)
        with self.db.transaction() as conn:
            conn.execute("UPDATE seasons SET is_active = 0, updated_at = ? WHERE id != ?",
                         (_now(), season_id))
            conn.execute("UPDATE seasons SET is_active = 1, updated_at = ? WHERE id = ?",
                         (_now(), season_id))
        return self.get_by_id(season_id)


class LeagueDatabase:
    def __init__(self, db_path: str = "league_data.db"):
        self.db_path = db_path
        self.init_database()

        self.teams = TableApi(self, 'teams')
        self.seasons = SeasonsApi(self, 'seasons')
        self.standings = TableApi(self, 'regular_season_standings')
        self.playoffs = TableApi(self, 'playoff_outcomes')
        self.players = TableApi(self, 'players')
        self.salaries = TableApi(self, 'player_salaries')
        self.media = TableApi(self, 'media')
        self.page_content = TableApi(self, 'page_content')
        self.pages = TableApi(self, 'pages')
        self.rivalries = TableApi(self, 'rivalries')
        self.rivalry_matchups = TableApi(self, 'rivalry_matchups')
        self.rookie_pool = TableApi(self, 'rookie_pool')
        self.draft_picks = TableApi(self, 'draft_picks')
        self.practice_squad = TableApi(self, 'practice_squad')
        self.user_roles = TableApi(self, 'user_roles')
        self.blog_posts = TableApi(self, 'blog_posts')
        self.coaches = TableApi(self, 'coaches')

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on error, always close"""
        conn = self.connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def init_database(self):
        """Create all tables and indexes if they don't exist"""
        logger.info(f"Initializing database at {self.db_path}")

        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        for statement in SCHEMA:
            cursor.execute(statement)

        for index in INDEXES:
            cursor.execute(index)

        conn.commit()
        conn.close()

    def table(self, name: str) -> TableApi:
        """Look up a table api by table name"""
        for api in self.tables():
            if api.table == name:
                return api
        raise NotFoundError('tables', name)

    def tables(self) -> List[TableApi]:
        return [value for value in vars(self).values() if isinstance(value, TableApi)]

    def count(self, table: str) -> int:
        if table not in TABLE_COLUMNS:
            raise ValidationError(f"Unknown table {table}")
        with self.transaction() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    def season_id_for(self, year: int) -> Optional[str]:
        try:
            return self.seasons.get_by_year(year)['id']
        except NotFoundError:
            return None
