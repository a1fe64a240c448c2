import pytest

from league_site.config import LeagueConfig
from league_site.errors import ValidationError


def test_defaults():
    config = LeagueConfig.from_env({})
    assert config.db_path == "league_data.db"
    assert config.site_password == "theshield"
    assert config.admin_password is None
    assert config.current_season == 2025
    assert config.draft_year == 2026


def test_from_env():
    config = LeagueConfig.from_env({
        'LEAGUE_DB_PATH': "/tmp/league.db",
        'LEAGUE_ADMIN_PASSWORD': "secret",
        'LEAGUE_LOG_LEVEL': "debug",
        'LEAGUE_CURRENT_SEASON': "2026",
    })
    assert config.db_path == "/tmp/league.db"
    assert config.admin_password == "secret"
    assert config.log_level == "DEBUG"
    assert config.current_season == 2026


def test_bad_integer_setting():
    with pytest.raises(ValidationError):
        LeagueConfig.from_env({'LEAGUE_DRAFT_YEAR': "next year"})
