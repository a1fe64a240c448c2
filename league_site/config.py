import os
from dataclasses import dataclass
from typing import Mapping, Optional

from league_site.errors import ValidationError


DEFAULT_DB_PATH = "league_data.db"
DEFAULT_SITE_PASSWORD = "theshield"


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{key} must be an integer, got {raw!r}")


@dataclass
class LeagueConfig:
    db_path: str = DEFAULT_DB_PATH
    site_password: str = DEFAULT_SITE_PASSWORD
    admin_password: Optional[str] = None
    log_level: str = "INFO"
    current_season: int = 2025
    draft_year: int = 2026

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LeagueConfig":
        """Build config from LEAGUE_* environment variables"""
        env = os.environ if env is None else env
        return cls(
            db_path=env.get("LEAGUE_DB_PATH", DEFAULT_DB_PATH),
            site_password=env.get("LEAGUE_SITE_PASSWORD", DEFAULT_SITE_PASSWORD),
            admin_password=env.get("LEAGUE_ADMIN_PASSWORD") or None,
            log_level=env.get("LEAGUE_LOG_LEVEL", "INFO").upper(),
            current_season=_int_setting(env, "LEAGUE_CURRENT_SEASON", 2025),
            draft_year=_int_setting(env, "LEAGUE_DRAFT_YEAR", 2026),
        )
