"""
Typed records for the rows the data access layer hands back.

Every record has a ``from_row`` constructor that accepts a row dict from the
facade and tolerates missing optional columns, so derivation code
can work on already-fetched collections without touching the database.
"""
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class Team:
    id: str
    name: str
    owner_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Team":
        return cls(id=row["id"], name=row["name"], owner_name=row.get("owner_name"))


@dataclass
class Season:
    id: str
    year: int
    is_active: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Season":
        return cls(id=row["id"], year=int(row["year"]), is_active=bool(row.get("is_active")))


@dataclass
class RegularSeasonStanding:
    id: str
    season_id: str
    team_id: str
    rank: int
    wins: int = 0
    losses: int = 0
    points_accumulated: Optional[float] = None
    total_points_for: Optional[float] = None
    average_ppw: Optional[float] = None
    median_ppw: Optional[float] = None
    average_finish: Optional[float] = None

    @property
    def winning_percentage(self) -> float:
        games = self.wins + self.losses
        return self.wins / games if games > 0 else 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegularSeasonStanding":
        return cls(
            id=row["id"],
            season_id=row["season_id"],
            team_id=row["team_id"],
            rank=int(row["rank"]),
            wins=int(row.get("wins") or 0),
            losses=int(row.get("losses") or 0),
            points_accumulated=_opt_float(row.get("points_accumulated")),
            total_points_for=_opt_float(row.get("total_points_for")),
            average_ppw=_opt_float(row.get("average_ppw")),
            median_ppw=_opt_float(row.get("median_ppw")),
            average_finish=_opt_float(row.get("average_finish")),
        )


@dataclass
class PlayoffOutcome:
    team_id: str
    rank: int
    is_finalist: bool = False
    semifinal_score: Optional[float] = None
    finals_score: Optional[float] = None
    season_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PlayoffOutcome":
        return cls(
            id=row.get("id"),
            season_id=row.get("season_id"),
            team_id=row["team_id"],
            rank=int(row["rank"]),
            is_finalist=bool(row.get("is_finalist")),
            semifinal_score=_opt_float(row.get("semifinal_score")),
            finals_score=_opt_float(row.get("finals_score")),
        )


@dataclass
class PlayerSalary:
    id: str
    player_id: str
    team_id: Optional[str] = None
    franchise_tag: bool = False
    acquired_via_waivers: bool = False
    rookie_draft_round: Optional[str] = None
    contract_year: Optional[str] = None
    number: Optional[int] = None
    salary_2025: Optional[str] = None
    salary_2026: Optional[str] = None
    salary_2027: Optional[str] = None
    salary_2028: Optional[str] = None
    salary_2029: Optional[str] = None

    @property
    def is_free_agent(self) -> bool:
        return self.team_id is None

    def salary_for(self, year: int) -> Optional[str]:
        return getattr(self, f"salary_{year}", None)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PlayerSalary":
        return cls(
            id=row["id"],
            player_id=row["player_id"],
            team_id=row.get("team_id"),
            franchise_tag=bool(row.get("franchise_tag")),
            acquired_via_waivers=bool(row.get("acquired_via_waivers")),
            rookie_draft_round=row.get("rookie_draft_round"),
            contract_year=row.get("contract_year"),
            number=_opt_int(row.get("number")),
            salary_2025=row.get("salary_2025"),
            salary_2026=row.get("salary_2026"),
            salary_2027=row.get("salary_2027"),
            salary_2028=row.get("salary_2028"),
            salary_2029=row.get("salary_2029"),
        )


@dataclass
class RookiePlayer:
    id: str
    draft_year: int
    player_name: str
    position: str
    college: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RookiePlayer":
        return cls(
            id=row["id"],
            draft_year=int(row["draft_year"]),
            player_name=row["player_name"],
            position=row["position"],
            college=row.get("college"),
            notes=row.get("notes"),
        )


@dataclass
class DraftPick:
    id: str
    draft_year: int
    round: int
    pick_number: int
    team_id: Optional[str] = None
    selected_player_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DraftPick":
        return cls(
            id=row["id"],
            draft_year=int(row["draft_year"]),
            round=int(row["round"]),
            pick_number=int(row["pick_number"]),
            team_id=row.get("team_id"),
            selected_player_id=row.get("selected_player_id"),
        )


@dataclass
class RivalryMatchup:
    season: int
    team1_score: float
    team2_score: float
    winner: str  # 'team1' or 'team2'
    rivalry_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RivalryMatchup":
        return cls(
            id=row.get("id"),
            rivalry_id=row.get("rivalry_id"),
            season=int(row["season"]),
            team1_score=float(row["team1_score"]),
            team2_score=float(row["team2_score"]),
            winner=row["winner"],
        )


@dataclass
class Rivalry:
    id: str
    game_name: str
    team1_governor: str
    team2_governor: str
    slogan: Optional[str] = None
    trophy_name: Optional[str] = None
    origin_story: List[str] = field(default_factory=list)
    matchups: List[RivalryMatchup] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Rivalry":
        story = row.get("origin_story") or ""
        if isinstance(story, str):
            story = [p for p in story.split("\n\n") if p.strip()]
        return cls(
            id=row["id"],
            game_name=row["game_name"],
            team1_governor=row["team1_governor"],
            team2_governor=row["team2_governor"],
            slogan=row.get("slogan"),
            trophy_name=row.get("trophy_name"),
            origin_story=list(story),
        )


@dataclass
class PageSection:
    page_slug: str
    section_key: str
    content: str
    content_type: str = "text"
    display_order: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PageSection":
        return cls(
            page_slug=row["page_slug"],
            section_key=row["section_key"],
            content=row.get("content") or "",
            content_type=row.get("content_type") or "text",
            display_order=int(row.get("display_order") or 0),
        )


@dataclass
class Page:
    id: str
    slug: str
    title: str
    content: Optional[str] = None
    template: Optional[str] = None
    published: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Page":
        return cls(
            id=row["id"],
            slug=row["slug"],
            title=row["title"],
            content=row.get("content"),
            template=row.get("template"),
            published=bool(row.get("published")),
        )


@dataclass
class BlogPost:
    id: str
    title: str
    slug: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    season_year: Optional[int] = None
    week_number: Optional[int] = None
    published: bool = False
    published_at: Optional[str] = None
    author_email: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BlogPost":
        return cls(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            content=row.get("content"),
            excerpt=row.get("excerpt"),
            season_year=_opt_int(row.get("season_year")),
            week_number=_opt_int(row.get("week_number")),
            published=bool(row.get("published")),
            published_at=row.get("published_at"),
            author_email=row.get("author_email"),
            created_at=row.get("created_at"),
        )


@dataclass
class Coach:
    id: str
    name: str
    tenure_start: int
    team_id: Optional[str] = None
    tenure_end: Optional[int] = None
    tenure_summary: Optional[str] = None
    photo_url: Optional[str] = None
    wins: int = 0
    losses: int = 0
    playoff_wins: int = 0
    playoff_losses: int = 0
    championships: int = 0
    is_current: bool = False
    display_order: int = 0

    @property
    def tenure(self) -> str:
        if self.is_current:
            return f"{self.tenure_start}-Present"
        return f"{self.tenure_start}-{self.tenure_end or '?'}"

    @property
    def win_pct(self) -> float:
        games = self.wins + self.losses
        return self.wins / games if games > 0 else 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Coach":
        return cls(
            id=row["id"],
            name=row["name"],
            tenure_start=int(row["tenure_start"]),
            team_id=row.get("team_id"),
            tenure_end=_opt_int(row.get("tenure_end")),
            tenure_summary=row.get("tenure_summary"),
            photo_url=row.get("photo_url"),
            wins=int(row.get("wins") or 0),
            losses=int(row.get("losses") or 0),
            playoff_wins=int(row.get("playoff_wins") or 0),
            playoff_losses=int(row.get("playoff_losses") or 0),
            championships=int(row.get("championships") or 0),
            is_current=bool(row.get("is_current")),
            display_order=int(row.get("display_order") or 0),
        )
