import logging
import sys
import warnings
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from league_site.database import LeagueDatabase
from league_site.errors import DataIntegrityWarning, LeagueError
from league_site.league_data import (
    ACTIVE_SEASON, CURRENT_STANDINGS, PLAYOFF_RESULTS, RIVALRIES, SEASON_STANDINGS,
    SEASON_YEARS, TEAMS,
)
from league_site.standings import StandingEntry, rank_standings

logger = logging.getLogger(__name__)


# Column positions in the commissioner's salary spreadsheet export
SALARY_CSV_COLUMNS = {
    'number': 0,
    'team': 1,
    'position': 2,
    'franchise_tag': 3,
    'contract_year': 4,
    'rookie_draft_round': 5,
    'acquired_via_waivers': 6,
    'first_name': 7,
    'last_name': 8,
    'full_name': 9,
    'salary_2025': 10,
    'salary_2026': 11,
    'salary_2027': 12,
    'salary_2028': 13,
}

FREE_AGENT_CODES = ('', 'FA')


def _cell(row: pd.Series, column: str) -> Optional[str]:
    position = SALARY_CSV_COLUMNS[column]
    if position >= len(row):
        return None
    value = str(row.iloc[position]).strip()
    return value or None


def resolve_team(code: Optional[str], teams: List[Dict]) -> Optional[str]:
    """Spreadsheet team code -> team id. Codes are a team name or one part of the owner's name."""
    if code is None or code.upper() in FREE_AGENT_CODES:
        return None
    code_lower = code.lower()
    for team in teams:
        if team['name'].lower() == code_lower:
            return team['id']
    for team in teams:
        parts = (team.get('owner_name') or '').lower().split()
        if code_lower in parts:
            return team['id']
    logger.warning(f"Unknown team code {code!r}, importing as free agent")
    return None


class LeagueDataImporter:
    def __init__(self, db_path: str = "league_data.db"):
        self.db_path = db_path
        self.db = LeagueDatabase(db_path)

    def _team_ids_by_owner(self) -> Dict[str, str]:
        return {t['owner_name']: t['id'] for t in self.db.teams.get_all() if t.get('owner_name')}

    def _team_ids_by_league_id(self) -> Dict[str, str]:
        by_name = {t['name']: t['id'] for t in self.db.teams.get_all()}
        return {team['id']: by_name[team['name']] for team in TEAMS if team['name'] in by_name}

    def import_teams(self) -> int:
        logger.info("Importing teams...")
        created = 0
        for team in TEAMS:
            if self.db.teams.filter(name=team['name']):
                continue
            self.db.teams.create({'name': team['name'], 'owner_name': team['owner_name']})
            created += 1
        logger.info(f"Imported {created} teams")
        return created

    def import_seasons(self) -> int:
        logger.info("Importing seasons...")
        created = 0
        for year in SEASON_YEARS:
            if self.db.seasons.filter(year=year):
                continue
            self.db.seasons.create({'year': year, 'is_active': False})
            created += 1

        active = self.db.seasons.get_by_year(ACTIVE_SEASON)
        self.db.seasons.set_active(active['id'])
        logger.info(f"Imported {created} seasons, {ACTIVE_SEASON} active")
        return created

    def import_current_standings(self) -> int:
        """Active season standings, ranked the same way the site ranks them"""
        season_id = self.db.season_id_for(ACTIVE_SEASON)
        if self.db.standings.get_by_season(season_id):
            logger.info(f"{ACTIVE_SEASON} standings already loaded")
            return 0

        team_ids = self._team_ids_by_league_id()
        entries = [
            StandingEntry(team_id=team_ids[league_id], total_points=total, points_for=pf,
                          wins=wins, losses=losses)
            for league_id, total, pf, wins, losses in CURRENT_STANDINGS
        ]
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataIntegrityWarning)
            ranked = rank_standings(entries)

        for r in ranked:
            e = r.entry
            games = e.wins + e.losses
            self.db.standings.create({
                'season_id': season_id,
                'team_id': e.team_id,
                'rank': r.rank,
                'points_accumulated': e.total_points,
                'wins': e.wins,
                'losses': e.losses,
                'winning_percentage': round(e.wins / games * 100, 1) if games else None,
                'total_points_for': e.points_for,
                'average_ppw': round(e.points_for / games, 2) if games else None,
            })
        logger.info(f"Imported {len(ranked)} standings for {ACTIVE_SEASON}")
        return len(ranked)

    def import_history(self) -> int:
        """Past standings, playoff outcomes and rivalries from league_data"""
        logger.info("Importing league history...")
        team_ids = self._team_ids_by_owner()
        imported = 0

        for year, rows in SEASON_STANDINGS.items():
            season_id = self.db.season_id_for(year)
            if season_id is None or self.db.standings.get_by_season(season_id):
                continue
            for rank, _team_name, owner, wins, losses, points_for, _result in rows:
                if owner not in team_ids:
                    logger.warning(f"No team for {owner} in {year}, skipping")
                    continue
                games = wins + losses
                self.db.standings.create({
                    'season_id': season_id,
                    'team_id': team_ids[owner],
                    'rank': rank,
                    'wins': wins,
                    'losses': losses,
                    'winning_percentage': round(wins / games * 100, 1) if games else None,
                    'total_points_for': points_for,
                    'average_ppw': round(points_for / games, 2) if games else None,
                })
                imported += 1

        for year, outcomes in PLAYOFF_RESULTS.items():
            season_id = self.db.season_id_for(year)
            if season_id is None or self.db.playoffs.get_by_season(season_id):
                continue
            for owner, place, finalist, semifinal, finals in outcomes:
                self.db.playoffs.create({
                    'season_id': season_id,
                    'team_id': team_ids[owner],
                    'rank': place,
                    'is_finalist': finalist,
                    'semifinal_score': semifinal,
                    'finals_score': finals,
                })
                imported += 1

        existing = {r['game_name'] for r in self.db.rivalries.get_all()}
        for rivalry in RIVALRIES:
            if rivalry['game_name'] in existing:
                continue
            fields = {k: v for k, v in rivalry.items() if k != 'matchups'}
            record = self.db.rivalries.create(fields)
            for season, team1_score, team2_score, winner in rivalry['matchups']:
                self.db.rivalry_matchups.create({
                    'rivalry_id': record['id'],
                    'season': season,
                    'team1_score': team1_score,
                    'team2_score': team2_score,
                    'winner': winner,
                })
            imported += 1

        logger.info(f"Imported {imported} history records")
        return imported

    def import_salaries_csv(self, csv_path: str) -> int:
        """Players and contracts from the salary spreadsheet export"""
        logger.info(f"Importing salaries from {csv_path}...")
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        teams = self.db.teams.get_all()
        known = {p['full_name']: p['id'] for p in self.db.players.get_all()}

        imported = 0
        for _, row in df.iterrows():
            full_name = _cell(row, 'full_name')
            if not full_name:
                continue
            if full_name in known:
                continue

            player = self.db.players.create({
                'first_name': _cell(row, 'first_name'),
                'last_name': _cell(row, 'last_name'),
                'full_name': full_name,
                'position': _cell(row, 'position'),
            })
            known[full_name] = player['id']

            number = _cell(row, 'number')
            self.db.salaries.create({
                'player_id': player['id'],
                'team_id': resolve_team(_cell(row, 'team'), teams),
                'number': int(number) if number and number.isdigit() else None,
                'franchise_tag': (_cell(row, 'franchise_tag') or '').upper() == 'YES',
                'contract_year': _cell(row, 'contract_year'),
                'rookie_draft_round': _cell(row, 'rookie_draft_round'),
                'acquired_via_waivers': (_cell(row, 'acquired_via_waivers') or '').upper() == 'YES',
                'salary_2025': _cell(row, 'salary_2025'),
                'salary_2026': _cell(row, 'salary_2026'),
                'salary_2027': _cell(row, 'salary_2027'),
                'salary_2028': _cell(row, 'salary_2028'),
            })
            imported += 1

        logger.info(f"Imported {imported} player contracts")
        return imported

    def import_admins(self, emails: List[str]) -> int:
        created = 0
        for email in emails:
            email = email.strip().lower()
            if self.db.user_roles.filter(user_email=email, role='admin'):
                continue
            self.db.user_roles.create({'user_email': email, 'role': 'admin'})
            created += 1
        return created

    def run(self, salaries_csv: Optional[str] = None, admin_emails: Optional[List[str]] = None):
        """Run complete import"""
        start_time = datetime.now()
        logger.info(f"Starting import at {start_time}")

        self.import_teams()
        self.import_seasons()
        self.import_current_standings()
        self.import_history()
        if salaries_csv:
            self.import_salaries_csv(salaries_csv)
        if admin_emails:
            self.import_admins(admin_emails)

        logger.info(f"Import completed in {datetime.now() - start_time}")

    def get_db_stats(self) -> Dict[str, int]:
        return {api.table: self.db.count(api.table) for api in self.db.tables()}


def main():
    """Main execution function"""
    import argparse

    parser = argparse.ArgumentParser(description="Men's League database import")
    parser.add_argument('--db', default='league_data.db', help='SQLite database path')
    parser.add_argument('--salaries-csv', help='Player salary spreadsheet export (CSV)')
    parser.add_argument('--admin-email', action='append', default=[], help='Grant admin role (repeatable)')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('league_import.log'),
            logging.StreamHandler()
        ]
    )

    importer = LeagueDataImporter(args.db)
    try:
        importer.run(salaries_csv=args.salaries_csv, admin_emails=args.admin_email)

        stats = importer.get_db_stats()
        print("\n" + "=" * 50)
        print("DATABASE STATISTICS")
        print("=" * 50)
        for table, count in stats.items():
            print(f"{table:25}: {count:,} records")
        print("=" * 50)

    except (LeagueError, OSError, pd.errors.ParserError) as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
