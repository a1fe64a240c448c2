import pandas as pd

from league_site.league_data import SEASON_YEARS, TEAMS
from league_site.playoffs import PlayoffsModule
from seed_league_db import LeagueDataImporter, resolve_team


def test_run_is_idempotent(tmp_path):
    importer = LeagueDataImporter(str(tmp_path / "seed.db"))
    importer.run()
    first = importer.get_db_stats()
    importer.run()

    assert importer.get_db_stats() == first
    assert first['teams'] == len(TEAMS)
    assert first['seasons'] == len(SEASON_YEARS)
    assert importer.db.seasons.get_active()['year'] == 2025


def test_imported_history_derives_champion(tmp_path):
    importer = LeagueDataImporter(str(tmp_path / "seed.db"))
    importer.run()

    season_id = importer.db.season_id_for(2024)
    bracket = PlayoffsModule(importer.db).get_bracket(season_id)
    champion = importer.db.teams.get_by_id(bracket.finals.champion.team_id)
    assert champion['owner_name'] == "Ben Holcomb"
    assert bracket.consolation.third is not None


def test_resolve_team():
    teams = [{'id': 't1', 'name': "The Chicago Dawgs", 'owner_name': "Will Hobart"}]
    assert resolve_team("Hobart", teams) == 't1'
    assert resolve_team("The Chicago Dawgs", teams) == 't1'
    assert resolve_team("FA", teams) is None
    assert resolve_team("Nobody", teams) is None


def test_import_salaries_csv(tmp_path):
    importer = LeagueDataImporter(str(tmp_path / "seed.db"))
    importer.import_teams()

    csv_path = tmp_path / "salaries.csv"
    pd.DataFrame([
        ["1", "Ben", "QB", "YES", "2", "1", "NO", "Josh", "Allen", "Josh Allen", "$100", "$100", "", ""],
        ["2", "FA", "WR", "NO", "", "", "YES", "Jaylin", "Noel", "Jaylin Noel", "$1", "", "", ""],
    ], columns=["No.", "Team", "Pos", "Tag", "Yr", "Rd", "Waivers", "First", "Last", "Full",
                "2025", "2026", "2027", "2028"]).to_csv(csv_path, index=False)

    assert importer.import_salaries_csv(str(csv_path)) == 2
    assert importer.import_salaries_csv(str(csv_path)) == 0

    salaries = {s['number']: s for s in importer.db.salaries.get_all()}
    assert salaries[1]['franchise_tag']
    assert salaries[1]['team_id'] is not None
    assert salaries[2]['team_id'] is None
    assert salaries[2]['acquired_via_waivers']
    assert salaries[2]['salary_2026'] is None
