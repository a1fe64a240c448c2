from league_site.coaches import CoachingModule, coach_rows, coaches_by_team
from league_site.models import Coach


def _coach(name, team_id, start, order=0, **fields):
    return Coach(id=name, name=name, team_id=team_id, tenure_start=start, display_order=order, **fields)


def test_coaches_grouped_by_team_name():
    coaches = [
        _coach("Later", 't1', 2022, order=1),
        _coach("Founder", 't1', 2017, order=0),
        _coach("Solo", 't2', 2019),
        _coach("Unattached", None, 2018),
        _coach("Orphan", 'gone', 2018),
    ]
    grouped = coaches_by_team(coaches, {'t1': "Zebras", 't2': "Aardvarks"})

    assert [t.team_name for t in grouped] == ["Aardvarks", "Zebras"]
    assert [c.name for c in grouped[1].coaches] == ["Founder", "Later"]


def test_coach_rows():
    rows = coach_rows([
        _coach("Ben", 't1', 2017, wins=92, losses=24, playoff_wins=10, playoff_losses=3,
               championships=4, is_current=True),
        _coach("Rookie", 't1', 2023, tenure_end=2024),
    ])
    assert rows[0]['Tenure'] == "2017-Present"
    assert rows[0]['Win %'] == "79.3%"
    assert rows[0]['Playoffs'] == "10-3"
    assert rows[1]['Tenure'] == "2023-2024"
    assert rows[1]['Win %'] == "0.0%"
    assert rows[1]['Playoffs'] == '-'


def test_module_reads_coaches(db, teams):
    db.coaches.create({'team_id': teams[0]['id'], 'name': "Coach A", 'tenure_start': 2017,
                       'is_current': True})
    db.coaches.create({'team_id': teams[2]['id'], 'name': "Coach C", 'tenure_start': 2020})

    grouped = CoachingModule(db).get_team_coaches()
    assert [t.team_name for t in grouped] == ["Team 1", "Team 3"]
    assert grouped[0].coaches[0].is_current
