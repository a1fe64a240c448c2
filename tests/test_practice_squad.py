import pytest

from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.practice_squad import (
    MAX_PRACTICE_SQUAD, PracticeSquadModule, add_player, remove_player, roster_rows,
    total_salary,
)


def test_add_player():
    roster = add_player([], "  Jaylin Noel ", 3)
    assert roster == [{'player_name': "Jaylin Noel", 'salary': 3}]


def test_squad_is_capped():
    roster = []
    for n in range(MAX_PRACTICE_SQUAD):
        roster = add_player(roster, f"Player {n}", 1)
    with pytest.raises(ValidationError):
        add_player(roster, "One Too Many", 1)


@pytest.mark.parametrize("name,salary", [("", 1), ("   ", 1), ("Name", None), ("Name", -1)])
def test_add_player_validation(name, salary):
    with pytest.raises(ValidationError):
        add_player([], name, salary)


def test_remove_player_and_total():
    roster = add_player(add_player([], "A", 2), "B", 5)
    assert total_salary(roster) == 7
    assert remove_player(roster, 0) == [{'player_name': "B", 'salary': 5}]
    with pytest.raises(ValidationError):
        remove_player(roster, 2)


def test_roster_rows():
    rows = roster_rows({'t1': [{'player_name': "A", 'salary': 2}]}, {'t1': "Kats"})
    assert rows == [{'Team': "Kats", 'Player': "A", 'Salary': "$2"}]


def test_module_enforces_cap(db, admin, teams):
    module = PracticeSquadModule(db)
    for n in range(MAX_PRACTICE_SQUAD):
        module.add(admin, teams[0]['id'], f"Player {n}", 1)
    with pytest.raises(ValidationError):
        module.add(admin, teams[0]['id'], "Overflow", 1)
    assert len(module.get_rosters()[teams[0]['id']]) == MAX_PRACTICE_SQUAD


def test_squad_changes_require_admin(db, admin, visitor, teams):
    module = PracticeSquadModule(db)
    with pytest.raises(AuthorizationError):
        module.add(visitor, teams[0]['id'], "Sneaky", 5)
    assert module.get_rosters() == {}

    module.add(admin, teams[0]['id'], "Jalen Royals", 2)
    with pytest.raises(AuthorizationError):
        module.drop(visitor, teams[0]['id'], "Jalen Royals")
    assert len(module.get_rosters()[teams[0]['id']]) == 1


def test_drop_matches_name_case_insensitively(db, admin, teams):
    module = PracticeSquadModule(db)
    module.add(admin, teams[0]['id'], "Jalen Royals", 2)
    module.add(admin, teams[0]['id'], "Tez Johnson", 1)

    module.drop(admin, teams[0]['id'], "  jalen ROYALS ")
    assert [p['player_name'] for p in module.get_rosters()[teams[0]['id']]] == ["Tez Johnson"]


def test_drop_unknown_player(db, admin, teams):
    module = PracticeSquadModule(db)
    module.add(admin, teams[0]['id'], "Tez Johnson", 1)
    with pytest.raises(NotFoundError):
        module.drop(admin, teams[0]['id'], "Jalen Royals")
    # on another team's squad, not this one
    with pytest.raises(NotFoundError):
        module.drop(admin, teams[1]['id'], "Tez Johnson")
