# Hard-coded league history. Past seasons are entered here, not recomputed.
from league_site.scoring import WeekResult


# Team ids: 1=Ben, 2=Carlos, 3=Jackson, 4=Johnny, 5=William, 6=Dino,
# 7=James, 8=Aicklen, 9=Hobart, 10=Blake
TEAMS = [
    {'id': '1', 'name': 'The Sylvan Park Forresters', 'owner_name': 'Ben Holcomb'},
    {'id': '2', 'name': 'The Franklin Fanatics', 'owner_name': 'Carlos Evans'},
    {'id': '3', 'name': 'The Nashville Kats', 'owner_name': 'Jackson Ferrell'},
    {'id': '4', 'name': 'The Abbattabad Geronimos', 'owner_name': 'Johnny Holcomb'},
    {'id': '5', 'name': 'The Queen City Harambes', 'owner_name': 'William Holcomb'},
    {'id': '6', 'name': 'The West NY Mary Washington Fire Ants', 'owner_name': 'Dino Nicandros'},
    {'id': '7', 'name': 'The Florida Area Ken Francis Experience', 'owner_name': 'James Holcomb'},
    {'id': '8', 'name': 'The Germantown Gamblers', 'owner_name': 'John Aicklen'},
    {'id': '9', 'name': 'The Chicago Dawgs', 'owner_name': 'Will Hobart'},
    {'id': '10', 'name': 'The California Crackdown', 'owner_name': 'Blake Blacklidge'},
]

SEASON_YEARS = [2017, 2018, 2019, 2020, 2021, 2022, 2023, 2024, 2025]
ACTIVE_SEASON = 2025

# 2025 regular season raw scores, week by week
SEASON_2025_WEEKS = [
    WeekResult(week=1, scores={
        '1': 124.83, '2': 74.61, '3': 100.17, '4': 136.17, '5': 101.43,
        '6': 116.56, '7': 68.96, '8': 124.83, '9': 126.99, '10': 78.38,
    }),
    WeekResult(week=2, scores={
        '1': 185.1, '2': 125.06, '3': 158.32, '4': 109.88, '5': 134.62,
        '6': 99.14, '7': 136.62, '8': 124.06, '9': 119.21, '10': 84.27,
    }),
    WeekResult(week=3, scores={
        '1': 163.17, '2': 119.77, '3': 89.37, '4': 127.33, '5': 122.64,
        '6': 133.91, '7': 124.64, '8': 181.16, '9': 119.37, '10': 75.79,
    }),
    WeekResult(week=4, scores={
        '1': 218.2, '2': 125.7, '3': 135.3, '4': 75.5, '5': 113.8,
        '6': 69.5, '7': 148.5, '8': 115.2, '9': 112.3, '10': 103.3,
    }),
    WeekResult(week=5, completed=False, scores={}),
]

# Career records through 2024
OWNERS = [
    {'id': '1', 'name': 'Ben Holcomb', 'team_name': 'The Sylvan Park Forresters', 'years_active': 9,
     'total_wins': 92, 'total_losses': 24, 'championships': 4, 'playoff_appearances': 8,
     'playoff_wins': 10, 'playoff_losses': 3, 'avg_points_per_year': 1763, 'avg_finish': 1.78},
    {'id': '2', 'name': 'Dino Nicandros', 'team_name': 'The West NY Mary Washington Fire Ants',
     'years_active': 9, 'total_wins': 53, 'total_losses': 61, 'championships': 2,
     'playoff_appearances': 4, 'playoff_wins': 5, 'playoff_losses': 1,
     'avg_points_per_year': 1433, 'avg_finish': 3.33},
    {'id': '3', 'name': 'John Aicklen', 'team_name': 'The Germantown Gamblers', 'years_active': 9,
     'total_wins': 61, 'total_losses': 54, 'championships': 1, 'playoff_appearances': 5,
     'playoff_wins': 2, 'playoff_losses': 2, 'avg_points_per_year': 1544, 'avg_finish': 3.33},
    {'id': '4', 'name': 'James Holcomb', 'team_name': 'The Florida Area Ken Francis Experience',
     'years_active': 9, 'total_wins': 55, 'total_losses': 60, 'championships': 1,
     'playoff_appearances': 3, 'playoff_wins': 2, 'playoff_losses': 3,
     'avg_points_per_year': 1480, 'avg_finish': 4.78},
    {'id': '5', 'name': 'Carlos Evans', 'team_name': 'The Franklin Fanatics', 'years_active': 9,
     'total_wins': 67, 'total_losses': 47, 'championships': 0, 'playoff_appearances': 6,
     'playoff_wins': 1, 'playoff_losses': 4, 'avg_points_per_year': 1608, 'avg_finish': 5.50},
    {'id': '6', 'name': 'Will Hobart', 'team_name': 'The Chicago Dawgs', 'years_active': 8,
     'total_wins': 41, 'total_losses': 45, 'championships': 0, 'playoff_appearances': 1,
     'playoff_wins': 1, 'playoff_losses': 1, 'avg_points_per_year': 1409, 'avg_finish': 8.25},
    {'id': '7', 'name': 'William Holcomb', 'team_name': 'The Queen City Harambes', 'years_active': 9,
     'total_wins': 61, 'total_losses': 54, 'championships': 0, 'playoff_appearances': 4,
     'playoff_wins': 0, 'playoff_losses': 4, 'avg_points_per_year': 1363, 'avg_finish': 6.88},
    {'id': '8', 'name': 'Johnny Holcomb', 'team_name': 'The Abbattabad Geronimos', 'years_active': 9,
     'total_wins': 56, 'total_losses': 59, 'championships': 0, 'playoff_appearances': 3,
     'playoff_wins': 1, 'playoff_losses': 3, 'avg_points_per_year': 1215, 'avg_finish': 7.50},
    {'id': '9', 'name': 'Blake Blacklidge', 'team_name': 'The California Crackdown', 'years_active': 5,
     'total_wins': 25, 'total_losses': 39, 'championships': 0, 'playoff_appearances': 2,
     'playoff_wins': 0, 'playoff_losses': 2, 'avg_points_per_year': 1425, 'avg_finish': 6.88},
    {'id': '10', 'name': 'Jackson Ferrell', 'team_name': 'The Nashville Kats', 'years_active': 5,
     'total_wins': 35, 'total_losses': 30, 'championships': 0, 'playoff_appearances': 2,
     'playoff_wins': 0, 'playoff_losses': 2, 'avg_points_per_year': 1556, 'avg_finish': 5.88},
]

# Final regular season order by year: (rank, team, owner, wins, losses, points_for, result)
SEASON_STANDINGS = {
    2024: [
        (1, 'The Sylvan Park Forresters', 'Ben Holcomb', 8, 5, 1696, 'Champion'),
        (2, 'The West NY Mary Washington Fire Ants', 'Dino Nicandros', 8, 5, 1676, 'Runner-Up'),
        (3, 'The Franklin Fanatics', 'Carlos Evans', 7, 6, 1640, '3rd Place'),
        (4, 'The Queen City Harambes', 'William Holcomb', 8, 5, 1633, 'Semifinalist'),
        (5, 'The Germantown Gamblers', 'John Aicklen', 6, 7, 1618, 'Purgatory'),
        (6, 'The California Crackdown', 'Blake Blacklidge', 6, 7, 1567, 'Consolation'),
        (7, 'The Nashville Kats', 'Jackson Ferrell', 7, 6, 1535, 'Consolation'),
        (8, 'The Florida Area Ken Francis Experience', 'James Holcomb', 5, 8, 1575, 'Consolation'),
        (9, 'The Chicago Dawgs', 'Will Hobart', 6, 7, 1635, 'Consolation'),
        (10, 'The Abbattabad Geronimos', 'Johnny Holcomb', 5, 8, 1522, 'Toilet Bowl'),
    ],
    2023: [
        (1, 'The Sylvan Park Forresters', 'Ben Holcomb', 10, 3, 1889.4, 'Champion'),
        (2, 'The Germantown Gamblers', 'John Aicklen', 7, 6, 1738.8, 'Runner-Up'),
        (3, 'The Nashville Kats', 'Jackson Ferrell', 9, 4, 1687.2, '3rd Place'),
        (4, 'The Florida Area Ken Francis Experience', 'James Holcomb', 7, 6, 1569.6, 'Semifinalist'),
        (5, 'The Abbattabad Geronimos', 'Johnny Holcomb', 10, 3, 1681.1, 'Purgatory'),
        (6, 'The Chicago Dawgs', 'Will Hobart', 6, 7, 1652.1, 'Consolation'),
        (7, 'The Queen City Harambes', 'William Holcomb', 6, 7, 1531.6, 'Consolation'),
        (8, 'The California Crackdown', 'Blake Blacklidge', 1, 12, 1225.9, 'Consolation'),
        (9, 'The West NY Mary Washington Fire Ants', 'Dino Nicandros', 3, 10, 1278.6, 'Toilet Bowl'),
        (10, 'The Franklin Fanatics', 'Carlos Evans', 6, 7, 1471.5, 'Toilet Bowl'),
    ],
    2022: [
        (1, 'Wrong for the Right Reasons', 'Ben Holcomb', 12, 1, 1770, 'Champion'),
        (2, "What's in the Baggy?", 'Johnny Holcomb', 13, 0, 1843, 'Runner-Up'),
        (3, 'Oaky Afterbirth', 'William Holcomb', 11, 2, 1731, '3rd Place'),
        (4, 'You like that?', 'James Holcomb', 5, 8, 1594, 'Semifinalist'),
        (5, 'Trust the Process', 'John Aicklen', 8, 5, 1699, 'Purgatory'),
        (6, "Roman Country, Let's Wipe", 'Jackson Ferrell', 6, 7, 1457, 'Consolation'),
        (7, 'Splash of Oat Milk', 'Will Hobart', 5, 8, 1320, 'Consolation'),
        (8, 'Not Dead Last', 'Carlos Evans', 0, 13, 1081, 'Consolation'),
        (9, 'Me-NAJEE-trois', 'Blake Blacklidge', 3, 10, 1306, 'Toilet Bowl'),
        (10, 'Mary Washington Fire Ants', 'Dino Nicandros', 2, 11, 1264, 'Toilet Bowl'),
    ],
}

CHAMPIONSHIP_LEADERS = [
    ('Ben Holcomb', 4, '2018, 2019, 2022, 2023'),
    ('Dino Nicandros', 2, '2020, 2021'),
    ('John Aicklen', 1, '2017'),
    ('James Holcomb', 1, '2024'),
]

RIVALRIES = [
    {
        'game_name': 'The Holcomb Bowl',
        'slogan': 'Blood is thicker than waivers',
        'trophy_name': 'The Family Gravy Boat',
        'team1_governor': 'Ben Holcomb',
        'team2_governor': 'James Holcomb',
        'origin_story': ("Two brothers, one league, and a Thanksgiving table that has "
                         "never recovered.\n\nThe loser carves the turkey in a jersey "
                         "of the winner's choosing."),
        'matchups': [
            (2017, 142.3, 138.7, 'team1'),
            (2018, 156.8, 161.2, 'team2'),
            (2019, 148.4, 148.0, 'team1'),
            (2020, 132.1, 145.6, 'team2'),
            (2021, 167.3, 152.8, 'team1'),
            (2022, 139.5, 142.1, 'team2'),
            (2023, 155.2, 149.8, 'team1'),
            (2024, 143.7, 158.4, 'team2'),
        ],
    },
    {
        'game_name': 'The Music City Classic',
        'slogan': 'Only one of us gets the stage',
        'trophy_name': 'The Golden Guitar Pick',
        'team1_governor': 'Jackson Ferrell',
        'team2_governor': 'Will Hobart',
        'origin_story': "Neighbors on Broadway, rivals everywhere else.",
        'matchups': [
            (2021, 112.4, 95.8, 'team1'),
            (2022, 115.3, 112.8, 'team1'),
            (2023, 121.6, 125.4, 'team2'),
            (2024, 118.9, 114.2, 'team1'),
        ],
    },
]

# 2025 standings as entered by the commissioner: (team id, standings pts, points for, W, L)
CURRENT_STANDINGS = [
    ('1', 172, 1853, 11, 2),
    ('2', 152, 1776, 8, 3),
    ('3', 127, 1655, 8, 5),
    ('4', 115, 1554, 6, 5),
    ('5', 112, 1660, 6, 6),
    ('6', 104, 1622, 5, 6),
    ('7', 81, 1486, 3, 9),
    ('8', 79, 1484, 3, 9),
    ('9', 76, 1451, 3, 7),
    ('10', 0, 0, 0, 0),
]

# Postseason by year: (owner, final place, finalist, semifinal score, two-week finals score)
PLAYOFF_RESULTS = {
    2024: [
        ('Ben Holcomb', 1, True, 151.4, 267.1),
        ('Dino Nicandros', 2, True, 139.8, 234.0),
        ('Carlos Evans', 3, False, 128.2, 281.2),
        ('William Holcomb', 4, False, 117.5, 278.7),
    ],
}
