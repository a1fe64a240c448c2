"""
Player contracts and the salary escalation rules from the constitution.

A contract's first year is its base salary. Year 2 rises 20% with a $125
floor, year 3 rises another 20% with a $150 floor, and from year 4 the
salary sits at the position's cap. A franchise tag overrides all of that
with a flat $100 for four seasons.
"""
import logging
import re
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from league_site.errors import ValidationError
from league_site.models import PlayerSalary

logger = logging.getLogger(__name__)


FRANCHISE_TAG_SALARY = 100
FRANCHISE_TAG_YEARS = 4
WAIVER_SALARY = 1

MAX_POSITIONAL_VALUES = {
    'QB': {'max': 200, 'cap': 180},
    'RB': {'max': 285, 'cap': 257},
    'WR': {'max': 225, 'cap': 203},
    'TE': {'max': 185, 'cap': 167},
}

SALARY_YEARS = [2025, 2026, 2027, 2028, 2029]
FREE_AGENT = "Free Agent"


def salary_for_year(base: float, year: int, position: str, franchise_tag: bool = False) -> float:
    """Salary owed in contract year ``year`` (1-indexed)"""
    if year < 1:
        raise ValidationError(f"Contract year must be 1 or greater, got {year}")
    if franchise_tag and year <= FRANCHISE_TAG_YEARS:
        return FRANCHISE_TAG_SALARY
    if year == 1:
        return base

    year2 = max(base * 1.2, 125)
    if year == 2:
        return year2
    if year == 3:
        return max(year2 * 1.2, 150)

    position_max = MAX_POSITIONAL_VALUES.get(position)
    return position_max['cap'] if position_max else base * 2


_SALARY_RE = re.compile(r'^\$?\s*(-?[\d,]+(?:\.\d+)?)$')


def parse_salary(value: Optional[str]) -> Optional[float]:
    """'$125' -> 125.0; blanks and non-numeric notes -> None"""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _SALARY_RE.match(value.strip())
    if not match:
        return None
    return float(match.group(1).replace(',', ''))


PROJECTED_MARK = "*"


def projected_salaries(contract: PlayerSalary, position: str) -> Dict[int, float]:
    """
    Salaries for the years after the last recorded one.

    The latest recorded salary is treated as contract year 1 and later years
    follow the escalation rules from there.
    """
    recorded = {year: parse_salary(contract.salary_for(year)) for year in SALARY_YEARS}
    known = [year for year, value in recorded.items() if value is not None]
    if not known:
        return {}

    base_year = max(known)
    base = recorded[base_year]
    return {
        year: salary_for_year(base, year - base_year + 1, position, contract.franchise_tag)
        for year in SALARY_YEARS
        if year > base_year
    }


def salary_rows(salaries: List[PlayerSalary], players: Dict[str, Dict],
                team_names: Dict[str, str]) -> List[Dict]:
    """Contracts joined to player and team names for display, blank years projected"""
    rows = []
    for contract in salaries:
        player = players.get(contract.player_id, {})
        name = player.get('full_name') or " ".join(
            part for part in (player.get('first_name'), player.get('last_name')) if part
        )
        if contract.is_free_agent:
            team = FREE_AGENT
        else:
            team = team_names.get(contract.team_id, contract.team_id)

        row = {
            'No.': contract.number,
            'Player': name or contract.player_id,
            'Pos': player.get('position') or '',
            'Team': team,
            'Tag': contract.franchise_tag,
            'Waivers': contract.acquired_via_waivers,
            'Rookie Rd': contract.rookie_draft_round or '',
            'Contract Yr': contract.contract_year or '',
        }
        projected = projected_salaries(contract, player.get('position') or '')
        for year in SALARY_YEARS:
            if contract.salary_for(year):
                row[str(year)] = contract.salary_for(year)
            elif year in projected:
                row[str(year)] = f"${projected[year]:,.0f}{PROJECTED_MARK}"
            else:
                row[str(year)] = ''
        rows.append(row)
    return rows


def franchise_tag_mismatches(salaries: List[PlayerSalary], year: int = 2025) -> List[PlayerSalary]:
    """Tagged contracts whose recorded salary for ``year`` isn't the tag amount"""
    mismatched = []
    for contract in salaries:
        if not contract.franchise_tag:
            continue
        recorded = parse_salary(contract.salary_for(year))
        if recorded is not None and recorded != FRANCHISE_TAG_SALARY:
            mismatched.append(contract)
    if mismatched:
        logger.info(f"{len(mismatched)} tagged contracts don't carry ${FRANCHISE_TAG_SALARY} in {year}")
    return mismatched


class SalariesModule:
    def __init__(self, db):
        self.db = db

    def get_contracts(self) -> List[PlayerSalary]:
        return [PlayerSalary.from_row(row) for row in self.db.salaries.get_all()]

    def get_salary_data(self, contracts: Optional[List[PlayerSalary]] = None) -> pd.DataFrame:
        contracts = contracts if contracts is not None else self.get_contracts()
        players = {p['id']: p for p in self.db.players.get_all()}
        team_names = {t['id']: t['name'] for t in self.db.teams.get_all()}
        return pd.DataFrame(salary_rows(contracts, players, team_names))

    def get_tag_mismatches(self, contracts: List[PlayerSalary], year: int = 2025) -> List[str]:
        """Names of tagged players whose recorded salary isn't the tag amount"""
        players = {p['id']: p for p in self.db.players.get_all()}
        return [
            players.get(c.player_id, {}).get('full_name') or c.player_id
            for c in franchise_tag_mismatches(contracts, year)
        ]

    def render_rules(self):
        with st.expander("Salary Rules"):
            st.markdown(
                f"- Franchise tag: ${FRANCHISE_TAG_SALARY} for {FRANCHISE_TAG_YEARS} seasons\n"
                f"- Waiver pickups: ${WAIVER_SALARY}\n"
                "- Year 2: +20%, minimum $125\n"
                "- Year 3: +20%, minimum $150\n"
                "- Year 4+: positional cap"
            )
            caps = pd.DataFrame([
                {'Position': pos, 'Max': v['max'], 'Cap': v['cap']}
                for pos, v in MAX_POSITIONAL_VALUES.items()
            ])
            st.dataframe(caps, use_container_width=True, hide_index=True)

    def render(self):
        """Main render function for salaries module"""
        st.title("Player Salaries")
        self.render_rules()

        try:
            contracts = self.get_contracts()
            df = self.get_salary_data(contracts)
            mismatched = self.get_tag_mismatches(contracts)
        except Exception as e:
            st.error(f"Error loading salaries: {str(e)}")
            return

        if df.empty:
            st.info("No salary data loaded.")
            return

        col1, col2 = st.columns(2)
        with col1:
            team = st.selectbox("Team", ["All"] + sorted(df['Team'].unique()))
        with col2:
            position = st.selectbox("Position", ["All"] + sorted(p for p in df['Pos'].unique() if p))

        if team != "All":
            df = df[df['Team'] == team]
        if position != "All":
            df = df[df['Pos'] == position]

        st.dataframe(df, use_container_width=True, hide_index=True)
        st.caption(f"{PROJECTED_MARK} projected from the latest recorded salary using the escalation rules")

        tagged = df[df['Tag']]
        if not tagged.empty:
            st.caption(f"{len(tagged)} franchise-tagged players shown")
        if mismatched:
            st.warning(
                f"Franchise-tagged but not recorded at ${FRANCHISE_TAG_SALARY}: {', '.join(mismatched)}"
            )
