from io import BytesIO
from typing import List, Tuple

from docx import Document
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

TITLE = "Constitution of Men's League Fantasy Football"

CONSTITUTION: List[Tuple[str, List[str]]] = [
    ("Preamble", [
        "We the Governors of Men's League, in Order to form a more perfect Fantasy Football "
        "Union, establish Justice in weekly matchups, ensure domestic Tranquility between "
        "competitors, provide for the common Defense against collusion, promote the general "
        "Welfare of fair play, and secure the Blessings of Liberty to ourselves and our Dynasty "
        "rosters, do ordain and establish this Constitution for Men's League Fantasy Football.",
    ]),
    ("Article I: League Structure", [
        "Section 1. The League shall consist of ten (10) franchises, each led by a Governor who "
        "shall bear full responsibility for their roster decisions.",
        "Section 2. The regular season shall span fourteen (14) weeks, followed by a playoff "
        "period of three (3) weeks.",
        "Section 3. All Governors shall have one (1) vote in league matters. A simple majority "
        "shall decide routine affairs; constitutional amendments require a two-thirds (2/3) "
        "supermajority.",
    ]),
    ("Article II: Scoring", [
        "Section 1. Points shall be awarded based on statistical performance in sanctioned NFL games.",
        "Section 2. The standings shall be determined by aggregate weekly ranking points, not "
        "head-to-head record.",
        "Section 3. Weekly rankings: 1st place receives 20 points, 2nd receives 18, 3rd receives "
        "16, 4th receives 14, 5th receives 12, 6th receives 5, 7th receives 4, 8th receives 3, "
        "9th receives 2, 10th receives 1 point.",
    ]),
    ("Article III: Playoffs", [
        "Section 1. The top four (4) franchises by total standings points shall qualify for the "
        "Championship Playoff.",
        "Section 2. The fifth (5th) place franchise shall reside in Purgatory, neither rewarded "
        "nor condemned.",
        "Section 3. Franchises ranked sixth (6th) through tenth (10th) shall compete in the "
        "Toilet Bowl.",
    ]),
    ("Article IV: Draft", [
        "Section 1. The Rookie Draft shall occur annually in the offseason, following the NFL Draft.",
        "Section 2. Draft order shall be determined by inverse order of final standings, with "
        "non-playoff teams receiving lottery consideration.",
        "Section 3. Each franchise shall receive three (3) draft picks per year, one in each round.",
    ]),
    ("Article V: Salaries & Contracts", [
        "Section 1. Player salaries are determined by acquisition price in the annual fall draft.",
        "Section 2. Waiver wire acquisitions shall have a default salary of One Dollar ($1).",
        "Section 3. Salary escalation: Year 2 = Greater of 1.2x or $125; Year 3 = Greater of "
        "1.2x or $150; Year 4+ = 90% of Maximum Positional Value.",
        "Section 4. Each franchise may apply the Franchise Tag to up to two (2) players, locking "
        "their salary at $100 for four (4) seasons.",
        "Section 5. Each franchise may carry up to three (3) players on its Practice Squad.",
    ]),
    ("Article VI: Trades", [
        "Section 1. All trades must be submitted to the Commissioner for review.",
        "Section 2. The League reserves the right to veto trades deemed to constitute collusion "
        "or gross competitive imbalance.",
        "Section 3. The trade deadline shall fall on the Monday of Week 10 at 11:59 PM Eastern Time.",
    ]),
    ("Article VII: Conduct", [
        "Section 1. All Governors shall conduct themselves with honor, integrity, and a healthy "
        "sense of trash talk.",
        "Section 2. Failure to set a legal lineup shall result in public shaming and potential "
        "league sanctions.",
        "Section 3. Collusion in any form is a capital offense, punishable by immediate expulsion "
        "and eternal banishment from the Pantheon.",
    ]),
    ("Article VIII: Amendments", [
        "Section 1. Proposed amendments must be submitted in writing to the Commissioner.",
        "Section 2. A two-thirds (2/3) supermajority vote of all Governors is required for ratification.",
        "Section 3. Amendments take effect at the start of the following season unless otherwise specified.",
    ]),
]


def rulebook_markdown() -> str:
    parts = [f"# {TITLE}"]
    for heading, sections in CONSTITUTION:
        parts.append(f"## {heading}")
        parts.extend(sections)
        parts.append("---")
    return "\n\n".join(parts)


RULEBOOK = rulebook_markdown()


def rulebook_docx() -> bytes:
    """Constitution as a .docx file"""
    doc = Document()
    doc.add_heading(TITLE, 0)
    for heading, sections in CONSTITUTION:
        doc.add_heading(heading, level=1)
        for text in sections:
            doc.add_paragraph(text)

    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def rulebook_pdf() -> bytes:
    """Constitution as a PDF"""
    buffer = BytesIO()
    pdf = SimpleDocTemplate(buffer, title=TITLE)
    styles = getSampleStyleSheet()
    story = [Paragraph(TITLE, styles['Title']), Spacer(1, 12)]

    for heading, sections in CONSTITUTION:
        story.append(Paragraph(heading, styles['Heading2']))
        for text in sections:
            # reportlab paragraphs take a small XML markup dialect
            escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
            story.append(Paragraph(escaped, styles['Normal']))
            story.append(Spacer(1, 6))

    pdf.build(story)
    return buffer.getvalue()
