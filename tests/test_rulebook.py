from league_site.rulebook import CONSTITUTION, RULEBOOK, rulebook_docx, rulebook_pdf


def test_constitution_articles():
    headings = [heading for heading, _ in CONSTITUTION]
    assert headings[0] == "Preamble"
    assert headings[-1] == "Article VIII: Amendments"
    assert "## Article II: Scoring" in RULEBOOK


def test_docx_export():
    data = rulebook_docx()
    assert data[:2] == b"PK"


def test_pdf_export():
    data = rulebook_pdf()
    assert data.startswith(b"%PDF")
