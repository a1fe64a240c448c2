import pytest

from league_site.content import (
    DynamicPageModule, content_map, page_by_slug, page_intro, published_pages, section,
    upsert_section,
)
from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.models import Page, PageSection


SECTIONS = [
    PageSection(page_slug="lore", section_key="outro", content="The end", display_order=2),
    PageSection(page_slug="lore", section_key="intro", content="In the beginning", display_order=1),
]


def test_content_map_in_display_order():
    assert list(content_map(SECTIONS)) == ["intro", "outro"]


def test_section_fallback():
    assert section(SECTIONS, "intro") == "In the beginning"
    assert section(SECTIONS, "missing") == ""
    assert section(SECTIONS, "missing", "TBD") == "TBD"


def test_published_pages_and_lookup():
    pages = [
        Page(id="1", slug="recaps", title="Recaps", published=True),
        Page(id="2", slug="draft-notes", title="Draft Notes", published=False),
    ]
    assert [p.slug for p in published_pages(pages)] == ["recaps"]
    assert page_by_slug(pages, "draft-notes").title == "Draft Notes"
    with pytest.raises(NotFoundError):
        page_by_slug(pages, "nope")


def test_upsert_section(db, admin):
    created = upsert_section(db, admin, "manifesto", "intro", "Version one")
    updated = upsert_section(db, admin, "manifesto", "intro", "Version two", display_order=3)
    assert created['id'] == updated['id']
    assert updated['content'] == "Version two"

    sections = DynamicPageModule(db).get_sections("manifesto")
    assert [s.content for s in sections] == ["Version two"]


def test_upsert_section_rules(db, admin, visitor):
    with pytest.raises(AuthorizationError):
        upsert_section(db, visitor, "manifesto", "intro", "x")
    with pytest.raises(ValidationError):
        upsert_section(db, admin, "manifesto", "intro", "x", content_type="markdown")


def test_page_intro_falls_back_until_saved(db, admin):
    assert page_intro(db, "recaps", "Default intro") == "Default intro"
    upsert_section(db, admin, "recaps", "intro", "Every week, every grudge.")
    assert page_intro(db, "recaps", "Default intro") == "Every week, every grudge."
    assert page_intro(db, "coaching-carousel", "Coaches") == "Coaches"
