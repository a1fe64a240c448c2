import logging
from typing import Dict, Iterable, List, Optional

import streamlit as st

from league_site.auth import Session, require_admin
from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.models import Page, PageSection

logger = logging.getLogger(__name__)


CONTENT_TYPES = ('text', 'html', 'list')


def content_map(sections: Iterable[PageSection]) -> Dict[str, str]:
    """section_key -> content, in display order"""
    ordered = sorted(sections, key=lambda s: s.display_order)
    return {s.section_key: s.content for s in ordered}


def section(sections: Iterable[PageSection], key: str, fallback: str = '') -> str:
    for s in sections:
        if s.section_key == key:
            return s.content or fallback
    return fallback


def published_pages(pages: Iterable[Page]) -> List[Page]:
    return sorted((p for p in pages if p.published), key=lambda p: p.title)


def page_by_slug(pages: Iterable[Page], slug: str) -> Page:
    for page in pages:
        if page.slug == slug:
            return page
    raise NotFoundError('pages', slug)


# Admin-editable copy: page slug -> section keys
EDITABLE_SECTIONS = {
    'recaps': ['intro'],
    'coaching-carousel': ['intro'],
    'team-profiles': ['intro'],
}


def page_sections(db, slug: str) -> List[PageSection]:
    rows = db.page_content.filter(page_slug=slug)
    return sorted((PageSection.from_row(r) for r in rows), key=lambda s: s.display_order)


def page_intro(db, slug: str, fallback: str) -> str:
    """The page's editable intro line, or ``fallback`` until one is saved"""
    return section(page_sections(db, slug), 'intro', fallback)


def upsert_section(db, session: Session, page_slug: str, section_key: str, content: str,
                   content_type: str = 'text', display_order: int = 0) -> Dict:
    """Create or replace the content for one (page, section) pair"""
    require_admin(session)
    if content_type not in CONTENT_TYPES:
        raise ValidationError(f"content_type must be one of {', '.join(CONTENT_TYPES)}")

    fields = {
        'content': content,
        'content_type': content_type,
        'display_order': display_order,
    }
    existing = db.page_content.filter(page_slug=page_slug, section_key=section_key)
    if existing:
        return db.page_content.update(existing[0]['id'], fields)
    return db.page_content.create(dict(fields, page_slug=page_slug, section_key=section_key))


def render_section(s: PageSection):
    if s.content_type == 'html':
        st.html(s.content)
    elif s.content_type == 'list':
        st.markdown("\n".join(f"- {line}" for line in s.content.splitlines() if line.strip()))
    else:
        st.write(s.content)


class DynamicPageModule:
    def __init__(self, db):
        self.db = db

    def get_pages(self) -> List[Page]:
        return [Page.from_row(row) for row in self.db.pages.get_all()]

    def get_sections(self, slug: str) -> List[PageSection]:
        return page_sections(self.db, slug)

    def render(self, slug: str, session: Optional[Session] = None):
        try:
            page = page_by_slug(self.get_pages(), slug)
        except NotFoundError:
            st.error(f"Page '{slug}' not found")
            return

        if not page.published and not (session and session.is_admin):
            st.error(f"Page '{slug}' not found")
            return

        st.title(page.title)
        if page.content:
            st.html(page.content)

        for s in self.get_sections(slug):
            render_section(s)


def render_page_copy_editor(db, session: Session):
    """Admin form for the editable sections of the built-in pages"""
    slug = st.selectbox("Page", list(EDITABLE_SECTIONS), key="page_copy_slug")
    current = content_map(page_sections(db, slug))
    if current:
        st.json(current)

    with st.form(f"page_copy_{slug}"):
        key = st.selectbox("Section", EDITABLE_SECTIONS[slug])
        content = st.text_area("Content", value=current.get(key, ''))
        content_type = st.selectbox("Type", CONTENT_TYPES)
        submitted = st.form_submit_button("Save")

    if submitted:
        try:
            upsert_section(db, session, slug, key, content, content_type)
            st.success(f"Saved {slug}/{key}")
        except (ValidationError, AuthorizationError) as e:
            st.error(str(e))
