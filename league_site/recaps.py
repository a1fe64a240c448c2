"""
Weekly recaps, stored as blog_posts.

Visitors see published recaps only, newest first. The commissioner writes
drafts and publishes them; publishing stamps published_at.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import streamlit as st

from league_site.auth import ANONYMOUS, Session, require_admin
from league_site.content import page_intro
from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.models import BlogPost

logger = logging.getLogger(__name__)


DEFAULT_INTRO = "The complete archive of weekly recaps. Filter by season to relive the glory."

_NON_SLUG = re.compile(r'[^a-z0-9]+')


def slugify(title: str) -> str:
    """'Week 12: Giants Roll!' -> 'week-12-giants-roll'"""
    return _NON_SLUG.sub('-', title.lower()).strip('-')


def _published_key(post: BlogPost):
    return (post.published_at or post.created_at or '', post.season_year or 0, post.week_number or 0)


def published_recaps(posts: Iterable[BlogPost]) -> List[BlogPost]:
    """Published posts, newest first"""
    return sorted((p for p in posts if p.published), key=_published_key, reverse=True)


def recap_seasons(posts: Iterable[BlogPost]) -> List[int]:
    return sorted({p.season_year for p in posts if p.season_year}, reverse=True)


def recaps_for_season(posts: Iterable[BlogPost], season_year: Optional[int]) -> List[BlogPost]:
    if season_year is None:
        return list(posts)
    return [p for p in posts if p.season_year == season_year]


def recap_by_slug(posts: Iterable[BlogPost], slug: str) -> BlogPost:
    for post in posts:
        if post.slug == slug:
            return post
    raise NotFoundError('blog_posts', slug)


def recap_label(post: BlogPost) -> str:
    if post.season_year and post.week_number:
        return f"Season {post.season_year}, Week {post.week_number}"
    if post.season_year:
        return f"Season {post.season_year}"
    return (post.published_at or post.created_at or '')[:10]


def create_recap(db, session: Session, title: str, content: str, excerpt: Optional[str] = None,
                 season_year: Optional[int] = None, week_number: Optional[int] = None,
                 slug: Optional[str] = None) -> Dict:
    """Save an unpublished recap. The slug defaults to one built from the title."""
    require_admin(session)
    if not title or not title.strip():
        raise ValidationError("Recap title is required")

    slug = slugify(slug or title)
    if not slug:
        raise ValidationError(f"Can't build a URL slug from {title!r}")
    if db.blog_posts.filter(slug=slug):
        raise ValidationError(f"A recap with slug '{slug}' already exists")

    logger.info(f"{session.user_email} drafted recap {slug}")
    return db.blog_posts.create({
        'title': title.strip(),
        'slug': slug,
        'content': content,
        'excerpt': excerpt,
        'season_year': season_year,
        'week_number': week_number,
        'published': False,
        'author_email': session.user_email,
    })


def publish_recap(db, session: Session, post_id: str) -> Dict:
    require_admin(session)
    return db.blog_posts.update(post_id, {
        'published': True,
        'published_at': datetime.now(timezone.utc).isoformat(),
    })


def unpublish_recap(db, session: Session, post_id: str) -> Dict:
    require_admin(session)
    return db.blog_posts.update(post_id, {'published': False, 'published_at': None})


class RecapsModule:
    def __init__(self, db):
        self.db = db

    def get_posts(self) -> List[BlogPost]:
        return [BlogPost.from_row(row) for row in self.db.blog_posts.get_all()]

    def get_recap(self, slug: str, session: Session = ANONYMOUS) -> BlogPost:
        """One recap by slug. Drafts are only visible to admins."""
        posts = self.get_posts() if session.is_admin else published_recaps(self.get_posts())
        return recap_by_slug(posts, slug)

    def render_recap(self, post: BlogPost, expanded: bool = False):
        st.subheader(post.title)
        st.caption(recap_label(post))
        if post.excerpt:
            st.markdown(f"*{post.excerpt}*")
        with st.expander("Read recap", expanded=expanded):
            st.markdown(post.content or "")

    def render_admin_controls(self, session: Session, posts: List[BlogPost]):
        st.subheader("Write a Recap")
        with st.form("recap_create"):
            title = st.text_input("Title")
            col1, col2 = st.columns(2)
            with col1:
                season_year = st.number_input("Season", min_value=2017, max_value=2100, value=2025)
            with col2:
                week_number = st.number_input("Week", min_value=1, max_value=18, value=1)
            excerpt = st.text_input("Excerpt")
            content = st.text_area("Recap", height=300)
            submitted = st.form_submit_button("Save Draft")

        if submitted:
            try:
                create_recap(self.db, session, title, content, excerpt or None,
                             int(season_year), int(week_number))
                st.success(f"Saved draft '{title}'")
                st.rerun()
            except (ValidationError, AuthorizationError) as e:
                st.error(str(e))

        if not posts:
            return

        st.subheader("Publish")
        post = st.selectbox(
            "Recap", posts,
            format_func=lambda p: f"{p.title} ({'published' if p.published else 'draft'})",
        )
        label = "Unpublish" if post.published else "Publish"
        if st.button(label, key="recap_toggle"):
            if post.published:
                unpublish_recap(self.db, session, post.id)
            else:
                publish_recap(self.db, session, post.id)
            st.rerun()

    def render(self, session: Session = ANONYMOUS):
        """Main render function for weekly recaps"""
        st.title("Weekly Recaps")
        st.caption(page_intro(self.db, 'recaps', DEFAULT_INTRO))

        try:
            posts = self.get_posts()
        except Exception as e:
            st.error(f"Error loading recaps: {str(e)}")
            return

        slug = st.query_params.get('recap')
        if slug:
            try:
                self.render_recap(self.get_recap(slug, session), expanded=True)
            except NotFoundError:
                st.error(f"Recap '{slug}' not found")
            return

        published = published_recaps(posts)
        if not published:
            st.info("No recaps published yet.")
        else:
            seasons = recap_seasons(published)
            choice = st.selectbox("Season", ["All Seasons"] + seasons)
            shown = recaps_for_season(published, None if choice == "All Seasons" else choice)
            for post in shown:
                self.render_recap(post)
                st.markdown("---")

        if session.is_admin:
            self.render_admin_controls(session, posts)
