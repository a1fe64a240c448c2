import pytest

from league_site.errors import AuthorizationError, NotFoundError, ValidationError
from league_site.models import BlogPost
from league_site.recaps import (
    RecapsModule, create_recap, publish_recap, published_recaps, recap_by_slug, recap_label,
    recap_seasons, recaps_for_season, slugify, unpublish_recap,
)


def _post(slug, published=True, published_at=None, season_year=2025, week_number=None):
    return BlogPost(id=slug, title=slug.title(), slug=slug, published=published,
                    published_at=published_at, season_year=season_year, week_number=week_number)


POSTS = [
    _post("week-1", published_at="2025-09-10T12:00:00+00:00", week_number=1),
    _post("week-3", published_at="2025-09-24T12:00:00+00:00", week_number=3),
    _post("week-2", published_at="2025-09-17T12:00:00+00:00", week_number=2),
    _post("week-4-draft", published=False, week_number=4),
    _post("week-12", published_at="2024-11-28T12:00:00+00:00", season_year=2024, week_number=12),
]


def test_slugify():
    assert slugify("Week 12: Giants Continue Their Dominance!") == "week-12-giants-continue-their-dominance"
    assert slugify("  --Trailing-- ") == "trailing"


def test_published_recaps_newest_first():
    assert [p.slug for p in published_recaps(POSTS)] == ["week-3", "week-2", "week-1", "week-12"]


def test_recap_season_filter():
    assert recap_seasons(POSTS) == [2025, 2024]
    assert [p.slug for p in recaps_for_season(POSTS, 2024)] == ["week-12"]
    assert len(recaps_for_season(POSTS, None)) == len(POSTS)


def test_recap_by_slug():
    assert recap_by_slug(POSTS, "week-2").week_number == 2
    with pytest.raises(NotFoundError):
        recap_by_slug(POSTS, "week-99")


def test_recap_label():
    assert recap_label(POSTS[0]) == "Season 2025, Week 1"
    assert recap_label(_post("x", week_number=None)) == "Season 2025"


def test_create_and_publish(db, admin):
    post = create_recap(db, admin, "Week 5: Chaos Reigns", "Three teams tied at 3-2.",
                        season_year=2025, week_number=5)
    assert post['slug'] == "week-5-chaos-reigns"
    assert not post['published']
    assert post['author_email'] == admin.user_email

    module = RecapsModule(db)
    assert published_recaps(module.get_posts()) == []

    published = publish_recap(db, admin, post['id'])
    assert published['published']
    assert published['published_at'] is not None
    assert module.get_recap("week-5-chaos-reigns").title == "Week 5: Chaos Reigns"

    hidden = unpublish_recap(db, admin, post['id'])
    assert hidden['published_at'] is None
    with pytest.raises(NotFoundError):
        module.get_recap("week-5-chaos-reigns")
    # drafts stay visible to the commissioner
    assert module.get_recap("week-5-chaos-reigns", admin).id == post['id']


def test_create_recap_rules(db, admin, visitor):
    with pytest.raises(AuthorizationError):
        create_recap(db, visitor, "Week 1", "x")
    with pytest.raises(ValidationError):
        create_recap(db, admin, "   ", "x")

    create_recap(db, admin, "Week 1", "x")
    with pytest.raises(ValidationError):
        create_recap(db, admin, "Week 1!", "y")


def test_publishing_requires_admin(db, admin, visitor):
    post = create_recap(db, admin, "Week 2", "x")
    with pytest.raises(AuthorizationError):
        publish_recap(db, visitor, post['id'])
    with pytest.raises(AuthorizationError):
        unpublish_recap(db, visitor, post['id'])
