import pytest

from league_site.auth import ANONYMOUS, check_site_password, require_admin, sign_in
from league_site.config import LeagueConfig
from league_site.errors import AuthorizationError


@pytest.fixture
def config(tmp_path):
    return LeagueConfig(db_path=str(tmp_path / "x.db"), admin_password="commish-only")


def test_site_password(config):
    assert check_site_password(config, "theshield")
    assert not check_site_password(config, "the shield")
    assert not check_site_password(config, "")
    assert not check_site_password(config, None)


def test_admin_sign_in(db, config):
    db.user_roles.create({'user_email': "commish@example.com", 'role': "admin"})
    session = sign_in(db, config, " Commish@Example.com ", "commish-only")
    assert session.is_admin
    assert session.user_email == "commish@example.com"
    require_admin(session)


def test_sign_in_without_admin_role(db, config):
    session = sign_in(db, config, "fan@example.com", "commish-only")
    assert session.signed_in
    assert not session.is_admin
    with pytest.raises(AuthorizationError):
        require_admin(session)


def test_wrong_password(db, config):
    with pytest.raises(AuthorizationError):
        sign_in(db, config, "commish@example.com", "guess")


def test_sign_in_disabled_without_admin_password(db):
    with pytest.raises(AuthorizationError):
        sign_in(db, LeagueConfig(), "commish@example.com", "anything")


def test_anonymous_is_not_admin():
    assert not ANONYMOUS.signed_in
    with pytest.raises(AuthorizationError):
        require_admin(ANONYMOUS)
