import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from league_site.errors import AuthorizationError

logger = logging.getLogger(__name__)


ADMIN_ROLE = 'admin'


@dataclass(frozen=True)
class Session:
    user_email: Optional[str] = None
    is_admin: bool = False

    @property
    def signed_in(self) -> bool:
        return self.user_email is not None


ANONYMOUS = Session()


def _matches(given: Optional[str], expected: Optional[str]) -> bool:
    if not given or not expected:
        return False
    return hmac.compare_digest(given.encode(), expected.encode())


def check_site_password(config, password: Optional[str]) -> bool:
    """Shared password that unlocks the public site"""
    return _matches(password, config.site_password)


def is_admin_email(db, email: str) -> bool:
    rows = db.user_roles.filter(user_email=email.strip().lower(), role=ADMIN_ROLE)
    return bool(rows)


def sign_in(db, config, email: str, password: str) -> Session:
    """
    Sign in with an email and the admin password.

    The email must hold the admin role in user_roles for the session to
    be an admin session. A wrong password raises AuthorizationError.
    """
    if not email or not email.strip():
        raise AuthorizationError("Email is required")
    if config.admin_password is None:
        raise AuthorizationError("Admin sign-in is disabled: LEAGUE_ADMIN_PASSWORD is not set")
    if not _matches(password, config.admin_password):
        logger.warning(f"Failed admin sign-in for {email}")
        raise AuthorizationError("Invalid email or password")

    email = email.strip().lower()
    admin = is_admin_email(db, email)
    logger.info(f"Signed in {email} (admin={admin})")
    return Session(user_email=email, is_admin=admin)


def require_admin(session: Session) -> None:
    if not session.is_admin:
        raise AuthorizationError("Admin access required")
