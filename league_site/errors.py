from typing import Optional


class LeagueError(Exception):
    """Base class for league site errors"""


class NotFoundError(LeagueError):
    """A lookup by id found nothing"""

    def __init__(self, table: str, record_id: Optional[str] = None):
        self.table = table
        self.record_id = record_id
        if record_id is None:
            message = f"No matching record in {table}"
        else:
            message = f"No record with id {record_id!r} in {table}"
        super().__init__(message)


class ValidationError(LeagueError, ValueError):
    """Input that would corrupt derived standings if it were defaulted"""


class AuthorizationError(LeagueError):
    """A mutation was attempted without an admin session"""


class DataIntegrityWarning(UserWarning):
    """Non-fatal: data is tied or undecided and is surfaced as such"""
