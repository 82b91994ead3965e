"""
Errors raised by the seeder.
Every one of them is fatal to a seed run.
"""
from typing import Optional


class SeedError(Exception):
    """Base class for seeding failures"""
    pass


class FixtureError(SeedError):
    """Raised when the seed fixture is unreadable, invalid or inconsistent"""
    pass


class SeedFileNotFoundError(SeedError, FileNotFoundError):
    """Raised when a media file named by the fixture is missing on disk"""
    pass


class PublicRoleNotFoundError(SeedError):
    """Raised when the public role never shows up after all lookup attempts"""
    pass


class StrapiAPIError(SeedError):
    """Raised when the Strapi API rejects a request or cannot be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
