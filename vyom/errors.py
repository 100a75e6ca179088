"""Exceptions raised by the outfit core and its catalog accessors."""

from typing import Optional


class VyomError(Exception):
    """Base class for domain errors"""


class CatalogError(VyomError):
    """The item catalog answered, but not with a usable wardrobe"""


class DownstreamUnavailable(CatalogError):
    """The item catalog did not respond; the caller may retry later"""

    def __init__(self, message: str = "Wardrobe service temporarily unavailable",
                 retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class CatalogNotAuthorized(CatalogError):
    """The item catalog refused the caller's credentials"""
