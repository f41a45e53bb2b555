"""
=============================================================================
HTTP METHODS
=============================================================================

The router keeps one route table per HTTP method. The set of methods it
accepts registrations for is closed:

    ┌────────┬───────────────────────────────────────────────────────────┐
    │ DELETE │ Remove a resource                                         │
    │ GET    │ Read a resource                                           │
    │ PATCH  │ Partially update a resource                               │
    │ POST   │ Create a resource / submit data                           │
    │ PUT    │ Replace a resource                                        │
    └────────┴───────────────────────────────────────────────────────────┘

Requests may still arrive with any method (HEAD, OPTIONS, BREW, ...).
Those have no table, so they always fall through to the 404 handler.

=============================================================================
"""

from enum import Enum
from typing import Optional


class HTTPMethod(str, Enum):
    """
    Supported HTTP methods.

    Extends str, so members compare equal to their names:

        >>> HTTPMethod.GET == "GET"
        True
    """

    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    @classmethod
    def parse(cls, value: str) -> Optional["HTTPMethod"]:
        """
        Look up a method name case-insensitively.

        Returns None for methods outside the supported set.
        """
        try:
            return cls(value.upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value
