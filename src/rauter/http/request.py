"""
=============================================================================
REQUEST CONTRACT
=============================================================================

The router does not parse HTTP. It receives a request object from the host
server and relies on exactly three attributes:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    WHAT THE ROUTER TOUCHES                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   request.method   read    "GET", "post", ...                       │
    │   request.url      read    "/users/42?expand=1" (path + query)      │
    │   request.params   WRITE   {"id": "42"} set just before the handler │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Any object with those attributes works. This module provides:

- RequestLike: a typing.Protocol describing the contract
- Request:     a small dataclass implementing it, used by tests and by
               hosts that build their own request objects

NOTE: the router matches against the raw url, query string included.
A pattern "/users" does NOT match "/users?page=2".

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol
from urllib.parse import parse_qs


class RequestLike(Protocol):
    """Structural type for anything the router can dispatch."""

    method: str
    url: str
    params: Dict[str, str]


@dataclass
class Request:
    """
    In-memory request satisfying RequestLike.

    Example:
        request = Request("GET", "/users/42?expand=profile")
        request.path          # "/users/42"
        request.query_string  # "expand=profile"
        request.params        # {} until the router dispatches it
    """

    method: str                                            # GET, POST, ...
    url: str = "/"                                         # Path plus optional query string
    headers: Dict[str, str] = field(default_factory=dict)  # Lowercase header names
    params: Dict[str, str] = field(default_factory=dict)   # Filled in by the router

    def __post_init__(self):
        # HTTP header names are case-insensitive
        self.headers = {name.lower(): value for name, value in self.headers.items()}

    @property
    def path(self) -> str:
        """The url without its query string."""
        return self.url.split("?", 1)[0]

    @property
    def query_string(self) -> str:
        """Everything after the first '?', or "" when there is none."""
        _, _, query = self.url.partition("?")
        return query

    @property
    def query_params(self) -> Dict[str, list[str]]:
        """
        Parsed query string as a dict of lists.

        "?a=1&a=2&b=3" → {"a": ["1", "2"], "b": ["3"]}
        """
        return parse_qs(self.query_string, keep_blank_values=True)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a query parameter, or default."""
        values = self.query_params.get(name)
        return values[0] if values else default

    def get_header(self, name: str, default: str = "") -> str:
        """Header lookup by case-insensitive name."""
        return self.headers.get(name.lower(), default)
