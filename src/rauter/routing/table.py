"""
=============================================================================
ROUTE TABLE
=============================================================================

One RouteTable per HTTP method. It is an ordered mapping:

    key (regex source)                              → RouteEntry
    ─────────────────────────────────────────────────────────────────
    ^/users(?:/(?=$))?$                             → list_users
    ^/users/((?:[^/]+?))(?:/(?=$))?$                → get_user
    ^/users/new(?:/(?=$))?$                         → new_user_form

ORDER IS PRIORITY. find() walks entries in registration order and returns
the first match, so in the table above "/users/new" is answered by
get_user with {"id": "new"}. Register "/users/new" first to make it win.

Re-registering a key replaces the handler but keeps the key's original
position.

Reading never creates entries: get() of an unknown key returns the
default, and there is no auto-vivifying __getitem__.

=============================================================================
"""

from typing import Dict, Iterator, List, Optional

from ..http.methods import HTTPMethod
from .route import Found, RouteEntry


class RouteTable:
    """Ordered routes for a single HTTP method."""

    __slots__ = ("method", "_entries")

    def __init__(self, method: Optional[HTTPMethod] = None):
        self.method = method
        self._entries: Dict[str, RouteEntry] = {}

    def add(self, entry: RouteEntry) -> Optional[RouteEntry]:
        """
        Store an entry under its key.

        Returns the entry it replaced, if any.
        """
        previous = self._entries.get(entry.key)
        self._entries[entry.key] = entry
        return previous

    def get(self, key: str, default: Optional[RouteEntry] = None) -> Optional[RouteEntry]:
        return self._entries.get(key, default)

    def find(self, url: str) -> Optional[Found]:
        """
        First entry whose pattern matches url, with its extracted params.

        O(N) regex matches in registration order; no scoring.
        """
        for entry in self._entries.values():
            params = entry.compiled.match(url)
            if params is not None:
                return Found(route=entry, params=params)
        return None

    def keys(self) -> List[str]:
        """Keys in registration order."""
        return list(self._entries)

    def entries(self) -> List[RouteEntry]:
        """Entries in registration order."""
        return list(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        method = self.method.value if self.method else "-"
        return f"RouteTable(method={method}, routes={len(self._entries)})"
