"""Route records and resolution results."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Tuple, Union

from .pattern import CompiledPattern


# A handler receives (request, response) and returns nothing useful
Handler = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class RouteEntry:
    """
    A registered route: what the route table stores per key.

    The compiled matcher and the parameter names are kept next to the
    handler, so dispatch never re-parses the URL pattern.
    """

    compiled: CompiledPattern
    handler: Handler

    @property
    def pattern(self) -> str:
        """The normalized URL pattern, e.g. "/users/:id"."""
        return self.compiled.pattern

    @property
    def param_names(self) -> Tuple[str, ...]:
        return self.compiled.param_names

    @property
    def key(self) -> str:
        """Regex source text the table stores this entry under."""
        return self.compiled.source


@dataclass(frozen=True)
class Found:
    """Resolution result: a route matched the request."""

    route: RouteEntry
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def handler(self) -> Handler:
        return self.route.handler


@dataclass(frozen=True)
class NotFound:
    """Resolution result: nothing matched, answer with the fallback."""

    handler: Handler


Resolution = Union[Found, NotFound]
