"""
=============================================================================
RAUTER - Minimal HTTP Request Router
=============================================================================

Given a request's method and url, dispatch to a registered handler with
the path parameters extracted, or answer 404 with a configurable message.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    rauter/
    ├── __init__.py          # This file - package exports
    ├── router.py            # Router, NotFoundHandler, use()
    ├── config.py            # RouterConfig dataclass, setup_logging(config)
    ├── errors.py            # Exception hierarchy
    ├── routing/             # Matching machinery
    │   ├── pattern.py       # URL pattern → regex compilation
    │   ├── route.py         # RouteEntry, Found, NotFound
    │   └── table.py         # Ordered per-method RouteTable
    └── http/                # HTTP vocabulary
        ├── methods.py       # HTTPMethod enum
        ├── status_codes.py  # HTTPStatus enum
        ├── request.py       # Request contract + reference Request
        └── response.py      # Response contract + reference Response

=============================================================================
QUICK START
=============================================================================

    from rauter import Router

    router = Router()

    def get_user(request, response):
        response.end(f"user {request.params['id']}")

    router.get("/users/:id", get_user)

    # Inside the host server's request callback:
    Router.use(router, request, response)

The host supplies the request (method, url, writable params) and the
response (settable status_code, end(body)). rauter.http.Request and
rauter.http.Response implement both contracts in memory.

=============================================================================
"""

__version__ = "1.0.0"

from .config import RouterConfig, setup_logging
from .errors import (
    ConfigurationError,
    HandlerArityError,
    PatternError,
    ResponseEndedError,
    RouteTypeError,
    RouterError,
    RouterFrozenError,
    UnsupportedMethodError,
)
from .router import NotFoundHandler, Router, use

__all__ = [
    "Router",
    "NotFoundHandler",
    "use",
    "RouterConfig",
    "setup_logging",
    "RouterError",
    "RouteTypeError",
    "HandlerArityError",
    "PatternError",
    "UnsupportedMethodError",
    "RouterFrozenError",
    "ConfigurationError",
    "ResponseEndedError",
    "__version__",
]
