"""
=============================================================================
ROUTER
=============================================================================

Maps an incoming (method, url) to a handler, or to a 404 fallback.

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   SETUP                                                              │
    │   router.get("/users/:id", get_user)                                 │
    │        │                                                             │
    │        ▼                                                             │
    │   validate method / pattern / handler                                │
    │        │                                                             │
    │        ▼                                                             │
    │   compile "/users/:id" → ^/users/((?:[^/]+?))(?:/(?=$))?$            │
    │        │                                                             │
    │        ▼                                                             │
    │   tables[GET][<regex source>] = RouteEntry(compiled, get_user)       │
    │                                                                      │
    │   REQUEST TIME                                                       │
    │   Router.use(router, request, response)     GET /users/42            │
    │        │                                                             │
    │        ▼                                                             │
    │   tables[GET], walked in registration order                          │
    │        │                                                             │
    │        ├── first match ──► request.params = {"id": "42"}             │
    │        │                   get_user(request, response)               │
    │        │                                                             │
    │        └── no match ─────► response.status_code = 404                │
    │                            response.end("not found")                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
WHAT CAN GO WRONG, AND WHEN
=============================================================================

Registration validates eagerly and raises (see rauter.errors).

Dispatch does not raise for a well-formed request. An unknown method, an
unmatched url, or an empty router all end the response with 404 and the
configured not-found message. Exceptions raised BY a handler propagate to
the host server unchanged.

=============================================================================
"""

import inspect
import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import RouterConfig
from .errors import (
    HandlerArityError,
    RouteTypeError,
    RouterFrozenError,
    UnsupportedMethodError,
)
from .http.methods import HTTPMethod
from .http.status_codes import HTTPStatus
from .routing.pattern import compile_pattern
from .routing.route import Found, Handler, NotFound, Resolution, RouteEntry
from .routing.table import RouteTable


logger = logging.getLogger(__name__)


class NotFoundHandler:
    """
    The fallback handler: status 404 plus the configured message.

    Used for unmatched urls and for methods that have no route table.
    """

    __slots__ = ("message",)

    def __init__(self, message: str = "not found"):
        self.message = message

    def __call__(self, request: Any, response: Any) -> None:
        response.status_code = HTTPStatus.NOT_FOUND
        response.end(self.message)

    def __repr__(self) -> str:
        return f"NotFoundHandler({self.message!r})"


def check_handler(handler: Any) -> None:
    """
    Make sure handler can be called as handler(request, response).

    Raises:
        RouteTypeError: handler is not callable
        HandlerArityError: handler declares fewer than two named
            positional parameters (*args does not count), requires
            more than two, or requires a keyword-only argument
    """
    if not callable(handler):
        raise RouteTypeError(f"callback expected a function but got {handler!r}", value=handler)

    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        # Some builtins expose no signature; they are called as-is.
        logger.debug(f"Cannot inspect signature of {handler!r}, skipping arity check")
        return

    positional = 0
    required = 0

    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
            if param.default is param.empty:
                required += 1
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            raise HandlerArityError(
                f"callback function has a required keyword-only argument {param.name!r}",
                handler=handler,
            )

    if positional < 2:
        raise HandlerArityError(
            f"callback function needs to have 2 arguments but has {positional}",
            handler=handler,
        )

    if required > 2:
        raise HandlerArityError(
            f"callback function requires {required} arguments but is called with 2",
            handler=handler,
        )


class Router:
    """
    HTTP request router with per-method route tables.

    ==========================================================================
    USAGE
    ==========================================================================

        router = Router()                      # 404 body: "not found"
        router = Router("nothing here")        # custom 404 body

        def get_user(request, response):
            response.end(f"user {request.params['id']}")

        router.get("/users/:id", get_user)

        # In the host server's per-request callback:
        Router.use(router, request, response)

    Decorator form:

        @router.route("POST", "/users")
        def create_user(request, response):
            response.status_code = 201
            response.end("created")

    ==========================================================================
    PRIORITY
    ==========================================================================

    First registered, first matched. There is no specificity ranking:

        router.get("/users/new", new_user_form)   # register first...
        router.get("/users/:id", get_user)        # ...or :id swallows "new"

    ==========================================================================
    LIFECYCLE
    ==========================================================================

    Register everything during setup, then serve. freeze() (or
    RouterConfig.freeze_on_first_dispatch) turns any later registration
    into RouterFrozenError instead of a silent change under live traffic.

    ==========================================================================
    """

    def __init__(
        self,
        not_found_message: Optional[str] = None,
        *,
        config: Optional[RouterConfig] = None,
    ):
        """
        Initialize the router.

        Args:
            not_found_message: Body of 404 responses. Overrides the value
                in config when given.
            config: Router configuration. Defaults to RouterConfig().
        """
        config = config or RouterConfig()
        if not_found_message is not None:
            config = replace(config, not_found_message=not_found_message)
        config.validate()  # Fail-fast on invalid config

        self.config = config
        self._tables: Dict[HTTPMethod, RouteTable] = {
            method: RouteTable(method) for method in HTTPMethod
        }
        self._not_found = NotFoundHandler(config.not_found_message)
        self._frozen = False

    @property
    def not_found_message(self) -> str:
        return self.config.not_found_message

    @property
    def not_found_handler(self) -> NotFoundHandler:
        return self._not_found

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Router":
        """Reject all further registrations. Returns self."""
        if not self._frozen:
            self._frozen = True
            logger.info(f"Router frozen with {sum(len(t) for t in self._tables.values())} routes")
        return self

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def register(self, method: str, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """
        Register handler for method and url_pattern.

        This is the core registration method; get(), post() etc. are thin
        wrappers around it.

        Args:
            method: HTTP method, case-insensitive (DELETE, GET, PATCH, POST, PUT)
            url_pattern: URL pattern, e.g. "/users/:id". A leading "/" is
                added when missing.
            handler: Function called as handler(request, response)

        Returns:
            The handler, unchanged.

        Raises:
            RouterFrozenError: the router is frozen
            RouteTypeError: method/url_pattern not a string, handler not callable
            UnsupportedMethodError: method is not one of the five
            HandlerArityError: handler cannot take (request, response)
            PatternError: url_pattern is malformed
        """
        if self._frozen:
            raise RouterFrozenError(f"Cannot register {method} {url_pattern}: router is frozen")

        if not isinstance(method, str) or not method:
            raise RouteTypeError(
                f"method expected a non-empty string but got {method!r}",
                value=method,
            )

        http_method = HTTPMethod.parse(method)
        if http_method is None:
            raise UnsupportedMethodError(method)

        if not isinstance(url_pattern, str):
            raise RouteTypeError(f"URL expected a string but got {url_pattern!r}", value=url_pattern)

        check_handler(handler)

        entry = RouteEntry(compiled=compile_pattern(url_pattern), handler=handler)
        previous = self._tables[http_method].add(entry)

        if previous is not None:
            logger.warning(
                f"{http_method} {entry.pattern} replaces handler "
                f"{getattr(previous.handler, '__name__', previous.handler)!r}"
            )

        logger.debug(f"Registered {http_method} {entry.pattern} as {entry.key}")
        return handler

    def route(self, method: str, url_pattern: str) -> Callable[[Handler], Handler]:
        """
        Decorator form of register().

        Usage:
            @router.route("GET", "/users")
            def list_users(request, response):
                response.end("[]")
        """
        def decorator(handler: Handler) -> Handler:
            return self.register(method, url_pattern, handler)
        return decorator

    def get(self, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """Register a GET route."""
        return self.register(HTTPMethod.GET.value, url_pattern, handler)

    def post(self, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """Register a POST route."""
        return self.register(HTTPMethod.POST.value, url_pattern, handler)

    def put(self, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """Register a PUT route."""
        return self.register(HTTPMethod.PUT.value, url_pattern, handler)

    def patch(self, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """Register a PATCH route."""
        return self.register(HTTPMethod.PATCH.value, url_pattern, handler)

    def delete(self, url_pattern: str, handler: Optional[Handler] = None) -> Handler:
        """Register a DELETE route."""
        return self.register(HTTPMethod.DELETE.value, url_pattern, handler)

    # =========================================================================
    # LOOKUP AND RESOLUTION
    # =========================================================================

    def table(self, method: str) -> RouteTable:
        """
        The route table for method (case-insensitive).

        Methods without a table (HEAD, OPTIONS, anything unknown) get a
        fresh empty table, so callers can always iterate the result.
        """
        http_method = HTTPMethod.parse(method) if isinstance(method, str) else None
        if http_method is None:
            return RouteTable()
        return self._tables[http_method]

    def lookup(self, method: str, key: str) -> Handler:
        """
        Handler stored under an exact table key, or the 404 handler.

        Never raises and never creates an entry, for any method string.
        """
        entry = self.table(method).get(key)
        return entry.handler if entry is not None else self._not_found

    def resolve(self, method: str, url: str) -> Resolution:
        """
        Find the handler for a request without calling it.

        Returns:
            Found(route, params) for the first matching route, or
            NotFound(handler) carrying the 404 fallback.
        """
        found = self.table(method).find(url) if isinstance(url, str) else None
        if found is None:
            return NotFound(self._not_found)
        return found

    # =========================================================================
    # DISPATCH
    # =========================================================================

    @staticmethod
    def use(router: "Router", request: Any, response: Any) -> None:
        """
        Dispatch a request through router.

        Meant to be wired into a host server's per-request callback:

            def on_request(request, response):
                Router.use(router, request, response)

        Sets request.params, then calls the first matching handler (or
        the 404 handler) with (request, response).
        """
        if router.config.freeze_on_first_dispatch and not router.frozen:
            router.freeze()

        method = request.method
        url = request.url
        resolution = router.resolve(method, url)

        if isinstance(resolution, Found):
            request.params = resolution.params
            logger.debug(f"{method} {url} matched {resolution.route.pattern} {resolution.params}")
        else:
            request.params = {}
            logger.debug(f"{method} {url} matched nothing, answering 404")

        resolution.handler(request, response)

    def handle(self, request: Any, response: Any) -> None:
        """Instance shortcut for Router.use(self, request, response)."""
        Router.use(self, request, response)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Tuple[str, str]]:
        """
        All registered (method, pattern) pairs.

        Grouped by method, each group in registration order.
        """
        return [
            (method.value, entry.pattern)
            for method, table in self._tables.items()
            for entry in table.entries()
        ]

    def print_routes(self) -> None:
        """
        Print all registered routes (useful for debugging).

        Example output:
            Registered Routes:
            ------------------------------------------------------------
              GET      /users
              GET      /users/:id
              POST     /users
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for method, pattern in self.routes():
            print(f"  {method:8} {pattern}")
        print("-" * 60)

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def __repr__(self) -> str:
        return f"Router(routes={len(self)}, not_found_message={self.not_found_message!r})"


# Module-level dispatch entry point: rauter.use(router, request, response)
use = Router.use
