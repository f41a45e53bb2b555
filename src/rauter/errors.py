"""
=============================================================================
ROUTER EXCEPTIONS
=============================================================================

Every error the router raises derives from RouterError, and also from the
built-in exception a caller would naturally expect:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       EXCEPTION HIERARCHY                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   RouterError                                                        │
    │   ├── RouteTypeError          (TypeError)    bad argument types     │
    │   ├── HandlerArityError       (ValueError)   wrong handler shape    │
    │   ├── PatternError            (ValueError)   malformed URL pattern  │
    │   ├── UnsupportedMethodError  (ValueError)   not one of the five    │
    │   ├── RouterFrozenError       (RuntimeError) late registration      │
    │   ├── ConfigurationError      (ValueError)   invalid RouterConfig   │
    │   └── ResponseEndedError      (RuntimeError) end() called twice     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

All of these are raised at REGISTRATION time. Dispatch never raises for a
well-formed request: an unmatched route is answered with 404, not an error.

=============================================================================
"""

from typing import Any


class RouterError(Exception):
    """Base class for all router errors."""


class RouteTypeError(RouterError, TypeError):
    """
    Raised when a registration argument has the wrong type.

    Covers a non-string method, a non-string URL pattern and a handler
    that is not callable at all.
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class HandlerArityError(RouterError, ValueError):
    """
    Raised when a handler cannot be called as handler(request, response).
    """

    def __init__(self, message: str, handler: Any = None):
        super().__init__(message)
        self.handler = handler


class PatternError(RouterError, ValueError):
    """
    Raised when a URL pattern fails the path-shape check or cannot be
    compiled into a regular expression.
    """

    def __init__(self, message: str, pattern: str = ""):
        super().__init__(message)
        self.pattern = pattern


class UnsupportedMethodError(RouterError, ValueError):
    """Raised when registering under a method other than DELETE/GET/PATCH/POST/PUT."""

    def __init__(self, method: str):
        super().__init__(f"Unsupported HTTP method: {method!r}")
        self.method = method


class RouterFrozenError(RouterError, RuntimeError):
    """Raised when a route is registered after the router was frozen."""


class ConfigurationError(RouterError, ValueError):
    """Raised by RouterConfig.validate() for invalid settings."""


class ResponseEndedError(RouterError, RuntimeError):
    """Raised when end() is called on a Response that already ended."""
