"""
pytest configuration and fixtures.
"""

from typing import Callable, List, Tuple

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rauter import Router
from rauter.http import Request, Response


@pytest.fixture
def router() -> Router:
    """Empty router with the default not-found message."""
    return Router()


@pytest.fixture
def response() -> Response:
    """Fresh in-memory response."""
    return Response()


@pytest.fixture
def calls() -> List[Tuple[str, dict]]:
    """Shared log of (handler name, params) recorded by make_handler."""
    return []


@pytest.fixture
def make_handler(calls) -> Callable[[str], Callable]:
    """Factory for handlers that record their call and answer with their name."""
    def factory(name: str) -> Callable:
        def handler(request, response):
            calls.append((name, dict(request.params)))
            response.end(name)
        handler.__name__ = name
        return handler
    return factory


@pytest.fixture
def dispatch() -> Callable[[Router, str, str], Tuple[Request, Response]]:
    """Run one request through a router and return (request, response)."""
    def run(router: Router, method: str, url: str) -> Tuple[Request, Response]:
        request = Request(method=method, url=url)
        response = Response()
        Router.use(router, request, response)
        return request, response
    return run
