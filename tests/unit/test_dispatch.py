"""
Unit tests for request dispatch.
"""

import pytest

import rauter
from rauter import Router
from rauter.http import HTTPStatus, Request, Response
from rauter.routing import Found, NotFound


class TestDispatch:
    """Tests for Router.use()."""

    def test_literal_route(self, router, make_handler, calls, dispatch):
        """Test that an exact literal match calls the handler with empty params."""
        router.get("/health", make_handler("health"))

        request, response = dispatch(router, "GET", "/health")

        assert calls == [("health", {})]
        assert request.params == {}
        assert response.text == "health"
        assert response.status_code == HTTPStatus.OK

    def test_named_parameter(self, router, make_handler, calls, dispatch):
        """Test that /users/:id binds id from /users/42."""
        router.get("/users/:id", make_handler("get_user"))

        request, _ = dispatch(router, "GET", "/users/42")

        assert calls == [("get_user", {"id": "42"})]
        assert request.params == {"id": "42"}

    def test_multiple_parameters(self, router, make_handler, calls, dispatch):
        """Test that several parameters are bound by position."""
        router.get("/users/:user_id/posts/:post_id", make_handler("post"))

        dispatch(router, "GET", "/users/7/posts/99")

        assert calls == [("post", {"user_id": "7", "post_id": "99"})]

    def test_handler_receives_request_and_response(self, router):
        """Test that the handler gets the same objects that were dispatched."""
        seen = []
        router.post("/items", lambda request, response: seen.append((request, response)))

        request = Request("POST", "/items")
        response = Response()
        Router.use(router, request, response)

        assert seen == [(request, response)]

    def test_method_selects_table(self, router, make_handler, calls, dispatch):
        """Test that the same path under different methods reaches different handlers."""
        router.get("/users", make_handler("list"))
        router.post("/users", make_handler("create"))

        dispatch(router, "GET", "/users")
        dispatch(router, "POST", "/users")

        assert [name for name, _ in calls] == ["list", "create"]

    def test_request_method_case_insensitive(self, router, make_handler, calls, dispatch):
        """Test that a lowercase request method still matches."""
        router.get("/users", make_handler("list"))

        dispatch(router, "get", "/users")

        assert calls == [("list", {})]

    def test_module_level_use(self, router, make_handler, calls):
        """Test the rauter.use() alias."""
        router.get("/", make_handler("index"))

        rauter.use(router, Request("GET", "/"), Response())

        assert calls == [("index", {})]

    def test_handle_shortcut(self, router, make_handler, calls):
        """Test router.handle() as an instance shortcut."""
        router.get("/", make_handler("index"))

        router.handle(Request("GET", "/"), Response())

        assert calls == [("index", {})]

    def test_params_are_fresh_per_request(self, router, dispatch):
        """Test that mutating params in one request does not leak into the next."""
        def mutate(request, response):
            request.params["seen"] = "yes"
            response.end()

        router.get("/users/:id", mutate)

        first, _ = dispatch(router, "GET", "/users/1")
        second, _ = dispatch(router, "GET", "/users/2")

        assert first.params == {"id": "1", "seen": "yes"}
        assert second.params == {"id": "2", "seen": "yes"}
        assert first.params is not second.params

    def test_handler_exception_propagates(self, router, dispatch):
        """Test that errors raised by a handler reach the caller."""
        def broken(request, response):
            raise RuntimeError("boom")

        router.get("/broken", broken)

        with pytest.raises(RuntimeError, match="boom"):
            dispatch(router, "GET", "/broken")


class TestPrecedence:
    """Tests for first-match-wins ordering."""

    def test_param_registered_first_wins(self, router, make_handler, calls, dispatch):
        """Test that /users/:id registered first captures /users/new."""
        router.get("/users/:id", make_handler("get_user"))
        router.get("/users/new", make_handler("new_user"))

        dispatch(router, "GET", "/users/new")

        assert calls == [("get_user", {"id": "new"})]

    def test_literal_registered_first_wins(self, router, make_handler, calls, dispatch):
        """Test that /users/new registered first beats /users/:id."""
        router.get("/users/new", make_handler("new_user"))
        router.get("/users/:id", make_handler("get_user"))

        dispatch(router, "GET", "/users/new")
        dispatch(router, "GET", "/users/42")

        assert calls == [("new_user", {}), ("get_user", {"id": "42"})]

    def test_only_first_match_runs(self, router, make_handler, calls, dispatch):
        """Test that later matching routes are not called."""
        router.get("/a/:x", make_handler("first"))
        router.get("/a/:y", make_handler("second"))

        dispatch(router, "GET", "/a/1")

        assert calls == [("first", {"x": "1"})]

    def test_overwrite_keeps_position(self, router, make_handler, calls, dispatch):
        """Test that replacing a handler keeps the route's original priority."""
        router.get("/users/:id", make_handler("old"))
        router.get("/users/new", make_handler("new_user"))
        router.get("/users/:id", make_handler("replacement"))

        dispatch(router, "GET", "/users/new")

        assert calls == [("replacement", {"id": "new"})]


class TestNotFound:
    """Tests for the 404 fallback."""

    def test_unmatched_path(self, router, make_handler, calls, dispatch):
        """Test that an unregistered path gets 404 with the default message."""
        router.get("/users", make_handler("list"))

        request, response = dispatch(router, "GET", "/posts")

        assert calls == []
        assert response.status_code == 404
        assert response.text == "not found"
        assert response.finished
        assert request.params == {}

    def test_custom_message(self, dispatch):
        """Test that the configured message is used as the 404 body."""
        router = Router("nothing to see here")

        _, response = dispatch(router, "GET", "/missing")

        assert response.status_code == 404
        assert response.text == "nothing to see here"

    def test_method_never_registered(self, router, make_handler, dispatch):
        """Test that a method with no routes yields 404, not a crash."""
        router.get("/users", make_handler("list"))

        _, response = dispatch(router, "DELETE", "/users")

        assert response.status_code == 404
        assert response.text == "not found"

    @pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "BREW"])
    def test_unsupported_method(self, router, make_handler, dispatch, method):
        """Test that methods without a route table fall back to 404."""
        router.get("/users", make_handler("list"))

        _, response = dispatch(router, method, "/users")

        assert response.status_code == 404

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
    def test_empty_router(self, router, dispatch, method):
        """Test that dispatch never throws with zero routes."""
        _, response = dispatch(router, method, "/anything")

        assert response.status_code == 404
        assert response.text == "not found"

    def test_query_string_limitation(self, router, make_handler, calls, dispatch):
        """Test that a query string on the url prevents a match."""
        router.get("/users", make_handler("list"))

        _, response = dispatch(router, "GET", "/users?page=2")

        assert calls == []
        assert response.status_code == 404

    def test_stale_params_cleared(self, router, dispatch):
        """Test that params from a previous dispatch are reset on 404."""
        request = Request("GET", "/missing", params={"id": "old"})

        Router.use(router, request, Response())

        assert request.params == {}

    def test_duck_typed_response(self, router):
        """Test the fallback against a response that only has status_code and end()."""
        class MinimalResponse:
            def __init__(self):
                self.status_code = 200
                self.chunks = []

            def end(self, body):
                self.chunks.append(body)

        response = MinimalResponse()
        Router.use(router, Request("GET", "/"), response)

        assert response.status_code == 404
        assert response.chunks == ["not found"]


class TestResolve:
    """Tests for Router.resolve()."""

    def test_found(self, router, make_handler):
        """Test that a match returns Found with params."""
        get_user = make_handler("get_user")
        router.get("/users/:id", get_user)

        resolution = router.resolve("GET", "/users/5")

        assert isinstance(resolution, Found)
        assert resolution.handler is get_user
        assert resolution.params == {"id": "5"}
        assert resolution.route.pattern == "/users/:id"

    def test_not_found(self, router):
        """Test that no match returns NotFound carrying the fallback."""
        resolution = router.resolve("GET", "/nope")

        assert isinstance(resolution, NotFound)
        assert resolution.handler is router.not_found_handler

    def test_does_not_call_handler(self, router, make_handler, calls):
        """Test that resolving has no side effects."""
        router.get("/", make_handler("index"))

        router.resolve("GET", "/")

        assert calls == []
