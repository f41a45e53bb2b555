"""
=============================================================================
RESPONSE CONTRACT
=============================================================================

Handlers and the fallback handler write to a response object supplied by
the host server. The router itself only needs two things from it:

    response.status_code = 404     settable status
    response.end("not found")      write the body and finish

ResponseLike captures that contract. Response is an in-memory
implementation that records what was written, which is what tests and
simple hosts need:

    Handler writes            Response records          Host sends
    ──────────────            ────────────────          ──────────
    status_code = 201   ───►  status_code=201     ───►  to_bytes()
    end('{"id": 1}')          body=b'{"id": 1}'
                              finished=True

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Union

from ..errors import ResponseEndedError
from .status_codes import HTTPStatus, get_phrase


class ResponseLike(Protocol):
    """Structural type for anything a handler can write to."""

    status_code: int

    def end(self, body: Union[str, bytes] = b"") -> None:
        ...


@dataclass
class Response:
    """
    In-memory response satisfying ResponseLike.

    end() may only be called once; a second call raises ResponseEndedError,
    so a test can tell a handler that answered twice from one that answered
    once.
    """

    status_code: int = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    finished: bool = False
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Example: "HTTP/1.1 404 Not Found"
        """
        return f"{self.version} {int(self.status_code)} {get_phrase(self.status_code)}"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def set_header(self, name: str, value: str) -> "Response":
        """Set a response header. Returns self for chaining."""
        self.headers[name] = value
        return self

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Header lookup by case-insensitive name."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    def end(self, body: Union[str, bytes] = b"") -> None:
        """
        Write the body and finish the response.

        Strings are encoded as UTF-8.
        """
        if self.finished:
            raise ResponseEndedError("Response already ended")

        if isinstance(body, str):
            body = body.encode("utf-8")

        self.body = body
        self.finished = True

    def to_bytes(self) -> bytes:
        """
        Serialize as an HTTP/1.1 message.

        Content-Length is always derived from the body.
        """
        headers = {k: v for k, v in self.headers.items() if k.lower() != "content-length"}
        headers["Content-Length"] = str(len(self.body))

        lines = [self.status_line]
        lines.extend(f"{name}: {value}" for name, value in headers.items())

        return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + self.body
