"""
=============================================================================
HTTP STATUS CODES (RFC 7231)
=============================================================================

The status codes the router and its reference Response actually write:
200 for a fresh Response and 404 from the fallback handler. Handlers set
whatever they like, so any integer is accepted by Response.status_code
and get_phrase() answers "Unknown" for codes not listed here.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200                       # Response default
    NOT_FOUND = 404                # Fallback handler status

    @property
    def phrase(self) -> str:
        """Reason phrase used in the HTTP status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "Not Found",
}


def get_phrase(status_code: int) -> str:
    """
    Reason phrase for an arbitrary integer status code.

    Falls back to "Unknown" for codes outside HTTPStatus.
    """
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"
