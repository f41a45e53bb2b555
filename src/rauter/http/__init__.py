"""
=============================================================================
HTTP VOCABULARY
=============================================================================

The small set of HTTP types the router speaks:

    methods.py       HTTPMethod - the five methods with route tables
    status_codes.py  HTTPStatus - status codes with reason phrases
    request.py       RequestLike / Request - what the router reads
    response.py      ResponseLike / Response - what handlers write

Usage:
    from rauter.http import Request, Response, HTTPMethod, HTTPStatus

=============================================================================
"""

from .methods import HTTPMethod
from .status_codes import HTTPStatus, get_phrase
from .request import Request, RequestLike
from .response import Response, ResponseLike

__all__ = [
    "HTTPMethod",
    "HTTPStatus",
    "get_phrase",
    "Request",
    "RequestLike",
    "Response",
    "ResponseLike",
]
