"""Route compilation, storage and resolution."""

from .pattern import (
    CompiledPattern,
    ParamToken,
    compile_pattern,
    extract_params,
    normalize_pattern,
    parse_pattern,
)
from .route import Found, Handler, NotFound, Resolution, RouteEntry
from .table import RouteTable

__all__ = [
    "CompiledPattern",
    "ParamToken",
    "compile_pattern",
    "extract_params",
    "normalize_pattern",
    "parse_pattern",
    "Found",
    "Handler",
    "NotFound",
    "Resolution",
    "RouteEntry",
    "RouteTable",
]
