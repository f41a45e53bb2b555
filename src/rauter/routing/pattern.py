"""
=============================================================================
URL PATTERN COMPILATION
=============================================================================

Turns a URL pattern such as "/users/:id" into an anchored regular
expression plus the ordered list of parameter names it declares.

=============================================================================
PATTERN SYNTAX
=============================================================================

1. LITERAL: exact text

   Pattern: /users/new
   Matches: /users/new, /users/new/
   Regex metacharacters are escaped, so "/v1.0" only matches a real dot.

2. NAMED PARAMETER (:name): one path segment

   Pattern: /users/:id
   Matches: /users/42    → {"id": "42"}
   Doesn't match: /users, /users/42/posts

3. CUSTOM PARAMETER (:name(regex)): one segment matching a regex

   Pattern: /users/:id(\\d+)
   Matches: /users/42    → {"id": "42"}
   Doesn't match: /users/new

4. UNNAMED PARAMETER ((regex)): keyed by position, "0", "1", ...

   Pattern: /files/(\\d+)
   Matches: /files/7     → {"0": "7"}

5. MODIFIERS after a parameter

   ?  optional        /users/:id?     matches /users and /users/42
   +  one or more     /files/:path+   matches /files/a/b → {"path": "a/b"}
   *  zero or more    /files/:path*   matches /files too

A backslash escapes the next character: "/price/\\:amount" is literal.

=============================================================================
COMPILATION
=============================================================================

    Pattern:  /users/:id/posts/:post_id
                 │     │         │
                 ▼     ▼         ▼
    Tokens:   "/users"  {id, prefix "/"}  "/posts"  {post_id, prefix "/"}
                 │     │         │
                 ▼     ▼         ▼
    Regex:    ^/users/((?:[^/]+?))/posts/((?:[^/]+?))(?:/(?=$))?$
                      ────────────        ────────────  ───────────
                      group 1 → id        group 2       optional
                                          → post_id     trailing slash

Groups are positional. Parameter i is group i + 1 (group 0 is the whole
match), which is why custom expressions have their own parentheses
escaped: they must not introduce extra groups.

The regex SOURCE TEXT is what the route table uses as its key, so two
patterns that compile to the same expression are the same route.

=============================================================================
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..errors import PatternError, RouteTypeError


# ─────────────────────────────────────────────────────────────────────────
# TOKENIZER
# ─────────────────────────────────────────────────────────────────────────
# Groups:
#   1 escaped   \x
#   2 prefix    "/" or "." immediately before the parameter
#   3 name      :name
#   4 custom    (...) after :name
#   5 group     (...) with no name
#   6 modifier  ? * +
_TOKEN_RE = re.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?)"
)

# Characters escaped inside custom expressions so they cannot open groups
_GROUP_ESCAPE_RE = re.compile(r"([=!:$/()])")

# Absolute URLs are not patterns
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

# After normalization: a slash, then anything but whitespace or a fragment
_PATH_SHAPE_RE = re.compile(r"^/[^\s#]*$")


@dataclass(frozen=True)
class ParamToken:
    """A parameter parsed out of a URL pattern."""

    name: str               # "id", or "0", "1", ... for unnamed groups
    prefix: str             # "/" or "." consumed together with the value
    delimiter: str          # Character the default expression stops at
    optional: bool          # ? or * modifier
    repeat: bool            # + or * modifier
    pattern: str            # Expression for one occurrence


Token = Union[str, ParamToken]


@dataclass(frozen=True)
class CompiledPattern:
    """
    A URL pattern compiled for matching.

    Example:
        compiled = compile_pattern("/users/:id")
        compiled.source        # "^/users/((?:[^/]+?))(?:/(?=$))?$"
        compiled.param_names   # ("id",)
        compiled.match("/users/42")   # {"id": "42"}
        compiled.match("/posts/42")   # None
    """

    pattern: str                      # Normalized URL pattern
    regex: re.Pattern                 # Compiled matcher
    param_names: Tuple[str, ...]      # Declared names, in group order

    @property
    def source(self) -> str:
        """Regular expression source text (the route table key)."""
        return self.regex.pattern

    def match(self, url: str) -> Optional[Dict[str, str]]:
        """
        Match a request url against this pattern.

        Returns the extracted parameters (possibly empty) on a match,
        None otherwise.
        """
        match = self.regex.fullmatch(url)
        if match is None:
            return None
        return extract_params(self.param_names, match)


def normalize_pattern(url_pattern: str) -> str:
    """
    Validate a URL pattern and make sure it starts with "/".

    Rejected:
        ""  "   "                 nothing to route
        "http://example.com/x"    absolute URL, not a path
        "/users list"  "/a#b"     whitespace or fragment

    Raises:
        RouteTypeError: url_pattern is not a string
        PatternError: url_pattern fails the path-shape check
    """
    if not isinstance(url_pattern, str):
        raise RouteTypeError(
            f"URL expected a string but got {type(url_pattern).__name__}",
            value=url_pattern,
        )

    if not url_pattern.strip():
        raise PatternError("URL pattern is empty", pattern=url_pattern)

    if _SCHEME_RE.match(url_pattern):
        raise PatternError(
            f"URL pattern must be a path, not an absolute URL: {url_pattern!r}",
            pattern=url_pattern,
        )

    if not url_pattern.startswith("/"):
        url_pattern = "/" + url_pattern

    if not _PATH_SHAPE_RE.match(url_pattern):
        raise PatternError(
            f"URL pattern does not look like a path: {url_pattern!r}",
            pattern=url_pattern,
        )

    return url_pattern


def parse_pattern(pattern: str) -> List[Token]:
    """
    Split a URL pattern into literal strings and ParamTokens.

        parse_pattern("/users/:id")
        → ["/users", ParamToken(name="id", prefix="/", ...)]
    """
    tokens: List[Token] = []
    unnamed_index = 0
    literal = ""
    position = 0

    for m in _TOKEN_RE.finditer(pattern):
        escaped, prefix, name, custom, group, modifier = m.groups()

        literal += pattern[position:m.start()]
        position = m.end()

        if escaped:
            literal += escaped[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        if name is None:
            name = str(unnamed_index)
            unnamed_index += 1

        prefix = prefix or ""
        delimiter = prefix or "/"
        expression = custom or group

        tokens.append(ParamToken(
            name=name,
            prefix=prefix,
            delimiter=delimiter,
            optional=modifier in ("?", "*"),
            repeat=modifier in ("+", "*"),
            pattern=(
                _GROUP_ESCAPE_RE.sub(r"\\\1", expression)
                if expression
                else f"[^{re.escape(delimiter)}]+?"
            ),
        ))

    literal += pattern[position:]
    if literal:
        tokens.append(literal)

    return tokens


def tokens_to_regex(tokens: List[Token]) -> str:
    """
    Build the anchored regex source for a token list.

    The trailing slash is optional and the match runs to the end of the
    string.
    """
    route = ""

    for token in tokens:
        if isinstance(token, str):
            route += re.escape(token)
            continue

        prefix = re.escape(token.prefix)
        capture = f"(?:{token.pattern})"

        if token.repeat:
            capture += f"(?:{prefix}{capture})*"

        if token.optional:
            if prefix:
                capture = f"(?:{prefix}({capture}))?"
            else:
                capture = f"({capture})?"
        else:
            capture = f"{prefix}({capture})"

        route += capture

    if route.endswith("/"):
        route = route[:-1]

    return f"^{route}(?:/(?=$))?$"


def compile_pattern(url_pattern: str) -> CompiledPattern:
    """
    Normalize, validate and compile a URL pattern.

    Raises:
        RouteTypeError: url_pattern is not a string
        PatternError: invalid path shape or invalid custom expression
    """
    pattern = normalize_pattern(url_pattern)
    tokens = parse_pattern(pattern)
    names = tuple(token.name for token in tokens if isinstance(token, ParamToken))

    try:
        regex = re.compile(tokens_to_regex(tokens))
    except re.error as e:
        raise PatternError(f"Invalid URL pattern {pattern!r}: {e}", pattern=pattern) from e

    if regex.groups != len(names):
        raise PatternError(
            f"Invalid URL pattern {pattern!r}: custom expressions must not contain groups",
            pattern=pattern,
        )

    return CompiledPattern(pattern=pattern, regex=regex, param_names=names)


def extract_params(param_names: Tuple[str, ...], match: re.Match) -> Dict[str, str]:
    """
    Zip declared names with captured groups by position.

    Group 0 is the whole match, so name i pairs with group i + 1.
    Optional parameters that did not participate are left out.
    """
    params: Dict[str, str] = {}
    for index, name in enumerate(param_names, start=1):
        value = match.group(index)
        if value is not None:
            params[name] = value
    return params
