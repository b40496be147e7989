"""
URL parsing and normalization.

Graph keys are absolute URLs with query string and fragment removed and the
path escaped and defaulted to ``/``. Display paths are the escaped path only.
"""
from __future__ import annotations

import re
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from sitemapper.errors import InvalidLinkError, InvalidSeedError

ALLOWED_SCHEMES: frozenset[str] = frozenset(("http", "https"))

# Characters left untouched when escaping a path ("%" keeps escaping idempotent)
_PATH_SAFE = "/%:@!$&'()*+,;=-._~[]"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _escaped_path(u: SplitResult) -> str:
    return quote(u.path, safe=_PATH_SAFE) or "/"


def normalize_url(u: SplitResult) -> str:
    """Return the graph key for an absolute URL: scheme, host and path only."""
    return urlunsplit((u.scheme, u.netloc, _escaped_path(u), "", ""))


def display_path(u: SplitResult) -> str:
    """Return the escaped path of ``u``, ``/`` when empty."""
    return _escaped_path(u)


def host_of(u: SplitResult) -> str:
    """Host and port of ``u`` as written, without any userinfo."""
    return u.netloc.rpartition("@")[2]


def parse_reference(href: str) -> SplitResult:
    """
    Parse a raw href into a URL reference.

    Raises InvalidLinkError for references that are not valid URLs:
    control characters, a second ``#``, malformed percent-escapes, a colon in
    the first segment of a relative path, or an unparseable host/port.
    """
    ref = href.strip()
    if _CONTROL_CHARS.search(ref):
        raise InvalidLinkError(f"control character in {href!r}")
    if ref.count("#") > 1:
        raise InvalidLinkError(f"more than one fragment in {href!r}")
    if _BAD_ESCAPE.search(ref):
        raise InvalidLinkError(f"invalid percent-escape in {href!r}")

    try:
        parsed = urlsplit(ref)
        _ = parsed.port  # raises on an invalid port
    except ValueError as e:
        raise InvalidLinkError(f"{href!r}: {e}") from e

    if not parsed.scheme and not parsed.netloc:
        first_segment = parsed.path.split("/", 1)[0]
        if ":" in first_segment:
            raise InvalidLinkError(f"colon in first path segment of {href!r}")
    return parsed


def parse_seed(raw: str) -> SplitResult:
    """Parse the start URL, which must be an absolute http(s) URL with a host."""
    try:
        parsed = parse_reference(raw)
    except InvalidLinkError as e:
        raise InvalidSeedError(str(e)) from e

    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.hostname:
        raise InvalidSeedError(f"not an absolute http(s) URL: {raw!r}")
    return parsed
