"""URL well-formedness checks used by the tag validators.

Leniency follows browser URL parsing: surrounding whitespace is ignored,
tabs and newlines are dropped, spaces are allowed outside the host, and
`http:example.com` is read as `http://example.com`.
"""

import re
from typing import Optional
from urllib.parse import ParseResult, urlparse

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_TAB_NEWLINE = re.compile(r"[\t\r\n]")
_HIERARCHICAL = {"http", "https", "ftp", "ws", "wss"}
_RELATIVE_PREFIXES = ("/", "./", "../", "data:")


def _parse(value: str) -> Optional[ParseResult]:
    try:
        parsed = urlparse(value)
        parsed.port  # raises on a malformed port
    except ValueError:
        return None
    return parsed


def _clean(value: str) -> str:
    return _TAB_NEWLINE.sub("", value.strip())


def is_absolute_url(value: str) -> bool:
    """True when `value` parses as an absolute URL (scheme required)."""
    value = _clean(value or "")
    if not value:
        return False
    parsed = _parse(value)
    if parsed is None or not parsed.scheme or not _SCHEME.match(parsed.scheme):
        return False

    scheme = parsed.scheme.lower()
    if scheme in _HIERARCHICAL:
        if not parsed.netloc:
            # http:example.com, http:/example.com
            rest = value[len(parsed.scheme) + 1:].lstrip("/\\")
            parsed = _parse(f"{scheme}://{rest}")
            if parsed is None:
                return False
        host = parsed.hostname
        return bool(host) and not any(c.isspace() for c in host)
    return bool(parsed.netloc or parsed.path)


def is_url_or_relative(value: str) -> bool:
    """Absolute URL, root/dot-relative path or data: URI."""
    if _clean(value or "").startswith(_RELATIVE_PREFIXES):
        return True
    return is_absolute_url(value)
