"""Cookie header codec — parse ``Set-Cookie`` / ``Cookie`` values and build ``Cookie`` headers."""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


# Set-Cookie attribute names (RFC 6265 + common extensions), lower-cased
_ATTRIBUTES = frozenset({
    "path", "domain", "expires", "max-age", "secure", "httponly",
    "samesite", "version", "comment", "priority", "partitioned",
})


def _pairs(value: str):
    for part in value.split(";"):
        part = part.strip()
        if not part:
            continue
        name, sep, val = part.partition("=")
        yield name.strip(), (val.strip() if sep else None)


def parse_cookie(value: str) -> Dict[str, str]:
    """Parse a ``Cookie:`` header value (``a=1; b=2``) into an ordered dict."""
    return {name: (val or "") for name, val in _pairs(value) if name}


def serialize_cookie(params: Mapping) -> str:
    """Build a ``Cookie:`` header value from a name → value mapping."""
    return "; ".join(f"{name}={value}" for name, value in params.items())


@dataclass
class SetCookie:
    """One ``Set-Cookie`` response header."""
    params: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def parse(cls, header: str) -> "SetCookie":
        cookie = cls()
        for name, val in _pairs(header):
            if not name:
                continue
            if name.lower() in _ATTRIBUTES:
                cookie.attributes[name.lower()] = val
            else:
                cookie.params[name] = val or ""
        return cookie
