"""Shared value types for injection points and scans."""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

from webvulns.core.errors import InvalidInjectionPoint


class HTTPMethod(str, Enum):
    """Request methods an injection point may use."""
    COPY = "COPY"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    LOCK = "LOCK"
    MKCOL = "MKCOL"
    MOVE = "MOVE"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    PUT = "PUT"
    TRACE = "TRACE"
    UNLOCK = "UNLOCK"

    @classmethod
    def coerce(cls, value: Union[str, "HTTPMethod"]) -> "HTTPMethod":
        """Accept an enum member or a case-insensitive verb; ValueError otherwise."""
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())

    def __str__(self):
        return self.value


class LocationKind(str, Enum):
    NONE = "none"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    FORM = "form"


@dataclass(frozen=True)
class Location:
    """The single request location a payload is injected into."""
    kind: LocationKind = LocationKind.NONE
    name: Optional[str] = None

    @classmethod
    def from_fields(cls, query_param=None, header_name=None,
                    cookie_param=None, form_param=None) -> "Location":
        fields = [
            (LocationKind.QUERY, query_param),
            (LocationKind.HEADER, header_name),
            (LocationKind.COOKIE, cookie_param),
            (LocationKind.FORM, form_param),
        ]
        active = [(kind, name) for kind, name in fields if name is not None]
        if len(active) > 1:
            kinds = ", ".join(kind.value for kind, _ in active)
            raise InvalidInjectionPoint(
                f"only one injection location may be set, got: {kinds}")
        if not active:
            return cls()
        kind, name = active[0]
        return cls(kind, str(name))

    def __bool__(self):
        return self.kind is not LocationKind.NONE

    def __str__(self):
        return f"{self.kind.value}.{self.name}" if self else self.kind.value


@dataclass(frozen=True)
class RequestOptions:
    """Baseline request configuration shared by every payload sent to a point."""
    request_method: HTTPMethod = HTTPMethod.GET
    query_params: Optional[Mapping[str, str]] = None   # overrides the URL's query
    headers: Optional[Mapping[str, str]] = None
    cookie: Union[str, Mapping[str, str], None] = None
    form_data: Union[str, Mapping[str, str], None] = None
    referer: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "request_method",
                           HTTPMethod.coerce(self.request_method))
        for name in ("query_params", "headers", "cookie", "form_data"):
            value = getattr(self, name)
            if isinstance(value, Mapping):
                object.__setattr__(self, name, dict(value))


class ScanAll(Enum):
    """Selector value requesting default enumeration of a dimension."""
    ALL = "all"

    def __repr__(self):
        return "ALL"


ALL = ScanAll.ALL
