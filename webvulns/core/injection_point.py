"""Injection points — one request location that a payload can be injected into."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from webvulns.core.engine import Engine, Selector
from webvulns.core.errors import PredicateNotImplemented
from webvulns.core.http import HTTPSession, connect
from webvulns.core.merge import (
    merge_cookie, merge_form_data, merge_headers, merge_query_params,
)
from webvulns.core.models import (
    HTTPMethod, Location, LocationKind, RequestOptions,
)
from webvulns.parsers.cookies import parse_cookie
from webvulns.parsers.url import (
    parse_url, query_params as url_query_params, request_path,
)

OnVuln = Optional[Callable[["InjectionPoint"], Any]]


class InjectionPoint(ABC):
    """
    Base class for web vulnerabilities tested through one injection point.

    Subclasses implement vulnerable(), usually by calling exploit() with one
    or more payloads and inspecting the responses. Scans are started with
    the class methods, e.g. ``MyVuln.scan("http://host/?id=1")``.
    """

    def __init__(self, url: Union[str, httpx.URL], *,
                 query_param: Optional[str] = None,
                 header_name: Optional[str] = None,
                 cookie_param: Optional[str] = None,
                 form_param: Optional[str] = None,
                 http: Optional[HTTPSession] = None,
                 logger=None,
                 **kwargs):
        """
        *url* is the URL to test. At most one of *query_param*,
        *header_name*, *cookie_param* or *form_param* names the location to
        inject into. Remaining keyword arguments are RequestOptions fields
        (request_method, query_params, headers, cookie, form_data, referer,
        user, password).
        """
        self._url = parse_url(url)
        self._location = Location.from_fields(
            query_param, header_name, cookie_param, form_param)
        self._options = RequestOptions(**kwargs)
        self._http = http or connect(self._url)
        self.logger = logger

        if self._options.query_params is not None:
            self._query_params = dict(self._options.query_params)
        else:
            self._query_params = url_query_params(self._url)

    # ── attributes ──────────────────────────────────────────────

    @property
    def url(self) -> httpx.URL:
        return self._url

    @property
    def location(self) -> Location:
        return self._location

    def _location_name(self, kind: LocationKind) -> Optional[str]:
        return self._location.name if self._location.kind is kind else None

    @property
    def query_param(self) -> Optional[str]:
        return self._location_name(LocationKind.QUERY)

    @property
    def header_name(self) -> Optional[str]:
        return self._location_name(LocationKind.HEADER)

    @property
    def cookie_param(self) -> Optional[str]:
        return self._location_name(LocationKind.COOKIE)

    @property
    def form_param(self) -> Optional[str]:
        return self._location_name(LocationKind.FORM)

    @property
    def http(self) -> HTTPSession:
        return self._http

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def request_method(self) -> HTTPMethod:
        return self._options.request_method

    @property
    def query_params(self) -> Dict[str, str]:
        return self._query_params

    @property
    def headers(self) -> Optional[Mapping[str, str]]:
        return self._options.headers

    @property
    def cookie(self) -> Union[str, Mapping[str, str], None]:
        return self._options.cookie

    @property
    def form_data(self) -> Union[str, Mapping[str, str], None]:
        return self._options.form_data

    @property
    def referer(self) -> Optional[str]:
        return self._options.referer

    @property
    def user(self) -> Optional[str]:
        return self._options.user

    @property
    def password(self) -> Optional[str]:
        return self._options.password

    # ── payload merging ─────────────────────────────────────────

    def exploit_query_params(self, payload):
        """query_params with the payload injected (unchanged if no query_param)."""
        return merge_query_params(self.query_params, self.query_param, payload)

    def exploit_headers(self, payload):
        return merge_headers(self.headers, self.header_name, payload)

    def exploit_cookie(self, payload):
        return merge_cookie(self.cookie, self.cookie_param, payload)

    def exploit_form_data(self, payload):
        return merge_form_data(self.form_data, self.form_param, payload)

    def exploit(self, payload, **kwargs) -> httpx.Response:
        """
        Send one request with *payload* injected at this point.

        Keyword arguments override the computed request options and are
        passed on to HTTPSession.request().
        """
        options = {
            "user": self.user,
            "password": self.password,
            "query_params": self.exploit_query_params(payload),
            "cookie": self.exploit_cookie(payload),
            "referer": self.referer,
            "headers": self.exploit_headers(payload),
            "form_data": self.exploit_form_data(payload),
        }
        options.update(kwargs)
        method = options.pop("request_method", self.request_method)
        path = options.pop("path", request_path(self.url))

        if self.logger:
            self.logger.debug(f"Exploit {self.location} = {payload!r}")
        return self.http.request(method, path, **options)

    def original_value(self) -> Optional[str]:
        """The baseline value of the injected query param, header, cookie param or form param."""
        if self.query_param is not None:
            return self.query_params.get(self.query_param)
        elif self.header_name is not None:
            return (self.headers or {}).get(self.header_name)
        elif self.cookie_param is not None:
            cookie = self.cookie
            if isinstance(cookie, str):
                cookie = parse_cookie(cookie)
            return (cookie or {}).get(self.cookie_param)
        elif self.form_param is not None:
            form_data = self.form_data
            if isinstance(form_data, Mapping):
                return form_data.get(self.form_param)
        return None

    # ── predicate ───────────────────────────────────────────────

    @abstractmethod
    def vulnerable(self) -> bool:
        """Whether the URL is vulnerable at this injection point."""
        raise PredicateNotImplemented("vulnerable", type(self))

    # ── scanning ────────────────────────────────────────────────

    @classmethod
    def scan_query_params(cls, url, query_params: Selector = None, *,
                          http: Optional[HTTPSession] = None,
                          on_vuln: OnVuln = None, logger=None,
                          **kwargs) -> List["InjectionPoint"]:
        """Test each query param (all params in the URL by default)."""
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.collect(engine.each_query_param(query_params), on_vuln)

    @classmethod
    def scan_headers(cls, url, header_names: Union[str, Iterable[str]], *,
                     http: Optional[HTTPSession] = None,
                     on_vuln: OnVuln = None, logger=None,
                     **kwargs) -> List["InjectionPoint"]:
        """Test each of the given header names."""
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.collect(engine.each_header(header_names), on_vuln)

    @classmethod
    def scan_cookie_params(cls, url, cookie_params: Selector = None, *,
                           http: Optional[HTTPSession] = None,
                           on_vuln: OnVuln = None, logger=None,
                           **kwargs) -> List["InjectionPoint"]:
        """Test each cookie param (the URL's Set-Cookie params by default)."""
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.collect(engine.each_cookie_param(cookie_params), on_vuln)

    @classmethod
    def scan_form_params(cls, url, form_params: Union[str, Iterable[str]], *,
                         http: Optional[HTTPSession] = None,
                         on_vuln: OnVuln = None, logger=None,
                         **kwargs) -> List["InjectionPoint"]:
        """Test each of the given form param names."""
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.collect(engine.each_form_param(form_params), on_vuln)

    @classmethod
    def scan(cls, url, query_params: Selector = None,
             header_names: Optional[Union[str, Iterable[str]]] = None,
             cookie_params: Selector = None,
             form_params: Optional[Union[str, Iterable[str]]] = None, *,
             http: Optional[HTTPSession] = None,
             on_vuln: OnVuln = None, logger=None,
             **kwargs) -> List["InjectionPoint"]:
        """
        Scan the URL across the selected dimensions.

        With no selectors, every query param of the URL is tested. Otherwise
        each given selector is scanned in the order query, header, cookie,
        form. Pass ``ALL`` as *query_params* or *cookie_params* to
        enumerate that dimension's defaults alongside other selectors.
        """
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.scan(query_params, header_names, cookie_params,
                           form_params, on_vuln=on_vuln)

    @classmethod
    def test(cls, url, query_params: Selector = None,
             header_names: Optional[Union[str, Iterable[str]]] = None,
             cookie_params: Selector = None,
             form_params: Optional[Union[str, Iterable[str]]] = None, *,
             http: Optional[HTTPSession] = None, logger=None,
             **kwargs) -> Optional["InjectionPoint"]:
        """Return the first vulnerable injection point, or None."""
        engine = Engine(cls, url, http=http, logger=logger, **kwargs)
        return engine.test(query_params, header_names, cookie_params,
                           form_params)

    # ── display ─────────────────────────────────────────────────

    def __str__(self):
        return str(self.url)

    def __repr__(self):
        return f"<{type(self).__name__} {self.url} {self.location}>"
