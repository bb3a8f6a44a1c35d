from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import List, Mapping, Optional, Union

import httpx

from webvulns.core.models import HTTPMethod
from webvulns.parsers.cookies import SetCookie, serialize_cookie
from webvulns.parsers.url import origin, parse_url

DEFAULT_TIMEOUT = 10

_FORM_CTYPE = "application/x-www-form-urlencoded"


def _no_store_jar() -> CookieJar:
    # rejects every Set-Cookie, so only caller-supplied cookies are sent
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


class HTTPSession:
    """
    One reusable httpx.Client bound to a single origin.

    Injection points borrow a session; whoever created it closes it.
    Responses are returned as received: redirects are not followed unless
    asked for, and Set-Cookie headers never feed later requests.
    """

    def __init__(self, base_url: str, proxy: str | None = None,
                 timeout: float = DEFAULT_TIMEOUT, verify: bool = False,
                 follow_redirects: bool = False, logger=None, **client_kwargs):
        self.base_url = base_url
        self.logger = logger
        client_kwargs.setdefault("cookies", _no_store_jar())
        self.client = httpx.Client(
            base_url=base_url, verify=verify, proxy=proxy,
            follow_redirects=follow_redirects, timeout=timeout, **client_kwargs)

    @classmethod
    def connect(cls, url, **kwargs) -> "HTTPSession":
        return cls(origin(parse_url(url)), **kwargs)

    # ---------- requests ----------
    def request(self, method: Union[str, HTTPMethod], path: str, *,
                user: Optional[str] = None, password: Optional[str] = None,
                query_params: Optional[Mapping] = None,
                cookie: Union[str, Mapping, None] = None,
                referer: Optional[str] = None,
                headers: Optional[Mapping] = None,
                form_data: Union[str, Mapping, None] = None,
                **kwargs) -> httpx.Response:
        method = HTTPMethod.coerce(method)
        hdrs = dict(headers) if headers else {}

        if referer is not None:
            hdrs["Referer"] = referer
        if cookie:
            hdrs["Cookie"] = cookie if isinstance(
                cookie, str) else serialize_cookie(cookie)
        if user is not None:
            kwargs.setdefault("auth", (user, password or ""))

        if isinstance(form_data, Mapping):
            kwargs.setdefault("data", dict(form_data))
        elif form_data:
            hdrs.setdefault("Content-Type", _FORM_CTYPE)
            kwargs.setdefault("content", form_data)

        if self.logger:
            self.logger.debug(f"→ {method} {path} params={query_params or {}}")

        return self.client.request(method=method.value, url=path or "/",
                                   params=query_params or None,
                                   headers=hdrs or None, **kwargs)

    def get(self, path: str, **kwargs) -> httpx.Response:
        return self.request(HTTPMethod.GET, path, **kwargs)

    def get_cookies(self, request_uri: str, **kwargs) -> List[SetCookie]:
        """GET *request_uri* and return its ``Set-Cookie`` headers, parsed."""
        resp = self.get(request_uri, **kwargs)
        return [SetCookie.parse(v) for v in resp.headers.get_list("set-cookie")]

    # ---------- lifecycle ----------
    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        return f"<HTTPSession {self.base_url}>"


def connect(url, **kwargs) -> HTTPSession:
    """Open a session for the origin of *url*."""
    return HTTPSession.connect(url, **kwargs)
