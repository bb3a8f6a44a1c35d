from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from webvulns.core.http import HTTPSession, connect
from webvulns.core.models import ScanAll
from webvulns.parsers.url import parse_url, query_params as url_query_params, request_uri

Selector = Union[None, ScanAll, str, Iterable[str]]


def _names(selector, dimension: str, allow_all: bool = False) -> Optional[List[str]]:
    """
    Normalise a selector into a list of names.

    None and ALL both return None (meaning: use the dimension's defaults);
    callers decide whether that is permitted.
    """
    if selector is None:
        return None
    if isinstance(selector, ScanAll):
        if not allow_all:
            raise TypeError(f"{dimension} cannot be scanned with ALL; "
                            f"pass explicit names")
        return None
    if isinstance(selector, bool):
        raise TypeError(f"{dimension} selector must be ALL or names, not {selector!r}")
    if isinstance(selector, (str, bytes)):
        return [selector]
    return list(selector)


class Engine:
    """
    Enumerates injection points of one URL and asks *vuln_class* whether each is vulnerable.

    One engine serves one scan call: the URL is parsed once and every
    candidate shares the same HTTP session. Extra keyword arguments are
    forwarded unchanged to each candidate's constructor.
    """

    def __init__(self, vuln_class, url, http: Optional[HTTPSession] = None,
                 logger=None, **kwargs):
        self.vuln_class = vuln_class
        self.url = parse_url(url)
        self.http = http or connect(self.url, logger=logger)
        self.logger = logger
        self.kwargs = kwargs

    def _candidate(self, **location):
        vuln = self.vuln_class(self.url, http=self.http,
                               logger=self.logger, **location, **self.kwargs)
        if self.logger:
            self.logger.debug(f"Testing {vuln.location}")
        if vuln.vulnerable():
            if self.logger:
                self.logger.finding(self.vuln_class.__name__, vuln.location.kind.value,
                                    vuln.location.name, str(self.url))
            return vuln
        return None

    def _each(self, field: str, names: Iterable[str]) -> Iterator:
        for name in names:
            vuln = self._candidate(**{field: name})
            if vuln is not None:
                yield vuln

    def _announce(self, dimension: str, names: List) -> None:
        if not self.logger:
            return
        if names:
            self.logger.info(f"Scanning {dimension} of {self.url}: {', '.join(map(str, names))}")
        else:
            self.logger.warn(f"No {dimension} to scan in {self.url}")

    # ---------- dimensions ----------
    def each_query_param(self, query_params: Selector = None) -> Iterator:
        names = _names(query_params, "query_params", allow_all=True)
        if names is None:
            names = list(url_query_params(self.url))
        self._announce("query params", names)
        return self._each("query_param", names)

    def each_header(self, header_names) -> Iterator:
        names = _names(header_names, "header_names")
        if names is None:
            raise TypeError("header_names is required")
        self._announce("headers", names)
        return self._each("header_name", names)

    def each_cookie_param(self, cookie_params: Selector = None) -> Iterator:
        names = _names(cookie_params, "cookie_params", allow_all=True)
        if names is None:
            names = self.discover_cookie_params()
        self._announce("cookie params", names)
        return self._each("cookie_param", names)

    def each_form_param(self, form_params) -> Iterator:
        names = _names(form_params, "form_params")
        if names is None:
            raise TypeError("form_params is required")
        self._announce("form params", names)
        return self._each("form_param", names)

    def discover_cookie_params(self) -> List[str]:
        """Request the URL once and collect the distinct Set-Cookie param names."""
        seen = {}
        for set_cookie in self.http.get_cookies(request_uri(self.url)):
            for name in set_cookie.params:
                seen.setdefault(name, None)
        return list(seen)

    # ---------- combined ----------
    def each_vuln(self, query_params: Selector = None, header_names=None,
                  cookie_params: Selector = None, form_params=None) -> Iterator:
        """
        Yield vulnerable injection points lazily, dimension by dimension.

        With no selectors this is each_query_param(). Otherwise the given
        selectors run in the order query, header, cookie, form.
        """
        if (query_params is None and header_names is None
                and cookie_params is None and form_params is None):
            yield from self.each_query_param()
            return

        if query_params is not None:
            yield from self.each_query_param(query_params)
        if header_names is not None:
            yield from self.each_header(header_names)
        if cookie_params is not None:
            yield from self.each_cookie_param(cookie_params)
        if form_params is not None:
            yield from self.each_form_param(form_params)

    def collect(self, vulns: Iterable, on_vuln: Optional[Callable[[Any], Any]] = None) -> List:
        results = []
        for vuln in vulns:
            if on_vuln:
                on_vuln(vuln)
            results.append(vuln)
        return results

    def scan(self, query_params: Selector = None, header_names=None,
             cookie_params: Selector = None, form_params=None,
             on_vuln: Optional[Callable[[Any], Any]] = None) -> List:
        results = self.collect(
            self.each_vuln(query_params, header_names, cookie_params, form_params),
            on_vuln)
        if self.logger and not results:
            self.logger.fail(f"No {self.vuln_class.__name__} found in {self.url}")
        return results

    def test(self, query_params: Selector = None, header_names=None,
             cookie_params: Selector = None, form_params=None):
        """First vulnerable injection point, or None. Stops at the first match."""
        vulns = self.each_vuln(query_params, header_names, cookie_params, form_params)
        try:
            return next(vulns, None)
        finally:
            vulns.close()
