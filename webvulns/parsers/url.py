"""URL parsing and accessors used to build requests."""

from typing import Dict, Union

import httpx


_SCHEMES = ("http", "https")


def parse_url(url: Union[str, httpx.URL]) -> httpx.URL:
    """
    Parse *url* into an absolute HTTP(S) ``httpx.URL``.

    Raises ``httpx.InvalidURL`` for malformed, relative or non-HTTP URLs.
    """
    if not isinstance(url, httpx.URL):
        url = httpx.URL(url)

    if url.scheme not in _SCHEMES:
        raise httpx.InvalidURL(f"Unsupported URL scheme: {str(url)!r}")
    if not url.host:
        raise httpx.InvalidURL(f"URL has no host: {str(url)!r}")
    return url


def query_params(url: httpx.URL) -> Dict[str, str]:
    """Ordered name → value mapping of the query string (last duplicate wins)."""
    params: Dict[str, str] = {}
    for name, value in url.params.multi_items():
        params[name] = value
    return params


def request_uri(url: httpx.URL) -> str:
    """Path plus query string, as sent on the request line."""
    return url.raw_path.decode("ascii")


def origin(url: httpx.URL) -> str:
    """scheme://host[:port]/ of *url*."""
    return f"{url.scheme}://{url.netloc.decode('ascii')}/"


def request_path(url: httpx.URL) -> str:
    """Path of *url* as written, percent-encoding kept, query excluded."""
    return url.raw_path.split(b"?", 1)[0].decode("ascii") or "/"
