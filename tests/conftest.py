import httpx
import pytest

from webvulns.core.http import HTTPSession
from webvulns.core.injection_point import InjectionPoint


@pytest.fixture
def sent():
    """Requests that reached the mock transport, in order."""
    return []


@pytest.fixture
def make_session(sent):
    def factory(handler=None, base_url="http://x.test/"):
        def record(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, text="ok")
        return HTTPSession(base_url, transport=httpx.MockTransport(record))
    return factory


@pytest.fixture
def make_vuln_class():
    """
    Build an InjectionPoint subclass whose predicate is true for the given names.

    Every predicate call is recorded as (kind, name) in ``cls.calls``.
    """
    def factory(vulnerable_names=(), fail_on=None):
        calls = []

        class FakeVuln(InjectionPoint):
            def vulnerable(self):
                calls.append((self.location.kind.value, self.location.name))
                if fail_on is not None and self.location.name == fail_on:
                    raise httpx.ConnectError("connection refused")
                return self.location.name in vulnerable_names

        FakeVuln.calls = calls
        return FakeVuln
    return factory
