import httpx
import pytest

from webvulns.checkers.base import BaseChecker, CheckerInjectionPoint


class MarkerChecker(BaseChecker):
    name = "Marker"

    def __init__(self, payloads):
        self.payloads = payloads

    def get_payloads(self):
        return self.payloads

    def check_response(self, response):
        return "VULNERABLE" in response.text


def reflect_q_b(request):
    if request.url.params.get("q") == "b":
        return httpx.Response(200, text="VULNERABLE")
    return httpx.Response(200, text="fine")


class TestBaseChecker:

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            BaseChecker()

    def test_rand(self):
        canary = BaseChecker.rand(12)
        assert len(canary) == 12
        assert canary.isalnum()


class TestCheckerInjectionPoint:

    def test_stops_at_first_accepted_payload(self, make_session, sent):
        vuln = CheckerInjectionPoint("http://x.test/s?q=1", query_param="q",
                                     checker=MarkerChecker(["a", "b", "c"]),
                                     http=make_session(reflect_q_b))
        assert vuln.vulnerable() is True
        assert vuln.payload == "b"
        assert vuln.response.text == "VULNERABLE"
        assert [r.url.params["q"] for r in sent] == ["a", "b"]

    def test_not_vulnerable(self, make_session, sent):
        vuln = CheckerInjectionPoint("http://x.test/s?q=1&r=2", query_param="r",
                                     checker=MarkerChecker(["a", "b"]),
                                     http=make_session(reflect_q_b))
        assert vuln.vulnerable() is False
        assert vuln.payload is None
        assert len(sent) == 2
        assert all(r.url.params["q"] == "1" for r in sent)

    def test_scan_forwards_checker(self, make_session, sent):
        vulns = CheckerInjectionPoint.scan("http://x.test/s?q=1&r=2",
                                           checker=MarkerChecker(["a", "b", "c"]),
                                           http=make_session(reflect_q_b))
        assert [v.query_param for v in vulns] == ["q"]
        assert vulns[0].payload == "b"
        assert len(sent) == 5
        assert "Marker" in repr(vulns[0])

    def test_header_injection(self, make_session, sent):
        def handler(request):
            text = "VULNERABLE" if request.headers.get("x-forwarded-for") == "'" else "ok"
            return httpx.Response(200, text=text)
        vuln = CheckerInjectionPoint.test("http://x.test/", header_names=["User-Agent", "X-Forwarded-For"],
                                          checker=MarkerChecker(["'"]),
                                          http=make_session(handler))
        assert vuln.header_name == "X-Forwarded-For"
        assert len(sent) == 2
