import pytest

from webvulns.core.merge import (
    merge_cookie, merge_form_data, merge_headers, merge_payload, merge_query_params,
)

MERGERS = [merge_query_params, merge_headers, merge_cookie, merge_form_data]


class TestPassThrough:

    @pytest.mark.parametrize("merge", MERGERS)
    def test_no_active_name_returns_baseline(self, merge):
        baseline = {"a": "1", "b": "2"}
        result = merge(baseline, None, "PAYLOAD")
        assert result is baseline
        assert baseline == {"a": "1", "b": "2"}

    @pytest.mark.parametrize("merge", MERGERS)
    def test_no_active_name_and_no_baseline(self, merge):
        assert merge(None, None, "PAYLOAD") is None


class TestOverride:

    def test_overrides_existing_key(self):
        baseline = {"id": "1", "name": "bob"}
        result = merge_query_params(baseline, "id", "' OR 1=1")
        assert result == {"id": "' OR 1=1", "name": "bob"}
        assert baseline == {"id": "1", "name": "bob"}
        assert result is not baseline

    def test_adds_missing_key(self):
        assert merge_headers({"Accept": "*/*"}, "X-Test", "x") == {
            "Accept": "*/*", "X-Test": "x"}

    @pytest.mark.parametrize("baseline", [None, {}])
    def test_absent_baseline_gives_single_entry(self, baseline):
        assert merge_payload(baseline, "k", "v") == {"k": "v"}

    def test_name_is_stringified(self):
        assert merge_form_data(None, 42, "v") == {"42": "v"}

    def test_keeps_key_order(self):
        result = merge_query_params({"a": "1", "b": "2", "c": "3"}, "b", "X")
        assert list(result) == ["a", "b", "c"]


class TestOpaqueStrings:

    def test_cookie_string_passes_through(self):
        assert merge_cookie("session=abc; lang=en", "session", "X") == "session=abc; lang=en"

    def test_cookie_mapping_is_merged(self):
        assert merge_cookie({"session": "abc"}, "session", "X") == {"session": "X"}

    def test_raw_form_body_passes_through(self):
        assert merge_form_data("a=1&b=2", "a", "X") == "a=1&b=2"

    def test_empty_form_body_gets_single_entry(self):
        assert merge_form_data("", "a", "X") == {"a": "X"}
