"""Payload merging: derive the request maps for one payload without touching the baselines."""

from typing import Any, Dict, Mapping, Optional, Union


def merge_payload(baseline: Optional[Mapping], name: Optional[Any], payload: Any):
    """
    Return *baseline* with *name* set to *payload*.

    If *name* is None the baseline is returned as-is. Otherwise a new dict is
    built; an absent or empty baseline yields ``{name: payload}``.
    """
    if name is None:
        return baseline
    merged: Dict[str, Any] = dict(baseline) if baseline else {}
    merged[str(name)] = payload
    return merged


def merge_query_params(query_params: Optional[Mapping], query_param, payload):
    return merge_payload(query_params, query_param, payload)


def merge_headers(headers: Optional[Mapping], header_name, payload):
    return merge_payload(headers, header_name, payload)


def merge_cookie(cookie: Union[str, Mapping, None], cookie_param, payload):
    """
    Like merge_payload, but a pre-serialized cookie string is passed through
    unchanged. Injecting into a cookie param requires the mapping form.
    """
    if isinstance(cookie, str):
        return cookie
    return merge_payload(cookie, cookie_param, payload)


def merge_form_data(form_data: Union[str, Mapping, None], form_param, payload):
    if isinstance(form_data, str) and form_data:
        # raw bodies are opaque, same rule as cookie strings
        return form_data
    return merge_payload(form_data, form_param, payload)
