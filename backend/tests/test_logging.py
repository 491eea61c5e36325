import json
import logging

from idp.core.logging_config import JsonFormatter, redact
from idp.core.request_context import clear_context, get_context, set_context
from idp.middleware.request_logging import _redact


def _record(**extra):
    record = logging.LogRecord("idp.test", logging.INFO, __file__, 1, "share.created", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_formatter_emits_context_and_extra_fields():
    set_context(request_id="rid-1", share_id="s-1")
    try:
        line = json.loads(JsonFormatter().format(_record(role_id=3)))
    finally:
        clear_context()

    assert line["msg"] == "share.created"
    assert line["request_id"] == "rid-1"
    assert line["share_id"] == "s-1"
    assert line["role_id"] == 3
    assert get_context() == {}


def test_share_tokens_are_masked():
    line = json.loads(JsonFormatter().format(_record(shareToken="secret", payload={"shareLink": "https://x/collaborate/secret"})))

    assert line["shareToken"] == "***"
    assert line["payload"] == {"shareLink": "***"}
    assert redact("see https://idp.test/collaborate/abc123 now") == "see https://idp.test/collaborate/*** now"


def test_collaborate_paths_are_redacted():
    assert _redact("/api/collaborate/tok123") == "/api/collaborate/***"
    assert _redact("/api/collaborate/tok123/feedback/101") == "/api/collaborate/***/feedback/101"
    assert _redact("/api/shares/mine") == "/api/shares/mine"


def test_request_id_is_echoed(client):
    r = client.get("/api/health", headers={"x-request-id": "abc"})
    assert r.status_code == 200
    assert r.headers["x-request-id"] == "abc"
