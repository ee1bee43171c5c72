import base64
import json
import types

import pytest

import triage_actions.code_search as cs
import triage_actions.crm as crm
import triage_actions.handler as h
import triage_actions.jira as jira
from triage_actions.http_client import HttpResponse

CTX = types.SimpleNamespace(aws_request_id="req-1")


def test_get_user_details_direct_invocation(monkeypatch):
    monkeypatch.setenv("CRM_API_KEY", "x")
    monkeypatch.setitem(
        crm.__dict__,
        "get_json",
        lambda *_a, **_k: HttpResponse(200, '{"subscription_level": "Enterprise"}'),
    )

    res = h.get_user_details({"payload": {"user_id": "u-9"}}, CTX)

    assert res == {"tier": "Enterprise", "priority_modifier": "P1_Critical"}


def test_get_user_details_missing_payload_returns_default(monkeypatch):
    res = h.get_user_details({}, None)
    assert res == {"tier": "Standard", "priority_modifier": "P3_Neutral"}


def test_search_codebase_direct_invocation(monkeypatch):
    monkeypatch.setenv("BITBUCKET_API_TOKEN", "x")
    body = json.dumps({"values": [{"file": {"path": "src/billing/charge.py"}}]})
    monkeypatch.setitem(cs.__dict__, "get_json", lambda *_a, **_k: HttpResponse(200, body))

    res = h.search_codebase({"payload": {"keywords": "charge failed"}}, CTX)

    assert res == {
        "component": "Billing/Payments",
        "team": "Team-Zeus",
        "path": "src/billing/charge.py",
    }


def test_search_codebase_upstream_down(monkeypatch):
    monkeypatch.setenv("BITBUCKET_API_TOKEN", "x")
    monkeypatch.setitem(cs.__dict__, "get_json", lambda *_a, **_k: HttpResponse(502, ""))

    res = h.search_codebase({"payload": {"keywords": "charge failed"}}, CTX)

    assert res == {"component": "Unassigned", "team": "Triage_Team", "path": None}


def test_create_jira_ticket_via_function_url(monkeypatch):
    monkeypatch.setenv("JIRA_API_TOKEN", "x")
    monkeypatch.setitem(
        jira.__dict__, "post_json", lambda *_a, **_k: HttpResponse(201, '{"key": "PROJ-7"}')
    )
    payload = {
        "summary": "Crash on save",
        "description": "Editor crashes",
        "priority": "Highest",
        "component": "Editor",
    }
    event = {
        "body": base64.b64encode(json.dumps({"payload": payload}).encode("utf-8")).decode(),
        "isBase64Encoded": True,
    }

    res = h.create_jira_ticket(event, CTX)

    assert res["statusCode"] == 200
    body = json.loads(res["body"])
    assert body["success"] is True
    assert body["issue_key"] == "PROJ-7"


def test_create_jira_ticket_body_without_payload_key(monkeypatch):
    monkeypatch.setenv("JIRA_API_TOKEN", "x")
    monkeypatch.setitem(
        jira.__dict__, "post_json", lambda *_a, **_k: HttpResponse(400, "bad request")
    )
    body = {"summary": "s", "description": "d", "priority": "Low", "component": "UI"}

    res = h.create_jira_ticket({"body": json.dumps(body)}, CTX)

    out = json.loads(res["body"])
    assert out["success"] is False
    assert "bad request" in out["message"]


def test_bad_settings_still_return_result(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "soon")

    assert h.get_user_details({"payload": {"user_id": "u"}}, CTX) == {
        "tier": "Standard",
        "priority_modifier": "P3_Neutral",
    }
    assert h.search_codebase({"payload": {"keywords": "k"}}, CTX)["path"] is None
    res = h.create_jira_ticket({"payload": {}}, CTX)
    assert res["success"] is False
    assert res["message"].startswith("Failed to create Jira ticket: ")


DEFAULT_TIER = {"tier": "Standard", "priority_modifier": "P3_Neutral"}


@pytest.mark.parametrize(
    "event",
    [
        {"body": "!!!not-base64", "isBase64Encoded": True},
        {"body": base64.b64encode(b"\xff\xfe{").decode(), "isBase64Encoded": True},
        {"body": "not json at all"},
        {"body": json.dumps(["user_id", "u-1"])},
        {"body": 12345},
        {"body": None},
    ],
)
def test_malformed_function_url_body_is_empty_payload(monkeypatch, event):
    calls = []
    monkeypatch.setitem(crm.__dict__, "get_json", lambda *a, **k: calls.append(a))

    res = h.get_user_details(event, CTX)

    assert res["statusCode"] == 200
    assert json.loads(res["body"]) == DEFAULT_TIER
    assert calls == []


def test_malformed_body_ticket_fails_cleanly(monkeypatch):
    posts = []
    monkeypatch.setitem(jira.__dict__, "post_json", lambda *a, **k: posts.append(a))
    event = {"body": base64.b64encode(b"\xff\xfe{").decode(), "isBase64Encoded": True}

    res = h.create_jira_ticket(event, CTX)

    out = json.loads(res["body"])
    assert out["success"] is False
    assert out["message"].startswith("Failed to create Jira ticket: missing required field(s)")
    assert posts == []


def test_done_record_carries_request_id(monkeypatch, events):
    monkeypatch.setenv("CRM_API_KEY", "x")
    monkeypatch.setitem(crm.__dict__, "get_json", lambda *_a, **_k: HttpResponse(404, ""))

    h.get_user_details({"payload": {"user_id": "u-9"}}, CTX)

    done = [e for e in events() if e["msg"] == "get_user_details_done"]
    assert len(done) == 1
    assert done[0]["rid"] == "req-1"
    assert isinstance(done[0]["ms"], int)
    assert done[0]["priority_modifier"] == "P3_Neutral"
