import json

import httpx

from conftest import chat_response, request_json
from schemas.shot import Plan
from services.api.app.core.config import settings

PLAN = {
    "totalDurationSec": 45,
    "shots": [
        {"durationSec": 8, "visualPrompt": "Rain on a neon street", "voiceover": "She never looked back.",
         "captions": "CITY OF RAIN", "sfx": "thunder"},
        {"durationSec": 12, "visualPrompt": "Close-up of a ticket", "voiceover": "One way.",
         "captions": "ONE WAY"},
    ],
}


def test_missing_script_returns_400(client, upstream):
    calls = upstream(lambda r: chat_response(json.dumps(PLAN)))
    for body in ({}, {"script": ""}, {"script": "   \n"}):
        resp = client.post("/api/v1/plan-shots", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing script"}
    assert calls == []


def test_missing_api_key_returns_500(client, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    resp = client.post("/api/v1/plan-shots", json={"script": "INT. KITCHEN - NIGHT"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Missing OPENAI_API_KEY"}


def test_success_returns_plan_verbatim(client, upstream):
    calls = upstream(lambda r: chat_response(json.dumps(PLAN)))
    resp = client.post("/api/v1/plan-shots", json={"script": "INT. KITCHEN - NIGHT"})
    assert resp.status_code == 200
    assert resp.json() == PLAN
    Plan.model_validate(resp.json())

    assert len(calls) == 1
    req = calls[0]
    assert req.method == "POST"
    assert str(req.url) == "https://api.openai.com/v1/chat/completions"
    assert req.headers["authorization"] == "Bearer test-openai-key"
    assert "openai-organization" not in req.headers
    body = request_json(req)
    assert body["model"] == "gpt-4o"
    assert body["temperature"] == 0.4
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert "Genre: Drama." in body["messages"][0]["content"]
    assert "Target total duration (sec): 45" in body["messages"][1]["content"]


def test_genre_duration_and_org_header_are_forwarded(client, upstream, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_ORG_ID", "org-123")
    calls = upstream(lambda r: chat_response(json.dumps(PLAN)))
    resp = client.post(
        "/api/v1/plan-shots",
        json={"script": "x" * 5000, "genre": "Horror", "targetDurationSec": 300},
    )
    assert resp.status_code == 200
    req = calls[0]
    assert req.headers["openai-organization"] == "org-123"
    system, user = request_json(req)["messages"]
    assert "Genre: Horror." in system["content"]
    assert "Target total duration (sec): 90" in user["content"]
    # 脚本截断到 4000 字符
    assert "x" * 4000 in user["content"]
    assert "x" * 4001 not in user["content"]


def test_short_target_is_clamped_up(client, upstream):
    calls = upstream(lambda r: chat_response(json.dumps(PLAN)))
    client.post("/api/v1/plan-shots", json={"script": "hello", "targetDurationSec": 5})
    assert "Target total duration (sec): 20" in request_json(calls[0])["messages"][1]["content"]


def test_fenced_content_is_parsed(client, upstream):
    upstream(lambda r: chat_response("```json\n" + json.dumps(PLAN) + "\n```"))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 200
    assert resp.json()["shots"][0]["captions"] == "CITY OF RAIN"


def test_upstream_error_is_passed_through_as_502(client, upstream):
    err = '{"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}'
    upstream(lambda r: httpx.Response(401, text=err))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "LLM error", "httpStatus": 401, "detail": err}


def test_non_json_outer_body_returns_502(client, upstream):
    upstream(lambda r: httpx.Response(200, text="<html>gateway</html>"))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Bad outer JSON", "detail": "<html>gateway</html>"}


def test_non_json_content_returns_502_with_content(client, upstream):
    upstream(lambda r: chat_response("Sorry, I can't help with that."))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Bad JSON in content", "content": "Sorry, I can't help with that."}


def test_missing_choices_is_bad_content(client, upstream):
    upstream(lambda r: httpx.Response(200, json={"id": "chatcmpl-1", "choices": []}))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Bad JSON in content", "content": ""}


def test_plan_without_shots_array_returns_502(client, upstream):
    upstream(lambda r: chat_response('{"totalDurationSec": 45, "shots": "none"}'))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Plan missing shots", "plan": {"totalDurationSec": 45, "shots": "none"}}


def test_null_content_reports_missing_shots(client, upstream):
    upstream(lambda r: chat_response("null"))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Plan missing shots", "plan": None}


def test_plan_wrapped_in_prose_is_not_salvaged(client, upstream):
    content = 'Sure! Here is the plan: {"shots": []} Hope it helps.'
    upstream(lambda r: chat_response(content))
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Bad JSON in content", "content": content}


def test_transport_failure_returns_unhandled_500(client, upstream):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream(boom)
    resp = client.post("/api/v1/plan-shots", json={"script": "hello"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Unhandled", "detail": "connection refused"}


def test_malformed_body_returns_400(client):
    resp = client.post(
        "/api/v1/plan-shots",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"
