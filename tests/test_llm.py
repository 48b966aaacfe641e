import json

import httpx
import pytest
from fastapi.testclient import TestClient

import settings
from deps.services import get_llm
from llm import LLMClient, LLMError
from main import app

client = TestClient(app)


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client_with(handler, **kw):
    return LLMClient("https://llm.example/v1", token="tok", transport=httpx.MockTransport(handler), **kw)


def test_chat_posts_openai_body():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("hello"))

    text = _client_with(handler).chat([{"role": "user", "content": "hi"}])
    assert text == "hello"
    assert seen["url"] == "https://llm.example/v1/chat/completions"
    assert seen["auth"] == "Bearer tok"
    assert seen["body"]["model"] == settings.DEFAULT_LLM_MODEL
    assert seen["body"]["messages"] == [{"role": "user", "content": "hi"}]


def test_chat_model_override(monkeypatch):
    monkeypatch.setenv("LLM_DEFAULT_MODEL", "tiny")
    models = []

    def handler(request):
        models.append(json.loads(request.content)["model"])
        return httpx.Response(200, json=_completion("ok"))

    c = _client_with(handler)
    c.chat([{"role": "user", "content": "x"}])
    c.chat([{"role": "user", "content": "x"}], model="big")
    assert models == ["tiny", "big"]


def test_chat_upstream_errors():
    c = _client_with(lambda request: httpx.Response(500, text="down"))
    with pytest.raises(LLMError):
        c.chat([{"role": "user", "content": "x"}])

    c = _client_with(lambda request: httpx.Response(200, json={"choices": []}))
    with pytest.raises(LLMError):
        c.chat([{"role": "user", "content": "x"}])


def test_missing_base_url():
    with pytest.raises(LLMError):
        LLMClient("").chat([{"role": "user", "content": "x"}])


def test_list_models():
    c = _client_with(lambda request: httpx.Response(200, json={"data": [{"id": "m1"}]}))
    assert c.list_models() == {"data": [{"id": "m1"}]}


@pytest.fixture
def upstream():
    calls = []

    def handler(request):
        calls.append(request)
        if request.url.path.endswith("/models"):
            return httpx.Response(200, json={"data": [{"id": "m1"}]})
        body = json.loads(request.content)
        if body["messages"][-1]["content"] == "explode":
            return httpx.Response(503)
        return httpx.Response(200, json=_completion("A helpful hint."))

    fake = _client_with(handler)
    app.dependency_overrides[get_llm] = lambda: fake
    yield calls
    app.dependency_overrides.pop(get_llm, None)


def test_llm_routes(upstream):
    r = client.get("/api/llm")
    assert r.status_code == 200
    assert r.json()["data"][0]["id"] == "m1"

    r = client.post("/api/llm", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 200
    assert r.json() == "A helpful hint."

    r = client.post("/api/llm", json={"messages": [{"role": "user", "content": "explode"}]})
    assert r.status_code == 502


def test_hint_route(upstream):
    question = {"question": "Which keyword defines a function?", "choices": ["def", "fn"], "answers": ["def"]}
    r = client.post("/api/hints", json={"type": "question", "question": question, "teacher": "sample__bob"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["message"] == "A helpful hint."
    assert body["bubble"]["emotion"] == "happy"
    prompt = json.loads(upstream[-1].content)["messages"][0]["content"]
    assert "male teacher" in prompt
    assert "Available choices: def, fn" in prompt


def test_hint_route_failure(monkeypatch):
    monkeypatch.delenv("LLM_BASE_URL", raising=False)
    question = {"question": "Sort it", "choices": [], "answers": []}
    r = client.post("/api/hints", json={"type": "explanation", "question": question})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["bubble"]["emotion"] == "worried"


def test_hint_route_rejects_unknown_kind():
    question = {"question": "Sort it", "choices": [], "answers": []}
    r = client.post("/api/hints", json={"type": "riddle", "question": question})
    assert r.status_code == 422
