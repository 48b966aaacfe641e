from fastapi.testclient import TestClient

from main import app
from quizbank import QUIZ, load_quiz

client = TestClient(app)


def test_reload_requires_configured_token(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    r = client.post("/admin/reload")
    assert r.status_code == 500


def test_reload_rejects_wrong_token(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "letmein")
    r = client.post("/admin/reload", headers={"X-Admin-Token": "nope"})
    assert r.status_code == 401


def test_reload_clears_cache(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "letmein")
    load_quiz(QUIZ, "python/basics")
    load_quiz(QUIZ, "mixed")
    r = client.post("/admin/reload", headers={"X-Admin-Token": "letmein"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "cleared": 2}
