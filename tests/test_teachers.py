from fastapi.testclient import TestClient

from conftest import PNG_BYTES
from jsonfiles import is_base64
from main import app
from teachers import gender_of

client = TestClient(app)


def test_list_teachers():
    r = client.get("/api/teachers")
    assert r.status_code == 200
    assert r.json() == {"generated": ["ada"], "samples": ["bob"]}


def test_teacher_images_inlined():
    r = client.get("/api/teachers/ada")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Ada"
    images = body["images"]
    assert images["neutral"].startswith("data:image/png;base64,")
    # already a data URL: untouched
    assert images["happy"] == "data:image/png;base64,AAAA"
    # unreadable file keeps its path
    assert images["sad"] == "missing.png"


def test_teacher_token_not_exposed():
    body = client.get("/api/teachers/ada").json()
    assert body["ttsEngine"]["baseUrl"] == "https://tts.example"
    assert body["ttsEngine"]["voiceName"] == "nova"
    assert "token" not in body["ttsEngine"]


def test_sample_teacher_by_prefix():
    r = client.get("/api/teachers/sample__bob")
    assert r.status_code == 200
    assert r.json()["name"] == "Bob"


def test_teacher_404():
    r = client.get("/api/teachers/nobody")
    assert r.status_code == 404


def test_sample_teacher_routes():
    r = client.get("/api/teachers/samples")
    assert r.json()["data"] == ["bob"]

    r = client.get("/api/teachers/samples/bob")
    body = r.json()
    assert body["status"] == 200 and body["data"]["name"] == "Bob"

    r = client.get("/api/teachers/samples/ada")
    assert r.status_code == 404


def test_gender_of():
    assert gender_of("ada") == "female"
    assert gender_of("sample__bob") == "male"
    assert gender_of("ghost") is None
    assert gender_of(None) is None


def test_is_base64():
    import base64

    assert is_base64("data:image/png;base64,AAAA")
    assert is_base64(base64.b64encode(PNG_BYTES).decode())
    assert not is_base64("neutral.png")
    assert not is_base64("")
