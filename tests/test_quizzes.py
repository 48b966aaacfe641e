import pytest
from fastapi.testclient import TestClient

from main import app
from quizbank import LEGACY, QUIZ, QuizNotFound, list_tree, load_quiz, resolve

client = TestClient(app)


def test_quiz_tree_lists_generated_and_sample_folders():
    r = client.get("/api/quiz")
    assert r.status_code == 200
    tree = r.json()
    assert tree["python/basics"] == ["01.question", "02.question", "03.json"]
    assert tree["mixed"] == ["a.question", "b.question", "c.question"]
    assert tree["samples/intro"] == ["01.json"]
    # folders without quiz files are left out
    assert "empty" not in tree and "python" not in tree


def test_quiz_questions_in_file_order():
    r = client.get("/api/quiz/python/basics")
    assert r.status_code == 200
    data = r.json()
    assert [q["question"] for q in data] == [
        "Which keyword defines a function in Python?",
        "Which of these are mutable?",
        "Write a bubble sort in python",
    ]
    coding = data[2]
    assert coding["choices"] == [] and len(coding["answers"]) == 2
    # optional fields come back with defaults
    assert data[1]["question_images"] == [] and data[1]["notes"] == []


def test_quiz_skips_malformed_and_invalid_files():
    r = client.get("/api/quiz/mixed")
    assert r.status_code == 200
    data = r.json()
    assert len(data) == 1
    assert data[0]["answers"] == ["def"]


def test_sample_quiz_path():
    r = client.get("/api/quiz/samples/intro")
    assert r.status_code == 200
    assert r.json()[0]["question"] == "Which of these are mutable?"


def test_quiz_missing_folder_404():
    r = client.get("/api/quiz/does/not/exist")
    assert r.status_code == 404


def test_resolve_refuses_escaping_the_root():
    with pytest.raises(ValueError):
        resolve(QUIZ, "../../etc")


def test_load_quiz_unknown_folder_raises():
    with pytest.raises(QuizNotFound):
        load_quiz(QUIZ, "nope")


def test_legacy_tree_only_counts_question_files():
    tree = list_tree(LEGACY)
    assert tree == {"legacy": ["01.question"], "samples/starter": ["01.question"]}


def test_legacy_routes():
    r = client.get("/api/quizzes")
    body = r.json()
    assert r.status_code == 200 and body["status"] == 200 and body["error"] is None
    assert "samples/starter" in body["data"]

    r = client.get("/api/quizzes/generated")
    assert r.json()["data"] == {"legacy": ["01.question"]}

    r = client.get("/api/quizzes/legacy")
    assert r.status_code == 200
    assert len(r.json()) == 1

    r = client.get("/api/quizzes/generated/legacy")
    assert r.json()["data"][0]["answers"] == ["def"]


def test_quiz_cache_until_reload(data_dir):
    assert len(load_quiz(QUIZ, "only-coding")) == 1
    (data_dir / "quiz" / "only-coding" / "02.question").write_text(
        '{"question": "Second?", "choices": ["a"], "answers": ["a"]}', encoding="utf-8"
    )
    assert len(load_quiz(QUIZ, "only-coding")) == 1

    from quizbank import reload_quizzes

    assert reload_quizzes() >= 1
    assert len(load_quiz(QUIZ, "only-coding")) == 2
