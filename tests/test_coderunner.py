import shutil

import pytest

import coderunner

from conftest import CODING

GOOD_PY = """
def bubble_sort(arr):
    return sorted(arr)
"""


@pytest.fixture
def no_node(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)


def test_determine_language():
    assert coderunner.determine_language("Write a bubble sort in Python") == "python"
    assert coderunner.determine_language("Reverse a string in JavaScript") == "javascript"
    assert coderunner.determine_language("Implement it in C#") == "csharp"
    assert coderunner.determine_language("Write it in Java") == "java"
    assert coderunner.determine_language("Use C++ templates") == "cpp"
    assert coderunner.determine_language("Sum two numbers") == "javascript"


def test_default_template():
    assert "def bubble_sort" in coderunner.default_template("python", "bubble sort it")
    assert "function solution" in coderunner.default_template("javascript", "Sum two numbers")
    assert coderunner.default_template("cobol", "x").startswith("//")


def test_run_python_submission():
    result = coderunner.run_tests(GOOD_PY, "python", CODING["answers"])
    assert result["is_correct"] is True
    assert [r["output"] for r in result["results"]] == [[2, 4, 5], [1, 3]]
    assert result["iterations"] == [3, 1]
    assert result["sizes"] == [3, 2]


def test_run_python_wrong_answer():
    code = "def bubble_sort(arr):\n    return arr\n"
    result = coderunner.run_tests(code, "python", CODING["answers"])
    assert result["is_correct"] is False
    assert result["results"][0]["passed"] is False
    assert result["results"][0]["output"] == [5, 2, 4]


def test_run_python_error_reported():
    result = coderunner.run_tests("def bubble_sort(arr):\n    raise ValueError('boom')\n", "python", CODING["answers"])
    assert result["is_correct"] is False
    assert all(r["output"].startswith("Error:") for r in result["results"])
    assert "boom" in result["results"][0]["output"]


def test_run_python_missing_entry_point():
    result = coderunner.run_tests("x = 1\n", "python", CODING["answers"][:1])
    assert result["results"][0]["output"].startswith("Error:")


def test_run_python_timeout(monkeypatch):
    monkeypatch.setenv("CODE_RUN_TIMEOUT", "0.5")
    code = "def bubble_sort(arr):\n    while True:\n        pass\n"
    result = coderunner.run_tests(code, "python", CODING["answers"][:1])
    assert result["results"][0]["output"].startswith("Error: timed out")


def test_other_languages_are_simulated():
    result = coderunner.run_tests("public class Solution {}", "java", CODING["answers"])
    assert result["is_correct"] is True
    assert result["results"][1]["output"] == [1, 3]


def test_javascript_simulated_without_node(no_node):
    result = coderunner.run_tests("function bubbleSort(a) { return a; }", "javascript", CODING["answers"])
    assert result["is_correct"] is True


def test_execution_disabled(monkeypatch):
    monkeypatch.setenv("CODE_RUN_ENABLED", "false")
    result = coderunner.run_tests("def bubble_sort(arr):\n    return arr\n", "python", CODING["answers"])
    # falls back to simulation, which sorts
    assert result["is_correct"] is True


def test_malformed_cases_skipped():
    result = coderunner.run_tests(GOOD_PY, "java", [["only-one"], [[[2, 1]], [1, 2]]])
    assert len(result["results"]) == 1


def test_no_cases_is_not_correct():
    result = coderunner.run_tests(GOOD_PY, "python", [])
    assert result["is_correct"] is False
    assert result["results"] == []


def test_mixed_type_inputs_do_not_crash():
    cases = [[[[3, "a", 1]], [1, 3, "a"]], [[[None, 1]], [None, 1]]]
    result = coderunner.run_tests("public class Solution {}", "java", cases)
    assert result["iterations"] == [3, 1]
    # unorderable input comes back unsorted from the simulation
    assert result["results"][0]["output"] == [3, "a", 1]
    assert result["results"][0]["passed"] is False
    assert result["results"][1]["passed"] is True


def test_mixed_type_inputs_run_in_python():
    code = "def solution(arr):\n    return arr\n"
    result = coderunner.run_tests(code, "python", [[[[3, "a", 1]], [1, 3, "a"]]])
    assert result["results"][0]["output"] == [3, "a", 1]
    assert result["is_correct"] is False


def test_scalar_and_empty_inputs():
    cases = [[[7], []], [[[]], []]]
    result = coderunner.run_tests("public class Solution {}", "java", cases)
    assert result["sizes"] == [0, 0]
    assert result["iterations"] == [0, 0]
    assert [r["output"] for r in result["results"]] == [[], []]
    assert result["is_correct"] is True


def test_submissions_cannot_read_server_secrets(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "super-admin-secret")
    monkeypatch.setenv("LLM_BEARER_TOKEN", "llm-secret")
    code = (
        "import os\n"
        "def solution(arr):\n"
        "    return [os.environ.get('ADMIN_TOKEN'), os.environ.get('LLM_BEARER_TOKEN')]\n"
    )
    result = coderunner.run_tests(code, "python", [[[[1]], [None, None]]])
    assert result["results"][0]["output"] == [None, None]


def test_submissions_run_in_a_scratch_directory():
    import os

    code = "import os\ndef solution(arr):\n    return os.getcwd()\n"
    result = coderunner.run_tests(code, "python", [[[[1]], ""]])
    output = result["results"][0]["output"]
    assert os.path.basename(output).startswith("quizzer-run-")
    assert output != os.getcwd()
