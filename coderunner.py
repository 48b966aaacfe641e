"""
Toy grader for coding questions.

Each test case of a coding question is ``[inputs, expected_output]``. Python
and JavaScript submissions are executed in a child interpreter with a short
timeout; every other language is "simulated" by sorting the first input,
which is all the sort-style challenges in the bank need.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
import sys
import tempfile
from typing import Any, Dict, List, Optional, Sequence

import settings
from scoring import compare_results, count_sort_iterations

logger = logging.getLogger("quizzer.coderunner")

LANGUAGES = ("javascript", "python", "csharp", "java", "cpp")
DEFAULT_LANGUAGE = "javascript"

_PY_HARNESS = """
import json, sys
payload = json.load(sys.stdin)
ns = {"__name__": "__submission__"}
exec(payload["code"], ns)
fn = ns.get(payload["entry"])
if not callable(fn):
    raise NameError("define a function named " + payload["entry"])
print(json.dumps(fn(*payload["inputs"])))
"""

_JS_HARNESS = """
const payload = JSON.parse(require("fs").readFileSync(0, "utf8"));
const fn = new Function(
  payload.code + "\\nreturn typeof " + payload.entry + " === 'function' ? " + payload.entry + " : undefined;"
)();
if (!fn) { throw new Error("define a function named " + payload.entry); }
process.stdout.write(JSON.stringify(fn(...payload.inputs)) + "\\n");
"""

_SORT_TEMPLATES = {
    "python": """def bubble_sort(arr):
    n = len(arr)
    for i in range(n):
        swapped = False
        for j in range(0, n - i - 1):
            pass

    return arr

# Example: bubble_sort([5, 2, 4, 2, 6, 2]) should return [2, 2, 2, 4, 5, 6]""",
    "javascript": """function bubbleSort(arr) {
    const n = arr.length;

    for (let i = 0; i < n; i++) {
        let swapped = false;

        for (let j = 0; j < n - i - 1; j++) {

        }

        if (!swapped) break;
    }

    return arr;
}

// Example: bubbleSort([5, 2, 4, 2, 6, 2]) should return [2, 2, 2, 4, 5, 6]""",
    "csharp": """using System;

public class Solution {
    public int[] BubbleSort(int[] arr) {
        int n = arr.Length;
        int[] sortedArr = new int[n];
        Array.Copy(arr, sortedArr, n);

        for (int i = 0; i < n; i++) {
            bool swapped = false;

            for (int j = 0; j < n - i - 1; j++) {

            }

            if (!swapped) break;
        }

        return sortedArr;
    }
}""",
    "java": """import java.util.Arrays;

public class Solution {
    public int[] bubbleSort(int[] arr) {
        int n = arr.length;
        int[] sortedArr = Arrays.copyOf(arr, n);

        for (int i = 0; i < n; i++) {
            boolean swapped = false;

            for (int j = 0; j < n - i - 1; j++) {

            }

            if (!swapped) break;
        }

        return sortedArr;
    }
}""",
    "cpp": """#include <vector>
#include <algorithm>

std::vector<int> bubbleSort(std::vector<int> arr) {
    int n = arr.size();

    for (int i = 0; i < n; i++) {
        bool swapped = false;

        for (int j = 0; j < n - i - 1; j++) {

        }

        if (!swapped) break;
    }

    return arr;
}""",
}

_GENERIC_TEMPLATES = {
    "python": """def solution(arr):

    return result""",
    "javascript": """function solution(arr) {

    return result;
}""",
    "csharp": """using System;
using System.Collections.Generic;

public class Solution {
    public object SolveChallenge(object[] args) {

        return result;
    }
}""",
    "java": """import java.util.*;

public class Solution {
    public Object solveChallenge(Object[] args) {

        return result;
    }
}""",
    "cpp": """#include <vector>
#include <string>

std::vector<int> solution(std::vector<int> arr) {

    return result;
}""",
}


def determine_language(question: str) -> str:
    q = question.lower()
    if "python" in q:
        return "python"
    if "javascript" in q or "js" in q:
        return "javascript"
    if "c#" in q:
        return "csharp"
    if "java" in q:
        return "java"
    if "c++" in q:
        return "cpp"
    return DEFAULT_LANGUAGE


def default_template(language: str, question: str) -> str:
    q = question.lower()
    is_sort = "sort" in q or "bubble" in q
    table = _SORT_TEMPLATES if is_sort else _GENERIC_TEMPLATES
    return table.get(language, "// Write your solution in your preferred language")


def _entry_point(code: str, language: str) -> str:
    if language == "python":
        return "bubble_sort" if "bubble_sort" in code else "solution"
    return "bubbleSort" if "bubbleSort" in code else "solution"


def _interpreter(language: str) -> Optional[List[str]]:
    if not settings.code_run_enabled():
        return None
    if language == "python":
        return [sys.executable, "-I", "-c", _PY_HARNESS]
    if language == "javascript":
        node = shutil.which("node")
        return [node, "-e", _JS_HARNESS] if node else None
    return None


def _as_args(inputs: Any) -> List[Any]:
    return list(inputs) if isinstance(inputs, list) else [inputs]


def simulate(inputs: Any) -> Any:
    args = _as_args(inputs)
    first = args[0] if args else None
    if not isinstance(first, list):
        return []
    try:
        return sorted(first)
    except TypeError:
        # mixed or unorderable elements come back as given
        return list(first)


def _child_env() -> Dict[str, str]:
    # submissions never see server secrets (tokens, AWS keys)
    return {"PATH": os.environ.get("PATH", os.defpath), "LANG": "C.UTF-8"}


def execute(code: str, language: str, inputs: Any) -> Any:
    """
    Run `code` against one set of inputs and return its decoded output.
    Raises RuntimeError with the interpreter's last error line on failure.
    """
    cmd = _interpreter(language)
    if cmd is None:
        return simulate(inputs)

    payload = json.dumps(
        {"code": code, "entry": _entry_point(code, language), "inputs": _as_args(inputs)}
    )
    try:
        with tempfile.TemporaryDirectory(prefix="quizzer-run-") as scratch:
            proc = subprocess.run(
                cmd,
                input=payload,
                capture_output=True,
                text=True,
                timeout=settings.code_run_timeout(),
                cwd=scratch,
                env=_child_env(),
            )
    except subprocess.TimeoutExpired:
        raise RuntimeError(f"timed out after {settings.code_run_timeout():g}s")

    if proc.returncode != 0:
        lines = [ln for ln in proc.stderr.strip().splitlines() if ln.strip()]
        raise RuntimeError(lines[-1] if lines else f"exit status {proc.returncode}")

    out = [ln for ln in proc.stdout.strip().splitlines() if ln.strip()]
    if not out:
        return None
    try:
        return json.loads(out[-1])
    except json.JSONDecodeError:
        return out[-1]


def run_tests(code: str, language: str, answers: Sequence[Any]) -> Dict[str, Any]:
    results: List[Dict[str, Any]] = []
    iterations: List[int] = []
    sizes: List[int] = []
    all_passed = True

    for case in answers:
        if not isinstance(case, (list, tuple)) or len(case) < 2:
            logger.warning("skipping malformed test case %r", case)
            continue
        inputs, expected = case[0], case[1]
        first = _as_args(inputs)[0] if _as_args(inputs) else None
        size = len(first) if isinstance(first, list) else 0
        iterations.append(count_sort_iterations(first) if size else 0)
        sizes.append(size)

        try:
            output = execute(code, language, inputs)
            passed = compare_results(output, expected)
        except (RuntimeError, TypeError) as e:
            output = f"Error: {e}"
            passed = False

        results.append(
            {"inputs": inputs, "expected_output": expected, "output": output, "passed": passed}
        )
        if not passed:
            all_passed = False

    return {
        "is_correct": all_passed and bool(results),
        "results": results,
        "iterations": iterations,
        "sizes": sizes,
    }
