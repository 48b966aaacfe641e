from __future__ import annotations

import json
from typing import Literal, Optional

from quizbank import QuizQuestion

HintKind = Literal["question", "choice", "explanation"]

EXTRA_PROMPT = "Give simple code snippets and use cases for examples."


def _teacher_label(gender: Optional[str]) -> str:
    return f"{gender} " if gender else ""


def hint_prompt(
    kind: HintKind,
    question: QuizQuestion,
    content: str = "",
    gender: Optional[str] = None,
) -> str:
    """
    Prompt for a teacher hint. `content` is the question text for "question"
    hints and the choice text for "choice" hints; explanations ignore it.
    """
    who = _teacher_label(gender)

    if kind == "question":
        text = content or question.question
        if question.is_coding:
            return (
                f"{EXTRA_PROMPT} As a helpful {who}programming teacher, provide a hint for this "
                f'coding challenge without giving away the solution directly. Challenge: "{text}". '
                "Give a supportive hint that guides thinking about the algorithm and implementation."
            )
        return (
            f"{EXTRA_PROMPT} As a helpful {who}teacher, provide a hint for this question without "
            f'giving away the answer directly. Question: "{text}". '
            f"Available choices: {', '.join(question.choices)}. Give a supportive hint that guides thinking."
        )

    if kind == "choice":
        return (
            f"{EXTRA_PROMPT} As a helpful {who}teacher, provide guidance about this answer choice "
            f"without revealing if it's correct or wrong. Question: \"{question.question}\". "
            f'Choice: "{content}". Give a hint about what to consider when evaluating this choice.'
        )

    if kind == "explanation":
        if question.is_coding:
            return (
                f"{EXTRA_PROMPT} As a supportive {who}programming teacher, explain the correct "
                f'approach to solve this coding challenge: "{question.question}". Provide a '
                "high-level explanation of the algorithm and implementation strategy without "
                "giving the complete code solution. Be encouraging and educational."
            )
        correct = ", ".join(str(a) for a in question.answers)
        return (
            f"{EXTRA_PROMPT} As a supportive {who}teacher, explain why the correct answer is "
            f'"{correct}" for the question: "{question.question}". Also explain common '
            "misconceptions about the incorrect choices. Be encouraging and educational."
        )

    raise ValueError(f"unknown hint kind: {kind}")


def analysis_prompt(
    question: QuizQuestion, code: str, language: str, gender: Optional[str] = None
) -> str:
    cases = "\n".join(
        f"Test case {i + 1}: Input: {json.dumps(case[0])}, Expected output: {json.dumps(case[1])}"
        for i, case in enumerate(question.answers)
        if isinstance(case, (list, tuple)) and len(case) >= 2
    )
    return f"""
As a {_teacher_label(gender)}programming teacher, analyze this {language} code for the following problem:

PROBLEM: {question.question}

CODE:
```{language}
{code}
```

TEST CASES:
{cases}

Please provide constructive feedback on:
1. What's good about the code (if anything)
2. What needs improvement
3. Any potential bugs or edge cases not handled
4. Algorithm efficiency and suggestions for optimization
5. Style and best practices

Provide specific, actionable advice that will help the student improve their solution. Be encouraging but thorough in your analysis.
"""


def user_message(prompt: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": prompt}]
