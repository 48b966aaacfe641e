"""
Quiz progression as a small state machine.

A session walks a fixed snapshot of quiz questions. It is in the "question"
state while the student answers, and in the "results" state once the last
question has been submitted. All state lives in a plain JSON-able dict so a
row in ``quiz_sessions`` can carry it between requests.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import coderunner
import speech
from quizbank import QuizQuestion
from scoring import performance_chart, score_quiz

QUESTION = "question"
RESULTS = "results"


class InvalidTransition(RuntimeError):
    pass


class EmptyQuiz(ValueError):
    pass


def _key(index: int) -> str:
    # JSON object keys are strings; keep them that way in stored state
    return str(index)


class QuizSession:
    def __init__(self, questions: List[QuizQuestion], state: Dict[str, Any]):
        if not questions:
            raise EmptyQuiz("quiz has no questions")
        self.questions = questions
        self.state = state

    # ---------- construction ----------

    @classmethod
    def start(cls, questions: List[QuizQuestion], teacher_name: Optional[str] = None) -> "QuizSession":
        session = cls(questions, {"teacher_name": teacher_name, "preferred_language": None})
        session._reset()
        greeting = speech.greeting(teacher_name)
        session.state["bubble"] = (greeting or speech.hidden()).model_dump()
        return session

    def _reset(self) -> None:
        selected: Dict[str, List[str]] = {}
        code: Dict[str, str] = {}
        for index, q in enumerate(self.questions):
            selected[_key(index)] = []
            if q.is_coding and q.answers:
                language = coderunner.determine_language(q.question)
                code[_key(index)] = coderunner.default_template(language, q.question)

        self.state.update(
            status=QUESTION,
            index=0,
            selected=selected,
            code=code,
            code_results={},
            hints={},
            score=None,
        )
        first = self.questions[0]
        self.state["language"] = (
            (self.state.get("preferred_language") or coderunner.determine_language(first.question))
            if first.is_coding
            else None
        )

    # ---------- accessors ----------

    @property
    def status(self) -> str:
        return self.state["status"]

    @property
    def index(self) -> int:
        return self.state["index"]

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.index]

    @property
    def language(self) -> str:
        return self.state.get("language") or coderunner.DEFAULT_LANGUAGE

    @property
    def bubble(self) -> Dict[str, Any]:
        return self.state.get("bubble") or speech.hidden().model_dump()

    def selected_for(self, index: int) -> List[str]:
        return list(self.state["selected"].get(_key(index), []))

    def code_for(self, index: int) -> str:
        return self.state["code"].get(_key(index), "")

    def code_result_for(self, index: int) -> Optional[Dict[str, Any]]:
        return self.state["code_results"].get(_key(index))

    def say(self, bubble: speech.SpeechBubble) -> None:
        self.state["bubble"] = bubble.model_dump()

    def _require_question_state(self) -> None:
        if self.status != QUESTION:
            raise InvalidTransition("quiz is already finished; restart to answer again")

    # ---------- transitions ----------

    def select(self, choice: str, checked: bool = True) -> List[str]:
        self._require_question_state()
        q = self.current
        if q.is_coding:
            raise InvalidTransition("current question is a coding question")
        if choice not in q.choices:
            raise ValueError(f"unknown choice: {choice!r}")

        current = self.selected_for(self.index)
        if q.is_single_choice:
            current = [choice]
        elif checked:
            if choice not in current:
                current.append(choice)
        else:
            current = [c for c in current if c != choice]

        self.state["selected"][_key(self.index)] = current
        return current

    def set_code(self, code: str) -> None:
        self._require_question_state()
        if not self.current.is_coding:
            raise InvalidTransition("current question is not a coding question")
        self.state["code"][_key(self.index)] = code

    def set_language(self, language: str, replace: bool = False) -> bool:
        """
        Switch the editor language. The starter template for the new language
        replaces the code when nothing was written yet, or when `replace` is
        set. Returns whether the code was replaced.
        """
        if language not in coderunner.LANGUAGES:
            raise ValueError(f"unsupported language: {language}")
        self._require_question_state()

        old_language = self.language
        self.state["language"] = language
        self.state["preferred_language"] = language

        q = self.current
        if not q.is_coding:
            return False

        current_code = self.code_for(self.index)
        old_template = coderunner.default_template(old_language, q.question)
        if not current_code or current_code == old_template or replace:
            self.state["code"][_key(self.index)] = coderunner.default_template(language, q.question)
            return True
        return False

    def run_code(self) -> Dict[str, Any]:
        self._require_question_state()
        q = self.current
        if not q.is_coding:
            raise InvalidTransition("current question is not a coding question")
        if not q.answers:
            raise InvalidTransition("question has no test cases")

        result = coderunner.run_tests(self.code_for(self.index), self.language, q.answers)
        self.state["code_results"][_key(self.index)] = result

        if result["is_correct"]:
            self.say(speech.code_passed())
        elif result["results"] and all(
            isinstance(r["output"], str) and r["output"].startswith("Error:")
            for r in result["results"]
        ):
            self.say(speech.code_error())
        else:
            self.say(speech.code_failed())
        return result

    def next(self) -> str:
        self._require_question_state()
        if self.index < len(self.questions) - 1:
            self.state["index"] = self.index + 1
            q = self.current
            if q.is_coding:
                self.state["language"] = self.state.get(
                    "preferred_language"
                ) or coderunner.determine_language(q.question)
            self.say(speech.next_question())
            return QUESTION

        self.finish()
        return RESULTS

    def previous(self) -> int:
        self._require_question_state()
        if self.index > 0:
            self.state["index"] = self.index - 1
            q = self.current
            if q.is_coding:
                self.state["language"] = coderunner.determine_language(q.question)
        return self.index

    def finish(self) -> Dict[str, Any]:
        selected = {i: self.selected_for(i) for i in range(len(self.questions))}
        code_results = {
            int(k): v for k, v in self.state["code_results"].items() if v is not None
        }
        score = score_quiz(self.questions, selected, code_results)
        self.state["score"] = score
        self.state["status"] = RESULTS
        self.say(speech.results(score["percent"]))
        return score

    def restart(self) -> None:
        self._reset()
        self.say(speech.restart())

    # ---------- teacher help ----------

    def apply_hint(self, text: Optional[str], index: Optional[int] = None) -> speech.SpeechBubble:
        """Store a hint for a question and put it in the teacher's mouth."""
        if text is None:
            bubble = speech.hint_failed()
        else:
            self.state["hints"][_key(self.index if index is None else index)] = text
            bubble = speech.hint_ready(text)
        self.say(bubble)
        return bubble

    def apply_analysis(self, text: Optional[str]) -> speech.SpeechBubble:
        bubble = speech.analysis_ready(text) if text is not None else speech.analysis_failed()
        self.say(bubble)
        return bubble

    def question_at(self, index: int) -> QuizQuestion:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"question index out of range: {index}")
        return self.questions[index]

    # ---------- views ----------

    def _question_view(self, index: int) -> Dict[str, Any]:
        q = self.questions[index]
        view = q.model_dump(exclude={"answers"})
        view["is_coding"] = q.is_coding
        view["single_choice"] = q.is_single_choice
        if q.is_coding:
            # test cases are visible in the editor, same as the quiz page shows them
            view["test_cases"] = copy.deepcopy(q.answers)
        return view

    def view(self) -> Dict[str, Any]:
        total = len(self.questions)
        index = self.index
        q = self.current
        return {
            "status": self.status,
            "index": index,
            "total": total,
            "progress": ((index + 1) / total) * 100,
            "question": self._question_view(index),
            "selected": self.selected_for(index),
            "code": self.code_for(index) if q.is_coding else None,
            "language": self.language if q.is_coding else None,
            "code_result": self.code_result_for(index),
            "hint": self.state["hints"].get(_key(index)),
            "score": self.state.get("score"),
            "bubble": self.bubble,
        }

    def results_view(self) -> Dict[str, Any]:
        if self.status != RESULTS:
            raise InvalidTransition("quiz is not finished yet")

        score = self.state["score"]
        review: List[Dict[str, Any]] = []
        for index, q in enumerate(self.questions):
            item: Dict[str, Any] = {
                "index": index,
                "question": q.question,
                "is_coding": q.is_coding,
                "earned": score["items"][index]["earned"],
                "total": score["items"][index]["total"],
            }
            if q.is_coding:
                result = self.code_result_for(index)
                item["code_result"] = result
                item["is_correct"] = bool(result and result["results"] and result["is_correct"])
                if result and result.get("iterations"):
                    item["chart"] = performance_chart(result["iterations"], result["sizes"])
            else:
                selected = self.selected_for(index)
                item["selected"] = selected
                item["answers"] = list(q.answers)
                item["is_correct"] = set(selected) == set(q.answers)
            review.append(item)

        return {"score": score, "review": review, "bubble": self.bubble}
