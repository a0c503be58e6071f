"""Service for managing the collection of quiz questions."""

from __future__ import annotations

from quiz_live.constants.quiz_constants import DEFAULT_QUIZ_NAME, MIN_ANSWER_COUNT
from quiz_live.core.errors import RangeError, ValidationError
from quiz_live.core.models import Question, QuizDocument


class QuestionBank:
    """Holds the editable question list and the quiz name."""

    def __init__(self, document: QuizDocument | None = None) -> None:
        self._quiz_name: str = DEFAULT_QUIZ_NAME
        self._questions: list[Question] = []
        if document is not None:
            self.replace(document)

    @property
    def quiz_name(self) -> str:
        return self._quiz_name

    def get_questions(self) -> list[Question]:
        """Return copies of all questions."""
        return [_copy_question(q) for q in self._questions]

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at_index(self, index: int) -> Question:
        self._check_index(index)
        return _copy_question(self._questions[index])

    def to_document(self) -> QuizDocument:
        return QuizDocument(quiz_name=self._quiz_name, questions=self.get_questions())

    def add_question(self, question: Question) -> None:
        self._questions.append(prepare_question(question))

    def update_question(self, index: int, question: Question) -> None:
        self._check_index(index)
        self._questions[index] = prepare_question(question)

    def delete_question(self, index: int) -> None:
        self._check_index(index)
        self._questions.pop(index)

    def replace(self, document: QuizDocument) -> None:
        """Overwrite the quiz name and every question; nothing changes if one is invalid."""
        prepared = [prepare_question(q) for q in document.questions]
        name = document.quiz_name.strip() if document.quiz_name else ""
        self._quiz_name = name or DEFAULT_QUIZ_NAME
        self._questions = prepared

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self._questions):
            raise RangeError(index, len(self._questions))


def prepare_question(question: Question) -> Question:
    """Validate and normalize a question before storage."""
    cleaned_text = question.text.strip()
    if not cleaned_text:
        raise ValidationError("Question text must not be empty.")

    answers = _validate_answers(question.answers)
    if not isinstance(question.correct_index, int) or not 0 <= question.correct_index < len(answers):
        raise ValidationError("The correct answer must point at one of the answers.")

    image = question.image.strip() if question.image else None

    return Question(
        text=cleaned_text,
        answers=answers,
        correct_index=question.correct_index,
        time_limit_seconds=_normalize_time_limit(question.time_limit_seconds),
        image=image or None,
    )


def _validate_answers(answers: list[str]) -> list[str]:
    if len(answers) < MIN_ANSWER_COUNT:
        raise ValidationError(f"Each question needs at least {MIN_ANSWER_COUNT} answers.")
    cleaned = [answer.strip() for answer in answers]
    if any(not answer for answer in cleaned):
        raise ValidationError("Answer text cannot be empty.")
    return cleaned


def _normalize_time_limit(time_limit_seconds: int) -> int:
    if not isinstance(time_limit_seconds, int) or isinstance(time_limit_seconds, bool):
        raise ValidationError("Time limit must be provided as an integer number of seconds.")
    if time_limit_seconds <= 0:
        raise ValidationError("Time limit must be a positive integer.")
    return time_limit_seconds


def _copy_question(question: Question) -> Question:
    return Question(
        text=question.text,
        answers=list(question.answers),
        correct_index=question.correct_index,
        time_limit_seconds=question.time_limit_seconds,
        image=question.image,
    )
