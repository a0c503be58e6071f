"""JSON persistence for the question bank.

Document format::

    {
      "quizName": "General knowledge",
      "questions": [
        {
          "question": "What is 2 + 2?",
          "answers": ["3", "4", "5", "22"],
          "solution": 1,
          "time": 20,
          "image": null
        }
      ]
    }

``time`` and ``image`` are optional. The file is read once at start-up and
rewritten wholesale whenever the manager replaces the questions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from quiz_live.constants.quiz_constants import DEFAULT_QUIZ_NAME, DEFAULT_TIME_LIMIT_SECONDS
from quiz_live.core.errors import ValidationError
from quiz_live.core.models import Question, QuizDocument
from quiz_live.core.services.question_bank import prepare_question

logger = logging.getLogger(__name__)

_DEFAULT_QUESTIONS: list[dict[str, Any]] = [
    {
        "question": "Which planet is known as the Red Planet?",
        "answers": ["Venus", "Mars", "Jupiter", "Mercury"],
        "solution": 1,
        "time": 15,
    },
    {
        "question": "How many continents are there on Earth?",
        "answers": ["5", "6", "7", "8"],
        "solution": 2,
        "time": 15,
    },
    {
        "question": "What is the chemical symbol for water?",
        "answers": ["H2O", "CO2", "O2", "NaCl"],
        "solution": 0,
        "time": 15,
    },
]


class QuestionPayload(BaseModel):
    """Schema of one question as exchanged with clients and stored on disk."""

    model_config = ConfigDict(extra="ignore")

    question: StrictStr
    answers: list[StrictStr]
    solution: StrictInt
    time: StrictInt | None = DEFAULT_TIME_LIMIT_SECONDS
    image: StrictStr | None = None


class QuizDocumentPayload(BaseModel):
    """Schema of the ``{quizName, questions}`` document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    quiz_name: StrictStr | None = Field(default=None, alias="quizName")
    questions: list[dict[str, Any]]


def parse_question(payload: Any) -> Question:
    """Build a validated ``Question`` from its JSON representation."""
    try:
        parsed = QuestionPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc, "Invalid question")) from exc

    return prepare_question(
        Question(
            text=parsed.question,
            answers=list(parsed.answers),
            correct_index=parsed.solution,
            time_limit_seconds=parsed.time if parsed.time is not None else DEFAULT_TIME_LIMIT_SECONDS,
            image=parsed.image,
        )
    )


def serialize_question(question: Question) -> dict[str, Any]:
    return {
        "question": question.text,
        "answers": list(question.answers),
        "solution": question.correct_index,
        "time": question.time_limit_seconds,
        "image": question.image,
    }


def parse_document(payload: Any) -> QuizDocument:
    """Build a ``QuizDocument`` from ``{quizName, questions}``."""
    try:
        parsed = QuizDocumentPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc, "Invalid quiz document")) from exc

    quiz_name = (parsed.quiz_name or "").strip() or DEFAULT_QUIZ_NAME
    return QuizDocument(
        quiz_name=quiz_name,
        questions=[parse_question(item) for item in parsed.questions],
    )


def serialize_document(document: QuizDocument) -> dict[str, Any]:
    return {
        "quizName": document.quiz_name,
        "questions": [serialize_question(q) for q in document.questions],
    }


def _describe(exc: PydanticValidationError, prefix: str) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{prefix}: {location} {first['msg']}" if location else f"{prefix}: {first['msg']}"


def default_document() -> QuizDocument:
    return parse_document({"quizName": DEFAULT_QUIZ_NAME, "questions": _DEFAULT_QUESTIONS})


class QuestionStore:
    """Reads and writes the question document on disk."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> QuizDocument:
        """Load the stored quiz, falling back to the built-in default when missing or corrupt."""
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            document = parse_document(raw)
            if not document.questions:
                raise ValidationError("Quiz document has no questions.")
        except FileNotFoundError:
            logger.info("No question file at %s, using the default quiz", self._file_path)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable question file %s: %s", self._file_path, exc)
        else:
            logger.info("Loaded %d questions from %s", len(document.questions), self._file_path)
            return document

        document = default_document()
        try:
            self.save(document)
        except OSError as exc:
            logger.error("Failed to initialize %s: %s", self._file_path, exc)
        return document

    def save(self, document: QuizDocument) -> None:
        """Persist the document as indented UTF-8 JSON."""
        file_path = self._file_path.resolve()
        file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(serialize_document(document), indent=2, ensure_ascii=False)
        file_path.write_text(payload + "\n", encoding="utf-8")
