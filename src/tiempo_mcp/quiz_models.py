"""Quiz data models — configuration, questions, results and the session."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from tiempo_mcp.answers import is_correct

QUESTION_COUNTS = [5, 10, 15, 20, 25]


class SessionError(RuntimeError):
    """A quiz session transition was attempted from the wrong state."""


class ScoreTier(str, Enum):
    good = "good"
    warn = "warn"
    bad = "bad"


class QuizConfig(BaseModel):
    """What to quiz on."""

    verb: str | None = None  # Single infinitive, None = any verb
    moods: list[str] = Field(default_factory=list)  # Empty = all moods
    tenses: list[str] = Field(default_factory=list)  # Empty = all tenses
    question_count: int | None = Field(default=None, ge=1)  # None = all matches
    favorites_only: bool = False
    favorite_infinitives: list[str] = Field(default_factory=list)


class QuizQuestion(BaseModel):
    """A single generated question: conjugate ``infinitive`` for ``performer``."""

    model_config = ConfigDict(frozen=True)

    infinitive: str
    translation: str
    mood: str
    tense: str
    performer: str
    performer_en: str
    correct_answer: str


class QuizResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_index: int
    question: QuizQuestion
    user_answer: str
    is_correct: bool


class QuizSummary(BaseModel):
    score: int
    total: int
    percentage: int
    message: str
    color_tier: ScoreTier


class QuizSession(BaseModel):
    """A quiz in progress.

    The session is ``Completed`` once ``current_question_index`` equals the
    number of questions. Answers are checked with :func:`is_correct`; moving
    to the next question is a separate step so the caller can show feedback
    in between.
    """

    config: QuizConfig
    questions: list[QuizQuestion]
    results: list[QuizResult] = Field(default_factory=list)
    current_question_index: int = 0
    score: int = 0

    @property
    def is_completed(self) -> bool:
        return self.current_question_index == len(self.questions)

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_completed:
            return None
        return self.questions[self.current_question_index]

    @property
    def answered_current(self) -> bool:
        return (
            bool(self.results)
            and self.results[-1].question_index == self.current_question_index
        )

    def submit_answer(self, user_answer: str) -> QuizResult:
        if self.is_completed:
            raise SessionError("Cannot submit an answer: quiz is completed")
        if self.answered_current:
            raise SessionError(
                f"Question {self.current_question_index} has already been answered"
            )

        question = self.questions[self.current_question_index]
        result = QuizResult(
            question_index=self.current_question_index,
            question=question,
            user_answer=user_answer,
            is_correct=is_correct(user_answer, question.correct_answer),
        )
        self.results.append(result)
        if result.is_correct:
            self.score += 1
        return result

    def advance(self) -> None:
        if self.is_completed:
            raise SessionError("Cannot advance: quiz is already completed")
        self.current_question_index += 1

    def reset(self) -> None:
        """Replay the same questions from the start ("try again")."""
        if not self.is_completed:
            raise SessionError("Only a completed quiz can be reset")
        self.current_question_index = 0
        self.results = []
        self.score = 0
