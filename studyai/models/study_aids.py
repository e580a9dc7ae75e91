"""Flashcard, quiz and study-buddy models."""
from pydantic import BaseModel, Field, field_validator, model_validator


class Flashcard(BaseModel):
    """Single flashcard with a prompt side and an answer side."""
    front: str
    back: str


class QuizQuestion(BaseModel):
    """Multiple-choice question; `correct` indexes into `options`."""
    question: str
    options: list[str] = Field(default_factory=list)
    correct: int
    explanation: str = ""

    @field_validator('options')
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Ensure there is something to choose from."""
        if len(v) < 2:
            raise ValueError('a quiz question needs at least two options')
        return v

    @model_validator(mode='after')
    def validate_correct_index(self) -> "QuizQuestion":
        if not 0 <= self.correct < len(self.options):
            raise ValueError('correct must be a valid option index')
        return self


class ChatExchange(BaseModel):
    """One question/answer turn with the study buddy."""
    question: str
    answer: str


class FlashcardsResponse(BaseModel):
    flashcards: list[Flashcard] = Field(default_factory=list)


class QuizResponse(BaseModel):
    quiz: list[QuizQuestion] = Field(default_factory=list)


class StudyBuddyResponse(BaseModel):
    answer: str
