"""In-memory study session state: flashcard deck, quiz progress, chat history."""
from dataclasses import dataclass, field
from typing import Optional

from studyai.models.study_aids import ChatExchange, Flashcard, QuizQuestion


@dataclass
class FlashcardDeck:
    """A deck of flashcards with a cursor and a flipped/unflipped face."""
    cards: list[Flashcard] = field(default_factory=list)
    index: int = 0
    flipped: bool = False

    @property
    def current(self) -> Optional[Flashcard]:
        if not self.cards:
            return None
        return self.cards[self.index]

    @property
    def visible_text(self) -> str:
        card = self.current
        if card is None:
            return ""
        return card.back if self.flipped else card.front

    def flip(self) -> None:
        self.flipped = not self.flipped

    def next_card(self) -> bool:
        """Move forward; returns False at the last card."""
        if self.index >= len(self.cards) - 1:
            return False
        self.index += 1
        self.flipped = False
        return True

    def prev_card(self) -> bool:
        """Move back; returns False at the first card."""
        if self.index <= 0:
            return False
        self.index -= 1
        self.flipped = False
        return True

    def reset(self, cards: list[Flashcard]) -> None:
        self.cards = list(cards)
        self.index = 0
        self.flipped = False


@dataclass
class QuizSession:
    """
    Progress through a quiz.

    Answering a question scores it and advances to the next one; after the
    last question the session is finished.
    """
    questions: list[QuizQuestion] = field(default_factory=list)
    index: int = 0
    score: int = 0
    answers: list[int] = field(default_factory=list)
    finished: bool = False

    def __post_init__(self):
        if not self.questions:
            self.finished = True

    @property
    def current(self) -> Optional[QuizQuestion]:
        if self.finished:
            return None
        return self.questions[self.index]

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def percentage(self) -> float:
        if not self.questions:
            return 0.0
        return self.score / len(self.questions) * 100

    def select_answer(self, answer_index: int) -> bool:
        """Record an answer for the current question. Returns True if correct."""
        question = self.current
        if question is None:
            raise ValueError("Quiz is already finished")
        if not 0 <= answer_index < len(question.options):
            raise ValueError(f"Answer index out of range: {answer_index}")

        self.answers.append(answer_index)
        correct = answer_index == question.correct
        if correct:
            self.score += 1

        if self.index < len(self.questions) - 1:
            self.index += 1
        else:
            self.finished = True
        return correct


@dataclass
class ChatHistory:
    """Question/answer turns with the study buddy, oldest first."""
    exchanges: list[ChatExchange] = field(default_factory=list)

    def record(self, question: str, answer: Optional[str]) -> Optional[ChatExchange]:
        """Append an exchange; unanswered questions are not recorded."""
        if not answer:
            return None
        exchange = ChatExchange(question=question, answer=answer)
        self.exchanges.append(exchange)
        return exchange

    @property
    def last_answer(self) -> Optional[str]:
        return self.exchanges[-1].answer if self.exchanges else None

    def __len__(self) -> int:
        return len(self.exchanges)
