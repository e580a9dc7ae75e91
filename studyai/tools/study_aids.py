"""Generate flashcards and quizzes and answer study questions using an LLM."""
import json
import logging
from typing import Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from studyai.config import get_settings
from studyai.models.study_aids import (
    Flashcard,
    FlashcardsResponse,
    QuizQuestion,
    QuizResponse,
    StudyBuddyResponse,
)

logger = logging.getLogger(__name__)


def _get_client() -> tuple[Optional[genai.Client], Optional[str]]:
    """Create a Gemini client (requires GOOGLE_API_KEY env var)."""
    api_key = get_settings().api_key
    if not api_key:
        return None, "GOOGLE_API_KEY not found"
    return genai.Client(api_key=api_key), None


def _generate(prompt: str, json_output: bool, temperature: float) -> tuple[Optional[str], Optional[str]]:
    """Run a single generate_content call and return the response text."""
    client, error = _get_client()
    if client is None:
        return None, error

    config = types.GenerateContentConfig(
        temperature=temperature,
        response_mime_type="application/json" if json_output else "text/plain",
    )

    try:
        response = client.models.generate_content(
            model=get_settings().model,
            contents=prompt,
            config=config,
        )
    except Exception as e:
        logger.error("LLM request failed: %s", e)
        return None, f"Request failed: {str(e)}"

    logger.debug("LLM response: %s", response.text)
    return response.text, None


def generate_flashcards(notes: str, max_cards: int = 10) -> tuple[list[Flashcard], Optional[str]]:
    """
    Turn study notes into question/answer flashcards.

    Args:
        notes: Free-text notes to study from
        max_cards: Upper bound on cards requested from the model

    Returns:
        (flashcards, error) - flashcards is empty when error is set
    """
    if not notes or not notes.strip():
        return [], None

    prompt = f"""Create up to {max_cards} study flashcards from these notes.
Each card has a short question or term on the front and a concise answer on the back.

Return JSON:
{{
  "flashcards": [
    {{"front": "What is photosynthesis?", "back": "The process plants use to turn light into chemical energy."}}
  ]
}}

Notes:
{notes}"""

    text, error = _generate(prompt, json_output=True, temperature=0.3)
    if error:
        return [], error

    try:
        result = FlashcardsResponse(**json.loads(text))
    except (ValidationError, ValueError, TypeError) as e:
        logger.error("Error generating flashcards: %s", e)
        return [], f"Flashcard generation failed: {str(e)}"

    return result.flashcards[:max_cards], None


def generate_quiz(text: str, num_questions: int = 5) -> tuple[list[QuizQuestion], Optional[str]]:
    """
    Build a multiple-choice quiz from study material.

    Returns:
        (questions, error) - questions is empty when error is set
    """
    if not text or not text.strip():
        return [], None

    prompt = f"""Write a multiple-choice quiz with {num_questions} questions about the material below.
Each question has exactly 4 options; "correct" is the 0-based index of the right option.

Return JSON:
{{
  "quiz": [
    {{
      "question": "Which organelle produces ATP?",
      "options": ["Nucleus", "Mitochondria", "Ribosome", "Golgi apparatus"],
      "correct": 1,
      "explanation": "Mitochondria carry out cellular respiration."
    }}
  ]
}}

Material:
{text}"""

    raw, error = _generate(prompt, json_output=True, temperature=0.4)
    if error:
        return [], error

    try:
        result = QuizResponse(**json.loads(raw))
    except (ValidationError, ValueError, TypeError) as e:
        logger.error("Error generating quiz: %s", e)
        return [], f"Quiz generation failed: {str(e)}"

    return result.quiz, None


def ask_study_buddy(question: str) -> tuple[Optional[str], Optional[str]]:
    """Answer a study question in plain language. Returns (answer, error)."""
    if not question or not question.strip():
        return None, None

    prompt = f"""You are a friendly study buddy helping a student learn.
Answer the question clearly and concisely. Use a short example when it helps.

Question: {question}"""

    answer, error = _generate(prompt, json_output=False, temperature=0.7)
    if error:
        return None, error
    if not answer or not answer.strip():
        return None, "Empty answer from model"
    return answer.strip(), None


# Request/response bodies for the flashcards, quiz, and study-buddy services

def handle_flashcards_request(body: dict) -> dict:
    """{"notes": ...} -> {"flashcards": [...]}"""
    flashcards, error = generate_flashcards(body.get("notes") or "")
    if error:
        return {"error": error}
    return {"flashcards": [card.model_dump() for card in flashcards]}


def handle_quiz_request(body: dict) -> dict:
    """{"text": ...} -> {"quiz": [...]}"""
    quiz, error = generate_quiz(body.get("text") or "")
    if error:
        return {"error": error}
    return {"quiz": [question.model_dump() for question in quiz]}


def handle_study_buddy_request(body: dict) -> dict:
    """{"question": ...} -> {"answer": ...}"""
    answer, error = ask_study_buddy(body.get("question") or "")
    if error:
        return {"error": error}
    return StudyBuddyResponse(answer=answer or "").model_dump()
