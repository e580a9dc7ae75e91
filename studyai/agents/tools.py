"""ADK tool wrappers for the study planner and study aids.

Each tool is a Python function returning a status dict so the agent can
report results back to the user.
"""
import logging
from typing import Optional

from studyai.config import get_settings
from studyai.tools.dates import format_local_date
from studyai.tools.plan_store import StudyPlanStore
from studyai.tools.storage import JsonFileStore
from studyai.tools.study_aids import generate_flashcards, generate_quiz

logger = logging.getLogger(__name__)

_store: Optional[StudyPlanStore] = None


def get_store() -> StudyPlanStore:
    """Shared store for the configured user and storage file."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = StudyPlanStore(JsonFileStore(settings.storage_path), user_id=settings.user_id)
    return _store


def _goal_info(goal) -> dict:
    return {
        "goal_id": goal.id,
        "description": goal.description,
        "target_date": format_local_date(goal.target_date),
        "completed": goal.completed,
    }


def _with_error(result: dict, store: StudyPlanStore) -> dict:
    """Attach the store's informational error, if any."""
    if store.error:
        result["warning"] = store.error
    return result


# ============================================================================
# PLANNER TOOLS
# ============================================================================

def list_goals() -> dict:
    """
    List the student's study goals and subjects.

    Returns:
        dict with:
        - status: "success" or "error"
        - goals: list of goals with goal_id, description, target_date, completed
        - subjects: list of subject names
        - message: summary message
    """
    store = get_store()
    plan = store.plan
    return _with_error({
        "status": "success",
        "goals": [_goal_info(goal) for goal in plan.goals],
        "subjects": plan.subjects,
        "message": f"{len(plan.goals)} goals ({len(store.incomplete_goals)} open), {len(plan.subjects)} subjects."
    }, store)


def add_goal(description: str, target_date: Optional[str] = None) -> dict:
    """
    Add a study goal.

    Args:
        description: What the student wants to achieve
        target_date: Optional target date (YYYY-MM-DD)
    """
    if not description or not description.strip():
        return {"status": "error", "message": "Goal description must not be empty."}

    store = get_store()
    _, goal = store.create_goal(description, target_date)
    return _with_error({
        "status": "success",
        "goal": _goal_info(goal),
        "message": f"Added goal: {goal.description}"
    }, store)


def toggle_goal(goal_id: str) -> dict:
    """Mark a goal done, or not done if it was already completed."""
    store = get_store()
    goal = store.toggle_goal(goal_id).goal_by_id(goal_id)
    if goal is None:
        return {"status": "error", "message": f"Goal not found: {goal_id}"}

    state = "completed" if goal.completed else "not completed"
    return _with_error({
        "status": "success",
        "goal": _goal_info(goal),
        "message": f"Marked '{goal.description}' as {state}."
    }, store)


def delete_goal(goal_id: str) -> dict:
    """Delete a goal by ID."""
    store = get_store()
    _, goal = store.pop_goal(goal_id)
    if goal is None:
        return {"status": "error", "message": f"Goal not found: {goal_id}"}

    return _with_error({"status": "success", "message": f"Deleted goal: {goal.description}"}, store)


def add_subject(name: str) -> dict:
    """Add a subject the student is studying."""
    if not name or not name.strip():
        return {"status": "error", "message": "Subject name must not be empty."}

    store = get_store()
    plan = store.add_subject(name)
    return _with_error({
        "status": "success",
        "subjects": plan.subjects,
        "message": f"Subjects: {', '.join(plan.subjects)}"
    }, store)


def delete_subject(name: str) -> dict:
    """Remove a subject by exact name."""
    store = get_store()
    plan, found = store.discard_subject(name)
    if not found:
        return {"status": "error", "message": f"Subject not found: {name}"}

    return _with_error({"status": "success", "subjects": plan.subjects, "message": f"Removed subject: {name}"}, store)


def get_progress() -> dict:
    """
    Report goal completion progress.

    Returns:
        dict with status, completed, incomplete, total, percent, message
    """
    store = get_store()
    progress = store.progress()
    return _with_error({
        "status": "success",
        "completed": progress["completed"],
        "incomplete": progress["incomplete"],
        "total": progress["total"],
        "percent": round(progress["percent"], 1),
        "message": f"{progress['completed']} out of {progress['total']} goals completed."
    }, store)


# ============================================================================
# STUDY AID TOOLS
# ============================================================================

def make_flashcards(notes: str) -> dict:
    """Create flashcards from study notes."""
    flashcards, error = generate_flashcards(notes)
    if error:
        return {"status": "error", "message": f"Flashcard generation failed: {error}"}
    return {
        "status": "success",
        "flashcards": [card.model_dump() for card in flashcards],
        "message": f"Created {len(flashcards)} flashcards."
    }


def make_quiz(text: str) -> dict:
    """Create a multiple-choice quiz from study material."""
    quiz, error = generate_quiz(text)
    if error:
        return {"status": "error", "message": f"Quiz generation failed: {error}"}
    return {
        "status": "success",
        "quiz": [question.model_dump() for question in quiz],
        "message": f"Created {len(quiz)} quiz questions."
    }
