"""Study plan store: load, mutate, and persist a single user's study plan.

The store owns the in-memory StudyPlan and mirrors it to a key-value storage
backend under ``studyPlan_<user_id>``. Every mutation is applied under a lock
against the latest in-memory plan, then the full plan is written back.
Storage failures never raise out of the store; they are logged and exposed
through ``load_error`` / ``save_error``.
"""
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from studyai.config import DEFAULT_USER_ID
from studyai.models.plan import Goal, StudyPlan
from studyai.tools.dates import DateInput, as_utc, parse_date_input, parse_iso, to_iso
from studyai.tools.storage import KeyValueStore, StorageError, storage_key

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load study plan from local storage."
SAVE_ERROR_MESSAGE = "Failed to save study plan to local storage."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_goal_id() -> str:
    """Generate a unique goal ID (UUID)."""
    return str(uuid.uuid4())


def default_plan(user_id: str, last_updated: str) -> StudyPlan:
    """Empty plan for a user with no stored data."""
    return StudyPlan(user_id=user_id, goals=[], subjects=[], last_updated=last_updated)


class StudyPlanStore:
    """
    Owner of one user's study plan.

    Args:
        storage: Durable key-value backend (get_item/set_item)
        user_id: Identity the plan belongs to; also determines the storage key
        clock: Optional callable returning the current datetime
        id_factory: Optional callable returning new goal IDs
    """

    def __init__(
        self,
        storage: KeyValueStore,
        user_id: str = DEFAULT_USER_ID,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.storage = storage
        self.user_id = user_id
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_goal_id
        self._lock = threading.RLock()
        self._plan: Optional[StudyPlan] = None
        self._version = 0
        self.load_error: Optional[str] = None
        self.save_error: Optional[str] = None

    @property
    def storage_key(self) -> str:
        return storage_key(self.user_id)

    @property
    def loaded(self) -> bool:
        return self._plan is not None

    @property
    def version(self) -> int:
        """Number of mutations applied since the plan was loaded."""
        return self._version

    @property
    def error(self) -> Optional[str]:
        """Most relevant informational error, if any."""
        return self.save_error or self.load_error

    def clear_error(self) -> None:
        self.load_error = None
        self.save_error = None

    # ------------------------------------------------------------------
    # Loading and persistence
    # ------------------------------------------------------------------

    def load(self) -> StudyPlan:
        """
        Read the plan from storage, or create and persist a default plan.

        A read or parse failure sets ``load_error`` and falls back to a
        default in-memory plan; the store stays usable.
        """
        with self._lock:
            self.load_error = None
            plan = None

            try:
                raw = self.storage.get_item(self.storage_key)
                if raw:
                    plan = StudyPlan.model_validate_json(raw)
                    logger.info("Study plan loaded from storage: %d goals, %d subjects",
                                len(plan.goals), len(plan.subjects))
            except (StorageError, OSError, ValueError) as e:
                logger.error("Error loading study plan from storage: %s", e)
                self.load_error = LOAD_ERROR_MESSAGE

            if plan is None:
                plan = default_plan(self.user_id, to_iso(self._clock()))
                self._plan = plan
                self._version = 0
                if self._persist():
                    logger.info("No study plan found in storage, created a default one.")
            else:
                self._plan = plan
                self._version = 0

            return plan.model_copy(deep=True)

    def _ensure_loaded(self) -> StudyPlan:
        if self._plan is None:
            self.load()
        return self._plan

    def _persist(self) -> bool:
        """Write the full plan to storage. Returns False and sets save_error on failure."""
        try:
            self.storage.set_item(self.storage_key, self._plan.to_json())
        except (StorageError, OSError) as e:
            logger.error("Error saving study plan to storage: %s", e)
            self.save_error = SAVE_ERROR_MESSAGE
            return False

        self.save_error = None
        logger.debug("Study plan saved to storage.")
        return True

    def _next_timestamp(self, previous: str) -> str:
        """Current time, never earlier than the previous lastUpdated."""
        now = as_utc(self._clock())
        previous_dt = parse_iso(previous)
        if previous_dt is not None and previous_dt > now:
            now = previous_dt
        return to_iso(now)

    def _mutate(self, action: str, change: Callable[[StudyPlan], bool]) -> StudyPlan:
        """
        Apply `change` to a copy of the latest plan and commit it.

        `change` returns False when there is nothing to do; the plan, its
        timestamp, and storage are then left untouched.
        """
        with self._lock:
            current = self._ensure_loaded()
            updated = current.model_copy(deep=True)

            if not change(updated):
                logger.debug("%s: nothing to change", action)
                return current.model_copy(deep=True)

            updated.last_updated = self._next_timestamp(current.last_updated)
            self._plan = updated
            self._version += 1

            # In-memory state keeps the mutation even if the write fails;
            # the next successful mutation rewrites the full plan.
            self._persist()
            logger.info("%s (version %d)", action, self._version)
            return updated.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def plan(self) -> StudyPlan:
        """Copy of the current plan."""
        with self._lock:
            return self._ensure_loaded().model_copy(deep=True)

    @property
    def goals(self) -> list[Goal]:
        return self.plan.goals

    @property
    def subjects(self) -> list[str]:
        return self.plan.subjects

    @property
    def incomplete_goals(self) -> list[Goal]:
        return [goal for goal in self.goals if not goal.completed]

    @property
    def completed_goals(self) -> list[Goal]:
        return [goal for goal in self.goals if goal.completed]

    @property
    def completion_ratio(self) -> float:
        """Fraction of goals completed, 0 when there are no goals."""
        goals = self.goals
        if not goals:
            return 0.0
        return sum(1 for goal in goals if goal.completed) / len(goals)

    def progress(self) -> dict:
        """
        Summary of goal progress.

        Returns:
            dict with completed, incomplete, total, ratio (0-1) and percent (0-100)
        """
        goals = self.goals
        completed = sum(1 for goal in goals if goal.completed)
        ratio = completed / len(goals) if goals else 0.0
        return {
            "completed": completed,
            "incomplete": len(goals) - completed,
            "total": len(goals),
            "ratio": ratio,
            "percent": ratio * 100,
        }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_goal(
        self, description: Optional[str], target_date: DateInput = None
    ) -> tuple[StudyPlan, Optional[Goal]]:
        """
        Append a new incomplete goal and return it with the updated plan.

        The goal is None when the description is blank.
        """
        if not description or not description.strip():
            return self.plan, None

        created: list[Goal] = []

        def change(plan: StudyPlan) -> bool:
            goal_id = self._id_factory()
            if plan.goal_by_id(goal_id) is not None:
                raise ValueError(f"Goal id already in use: {goal_id}")
            goal = Goal(
                id=goal_id,
                description=description.strip(),
                target_date=parse_date_input(target_date),
                completed=False,
            )
            plan.goals.append(goal)
            created.append(goal.model_copy())
            return True

        plan = self._mutate("Goal added", change)
        return plan, created[0]

    def add_goal(self, description: Optional[str], target_date: DateInput = None) -> StudyPlan:
        """Append a new incomplete goal. Blank descriptions are ignored."""
        return self.create_goal(description, target_date)[0]

    def toggle_goal(self, goal_id: str) -> StudyPlan:
        """Flip the completed flag of a goal. Unknown IDs are ignored."""
        def change(plan: StudyPlan) -> bool:
            goal = plan.goal_by_id(goal_id)
            if goal is None:
                return False
            goal.completed = not goal.completed
            return True

        return self._mutate("Goal completion toggled", change)

    def pop_goal(self, goal_id: str) -> tuple[StudyPlan, Optional[Goal]]:
        """Remove a goal and return it with the updated plan (None if it was not there)."""
        removed: list[Goal] = []

        def change(plan: StudyPlan) -> bool:
            goal = plan.goal_by_id(goal_id)
            if goal is None:
                return False
            plan.goals = [g for g in plan.goals if g.id != goal_id]
            removed.append(goal)
            return True

        plan = self._mutate("Goal deleted", change)
        return plan, removed[0] if removed else None

    def delete_goal(self, goal_id: str) -> StudyPlan:
        """Remove a goal. Unknown IDs are ignored."""
        return self.pop_goal(goal_id)[0]

    def add_subject(self, name: Optional[str]) -> StudyPlan:
        """Add a subject (trimmed). Re-adding an existing subject keeps one entry."""
        if not name or not name.strip():
            return self.plan

        def change(plan: StudyPlan) -> bool:
            plan.subjects = list(dict.fromkeys([*plan.subjects, name.strip()]))
            return True

        return self._mutate("Subject added", change)

    def discard_subject(self, subject: str) -> tuple[StudyPlan, bool]:
        """Remove an exact subject match. Returns the updated plan and whether it was present."""
        found: list[bool] = []

        def change(plan: StudyPlan) -> bool:
            if subject not in plan.subjects:
                return False
            plan.subjects = [s for s in plan.subjects if s != subject]
            found.append(True)
            return True

        plan = self._mutate("Subject deleted", change)
        return plan, bool(found)

    def delete_subject(self, subject: str) -> StudyPlan:
        """Remove an exact subject match. Missing subjects are ignored."""
        return self.discard_subject(subject)[0]
