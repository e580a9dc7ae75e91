"""Study plan model: goals and subjects for a single user."""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional


class Goal(BaseModel):
    """A study objective with an optional target date."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str
    target_date: Optional[str] = Field(default=None, alias="targetDate")  # ISO string, UTC
    completed: bool = False

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Ensure description is not blank."""
        if not v.strip():
            raise ValueError('description must not be empty')
        return v


class StudyPlan(BaseModel):
    """Complete per-user record of goals and subjects."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    goals: list[Goal] = Field(default_factory=list)  # insertion order
    subjects: list[str] = Field(default_factory=list)
    last_updated: str = Field(alias="lastUpdated")  # ISO timestamp

    @field_validator('goals', 'subjects', mode='before')
    @classmethod
    def null_to_empty(cls, v):
        """Treat a stored null list as empty."""
        return [] if v is None else v

    @field_validator('subjects')
    @classmethod
    def dedupe_subjects(cls, v: list[str]) -> list[str]:
        """Remove duplicate subjects, keeping first-seen order."""
        return list(dict.fromkeys(v))

    @model_validator(mode='after')
    def validate_unique_goal_ids(self) -> "StudyPlan":
        """Ensure no two goals share an id."""
        ids = [goal.id for goal in self.goals]
        if len(ids) != len(set(ids)):
            raise ValueError('goal ids must be unique')
        return self

    def goal_by_id(self, goal_id: str) -> Optional[Goal]:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        return None

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize with the camelCase field names used in storage."""
        return self.model_dump_json(by_alias=True, indent=indent)
