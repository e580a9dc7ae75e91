"""Study buddy agent: ADK entrypoint; answers questions and manages the study plan."""
from google.adk.agents.llm_agent import Agent

from studyai.agents.tools import (
    add_goal,
    add_subject,
    delete_goal,
    delete_subject,
    get_progress,
    list_goals,
    make_flashcards,
    make_quiz,
    toggle_goal,
)
from studyai.config import get_settings

root_agent = Agent(
    model=get_settings().model,
    name="study_buddy",
    description="A friendly study buddy that answers questions and keeps track of study goals.",
    instruction=(
        "Answer the student's study questions clearly and concisely. "
        "Use list_goals, add_goal, toggle_goal, delete_goal, add_subject, delete_subject "
        "and get_progress to manage their study plan, and make_flashcards or make_quiz "
        "when they want practice material."
    ),
    tools=[
        list_goals,
        add_goal,
        toggle_goal,
        delete_goal,
        add_subject,
        delete_subject,
        get_progress,
        make_flashcards,
        make_quiz,
    ],
)
