"""Tests for studyai.cli.planner."""
import json
from pathlib import Path

import pytest

from studyai.cli import planner
from studyai.tools.storage import JsonFileStore


def run(storage: Path, *args: str) -> None:
    planner.main(["--storage", str(storage), *args])


def stored_plan(storage: Path) -> dict:
    return json.loads(JsonFileStore(storage).get_item("studyPlan_localUser123"))


def test_show_creates_default_plan(tmp_path: Path) -> None:
    storage = tmp_path / "local_storage.json"
    run(storage, "show")
    plan = stored_plan(storage)
    assert plan["userId"] == "localUser123"
    assert plan["goals"] == [] and plan["subjects"] == []


def test_goal_commands(tmp_path: Path) -> None:
    storage = tmp_path / "local_storage.json"
    run(storage, "add-goal", "Master React Hooks", "--target-date", "2025-06-01")
    goal = stored_plan(storage)["goals"][0]
    assert goal["targetDate"] == "2025-06-01T00:00:00.000Z"

    run(storage, "toggle-goal", goal["id"])
    assert stored_plan(storage)["goals"][0]["completed"] is True

    run(storage, "delete-goal", goal["id"])
    assert stored_plan(storage)["goals"] == []


def test_subject_commands(tmp_path: Path) -> None:
    storage = tmp_path / "local_storage.json"
    run(storage, "add-subject", "Biology")
    run(storage, "add-subject", "Biology")
    assert stored_plan(storage)["subjects"] == ["Biology"]

    run(storage, "delete-subject", "Biology")
    assert stored_plan(storage)["subjects"] == []


def test_unknown_goal_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        run(tmp_path / "s.json", "toggle-goal", "missing")
    assert exc.value.code == 1


def test_user_id_option(tmp_path: Path) -> None:
    storage = tmp_path / "s.json"
    planner.main(["--storage", str(storage), "--user-id", "alice", "add-subject", "Art"])
    assert json.loads(JsonFileStore(storage).get_item("studyPlan_alice"))["subjects"] == ["Art"]


def test_show_with_out_of_range_target_date(tmp_path: Path, new_york_tz) -> None:
    storage = tmp_path / "s.json"
    plan = {
        "userId": "localUser123",
        "goals": [{"id": "g1", "description": "Ancient", "targetDate": "0001-01-01T00:00:00.000Z", "completed": False}],
        "subjects": [],
        "lastUpdated": "2025-01-01T00:00:00.000Z",
    }
    JsonFileStore(storage).set_item("studyPlan_localUser123", json.dumps(plan))

    run(storage, "show")
    assert stored_plan(storage)["goals"][0]["id"] == "g1"
