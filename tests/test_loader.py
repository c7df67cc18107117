import json
from pathlib import Path

import pytest

from mockrobot.loader import load_plan, plan_from_data


def test_load_plan_reads_commands_and_defaults(tmp_path: Path) -> None:
    path = tmp_path / "plan.json"
    path.write_text(
        json.dumps(
            {
                "name": "cycle",
                "seed": 9,
                "commands": [
                    {"command": "home"},
                    {"command": "pick", "location": [4, -5, 6], "trials": 25},
                ],
            }
        ),
        encoding="utf-8",
    )

    plan = load_plan(path)

    assert plan.name == "cycle"
    assert plan.seed == 9
    assert plan.trials == 1000
    assert plan.commands[0].command == "home"
    assert plan.commands[0].location == (0, 0, 0)
    assert plan.commands[0].trials is None
    assert plan.commands[1].location == (4, -5, 6)
    assert plan.commands[1].trials == 25


def test_plan_rejects_unknown_command() -> None:
    with pytest.raises(ValueError):
        plan_from_data({"name": "bad", "commands": [{"command": "dance"}]})


def test_shipped_plans_load() -> None:
    plan_dir = Path(__file__).resolve().parents[1] / "configs" / "trials"
    paths = sorted(plan_dir.glob("*.json"))

    assert paths
    for path in paths:
        plan = load_plan(path)
        assert plan.commands
