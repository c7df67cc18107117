from __future__ import annotations

import json
from pathlib import Path

from mockrobot.models import COMMAND_ACTIONS, ORIGIN, CommandSpec, TrialPlan, as_location


def load_plan(path: str | Path) -> TrialPlan:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    return plan_from_data(data)


def plan_from_data(data: dict) -> TrialPlan:
    commands = []
    for entry in data["commands"]:
        command = entry["command"]
        if command not in COMMAND_ACTIONS:
            raise ValueError(f"Unknown command {command!r} in plan {data.get('name')!r}")
        trials = entry.get("trials")
        commands.append(
            CommandSpec(
                command=command,
                location=as_location(entry.get("location", ORIGIN)),
                trials=int(trials) if trials is not None else None,
            )
        )

    return TrialPlan(
        name=data["name"],
        seed=int(data.get("seed", 0)),
        commands=commands,
        trials=int(data.get("trials", 1000)),
    )
