from __future__ import annotations

import random

from mockrobot.models import (
    COMMAND_ACTIONS,
    ORIGIN,
    Command,
    Location,
    RobotFault,
    State,
    TrialPlan,
    TrialReport,
)
from mockrobot.resolver import expected_success_rate
from mockrobot.robot import Robot


class TrialCollector:
    def __init__(self, command: Command) -> None:
        if command not in COMMAND_ACTIONS:
            raise ValueError(f"Unknown command {command!r}")
        self.command = command
        self.successes = 0
        self.failures = 0
        self._faults: dict[str, int] = {}
        self._states: dict[str, int] = {}

    def add_success(self, state: State) -> None:
        self.successes += 1
        self._states[state.kind] = self._states.get(state.kind, 0) + 1

    def add_failure(self, fault: RobotFault, state: State) -> None:
        self.failures += 1
        key = fault.error.name
        self._faults[key] = self._faults.get(key, 0) + 1
        self._states[state.kind] = self._states.get(state.kind, 0) + 1

    def finalize(self, seed: int | None) -> TrialReport:
        trials = self.successes + self.failures
        action = COMMAND_ACTIONS[self.command]
        return TrialReport(
            command=self.command,
            action=action,
            seed=seed,
            trials=trials,
            successes=self.successes,
            failures=self.failures,
            success_rate=round(self.successes / max(1, trials), 4),
            expected_success_rate=round(expected_success_rate(action), 4),
            fault_counts=dict(sorted(self._faults.items())),
            state_counts=dict(sorted(self._states.items())),
        )


def run_command(robot: Robot, command: Command, location: Location = ORIGIN) -> None:
    if command == "home":
        robot.home()
    elif command == "pick":
        robot.pick(location)
    elif command == "place":
        robot.place(location)
    else:
        raise ValueError(f"Unknown command {command!r}")


def run_trials(
    command: Command,
    trials: int,
    seed: int | None = None,
    location: Location = ORIGIN,
) -> TrialReport:
    """Issue ``command`` once on each of ``trials`` fresh robots and tally outcomes.

    All robots share one ``random.Random(seed)`` so a seeded run is
    reproducible end to end.
    """
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")
    collector = TrialCollector(command)
    rng = random.Random(seed)

    for _ in range(trials):
        robot = Robot(rng=rng)
        try:
            run_command(robot, command, location)
        except RobotFault as fault:
            collector.add_failure(fault, robot.state)
        else:
            collector.add_success(robot.state)

    return collector.finalize(seed)


def run_plan(plan: TrialPlan, seed: int | None = None) -> list[TrialReport]:
    run_seed = plan.seed if seed is None else seed
    reports: list[TrialReport] = []
    for index, spec in enumerate(plan.commands):
        trials = spec.trials if spec.trials is not None else plan.trials
        # Offset per entry so repeated commands in one plan draw independent streams.
        reports.append(
            run_trials(
                command=spec.command,
                trials=trials,
                seed=run_seed + index,
                location=spec.location,
            )
        )
    return reports
