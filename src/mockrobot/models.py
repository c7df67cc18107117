from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

Location = tuple[int, int, int]
Action = Literal["idle", "picking", "placing", "going_home"]
StateKind = Literal["ready", "in_progress", "complete", "faulted", "disconnected"]
Command = Literal["home", "pick", "place"]

ORIGIN: Location = (0, 0, 0)

COMMAND_ACTIONS: dict[str, Action] = {
    "home": "going_home",
    "pick": "picking",
    "place": "placing",
}


class RobotError(Enum):
    """Fault kinds attached to a faulted state; values are the canonical messages."""

    PICK_FAULT = "Unable to pick"
    PLACE_FAULT = "Unable to place"
    UNKNOWN_FAULT = "Unknown error occurred"
    NOT_CONNECTED = "Robot is not connected"

    def __str__(self) -> str:
        return self.value


class RobotFault(Exception):
    """Raised by a robot command whose resolution ended in a fault."""

    def __init__(self, error: RobotError) -> None:
        super().__init__(error.value)
        self.error = error


@dataclass(frozen=True)
class State:
    kind: StateKind
    error: RobotError | None = None

    def __post_init__(self) -> None:
        if (self.kind == "faulted") != (self.error is not None):
            raise ValueError(
                f"State {self.kind!r} cannot carry error {self.error!r}"
            )

    @classmethod
    def faulted(cls, error: RobotError) -> "State":
        return cls(kind="faulted", error=error)

    def is_faulted(self) -> bool:
        return self.kind == "faulted"

    def __str__(self) -> str:
        if self.error is not None:
            return f"faulted({self.error.name})"
        return self.kind


READY = State("ready")
IN_PROGRESS = State("in_progress")
COMPLETE = State("complete")
DISCONNECTED = State("disconnected")


def as_location(value) -> Location:
    x, y, z = value
    return (int(x), int(y), int(z))


@dataclass(frozen=True)
class CommandSpec:
    command: Command
    location: Location = ORIGIN
    trials: int | None = None


@dataclass(frozen=True)
class TrialPlan:
    name: str
    seed: int
    commands: list[CommandSpec]
    trials: int = 1000


@dataclass
class TrialReport:
    command: Command
    action: Action
    seed: int | None
    trials: int
    successes: int
    failures: int
    success_rate: float
    expected_success_rate: float
    fault_counts: dict[str, int] = field(default_factory=dict)
    state_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "action": self.action,
            "seed": self.seed,
            "trials": self.trials,
            "successes": self.successes,
            "failures": self.failures,
            "success_rate": self.success_rate,
            "expected_success_rate": self.expected_success_rate,
            "fault_counts": self.fault_counts,
            "state_counts": self.state_counts,
        }
