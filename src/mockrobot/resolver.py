from __future__ import annotations

from typing import TYPE_CHECKING

from mockrobot.models import COMPLETE, READY, Action, RobotError, State

if TYPE_CHECKING:
    from mockrobot.robot import Robot

DRAW_BITS = 32

# action -> (success modulus, fault raised on a miss)
FAILURE_POLICY: dict[str, tuple[int, RobotError]] = {
    "picking": (5, RobotError.PICK_FAULT),
    "placing": (3, RobotError.PLACE_FAULT),
    "going_home": (2, RobotError.UNKNOWN_FAULT),
}


def draw(rng) -> int:
    """Take one unsigned 32-bit sample from ``rng``."""
    return rng.getrandbits(DRAW_BITS)


def resolve_outcome(action: Action, random_number: int) -> State:
    """Map an action and a single draw to the resulting state.

    Idle always resolves to ready. Every other action completes when the
    draw is divisible by its modulus and faults otherwise.
    """
    if action == "idle":
        return READY
    policy = FAILURE_POLICY.get(action)
    if policy is None:
        raise ValueError(f"Unknown action {action!r}")
    modulus, error = policy
    if random_number % modulus == 0:
        return COMPLETE
    return State.faulted(error)


def expected_success_rate(action: Action) -> float:
    if action == "idle":
        return 1.0
    policy = FAILURE_POLICY.get(action)
    if policy is None:
        raise ValueError(f"Unknown action {action!r}")
    return 1.0 / policy[0]


def simulate(robot: "Robot", rng) -> State:
    """Resolve the robot's current action with one draw and store the new state."""
    robot.state = resolve_outcome(robot.action, draw(rng))
    return robot.state
