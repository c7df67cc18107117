import random

import pytest

from mockrobot.models import COMPLETE, READY, RobotError, State
from mockrobot.resolver import draw, expected_success_rate, resolve_outcome, simulate
from mockrobot.robot import Robot


def test_idle_always_resolves_ready() -> None:
    for random_number in [0, 1, 2, 3, 4, 7, 2**32 - 1]:
        assert resolve_outcome("idle", random_number) == READY


@pytest.mark.parametrize(
    ("action", "modulus", "error"),
    [
        ("picking", 5, RobotError.PICK_FAULT),
        ("placing", 3, RobotError.PLACE_FAULT),
        ("going_home", 2, RobotError.UNKNOWN_FAULT),
    ],
)
def test_action_outcomes_follow_modulus(action, modulus, error) -> None:
    assert resolve_outcome(action, 0) == COMPLETE
    assert resolve_outcome(action, modulus * 17) == COMPLETE
    assert resolve_outcome(action, 1) == State.faulted(error)
    assert resolve_outcome(action, modulus * 17 + 1) == State.faulted(error)


def test_home_failure_is_reported_as_unknown_fault() -> None:
    assert resolve_outcome("going_home", 3).error is RobotError.UNKNOWN_FAULT


def test_unknown_action_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_outcome("dancing", 0)
    with pytest.raises(ValueError):
        expected_success_rate("dancing")


def test_draw_is_unsigned_32_bit() -> None:
    rng = random.Random(5)
    values = [draw(rng) for _ in range(1000)]

    assert all(0 <= value < 2**32 for value in values)


def test_outcome_sets_are_action_conditioned() -> None:
    rng = random.Random(99)
    allowed = {
        "idle": {READY},
        "picking": {COMPLETE, State.faulted(RobotError.PICK_FAULT)},
        "placing": {COMPLETE, State.faulted(RobotError.PLACE_FAULT)},
        "going_home": {COMPLETE, State.faulted(RobotError.UNKNOWN_FAULT)},
    }
    for action, states in allowed.items():
        seen = {resolve_outcome(action, draw(rng)) for _ in range(500)}
        assert seen <= states


@pytest.mark.parametrize(
    ("action", "expected"),
    [("picking", 1 / 5), ("placing", 1 / 3), ("going_home", 1 / 2)],
)
def test_success_rate_converges_to_policy(action, expected) -> None:
    rng = random.Random(2024)
    n = 10_000
    successes = sum(
        1 for _ in range(n) if resolve_outcome(action, draw(rng)) == COMPLETE
    )

    assert abs(successes / n - expected) < 0.03
    assert expected_success_rate(action) == pytest.approx(expected)


def test_simulate_only_touches_state(scripted_rng) -> None:
    rng = scripted_rng([4])
    robot = Robot(rng=rng)
    robot.action = "picking"
    robot_id = robot.id

    state = simulate(robot, rng)

    assert state == State.faulted(RobotError.PICK_FAULT)
    assert robot.state == state
    assert robot.action == "picking"
    assert robot.location == (0, 0, 0)
    assert robot.id == robot_id
    assert rng.calls == 1


def test_simulate_idle_consumes_one_draw_and_stays_ready(scripted_rng) -> None:
    rng = scripted_rng([1])
    robot = Robot(rng=rng)

    assert simulate(robot, rng) == READY
    assert rng.calls == 1
