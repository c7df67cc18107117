from __future__ import annotations

import logging
import random
import uuid

from mockrobot.models import (
    DISCONNECTED,
    ORIGIN,
    READY,
    Action,
    Location,
    RobotError,
    RobotFault,
    State,
    as_location,
)
from mockrobot.resolver import simulate

logger = logging.getLogger(__name__)


class Robot:
    """In-memory stand-in for a robot arm.

    Commands resolve immediately through the outcome resolver and mutate the
    robot in place. A faulted resolution raises ``RobotFault``; any other
    resulting state counts as success. Instances are not thread-safe; use
    ``Fleet`` when several threads share a robot.
    """

    def __init__(self, rng=None) -> None:
        self._id = str(uuid.uuid4())
        self.state: State = READY
        self.location: Location = ORIGIN
        self.action: Action = "idle"
        self.rng = rng if rng is not None else random.Random()

    @property
    def id(self) -> str:
        return self._id

    @property
    def connected(self) -> bool:
        return self.state != DISCONNECTED

    def home(self) -> None:
        self._command("going_home")

    def pick(self, location: Location) -> None:
        # location is accepted for API parity; outcomes ignore it.
        as_location(location)
        self._command("picking")

    def place(self, location: Location) -> None:
        as_location(location)
        self._command("placing")

    def disconnect(self) -> None:
        self._require_connected()
        self.action = "idle"
        self.state = DISCONNECTED
        logger.info("Robot %s disconnected", self._id)

    def _require_connected(self) -> None:
        if not self.connected:
            raise RobotFault(RobotError.NOT_CONNECTED)

    def _command(self, action: Action) -> None:
        self._require_connected()
        self.action = action
        state = simulate(self, self.rng)
        logger.debug("Robot %s resolved %s -> %s", self._id, action, state)
        if state.error is not None:
            logger.info("Robot %s fault during %s: %s", self._id, action, state.error)
            raise RobotFault(state.error)

    def __repr__(self) -> str:
        return (
            f"Robot(id={self._id!r}, state={self.state}, "
            f"action={self.action!r}, location={self.location})"
        )
