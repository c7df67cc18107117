from __future__ import annotations

import logging
import random
import threading

from mockrobot.models import Location
from mockrobot.robot import Robot

logger = logging.getLogger(__name__)


class Fleet:
    """Registry of connected robots with one lock per robot."""

    def __init__(self, seed: int | None = None) -> None:
        self._seeder = random.Random(seed) if seed is not None else None
        self._robots: dict[str, Robot] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def connect(self) -> Robot:
        if self._seeder is not None:
            robot = Robot(rng=random.Random(self._seeder.getrandbits(64)))
        else:
            robot = Robot()
        with self._registry_lock:
            self._robots[robot.id] = robot
            self._locks[robot.id] = threading.Lock()
        logger.info("Robot %s connected", robot.id)
        return robot

    def get(self, robot_id: str) -> Robot:
        with self._registry_lock:
            robot = self._robots.get(robot_id)
        if robot is None:
            raise KeyError(f"Robot {robot_id} is not registered")
        return robot

    def robot_ids(self) -> list[str]:
        with self._registry_lock:
            return sorted(self._robots)

    def home(self, robot_id: str) -> None:
        robot, lock = self._lookup(robot_id)
        with lock:
            robot.home()

    def pick(self, robot_id: str, location: Location) -> None:
        robot, lock = self._lookup(robot_id)
        with lock:
            robot.pick(location)

    def place(self, robot_id: str, location: Location) -> None:
        robot, lock = self._lookup(robot_id)
        with lock:
            robot.place(location)

    def disconnect(self, robot_id: str) -> None:
        robot, lock = self._lookup(robot_id)
        with lock:
            robot.disconnect()
        with self._registry_lock:
            self._robots.pop(robot_id, None)
            self._locks.pop(robot_id, None)
        logger.info("Robot %s removed from fleet", robot_id)

    def _lookup(self, robot_id: str) -> tuple[Robot, threading.Lock]:
        with self._registry_lock:
            robot = self._robots.get(robot_id)
            lock = self._locks.get(robot_id)
        if robot is None or lock is None:
            raise KeyError(f"Robot {robot_id} is not registered")
        return robot, lock

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._robots)

    def __contains__(self, robot_id: object) -> bool:
        with self._registry_lock:
            return robot_id in self._robots
