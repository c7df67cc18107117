"""Mock robot arm actuator with probabilistic command outcomes."""

from mockrobot.fleet import Fleet
from mockrobot.models import RobotError, RobotFault, State
from mockrobot.robot import Robot
from mockrobot.trials import run_trials

__all__ = ["Fleet", "Robot", "RobotError", "RobotFault", "State", "run_trials"]
