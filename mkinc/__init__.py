from .errors import (
    CommandFailure,
    MakeError,
    MissingRule,
    StateAccessFailure,
    TargetNotProduced,
)
from .make import Make, make
from .mkfile import MkFile, Rule, parse_mkfile
from .state import UpdateState, current_modification_time
from .target import ConcreteTarget, Deep, Shallow, Target, Virtual, parse_target

__all__ = [
    "CommandFailure",
    "ConcreteTarget",
    "Deep",
    "Make",
    "MakeError",
    "MissingRule",
    "MkFile",
    "Rule",
    "Shallow",
    "StateAccessFailure",
    "Target",
    "TargetNotProduced",
    "UpdateState",
    "Virtual",
    "current_modification_time",
    "make",
    "parse_mkfile",
    "parse_target",
]
