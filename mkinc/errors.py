from .target import ConcreteTarget, Target, Virtual, format_target

__all__ = [
    "MakeError",
    "MissingRule",
    "CommandFailure",
    "TargetNotProduced",
    "StateAccessFailure",
]


class MakeError(RuntimeError):
    """Base class of every failure that aborts a build."""


class MissingRule(MakeError):
    def __init__(self, target: Virtual):
        self.target = target
        super().__init__(f"No rule to make target `{format_target(target)}`")


class CommandFailure(MakeError):
    def __init__(self, target: Target, command: str, returncode: int):
        self.target = target
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Command `{command}` for target `{format_target(target)}` "
            f"exited with status {returncode}"
        )


class TargetNotProduced(MakeError):
    def __init__(self, target: ConcreteTarget):
        self.target = target
        super().__init__(f"Target `{format_target(target)}` was not created")


class StateAccessFailure(MakeError):
    def __init__(self, target: ConcreteTarget, reason: str):
        self.target = target
        super().__init__(
            f"Cannot read modification time of `{format_target(target)}`: {reason}"
        )
