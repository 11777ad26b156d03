import dataclasses as _dc
import logging
import subprocess as _sp
import typing as _ty

from .errors import CommandFailure, MissingRule, TargetNotProduced
from .mkfile import MkFile
from .state import UpdateState
from .target import (
    ConcreteTarget,
    Deep,
    Shallow,
    Target,
    Virtual,
    format_target,
    is_concrete,
)

__all__ = ["Make", "make", "run_shell"]

_logger = logging.getLogger(__name__)


def run_shell(command: str) -> int:
    """Run `command` with /bin/sh and return its exit status."""
    return _sp.run(command, shell=True).returncode


@_dc.dataclass
class Make:
    mkfile: MkFile
    state: UpdateState
    dry_run: bool = False
    run_command: _ty.Callable[[str], int] = run_shell

    def _record(self, target: ConcreteTarget) -> None:
        if not self.dry_run:
            self.state.record_state(target)

    def _make_leaf(self, target: Target) -> bool:
        match target:
            case Virtual():
                raise MissingRule(target)
            case Shallow() | Deep():
                if self.state.is_up_to_date(target):
                    return False
                self._record(target)
                return True

    def _execute(self, target: Target) -> None:
        for command in self.mkfile.commands(target):
            if self.dry_run:
                print(command)
                continue
            _logger.info("Executing command `%s`", command)
            returncode = self.run_command(command)
            if returncode != 0:
                raise CommandFailure(target, command, returncode)

    def make(self, target: Target) -> bool:
        """Bring `target` up to date and report whether it was (re)built."""
        _logger.info("Making target `%s`", format_target(target))

        if not self.mkfile.has_target(target):
            return self._make_leaf(target)

        # 依存関係を先に実行
        dependencies = self.mkfile.dependencies(target)
        changed = [self.make(dep) for dep in dependencies]

        match target:
            case Virtual():
                needs_making = any(changed) or not dependencies
            case Shallow(path) | Deep(path):
                needs_making = any(changed) or not path.exists()

        if needs_making:
            self._execute(target)
            if is_concrete(target):
                if not self.dry_run and not target.path.exists():
                    raise TargetNotProduced(target)
                self._record(target)
        else:
            _logger.debug("Target `%s` is up to date", format_target(target))
            if is_concrete(target):
                self._record(target)

        return needs_making


def make(mkfile: MkFile, target: Target, state: UpdateState, **kwargs) -> bool:
    return Make(mkfile, state, **kwargs).make(target)
