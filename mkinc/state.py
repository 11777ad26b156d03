import dataclasses as _dc
import logging
import stat as _stat

from .errors import StateAccessFailure
from .target import ConcreteTarget, Deep, format_target

__all__ = ["UpdateState", "current_modification_time"]

_logger = logging.getLogger(__name__)


def _modification_time(target: ConcreteTarget) -> int:
    status = target.path.stat()
    latest = status.st_mtime_ns
    if isinstance(target, Deep) and _stat.S_ISDIR(status.st_mode):
        for child in target.path.iterdir():
            latest = max(latest, _modification_time(Deep(child)))
    return latest


def current_modification_time(target: ConcreteTarget) -> int:
    """Modification time of `target` in nanoseconds.

    A `Deep` directory reports the latest time found anywhere below it; the
    subtree is walked again on every call.
    """
    try:
        return _modification_time(target)
    except OSError as e:
        raise StateAccessFailure(target, e.strerror or str(e)) from e


@_dc.dataclass
class UpdateState:
    """Last recorded modification time of every concrete target built so far."""

    last_update: dict[ConcreteTarget, int] = _dc.field(default_factory=dict)

    def is_up_to_date(self, target: ConcreteTarget) -> bool:
        if target not in self.last_update:
            return False
        current = current_modification_time(target)
        _logger.debug(
            "%s: current %d, recorded %d",
            format_target(target),
            current,
            self.last_update[target],
        )
        return current <= self.last_update[target]

    def record_state(self, target: ConcreteTarget) -> None:
        self.last_update[target] = current_modification_time(target)
