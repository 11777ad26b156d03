import logging
from pathlib import Path

import yaml as _yaml

from .state import UpdateState
from .target import ConcreteTarget, Deep, Shallow

__all__ = ["load_state", "save_state", "state_to_obj", "obj_to_state"]

_logger = logging.getLogger(__name__)

_FORMAT_VERSION = 1

_KINDS: dict[str, type] = {"shallow": Shallow, "deep": Deep}


def _kind(target: ConcreteTarget) -> str:
    return "deep" if isinstance(target, Deep) else "shallow"


def state_to_obj(state: UpdateState) -> dict:
    records = [
        {"kind": _kind(target), "path": str(target.path), "mtime_ns": mtime}
        for target, mtime in state.last_update.items()
    ]
    records.sort(key=lambda r: (r["path"], r["kind"]))
    return {"version": _FORMAT_VERSION, "targets": records}


def obj_to_state(data) -> UpdateState:
    if not isinstance(data, dict) or data.get("version") != _FORMAT_VERSION:
        raise ValueError(f"unsupported state document: {data!r:.80}")

    state = UpdateState()
    for record in data.get("targets") or []:
        kind = _KINDS[record["kind"]]
        mtime = record["mtime_ns"]
        if isinstance(mtime, bool) or not isinstance(mtime, int):
            raise ValueError(f"mtime_ns should be an integer: {mtime!r}")
        state.last_update[kind(Path(record["path"]))] = mtime
    return state


def load_state(filepath: Path) -> UpdateState:
    """Read the state written by a previous run.

    A missing, unreadable or malformed file yields an empty state.
    """
    try:
        with open(filepath) as f:
            data = _yaml.safe_load(f)
        return obj_to_state(data)
    except FileNotFoundError:
        _logger.debug("No state file at %s, starting from scratch", filepath)
    except (OSError, _yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        _logger.warning("Ignoring unreadable state file %s: %s", filepath, e)
    return UpdateState()


def save_state(state: UpdateState, filepath: Path) -> None:
    with open(filepath, "w") as f:
        _yaml.safe_dump(
            state_to_obj(state), f, default_flow_style=False, sort_keys=False
        )
