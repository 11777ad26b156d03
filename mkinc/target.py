import dataclasses as _dc
import typing as _ty
from pathlib import Path

__all__ = [
    "Virtual",
    "Shallow",
    "Deep",
    "ConcreteTarget",
    "Target",
    "parse_target",
    "format_target",
    "is_concrete",
]


@_dc.dataclass(frozen=True)
class Virtual:
    """A target that only exists in the dependency graph."""

    name: str


@_dc.dataclass(frozen=True)
class Shallow:
    """A path whose own modification time decides staleness."""

    path: Path


@_dc.dataclass(frozen=True)
class Deep:
    """A path whose whole subtree decides staleness."""

    path: Path


ConcreteTarget = _ty.Union[Shallow, Deep]

Target = _ty.Union[Virtual, Shallow, Deep]


def parse_target(token: str) -> Target:
    if token.startswith("$"):
        return Virtual(token[1:])
    elif token.startswith("^"):
        return Deep(Path(token[1:]))
    else:
        return Shallow(Path(token))


def format_target(target: Target) -> str:
    match target:
        case Virtual(name):
            return f"${name}"
        case Deep(path):
            return f"^{path}"
        case Shallow(path):
            return str(path)
    raise TypeError(f"not a target: {target!r}")


def is_concrete(target: Target) -> bool:
    return isinstance(target, (Shallow, Deep))
