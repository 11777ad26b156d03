import dataclasses as _dc
import typing as _ty
from argparse import ArgumentParser
from pathlib import Path

import yaml as _yaml

__all__ = [
    "Settings",
    "obj_to_settings",
    "emit_yaml_example",
    "make_from_arguments",
]

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@_dc.dataclass
class Settings:
    mkfile: Path = Path("mkfile")
    state: Path = Path(".mkstate.yaml")
    target: str = "all"
    dry_run: bool = False
    log_level: str = "INFO"


def _run_time_error(
    filepath: _ty.Optional[Path], msg: str, data, key: _ty.Optional[str]
) -> RuntimeError:
    filename = str(filepath.name) if filepath else "<unknown>"
    if key is not None:
        line = f"{filename}:{key}: {msg}"
    else:
        line = f"{filename}: {msg}"

    actual = repr(data)
    if len(actual) > 80:
        line2 = f"actual: {actual[:77]}..."
    else:
        line2 = f"actual: {actual}"

    return RuntimeError(f"{line}\n{line2}")


def _convert(cls: type, value, key: str, filepath: _ty.Optional[Path]):
    if cls is bool:
        if not isinstance(value, bool):
            raise _run_time_error(filepath, "expected to be bool", value, key)
        return value

    if not isinstance(value, (str, Path)):
        raise _run_time_error(filepath, f"expected to be {cls.__name__}", value, key)

    if key == "log_level":
        if str(value).upper() not in _LOG_LEVELS:
            raise _run_time_error(
                filepath, f"expected to be one of {_LOG_LEVELS}", value, key
            )
        return str(value).upper()
    return cls(value)


def obj_to_settings(
    data, filepath: _ty.Optional[Path] = None, base: _ty.Optional[Settings] = None
) -> Settings:
    """Overlay a YAML mapping onto `base` (defaults when omitted)."""
    settings = base if base is not None else Settings()
    if data is None:
        return settings
    if not isinstance(data, dict):
        raise _run_time_error(filepath, "expected to be dict", data, None)

    field_types = {f.name: f.type for f in _dc.fields(Settings)}
    changes = {}
    for k, v in data.items():
        if k not in field_types:
            raise _run_time_error(filepath, "unknown setting", data, str(k))
        changes[k] = _convert(field_types[k], v, k, filepath)
    return _dc.replace(settings, **changes)


def emit_yaml_example(filepath: Path) -> None:
    obj = {
        k: str(v) if isinstance(v, Path) else v
        for k, v in _dc.asdict(Settings()).items()
    }
    with open(filepath, "w") as f:
        _yaml.safe_dump(obj, f, default_flow_style=False, sort_keys=False)


def _parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="mkinc", description="Rebuild the stale targets of an mkfile."
    )
    parser.add_argument("target", nargs="?", help="target to make (default: all)")
    parser.add_argument("-m", "--mkfile", type=Path, help="rule file to read")
    parser.add_argument("-s", "--state", type=Path, help="update state file")
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        default=None,
        help="print the commands that would run without running them",
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=_LOG_LEVELS, help="logging level"
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--emit_example", type=Path, help="emit configuration example")
    return parser


def make_from_arguments(argv: _ty.Optional[list[str]] = None) -> Settings:
    args = _parser().parse_args(argv)

    if args.emit_example is not None:
        emit_yaml_example(args.emit_example)
        raise SystemExit(0)

    settings = Settings()
    if args.config is not None:
        with open(args.config) as f:
            data = _yaml.safe_load(f)
        settings = obj_to_settings(data, filepath=args.config, base=settings)

    # コマンドラインで指定された値を優先
    overrides = {
        f.name: getattr(args, f.name)
        for f in _dc.fields(Settings)
        if getattr(args, f.name) is not None
    }
    return _dc.replace(settings, **overrides)
