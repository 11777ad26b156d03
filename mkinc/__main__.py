import logging
import sys
import typing as _ty

from .arguments import make_from_arguments
from .errors import MakeError
from .make import Make
from .mkfile import MkFile
from .statefile import load_state, save_state
from .target import Target, Virtual, format_target, parse_target

_logger = logging.getLogger("mkinc")


def resolve_target(mkfile: MkFile, name: str) -> Target:
    """Interpret a requested name, falling back to a virtual target."""
    target = parse_target(name)
    if not mkfile.has_target(target):
        target = Virtual(name)
    return target


def main(argv: _ty.Optional[list[str]] = None) -> int:
    settings = make_from_arguments(argv)
    logging.basicConfig(
        level=settings.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        mkfile = MkFile.from_path(settings.mkfile)
    except OSError as e:
        _logger.error("Failed to read mkfile %s: %s", settings.mkfile, e)
        return 1

    state = load_state(settings.state)
    target = resolve_target(mkfile, settings.target)

    try:
        made = Make(mkfile, state, dry_run=settings.dry_run).make(target)
    except (MakeError, RecursionError) as e:
        _logger.error("Failed to make target `%s`: %s", format_target(target), e)
        return 1
    finally:
        if not settings.dry_run:
            save_state(state, settings.state)

    if made:
        _logger.info("Made target `%s`", format_target(target))
    else:
        _logger.info("Target `%s` is up to date", format_target(target))
    return 0


if __name__ == "__main__":
    sys.exit(main())
