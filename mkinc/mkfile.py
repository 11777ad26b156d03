import dataclasses as _dc
import re
from pathlib import Path

from .target import Target, parse_target

__all__ = ["Rule", "MkFile", "parse_mkfile"]

# `target : dep dep ...`; the token is greedy, so `a:b: c` declares `a:b`
_HEADER = re.compile(r"^(\S+)\s*:(.*)$")


@_dc.dataclass
class Rule:
    dependencies: list[Target]
    commands: list[str]


@_dc.dataclass
class MkFile:
    rules: dict[Target, Rule] = _dc.field(default_factory=dict)

    def has_target(self, target: Target) -> bool:
        return target in self.rules

    def dependencies(self, target: Target) -> list[Target]:
        return self.rules[target].dependencies

    def commands(self, target: Target) -> list[str]:
        return self.rules[target].commands

    @classmethod
    def from_path(cls, path: Path) -> "MkFile":
        with open(path, encoding="utf-8") as f:
            return parse_mkfile(f.read())


def _is_continuation(line: str) -> bool:
    return line[:1] in (" ", "\t")


def parse_mkfile(text: str) -> MkFile:
    """Parse rule-file text into a rule store.

    A rule is a header line `target: deps...` followed by indented command
    lines, up to the first empty or unindented line. Indented lines holding
    only whitespace are dropped. Lines that do not fit this shape are
    skipped, and a target declared twice keeps its last rule.
    """
    rules: dict[Target, Rule] = {}
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        header = _HEADER.match(lines[i])
        i += 1
        if header is None:
            continue

        commands = []
        while i < len(lines) and _is_continuation(lines[i]):
            command = lines[i].strip()
            if command:
                commands.append(command)
            i += 1

        target = parse_target(header.group(1))
        dependencies = [parse_target(token) for token in header.group(2).split()]
        rules[target] = Rule(dependencies, commands)

    return MkFile(rules)
