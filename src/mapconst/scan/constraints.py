"""Go build constraint evaluation.

Implements the file-selection rules of `go/build` that decide whether a file
belongs to the package for a target platform:

- file name suffixes `_GOOS`, `_GOARCH` and `_GOOS_GOARCH`
- `//go:build <expr>` lines
- legacy `// +build` lines, honored only when no `//go:build` line exists
"""

from __future__ import annotations

import os
import platform
import re
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mapconst.contract.errors import LoadError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from mapconst.rules.config import BuildConfig

KNOWN_OS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "js",
        "linux",
        "nacl",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "wasip1",
        "windows",
        "zos",
    }
)

UNIX_OS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "solaris",
    }
)

KNOWN_ARCH = frozenset(
    {
        "386",
        "amd64",
        "amd64p32",
        "arm",
        "armbe",
        "arm64",
        "arm64be",
        "loong64",
        "mips",
        "mipsle",
        "mips64",
        "mips64le",
        "mips64p32",
        "mips64p32le",
        "ppc",
        "ppc64",
        "ppc64le",
        "riscv",
        "riscv64",
        "s390",
        "s390x",
        "sparc",
        "sparc64",
        "wasm",
    }
)

# GOOS values that also satisfy another OS tag.
_OS_ALIASES = {
    "android": "linux",
    "illumos": "solaris",
    "ios": "darwin",
}

_PLATFORM_OS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "aix": "aix",
    "sunos5": "solaris",
}

_MACHINE_ARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

DEFAULT_RELEASE = 22


def host_goos() -> str:
    for prefix, goos in _PLATFORM_OS.items():
        if sys.platform.startswith(prefix):
            return goos
    return sys.platform


def host_goarch() -> str:
    machine = platform.machine().lower()
    return _MACHINE_ARCH.get(machine, machine)


class ConstraintError(LoadError):
    """Raised for a malformed build constraint line."""


# ---------------------------------------------------------------------------
# Constraint expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TagExpr:
    tag: str

    def evaluate(self, ok: Callable[[str], bool]) -> bool:
        return ok(self.tag)


@dataclass(frozen=True)
class NotExpr:
    operand: ConstraintExpr

    def evaluate(self, ok: Callable[[str], bool]) -> bool:
        return not self.operand.evaluate(ok)


@dataclass(frozen=True)
class AndExpr:
    left: ConstraintExpr
    right: ConstraintExpr

    def evaluate(self, ok: Callable[[str], bool]) -> bool:
        # Both sides are evaluated so every tag is visited.
        left = self.left.evaluate(ok)
        right = self.right.evaluate(ok)
        return left and right


@dataclass(frozen=True)
class OrExpr:
    left: ConstraintExpr
    right: ConstraintExpr

    def evaluate(self, ok: Callable[[str], bool]) -> bool:
        left = self.left.evaluate(ok)
        right = self.right.evaluate(ok)
        return left or right


ConstraintExpr = TagExpr | NotExpr | AndExpr | OrExpr

_TOKEN = re.compile(r"\s*(&&|\|\||!|\(|\)|[A-Za-z0-9_.]+)")
_TAG = re.compile(r"^[A-Za-z0-9_.]+$")


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            msg = f"unexpected character {text[pos:].strip()[:1]!r}"
            raise ConstraintError(msg)
        tokens.append(match.group(1))
        pos = match.end()
    return tokens


def _parse_or(tokens: list[str], pos: int) -> tuple[ConstraintExpr, int]:
    left, pos = _parse_and(tokens, pos)
    while pos < len(tokens) and tokens[pos] == "||":
        right, pos = _parse_and(tokens, pos + 1)
        left = OrExpr(left, right)
    return left, pos


def _parse_and(tokens: list[str], pos: int) -> tuple[ConstraintExpr, int]:
    left, pos = _parse_not(tokens, pos)
    while pos < len(tokens) and tokens[pos] == "&&":
        right, pos = _parse_not(tokens, pos + 1)
        left = AndExpr(left, right)
    return left, pos


def _parse_not(tokens: list[str], pos: int) -> tuple[ConstraintExpr, int]:
    if pos < len(tokens) and tokens[pos] == "!":
        operand, pos = _parse_not(tokens, pos + 1)
        return NotExpr(operand), pos
    return _parse_atom(tokens, pos)


def _parse_atom(tokens: list[str], pos: int) -> tuple[ConstraintExpr, int]:
    if pos >= len(tokens):
        msg = "unexpected end of expression"
        raise ConstraintError(msg)

    token = tokens[pos]
    if token == "(":
        expr, pos = _parse_or(tokens, pos + 1)
        if pos >= len(tokens) or tokens[pos] != ")":
            msg = "missing )"
            raise ConstraintError(msg)
        return expr, pos + 1

    if _TAG.match(token):
        return TagExpr(token), pos + 1

    msg = f"unexpected token {token!r}"
    raise ConstraintError(msg)


def parse_go_build(expr: str) -> ConstraintExpr:
    """Parse the expression of a `//go:build` line."""
    tokens = _tokenize(expr)
    if not tokens:
        msg = "empty //go:build expression"
        raise ConstraintError(msg)
    result, pos = _parse_or(tokens, 0)
    if pos != len(tokens):
        msg = f"unexpected token {tokens[pos]!r}"
        raise ConstraintError(msg)
    return result


def parse_plus_build(line: str) -> ConstraintExpr:
    """Parse the options of one legacy `// +build` line.

    Space-separated options are ORed; comma-separated terms are ANDed.
    """
    result: ConstraintExpr | None = None
    for option in line.split():
        clause: ConstraintExpr | None = None
        for term in option.split(","):
            negated = term.startswith("!")
            tag = term[1:] if negated else term
            if not _TAG.match(tag) or tag.startswith("!"):
                msg = f"invalid +build term {term!r}"
                raise ConstraintError(msg)
            node: ConstraintExpr = NotExpr(TagExpr(tag)) if negated else TagExpr(tag)
            clause = node if clause is None else AndExpr(clause, node)
        if clause is None:
            continue
        result = clause if result is None else OrExpr(result, clause)
    if result is None:
        msg = "empty +build line"
        raise ConstraintError(msg)
    return result


# ---------------------------------------------------------------------------
# Build context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildContext:
    """Target platform and tags used to select package files."""

    goos: str = field(default_factory=host_goos)
    goarch: str = field(default_factory=host_goarch)
    tags: frozenset[str] = frozenset()
    cgo: bool = True
    release: int = DEFAULT_RELEASE

    @classmethod
    def from_config(
        cls, config: BuildConfig | None = None, extra_tags: Iterable[str] = ()
    ) -> BuildContext:
        goos = os.environ.get("GOOS") or host_goos()
        goarch = os.environ.get("GOARCH") or host_goarch()
        if config is None:
            return cls(goos=goos, goarch=goarch, tags=frozenset(extra_tags))
        return cls(
            goos=config.goos or goos,
            goarch=config.goarch or goarch,
            tags=frozenset([*config.tags, *extra_tags]),
            cgo=config.cgo,
            release=config.release,
        )

    def match_tag(self, tag: str) -> bool:
        if tag in (self.goos, self.goarch):
            return True
        if _OS_ALIASES.get(self.goos) == tag:
            return True
        if tag == "unix":
            return self.goos in UNIX_OS
        if tag == "gc":
            return True
        if tag == "cgo":
            return self.cgo
        if tag.startswith("go1."):
            minor = tag[len("go1.") :]
            return minor.isdigit() and 1 <= int(minor) <= self.release
        return tag in self.tags

    def match_file_name(self, name: str) -> bool:
        """Apply the `_GOOS`, `_GOARCH` and `_GOOS_GOARCH` file name rules."""
        stem = name.rsplit(".", 1)[0]
        index = stem.find("_")
        if index < 0:
            return True
        parts = stem[index:].split("_")
        if parts and parts[-1] == "test":
            parts = parts[:-1]
        count = len(parts)
        if count >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
            return self.match_tag(parts[-2]) and self.match_tag(parts[-1])
        if count >= 1 and (parts[-1] in KNOWN_OS or parts[-1] in KNOWN_ARCH):
            return self.match_tag(parts[-1])
        return True

    def match_header(self, source: bytes) -> bool:
        """Evaluate the build constraint lines in a file's leading comments."""
        go_build, plus_build = read_constraint_lines(source)
        if go_build is not None:
            return parse_go_build(go_build).evaluate(self.match_tag)
        return all(
            parse_plus_build(line).evaluate(self.match_tag) for line in plus_build
        )


def read_constraint_lines(source: bytes) -> tuple[str | None, list[str]]:
    """Collect constraint lines from the comments before the package clause.

    Returns the `//go:build` expression, if any, and the `// +build` option
    strings. A `// +build` line only counts when its comment block is
    followed by a blank line.
    """
    go_build: str | None = None
    plus_build: list[str] = []
    pending: list[str] = []
    in_block_comment = False

    for raw_line in source.decode("utf8", errors="replace").splitlines():
        line = raw_line.strip()
        if in_block_comment:
            if "*/" in line:
                in_block_comment = False
            continue
        if not line:
            plus_build.extend(pending)
            pending = []
            continue
        if line.startswith("/*"):
            in_block_comment = "*/" not in line[2:]
            pending = []
            continue
        if not line.startswith("//"):
            break
        if line.startswith("//go:build"):
            if go_build is not None:
                msg = "multiple //go:build comments"
                raise ConstraintError(msg)
            go_build = line[len("//go:build") :].strip()
        elif line.startswith("// +build"):
            pending.append(line[len("// +build") :].strip())

    return go_build, plus_build


__all__ = [
    "KNOWN_ARCH",
    "KNOWN_OS",
    "BuildContext",
    "ConstraintError",
    "host_goarch",
    "host_goos",
    "parse_go_build",
    "parse_plus_build",
    "read_constraint_lines",
]
