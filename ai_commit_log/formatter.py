from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Sequence

from rich.cells import cell_len

from ai_commit_log.prompts import COMMIT_PREFIXES
from ai_commit_log.utils.text import TAB_SIZE, wrap_line

MAX_WIDTH = 80
BULLET_INDENT = "  "

_BULLET_RE = re.compile(r"^(\s*)- ")
_PREFIX_RE = re.compile(r"^\s*([a-z]+)\s*(?:\([^)]*\))?\s*!?\s*:")

Lines = list[str]
Step = Callable[[Sequence[str]], Lines]


def _is_blank(line: str) -> bool:
    return not line.strip()


def _bullet_prefix(line: str) -> str | None:
    m = _BULLET_RE.match(line)
    return m.group(1) if m else None


def _bullet_scopes(lines: Iterable[str]) -> Iterator[tuple[str, str | None]]:
    """
    Yield (line, continuation_indent) pairs.

    continuation_indent is set for lines that continue a bullet, i.e. every line after a
    bullet start up to the next blank line or bullet start; it is None otherwise.
    """
    indent: str | None = None
    for line in lines:
        prefix = _bullet_prefix(line)
        if prefix is not None:
            indent = prefix + BULLET_INDENT
            yield line, None
        elif _is_blank(line):
            indent = None
            yield line, None
        else:
            yield line, indent


def trim(lines: Sequence[str]) -> Lines:
    return "\n".join(lines).strip().split("\n")


def separate_subject(lines: Sequence[str]) -> Lines:
    """Make sure a blank line follows the subject when a body is present."""
    out = list(lines)
    if len(out) > 1 and not _is_blank(out[1]):
        out.insert(1, "")
    return out


def make_wrap(width: int = MAX_WIDTH) -> Step:
    def wrap(lines: Sequence[str]) -> Lines:
        # Tabs become spaces: their width depends on the column a line ends up at.
        lines = [line.expandtabs(TAB_SIZE) for line in lines]
        out: Lines = []
        for line, indent in _bullet_scopes(lines):
            prefix = _bullet_prefix(line)
            if prefix is not None:
                # Later pieces get the continuation indent from indent_bullets.
                out.extend(wrap_line(line, width, rest_width=width - cell_len(prefix + BULLET_INDENT)))
            elif indent is None:
                out.extend(wrap_line(line, width))
            elif line.startswith(indent):
                out.extend(wrap_line(line, width, rest_width=width - cell_len(indent)))
            else:
                narrow = width - cell_len(indent)
                out.extend(wrap_line(line.lstrip(), narrow))
        return out

    return wrap


def indent_bullets(lines: Sequence[str]) -> Lines:
    """Align bullet continuation lines under the first character after "- "."""
    out: Lines = []
    for line, indent in _bullet_scopes(lines):
        if indent is None or line.startswith(indent):
            out.append(line)
        else:
            out.append(indent + line.lstrip())
    return out


def drop_trailing_blank_lines(lines: Sequence[str]) -> Lines:
    out = list(lines)
    while out and _is_blank(out[-1]):
        out.pop()
    return out


def pipeline(width: int = MAX_WIDTH) -> list[Step]:
    return [trim, separate_subject, make_wrap(width), indent_bullets, drop_trailing_blank_lines]


def compose(steps: Iterable[Step]) -> Step:
    steps = list(steps)

    def run(lines: Sequence[str]) -> Lines:
        out = list(lines)
        for step in steps:
            out = step(out)
        return out

    return run


def format_commit_message(text: str, *, width: int = MAX_WIDTH) -> str:
    return "\n".join(compose(pipeline(width))(text.splitlines()))


def subject_prefix(subject: str) -> str | None:
    """Return the conventional prefix ("feature", "fix", ...) of a subject line, if any."""
    m = _PREFIX_RE.match(subject)
    if m and m.group(1) in COMMIT_PREFIXES:
        return m.group(1)
    return None
