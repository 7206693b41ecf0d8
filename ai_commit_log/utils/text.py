from __future__ import annotations

import re

from rich.cells import cell_len

TAB_SIZE = 8

_WORD_RE = re.compile(r"\S+")


def display_width(text: str) -> int:
    """Terminal cells `text` occupies when printed from column 0."""
    return cell_len(text.expandtabs(TAB_SIZE))


def _units(text: str) -> list[tuple[int, int]]:
    """
    Spans of the words of `text` that must stay on one line.

    A lone "-" is glued to the word before it, or to the word after it when it
    leads the text (the bullet marker), so no piece can end or start with one.
    """
    spans: list[tuple[int, int]] = []
    glue_next = False
    for m in _WORD_RE.finditer(text):
        start, end = m.span()
        if glue_next:
            spans[-1] = (spans[-1][0], end)
            glue_next = False
        elif m.group() == "-" and spans:
            spans[-1] = (spans[-1][0], end)
        else:
            spans.append((start, end))
            glue_next = m.group() == "-"
    return spans


def wrap_line(line: str, width: int, *, rest_width: int | None = None) -> list[str]:
    """
    Greedy word wrap measured in terminal cells.

    - A line that already fits is returned untouched.
    - Breaks only at whitespace; a word wider than the limit gets a line of its own.
    - Spacing inside a piece is kept as written; whitespace at a break is dropped.
    - The first piece keeps the line's leading whitespace, later pieces start at the word.
    - A piece never starts with a lone "-" token, so wrapped text cannot pose as a bullet.
    """
    rest_width = width if rest_width is None else rest_width
    if display_width(line) <= width:
        return [line]

    stripped = line.lstrip()
    lead = line[: len(line) - len(stripped)]
    units = _units(stripped)
    if not units:
        return [line]

    pieces: list[str] = []
    prefix = lead
    limit = width
    start, end = units[0]
    for u_start, u_end in units[1:]:
        if display_width(prefix + stripped[start:u_end]) <= limit:
            end = u_end
            continue
        pieces.append(prefix + stripped[start:end])
        prefix = ""
        limit = max(rest_width, 1)
        start, end = u_start, u_end
    pieces.append(prefix + stripped[start:end])
    return pieces
