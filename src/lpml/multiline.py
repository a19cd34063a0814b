"""Folded (``>``) and literal (``|``) multiline strings."""

from __future__ import annotations

from .lines import Chomp, LineKind, classify, leading_spaces

_COLLECTABLE = (LineKind.BLANK, LineKind.COMMENT, LineKind.UNKNOWN)


def block_end(lines: list[str], start: int, boundary: int) -> int:
    """Index of the first line at or after *start* not deeper than *boundary*.

    Blank lines belong to the run only when a deeper line follows them.
    """
    end = start
    i = start
    while i < len(lines):
        if not lines[i].strip():
            i += 1
            continue
        if leading_spaces(lines[i]) <= boundary:
            break
        i += 1
        end = i
    return end


def collect(
    lines: list[str],
    start: int,
    boundary: int,
    kind: LineKind,
    chomp: Chomp,
) -> tuple[str, int]:
    """Gather the body of a multiline key starting at *start*.

    Returns the chomped text and the index of the first line not consumed.
    A line that looks like ``key: value`` or ``- item`` stops collection even
    when it is indented deeply enough to belong to the block.
    """
    end = block_end(lines, start, boundary)
    parts: list[str] = []
    i = start

    while i < end:
        chunk = lines[i].lstrip(" ")
        info = classify(chunk)
        if info.kind not in _COLLECTABLE:
            break
        if kind is LineKind.MULTILINE_PRESERVE:
            parts.append(chunk + "\n")
        elif info.kind is LineKind.BLANK:
            parts.append(" ")
        else:
            parts.append(chunk)
        i += 1

    text = "".join(parts)
    if chomp is not Chomp.KEEP:
        text = text.lstrip("\n")

    return chomp_text(text, kind, chomp), i


def chomp_text(text: str, kind: LineKind, chomp: Chomp) -> str:
    """Apply the strip / keep / clip rule for the given block kind."""
    if kind is LineKind.MULTILINE_JOIN:
        if chomp is Chomp.STRIP:
            return text.rstrip()
        if chomp is Chomp.KEEP:
            return text + "\n"
        return text.rstrip() + "\n"

    if chomp is Chomp.STRIP:
        return text.rstrip("\n")
    if chomp is Chomp.KEEP:
        return text + "\n"
    return text
