"""Line layer: comment stripping and per-line classification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto


class LineKind(Enum):
    BLANK = auto()
    COMMENT = auto()
    MERGE_INLINE = auto()
    MERGE_START = auto()
    SEQUENCE_ELEMENT = auto()
    MULTILINE_PRESERVE = auto()
    MULTILINE_JOIN = auto()
    KEY_VALUE = auto()
    BLOCK_START = auto()
    UNKNOWN = auto()


class Chomp(Enum):
    """Trailing newline handling for ``|`` and ``>`` blocks."""

    CLIP = ""
    STRIP = "-"
    KEEP = "+"


@dataclass(frozen=True, slots=True)
class LineInfo:
    """Result of :func:`classify`.

    ``key`` holds the mapping key, and ``value`` the merge target, sequence
    item, key value or (for UNKNOWN) the trimmed line itself.
    """

    kind: LineKind
    key: str | None = None
    value: str | None = None
    chomp: Chomp = Chomp.CLIP

    @property
    def substantive(self) -> bool:
        return self.kind not in (LineKind.BLANK, LineKind.COMMENT)


_MERGE_INLINE_RE = re.compile(r"^(?:- )?<<: (.+)$")
_MERGE_START_RE = re.compile(r"^(?:- )?<<:$")
_SEQUENCE_RE = re.compile(r"^- (.*)$")
_MULTILINE_RE = re.compile(r"^(.*?): ([|>])([-+]?)$")
_KEY_VALUE_RE = re.compile(r"^(.*?): (.*)$")
_BLOCK_START_RE = re.compile(r"^(.*):$")


# ---------------------------------------------------------------------------
# Comment stripping
# ---------------------------------------------------------------------------

def strip_comment(line: str) -> str:
    """Remove a trailing ``# comment`` while keeping ``#`` inside quotes.

    When the line holds a quote character, everything up to the last
    matching quote is kept and only what follows it is dropped. A lone
    opening quote means the string is still open, so nothing is removed.
    """
    pound = line.find("#")
    if pound == -1:
        return line

    quote = '"' if '"' in line else "'" if "'" in line else None
    if quote is not None:
        left = line.find(quote)
        right = line.rfind(quote)
        if right == left:
            return line
        return line[: right + 1]

    return line[:pound]


def leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify(line: str) -> LineInfo:
    """Work out what kind of LPML construct *line* is.

    Merge patterns are tried before the sequence pattern, since
    ``- <<: base`` would otherwise read as a plain list item.

    Examples::

        ""                → BLANK
        "# note"          → COMMENT
        "<<: base"        → MERGE_INLINE, value="base"
        "- <<:"           → MERGE_START
        "- sword"         → SEQUENCE_ELEMENT, value="sword"
        "desc: |-"        → MULTILINE_PRESERVE, key="desc", chomp=STRIP
        "desc: >"         → MULTILINE_JOIN, key="desc", chomp=CLIP
        "name: Gesslar"   → KEY_VALUE, key="name", value="Gesslar"
        "stats:"          → BLOCK_START, key="stats"
        "whatever"        → UNKNOWN, value="whatever"
    """
    line = line.lstrip()

    if not line:
        return LineInfo(LineKind.BLANK)

    if line.startswith("#"):
        return LineInfo(LineKind.COMMENT)

    m = _MERGE_INLINE_RE.match(line)
    if m:
        return LineInfo(LineKind.MERGE_INLINE, value=m.group(1).strip())
    if _MERGE_START_RE.match(line):
        return LineInfo(LineKind.MERGE_START)

    m = _SEQUENCE_RE.match(line)
    if m:
        return LineInfo(LineKind.SEQUENCE_ELEMENT, value=m.group(1))

    m = _MULTILINE_RE.match(line)
    if m:
        kind = (
            LineKind.MULTILINE_PRESERVE if m.group(2) == "|" else LineKind.MULTILINE_JOIN
        )
        return LineInfo(kind, key=m.group(1), chomp=Chomp(m.group(3)))

    m = _KEY_VALUE_RE.match(line)
    if m:
        return LineInfo(LineKind.KEY_VALUE, key=m.group(1), value=m.group(2).strip())

    m = _BLOCK_START_RE.match(line)
    if m:
        return LineInfo(LineKind.BLOCK_START, key=m.group(1))

    return LineInfo(LineKind.UNKNOWN, value=line)


def prepare(line: str) -> str:
    """Strip the inline comment and trailing whitespace from a raw line."""
    return strip_comment(line).rstrip()
