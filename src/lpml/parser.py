"""Block parser: indentation-delimited lines → VMapping / VList."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import LPMLStructureError
from .lines import LineInfo, LineKind, classify, leading_spaces, prepare
from .merge import combine, inherit
from .multiline import block_end, collect
from .scalar import coerce
from .values import Value, VList, VMapping, VString

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

_MAPPING_KINDS = (
    LineKind.KEY_VALUE,
    LineKind.BLOCK_START,
    LineKind.MULTILINE_PRESERVE,
    LineKind.MULTILINE_JOIN,
)

_MERGE_KINDS = (LineKind.MERGE_INLINE, LineKind.MERGE_START)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse_block(
    lines: list[str],
    document: Document,
    level: int = 0,
    width: int = 0,
    *,
    compact: bool = False,
) -> tuple[Value, int]:
    """Parse one block and return ``(node, index of the first unconsumed line)``.

    The first substantive line picks the shape: ``- item`` gives a VList,
    anything else a VMapping. The block ends at the first line indented
    less than *width*. A line indented more than *width* does not open a
    new block by itself; the block simply adopts its indentation from then
    on, raising *level* by one.

    *compact* marks a block opened right under a ``key:`` line, where a
    sequence may sit at the key's own indentation::

        items:
        - sword
        - shield
        name: bag     ← ends the sequence
    """
    if not lines:
        return VMapping(), 0

    curr = _next_line(lines, 0)
    if curr >= len(lines):
        return VMapping(), len(lines)

    first = classify(prepare(lines[curr]))
    result: Value = VList() if first.kind is LineKind.SEQUENCE_ELEMENT else VMapping()
    entry_width = width

    while curr < len(lines):
        line = prepare(lines[curr])
        info = classify(line)
        indent = leading_spaces(line)

        if indent < width:
            break
        if (
            compact
            and indent == entry_width
            and isinstance(result, VList)
            and _belongs_to_parent(line, info)
        ):
            break
        if indent > width:
            level += 1
            width = indent

        nxt = _dispatch(lines, curr, info, result, document, level, width)
        curr = _next_line(lines, nxt)

    return result, curr


# ---------------------------------------------------------------------------
# Per-line handling
# ---------------------------------------------------------------------------

def _dispatch(
    lines: list[str],
    curr: int,
    info: LineInfo,
    result: Value,
    document: Document,
    level: int,
    width: int,
) -> int:
    """Fold line *curr* (and any lines it owns) into *result*.

    Returns the index of the first line not consumed.
    """
    kind = info.kind

    if kind is LineKind.MERGE_START:
        return _merge_block(lines, curr, result, document, width)

    if kind is LineKind.MERGE_INLINE:
        _merge_inline(info.value, result, document)
        return curr + 1

    if kind is LineKind.SEQUENCE_ELEMENT:
        if not isinstance(result, VList):
            raise LPMLStructureError("List item inside a mapping", lines[curr].strip())
        return _sequence_element(lines, curr, info.value, result, document, level, width)

    if kind in _MAPPING_KINDS:
        if not isinstance(result, VMapping):
            raise LPMLStructureError("Key inside a list", lines[curr].strip())

        if kind is LineKind.KEY_VALUE and info.value:
            result.entries[info.key] = coerce(info.value)
            return curr + 1

        if kind in (LineKind.MULTILINE_PRESERVE, LineKind.MULTILINE_JOIN):
            text, nxt = collect(lines, curr + 1, width, kind, info.chomp)
            result.entries[info.key] = VString(text)
            return nxt

        value, nxt = _nested_block(lines, curr, document, level, width)
        result.entries[info.key] = value
        return nxt

    if document.settings.strict:
        raise LPMLStructureError("Unrecognised line", lines[curr].strip())
    logger.debug("%s: skipping unrecognised line %r (level %d)", document.origin, info.value, level)
    return curr + 1


def _nested_block(
    lines: list[str], curr: int, document: Document, level: int, width: int
) -> tuple[Value, int]:
    """Value of a ``key:`` line whose content follows on the next lines."""
    after = _next_line(lines, curr + 1)
    if after < len(lines):
        peek = prepare(lines[after])
        depth = leading_spaces(peek)
        if depth > width or (
            depth == width and classify(peek).kind is LineKind.SEQUENCE_ELEMENT
        ):
            value, consumed = parse_block(
                lines[curr + 1 :], document, level, width, compact=True
            )
            return value, curr + 1 + consumed
    return VMapping(), curr + 1


def _sequence_element(
    lines: list[str],
    curr: int,
    item: str,
    result: VList,
    document: Document,
    level: int,
    width: int,
) -> int:
    if classify(item).kind is not LineKind.SEQUENCE_ELEMENT:
        result.items.append(coerce(item.strip()))
        return curr + 1

    # "- - x": the inner item plus the deeper lines under it form a list of
    # their own, re-indented to where the inner dash sits.
    end = block_end(lines, curr + 1, width)
    nested = [" " * (width + 2) + item] + lines[curr + 1 : end]
    value, consumed = parse_block(nested, document, level + 1, width + 1)
    result.items.append(value)
    return curr + consumed


def _merge_inline(target: str, result: Value, document: Document) -> None:
    parsed = coerce(target)
    if isinstance(parsed, VString):
        sources = [parsed]
    elif isinstance(parsed, VList):
        sources = parsed.items
    else:
        raise LPMLStructureError("Invalid merge inline value", target)

    for source in sources:
        if not isinstance(source, VString):
            raise LPMLStructureError("Invalid merge inline value", str(source))
        combine(result, inherit(source.value, document))


def _merge_block(
    lines: list[str], curr: int, result: Value, document: Document, width: int
) -> int:
    """``<<:`` followed by deeper ``- reference`` lines."""
    end = block_end(lines, curr + 1, width)
    for raw in lines[curr + 1 : end]:
        info = classify(prepare(raw))
        if info.kind is not LineKind.SEQUENCE_ELEMENT:
            continue
        combine(result, inherit(_reference(info.value), document))
    return end


def _reference(text: str) -> str:
    """Unquote a block merge reference; ``- 0`` still names page ``"0"``."""
    text = text.strip()
    parsed = coerce(text)
    if isinstance(parsed, VString):
        return parsed.value
    return text


def _belongs_to_parent(line: str, info: LineInfo) -> bool:
    """Whether a line at the key's indent ends a compact sequence."""
    if info.kind in _MAPPING_KINDS:
        return True
    return info.kind in _MERGE_KINDS and not line.lstrip().startswith("- ")


def _next_line(lines: list[str], start: int) -> int:
    """Index of the first non-blank, non-comment line at or after *start*."""
    i = start
    while i < len(lines):
        if classify(prepare(lines[i])).substantive:
            return i
        i += 1
    return i
