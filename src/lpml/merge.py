"""Merge directives: loading another page or file and folding it in."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .errors import LPMLReferenceError, LPMLStructureError
from .values import Value, VList, VMapping

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

class FileSource(Protocol):
    """What the resolver needs from the host to follow ``/path`` merges."""

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> str: ...


class LocalFileSource:
    """Reads merge files from disk, optionally below a root directory.

    With ``root="/srv/mud/lib"`` the reference ``/d/base.lpml`` reads
    ``/srv/mud/lib/d/base.lpml``.
    """

    def __init__(self, root: str | None = None, encoding: str = "utf-8") -> None:
        self.root = Path(root) if root else None
        self.encoding = encoding

    def locate(self, path: str) -> Path:
        if self.root is None:
            return Path(path)
        root = self.root.resolve()
        target = (root / path.lstrip("/")).resolve()
        if not target.is_relative_to(root):
            raise LPMLReferenceError("Merge path escapes the root directory", path)
        return target

    def exists(self, path: str) -> bool:
        return self.locate(path).is_file()

    def read(self, path: str) -> str:
        return self.locate(path).read_text(encoding=self.encoding)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def inherit(reference: str, document: Document) -> Value:
    """Resolve a merge reference to a freshly copied Value.

    ``/``-prefixed references are files decoded as a single page; anything
    else is the title of a page in *document*.
    """
    if reference.startswith("/"):
        value = _inherit_file(reference, document)
    else:
        logger.debug("merging page %r", reference)
        value = document.resolve(reference)
    return copy.deepcopy(value)


def _inherit_file(path: str, document: Document) -> Value:
    from .document import Document

    if path in document.active_files:
        raise LPMLReferenceError("Circular merge of file", path)

    files = document.files
    if not files.exists(path):
        raise LPMLReferenceError("No such inherited file", path)
    try:
        text = files.read(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise LPMLReferenceError("Could not read inherited file", path) from exc

    logger.debug("merging file %s (%d bytes)", path, len(text))
    child = Document.single(
        text,
        settings=document.settings,
        files=files,
        origin=path,
        active_files=document.active_files | {path},
    )
    return child.decode()


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------

def combine(result: Value, merged: Value) -> Value:
    """Fold *merged* into *result* and return the updated *result*.

    - list + list  → concatenation
    - list + other → *merged* appended as one item
    - map + map    → key union, *merged* wins on shared keys
    """
    if isinstance(result, VList):
        if isinstance(merged, VList):
            result.items.extend(merged.items)
        else:
            result.items.append(merged)
        return result

    if not isinstance(merged, VMapping):
        raise LPMLStructureError(
            f"Cannot merge a {type(merged).__name__} into a mapping", str(merged)
        )
    for key, value in merged.entries.items():
        result.entries[key] = value
    return result
