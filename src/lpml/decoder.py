"""Public entry points: LPML text or file → Value."""

from __future__ import annotations

from pathlib import Path

from .document import Document
from .merge import FileSource
from .settings import DecoderSettings, get_settings
from .values import Value, VMapping


def decode(
    text: str | None,
    settings: DecoderSettings | None = None,
    files: FileSource | None = None,
    origin: str = "<string>",
) -> Value:
    """Decode LPML *text* and return the value of its last page.

    Earlier pages only matter as targets of ``<<:`` merges. Empty input
    gives an empty VMapping.

    Usage::

        decode("name: Gesslar\\nage: 10\\n")
        # → VMapping({"name": VString("Gesslar"), "age": VInt(10)})
    """
    if not text:
        return VMapping()
    doc = Document.from_text(
        text,
        settings=settings or get_settings(),
        files=files,
        origin=origin,
    )
    return doc.decode()


def decode_file(
    path: str | Path,
    settings: DecoderSettings | None = None,
    files: FileSource | None = None,
) -> Value:
    """Read *path* from disk and decode it.

    The path itself is a real filesystem path; ``settings.root`` only
    applies to ``/``-prefixed merge references inside the file.
    """
    settings = settings or get_settings()
    text = Path(path).read_text(encoding=settings.encoding)
    return decode(text, settings=settings, files=files, origin=str(path))
