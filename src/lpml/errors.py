"""Exceptions raised while decoding LPML."""

from __future__ import annotations


class LPMLError(Exception):
    """Base class for all decoder errors."""


class LPMLStructureError(LPMLError):
    """The text is well-formed line by line but cannot be assembled.

    Raised for inline merge targets that are neither a string nor a list,
    for a mapping merged with a non-mapping, for a key inside a sequence
    block (or an item inside a mapping block), and for unknown lines when
    strict mode is on.
    """

    def __init__(self, message: str, line: str | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)


class LPMLReferenceError(LPMLError):
    """A merge directive names something that cannot be loaded."""

    def __init__(self, message: str, reference: str) -> None:
        self.reference = reference
        super().__init__(f"{message}: {reference}")
