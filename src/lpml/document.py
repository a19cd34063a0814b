"""Document: an LPML input split into titled pages."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .errors import LPMLReferenceError
from .merge import FileSource, LocalFileSource
from .settings import DecoderSettings, get_settings
from .values import Value, VMapping

logger = logging.getLogger(__name__)

SEPARATOR = "---\n"

_TITLE_RE = re.compile(r"^#@(.+)$")


@dataclass
class Page:
    """One ``---``-delimited unit of a document."""

    title: str
    source: str
    result: Value | None = None
    # Set while the page is being parsed, to catch pages merging themselves
    resolving: bool = field(default=False, repr=False, compare=False)

    @property
    def lines(self) -> list[str]:
        # source always ends with "\n"; drop the empty tail
        return self.source.split("\n")[:-1]

    @classmethod
    def from_chunk(cls, chunk: str, index: int) -> "Page":
        if not chunk.endswith("\n"):
            chunk += "\n"
        first, _, rest = chunk.partition("\n")
        m = _TITLE_RE.match(first)
        if m and m.group(1).strip():
            return cls(title=m.group(1).strip(), source=rest or "\n")
        return cls(title=str(index), source=chunk)


def paginate(text: str) -> list[Page]:
    """Split *text* on ``---\\n`` into pages.

    The split is a plain substring split, so a separator inside a multiline
    body also starts a new page. Empty chunks before the first or after the
    last separator are dropped.
    """
    chunks = text.split(SEPARATOR)
    if len(chunks) > 1 and chunks[0] == "":
        chunks.pop(0)
    if len(chunks) > 1 and chunks[-1] == "":
        chunks.pop()
    return [Page.from_chunk(chunk, i) for i, chunk in enumerate(chunks)]


@dataclass
class Document:
    """Pages of one decode call plus the state that call needs.

    ``active_files`` holds the merge files currently being decoded up the
    call chain; it is what detects a file that merges itself.
    """

    pages: list[Page] = field(default_factory=list)
    settings: DecoderSettings = field(default_factory=get_settings)
    files: FileSource | None = None
    origin: str = "<string>"
    active_files: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.files is None:
            self.files = LocalFileSource(self.settings.root, self.settings.encoding)

    # -- Construction ---------------------------------------------------

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Document":
        doc = cls(pages=paginate(text), **kwargs)
        logger.debug(
            "%s: %d page(s) %s",
            doc.origin,
            len(doc.pages),
            [p.title for p in doc.pages],
        )
        return doc

    @classmethod
    def single(cls, text: str, **kwargs) -> "Document":
        """A one-page document; ``---`` inside *text* is not a separator."""
        return cls(pages=[Page.from_chunk(text, 0)], **kwargs)

    # -- Lookup ---------------------------------------------------------

    @property
    def titles(self) -> list[str]:
        return [p.title for p in self.pages]

    def find(self, title: str) -> Page | None:
        for page in self.pages:
            if page.title == title:
                return page
        return None

    def resolve(self, title: str) -> Value:
        """Parsed value of the first page called *title*, parsing it if needed."""
        page = self.find(title)
        if page is None:
            raise LPMLReferenceError("No such inherited LPML page", title)
        return self._parse_page(page)

    # -- Evaluation -----------------------------------------------------

    def decode(self) -> Value:
        """Parse every page in order and return the last page's value."""
        if not self.pages:
            return VMapping()
        for page in self.pages:
            self._parse_page(page)
        return self.pages[-1].result

    def _parse_page(self, page: Page) -> Value:
        from .parser import parse_block

        if page.result is not None:
            return page.result
        if page.resolving:
            raise LPMLReferenceError("Circular merge of page", page.title)

        page.resolving = True
        try:
            page.result, _ = parse_block(page.lines, self)
        finally:
            page.resolving = False
        return page.result
