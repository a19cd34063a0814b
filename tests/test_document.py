"""Tests for pagination and the Document."""

import pytest

from lpml.document import Document, Page, paginate
from lpml.errors import LPMLReferenceError
from lpml.values import VInt, VList, VMapping, VString


# ---------------------------------------------------------------------------
# Page.from_chunk
# ---------------------------------------------------------------------------

def test_page_untitled_uses_index():
    page = Page.from_chunk("a: 1\n", 3)
    assert page.title == "3"
    assert page.source == "a: 1\n"

def test_page_title_directive():
    page = Page.from_chunk("#@base\na: 1\n", 0)
    assert page.title == "base"
    assert page.source == "a: 1\n"

def test_page_trailing_newline_added():
    assert Page.from_chunk("a: 1", 0).source == "a: 1\n"

def test_page_title_only():
    page = Page.from_chunk("#@empty", 0)
    assert page.title == "empty"
    assert page.source == "\n"

def test_page_bare_title_marker_is_not_a_title():
    page = Page.from_chunk("#@\na: 1\n", 2)
    assert page.title == "2"

def test_page_lines():
    assert Page.from_chunk("a: 1\nb: 2\n", 0).lines == ["a: 1", "b: 2"]


# ---------------------------------------------------------------------------
# paginate
# ---------------------------------------------------------------------------

def test_paginate_single():
    pages = paginate("a: 1\n")
    assert [p.title for p in pages] == ["0"]

def test_paginate_multiple():
    pages = paginate("#@base\na: 1\n---\nb: 2\n---\n#@last\nc: 3\n")
    assert [p.title for p in pages] == ["base", "1", "last"]
    assert pages[1].source == "b: 2\n"

def test_paginate_leading_and_trailing_separator():
    pages = paginate("---\na: 1\n---\n")
    assert len(pages) == 1
    assert pages[0].source == "a: 1\n"

def test_paginate_separator_needs_newline():
    assert len(paginate("a: 1\n---")) == 1

def test_paginate_splits_inside_multiline_body():
    pages = paginate("desc: |\n  top\n---\n  bottom\n")
    assert len(pages) == 2


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def test_decode_returns_last_page():
    doc = Document.from_text("a: 1\n---\nb: 2\n")
    assert doc.decode() == VMapping({"b": VInt(2)})

def test_decode_memoizes_every_page():
    doc = Document.from_text("a: 1\n---\n- x\n")
    doc.decode()
    assert doc.pages[0].result == VMapping({"a": VInt(1)})
    assert doc.pages[1].result == VList([VString("x")])

def test_decode_no_pages():
    assert Document().decode() == VMapping()

def test_titles():
    doc = Document.from_text("#@a\nx: 1\n---\ny: 2\n")
    assert doc.titles == ["a", "1"]

def test_find_first_match():
    doc = Document.from_text("#@dup\nx: 1\n---\n#@dup\nx: 2\n")
    assert doc.find("dup") is doc.pages[0]
    assert doc.find("nope") is None

def test_resolve_parses_on_demand():
    doc = Document.from_text("#@base\nhp: 4\n---\nname: orc\n")
    assert doc.resolve("base") == VMapping({"hp": VInt(4)})
    assert doc.pages[0].result is not None
    assert doc.pages[1].result is None

def test_resolve_unknown_title():
    doc = Document.from_text("a: 1\n")
    with pytest.raises(LPMLReferenceError, match="No such inherited LPML page: ghost"):
        doc.resolve("ghost")

def test_resolve_circular():
    doc = Document.from_text("#@loop\n<<: loop\n")
    with pytest.raises(LPMLReferenceError, match="Circular merge of page"):
        doc.decode()

def test_single_ignores_separators():
    doc = Document.single("a: 1\n---\nb: 2\n")
    assert len(doc.pages) == 1
