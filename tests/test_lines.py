"""Tests for the line layer: comment stripping and classification."""

import pytest

from lpml.lines import Chomp, LineKind, classify, leading_spaces, prepare, strip_comment


# ---------------------------------------------------------------------------
# strip_comment
# ---------------------------------------------------------------------------

def test_strip_no_comment():
    assert strip_comment("name: orc") == "name: orc"

def test_strip_trailing_comment():
    assert strip_comment("hp: 10 # base value") == "hp: 10 "

def test_strip_keeps_hash_inside_double_quotes():
    assert strip_comment('msg: "a#b"') == 'msg: "a#b"'

def test_strip_keeps_hash_inside_single_quotes():
    assert strip_comment("msg: 'a#b' # note") == "msg: 'a#b'"

def test_strip_drops_comment_after_closing_quote():
    assert strip_comment('msg: "hi" # greeting') == 'msg: "hi"'

def test_strip_unterminated_quote_left_alone():
    assert strip_comment('msg: "open # still open') == 'msg: "open # still open'

def test_strip_double_quote_wins_over_single():
    assert strip_comment('a: "it\'s" # x') == 'a: "it\'s"'

def test_strip_whole_line_comment():
    assert strip_comment("# just a note") == ""

def test_prepare_strips_comment_and_trailing_space():
    assert prepare("  key: value   # c  ") == "  key: value"


# ---------------------------------------------------------------------------
# leading_spaces
# ---------------------------------------------------------------------------

def test_leading_spaces():
    assert leading_spaces("    a") == 4
    assert leading_spaces("a") == 0
    assert leading_spaces("") == 0

def test_leading_spaces_ignores_tabs():
    assert leading_spaces("\ta") == 0


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

def test_blank():
    assert classify("").kind is LineKind.BLANK
    assert classify("    ").kind is LineKind.BLANK

def test_comment():
    assert classify("# hello").kind is LineKind.COMMENT
    assert classify("    # indented").kind is LineKind.COMMENT

def test_title_line_is_comment():
    assert classify("#@base").kind is LineKind.COMMENT

def test_merge_inline():
    info = classify("<<: base")
    assert info.kind is LineKind.MERGE_INLINE
    assert info.value == "base"

def test_merge_inline_in_sequence():
    info = classify("  - <<: [a, b]")
    assert info.kind is LineKind.MERGE_INLINE
    assert info.value == "[a, b]"

@pytest.mark.parametrize("line", ["<<:", "- <<:", "   <<:"])
def test_merge_start(line):
    assert classify(line).kind is LineKind.MERGE_START

def test_sequence_element():
    info = classify("  - sword")
    assert info.kind is LineKind.SEQUENCE_ELEMENT
    assert info.value == "sword"

def test_sequence_element_nested():
    info = classify("- - a")
    assert info.kind is LineKind.SEQUENCE_ELEMENT
    assert info.value == "- a"

def test_sequence_element_key_value_text():
    info = classify("- name: orc")
    assert info.kind is LineKind.SEQUENCE_ELEMENT
    assert info.value == "name: orc"

@pytest.mark.parametrize(
    "line, chomp",
    [("desc: |", Chomp.CLIP), ("desc: |-", Chomp.STRIP), ("desc: |+", Chomp.KEEP)],
)
def test_multiline_preserve(line, chomp):
    info = classify(line)
    assert info.kind is LineKind.MULTILINE_PRESERVE
    assert info.key == "desc"
    assert info.chomp is chomp

@pytest.mark.parametrize(
    "line, chomp",
    [("desc: >", Chomp.CLIP), ("desc: >-", Chomp.STRIP), ("desc: >+", Chomp.KEEP)],
)
def test_multiline_join(line, chomp):
    info = classify(line)
    assert info.kind is LineKind.MULTILINE_JOIN
    assert info.key == "desc"
    assert info.chomp is chomp

def test_pipe_followed_by_text_is_plain_value():
    info = classify("shell: |grep x")
    assert info.kind is LineKind.KEY_VALUE
    assert info.value == "|grep x"

def test_key_value():
    info = classify("name: Gesslar")
    assert info.kind is LineKind.KEY_VALUE
    assert info.key == "name"
    assert info.value == "Gesslar"

def test_key_value_splits_on_first_separator():
    info = classify("note: a: b")
    assert info.key == "note"
    assert info.value == "a: b"

def test_key_value_strips_value():
    assert classify("name:    orc").value == "orc"

def test_block_start():
    info = classify("stats:")
    assert info.kind is LineKind.BLOCK_START
    assert info.key == "stats"

def test_unknown():
    info = classify("  just some words")
    assert info.kind is LineKind.UNKNOWN
    assert info.value == "just some words"

def test_colon_without_space_is_unknown():
    assert classify("http://example.com").kind is LineKind.UNKNOWN

def test_substantive():
    assert not classify("").substantive
    assert not classify("# c").substantive
    assert classify("a: 1").substantive
