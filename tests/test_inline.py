"""Tests for the inline prefix/suffix cell diff."""

import pytest

from rowdiff_view.inline import (
    common_affixes,
    fragments_to_html,
    fragments_to_text,
    inline_diff,
)
from rowdiff_view.models import ABSENT, HighlightKind


def parts(fragments):
    return [(f.raw, f.kind) for f in fragments]


def test_changed_word_after_common_prefix():
    """Test 'hello world' vs 'hello earth' highlights only the last word."""
    diff = inline_diff("hello world", "hello earth")

    assert diff.prefix_len == 6
    assert diff.suffix_len == 0
    assert parts(diff.left) == [("hello ", HighlightKind.NONE), ("world", HighlightKind.REMOVED)]
    assert parts(diff.right) == [("hello ", HighlightKind.NONE), ("earth", HighlightKind.ADDED)]


def test_null_left_highlights_whole_right():
    """Test a null left value renders (null) and the right value fully added."""
    diff = inline_diff(None, "new value")

    assert parts(diff.left) == [("(null)", HighlightKind.NONE)]
    assert parts(diff.right) == [("new value", HighlightKind.ADDED)]


def test_absent_right_highlights_whole_left():
    """Test a missing right column highlights the whole left value as removed."""
    diff = inline_diff(42, ABSENT)

    assert parts(diff.left) == [("42", HighlightKind.REMOVED)]
    assert parts(diff.right) == [("(null)", HighlightKind.NONE)]


def test_null_and_absent_are_both_rendered_plain():
    """Test null vs missing column shows (null) on both sides without highlight."""
    diff = inline_diff(None, ABSENT)

    assert parts(diff.left) == [("(null)", HighlightKind.NONE)]
    assert parts(diff.right) == [("(null)", HighlightKind.NONE)]


@pytest.mark.parametrize("value", ["same", 7, 1.5, True, None, ABSENT, ""])
def test_equal_values_have_no_highlight(value):
    """Test diff(X, X) never highlights anything."""
    diff = inline_diff(value, value)

    assert not diff.changed
    assert diff.left == diff.right


def test_numbers_are_highlighted_whole():
    """Test two non-string values are not split into prefix/suffix."""
    diff = inline_diff(100, 150)

    assert parts(diff.left) == [("100", HighlightKind.REMOVED)]
    assert parts(diff.right) == [("150", HighlightKind.ADDED)]


def test_bool_is_not_equal_to_number():
    """Test True and 1 count as different values."""
    diff = inline_diff(True, 1)

    assert parts(diff.left) == [("true", HighlightKind.REMOVED)]
    assert parts(diff.right) == [("1", HighlightKind.ADDED)]


def test_string_against_number_uses_affixes():
    """Test a string on one side enables partial matching on the text."""
    diff = inline_diff("100", 150)

    assert parts(diff.left) == [
        ("1", HighlightKind.NONE),
        ("0", HighlightKind.REMOVED),
        ("0", HighlightKind.NONE),
    ]
    assert parts(diff.right) == [
        ("1", HighlightKind.NONE),
        ("5", HighlightKind.ADDED),
        ("0", HighlightKind.NONE),
    ]


def test_pure_insertion_omits_empty_middle():
    """Test a prefix-only match highlights only the inserted tail."""
    diff = inline_diff("abc", "abcdef")

    assert parts(diff.left) == [("abc", HighlightKind.NONE)]
    assert parts(diff.right) == [("abc", HighlightKind.NONE), ("def", HighlightKind.ADDED)]


def test_pure_deletion_in_the_middle():
    """Test a removed middle segment keeps prefix and suffix plain."""
    diff = inline_diff("2024-01-15", "2024-15")

    assert diff.prefix_len == 5
    assert diff.suffix_len == 2
    assert parts(diff.left) == [
        ("2024-", HighlightKind.NONE),
        ("01-", HighlightKind.REMOVED),
        ("15", HighlightKind.NONE),
    ]
    assert parts(diff.right) == [("2024-", HighlightKind.NONE), ("15", HighlightKind.NONE)]


def test_completely_different_strings():
    """Test equal-length strings differing everywhere are fully highlighted."""
    diff = inline_diff("abc", "xyz")

    assert (diff.prefix_len, diff.suffix_len) == (0, 0)
    assert parts(diff.left) == [("abc", HighlightKind.REMOVED)]
    assert parts(diff.right) == [("xyz", HighlightKind.ADDED)]


def test_suffix_scan_does_not_overlap_prefix():
    """Test repeated characters are not consumed by both prefix and suffix."""
    assert common_affixes("aaa", "aa") == (2, 0)
    assert common_affixes("abab", "ab") == (2, 0)
    assert common_affixes("xaax", "xax") == (2, 1)


@pytest.mark.parametrize(
    "left,right",
    [
        ("hello world", "hello earth"),
        ("aaa", "aa"),
        ("", "abc"),
        ("abc", ""),
        ("kitten", "sitting"),
        ("2024-01-15", "2024-15"),
        ("mississippi", "missisippi"),
        ("same", "same"),
    ],
)
def test_segments_reassemble_both_values(left, right):
    """Test prefix + middle + suffix reproduces each side exactly."""
    diff = inline_diff(left, right)

    assert diff.prefix_len + diff.suffix_len <= min(len(left), len(right)) or left == right
    assert "".join(f.raw for f in diff.left) == left
    assert "".join(f.raw for f in diff.right) == right


def test_fragments_are_escaped():
    """Test markup in values is escaped inside and outside highlights."""
    diff = inline_diff("<b>x</b>", "<b>y</b>")

    html = fragments_to_html(diff.left)
    assert html == '&lt;b&gt;<span class="diff-del">x</span>&lt;/b&gt;'
    assert fragments_to_html(diff.right) == '&lt;b&gt;<span class="diff-add">y</span>&lt;/b&gt;'


def test_fragments_to_text_styles_highlight():
    """Test the terminal rendering keeps raw text and styles the change."""
    diff = inline_diff("hello world", "hello earth")

    text = fragments_to_text(diff.left)
    assert text.plain == "hello world"
    assert [(s.start, s.end, s.style) for s in text.spans] == [(6, 11, "bold red strike")]
