"""Inline (character-level) diff of two cell values.

The diff is a common-prefix/common-suffix split: whatever lies between the
shared prefix and the shared suffix is shown as removed on the left and added
on the right. It is not a general sequence alignment.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from rich.text import Text

from .escape import display_text, escape_html
from .models import DisplayFragment, HighlightKind, is_missing
from .reconcile import values_equal

HTML_CLASSES = {
    HighlightKind.ADDED: "diff-add",
    HighlightKind.REMOVED: "diff-del",
}

RICH_STYLES = {
    HighlightKind.ADDED: "bold green",
    HighlightKind.REMOVED: "bold red strike",
}


@dataclass(frozen=True)
class InlineDiff:
    """Rendered left and right sides of one cell.

    Attributes:
        left: Segments of the left value, in order
        right: Segments of the right value, in order
        prefix_len: Length of the common prefix (string comparisons only)
        suffix_len: Length of the common suffix (string comparisons only)
    """

    left: tuple[DisplayFragment, ...]
    right: tuple[DisplayFragment, ...]
    prefix_len: int = 0
    suffix_len: int = 0

    @property
    def changed(self) -> bool:
        return any(f.is_highlighted for f in self.left + self.right)


def fragment(text: str, kind: HighlightKind = HighlightKind.NONE) -> DisplayFragment:
    return DisplayFragment(text=escape_html(text), kind=kind, raw=text)


def _whole(value: Any, kind: HighlightKind) -> tuple[DisplayFragment, ...]:
    if is_missing(value):
        return (fragment(display_text(value)),)
    return (fragment(display_text(value), kind),)


def common_affixes(left: str, right: str) -> tuple[int, int]:
    """Return (prefix, suffix) lengths shared by `left` and `right`.

    The suffix scan stops at the end of the prefix on either string, so
    prefix + suffix never exceeds the shorter length.
    """
    limit = min(len(left), len(right))
    start = 0
    while start < limit and left[start] == right[start]:
        start += 1

    end_l = len(left) - 1
    end_r = len(right) - 1
    while end_l >= start and end_r >= start and left[end_l] == right[end_r]:
        end_l -= 1
        end_r -= 1

    return start, len(left) - 1 - end_l


def _side(
    text: str, prefix_len: int, suffix_len: int, kind: HighlightKind
) -> tuple[DisplayFragment, ...]:
    middle_end = len(text) - suffix_len
    parts = []
    if prefix_len:
        parts.append(fragment(text[:prefix_len]))
    middle = text[prefix_len:middle_end]
    if middle:
        parts.append(fragment(middle, kind))
    if suffix_len:
        parts.append(fragment(text[middle_end:]))
    if not parts:
        parts.append(fragment(""))
    return tuple(parts)


def inline_diff(left: Any, right: Any) -> InlineDiff:
    """Compute the highlighted left/right rendering of a changed cell.

    Args:
        left: Value on the left side (may be None or ABSENT)
        right: Value on the right side (may be None or ABSENT)

    Returns:
        InlineDiff with escaped segments for both sides
    """
    if values_equal(left, right):
        text = display_text(left)
        same = (fragment(text),)
        return InlineDiff(left=same, right=same, prefix_len=len(text))

    if is_missing(left) or is_missing(right):
        return InlineDiff(
            left=_whole(left, HighlightKind.REMOVED),
            right=_whole(right, HighlightKind.ADDED),
        )

    if not isinstance(left, str) and not isinstance(right, str):
        return InlineDiff(
            left=_whole(left, HighlightKind.REMOVED),
            right=_whole(right, HighlightKind.ADDED),
        )

    left_text = display_text(left)
    right_text = display_text(right)
    prefix_len, suffix_len = common_affixes(left_text, right_text)
    return InlineDiff(
        left=_side(left_text, prefix_len, suffix_len, HighlightKind.REMOVED),
        right=_side(right_text, prefix_len, suffix_len, HighlightKind.ADDED),
        prefix_len=prefix_len,
        suffix_len=suffix_len,
    )


def fragments_to_html(fragments: Iterable[DisplayFragment]) -> str:
    """Join segments into HTML, wrapping highlighted ones in a span."""
    html_parts = []
    for frag in fragments:
        if frag.is_highlighted:
            html_parts.append(f'<span class="{HTML_CLASSES[frag.kind]}">{frag.text}</span>')
        else:
            html_parts.append(frag.text)
    return "".join(html_parts)


def fragments_to_text(fragments: Iterable[DisplayFragment]) -> Text:
    """Join segments into a rich Text for terminal output."""
    text = Text()
    for frag in fragments:
        text.append(frag.raw, style=RICH_STYLES.get(frag.kind))
    return text
