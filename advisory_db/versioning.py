"""
Release version parsing and ordering.

Advisory data is not normalized, so parsing never fails: every string maps to
a sequence of segment keys and any two versions compare. Missing trailing
segments count as zero, which makes ``1.2`` equal to ``1.2.0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from itertools import zip_longest
from typing import Tuple, Union

SegmentKey = Tuple[int, str]

_SEPARATORS = re.compile(r"[._]")
_LEADING_DIGITS = re.compile(r"^(\d*)(.*)$", re.DOTALL)

# Key of an absent or empty segment.
ZERO_SEGMENT: SegmentKey = (0, "")


def segment_key(segment: str) -> SegmentKey:
    """Turn one version segment into a comparable key.

    The leading digits compare numerically and whatever follows them compares
    as a string, so ``2`` < ``2a`` < ``3``. A segment without leading digits
    (``rc1``, ``TRIAL``) sorts before every numeric segment, including zero.
    """
    if not segment:
        return ZERO_SEGMENT
    digits, tail = _LEADING_DIGITS.match(segment).groups()
    if digits:
        return int(digits), tail
    return -1, tail


def split_version(text: str) -> Tuple[SegmentKey, ...]:
    """Split a version string on ``.`` and ``_`` into segment keys."""
    text = text.strip()
    if text[:1] in ("v", "V") and text[1:2].isdigit():
        text = text[1:]
    return tuple(segment_key(part) for part in _SEPARATORS.split(text))


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """An immutable, totally ordered release version."""

    text: str
    segments: Tuple[SegmentKey, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        text = str(self.text)
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "segments", split_version(text))

    @classmethod
    def parse(cls, value: Union["Version", str, int, float]) -> "Version":
        """Return ``value`` as a Version, parsing it when needed."""
        if isinstance(value, cls):
            return value
        return cls(str(value))

    def _normalized(self) -> Tuple[SegmentKey, ...]:
        segments = list(self.segments)
        while segments and segments[-1] == ZERO_SEGMENT:
            segments.pop()
        return tuple(segments)

    def __str__(self) -> str:
        return self.text

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) < 0


def compare_versions(a: Union[Version, str], b: Union[Version, str]) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    left = Version.parse(a)
    right = Version.parse(b)
    for x, y in zip_longest(left.segments, right.segments, fillvalue=ZERO_SEGMENT):
        if x != y:
            return -1 if x < y else 1
    return 0
