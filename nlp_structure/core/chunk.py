"""Labeled contiguous token span (named entity mention and the like).

WHY: Named entities and other flat annotations cover runs of tokens,
not tree nodes. Both encoders need the span boundaries: the sparse form
lists them, the CoNLL form expands them into per-token BILOU tags.

HOW: A small dataclass with inclusive token indices, validated on
construction.

RULES:
- begin and end are inclusive 0-based token indices, begin <= end
- The sparse form is [begin, end + 1, label] (end exclusive)
- Chunks of one sentence must not overlap (enforced by Sentence)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union


@dataclass
class Chunk:
    """A labeled span over tokens begin..end (inclusive)."""

    label: str
    begin: int
    end: int

    def __post_init__(self) -> None:
        if self.begin < 0:
            raise ValueError("begin must be >= 0, got {}".format(self.begin))
        if self.end < self.begin:
            raise ValueError("end must be >= begin, got {} < {}".format(self.end, self.begin))

    @classmethod
    def from_list(cls, data: List[Union[int, str]]) -> Chunk:
        """Parse the sparse ``[begin, end_exclusive, label]`` form."""
        begin, end, label = data
        return cls(label=str(label), begin=int(begin), end=int(end) - 1)

    @property
    def size(self) -> int:
        return self.end - self.begin + 1

    def overlaps(self, other: Chunk) -> bool:
        return self.begin <= other.end and other.begin <= self.end

    def to_list(self) -> List[Union[int, str]]:
        return [self.begin, self.end + 1, self.label]
