"""Contiguous secondary-structure blocks and overlaps between them."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SSBlock:
    """A run of one secondary-structure class over positions start..end inclusive."""

    start: int
    end: int
    ss_class: str

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Region 'To' cannot be less than 'From'")

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class OverlapBlock:
    """A reference block paired with a predicted block of the same class."""

    ref: SSBlock
    pred: SSBlock

    @property
    def start(self) -> int:
        return min(self.ref.start, self.pred.start)

    @property
    def end(self) -> int:
        return max(self.ref.end, self.pred.end)

    @property
    def length(self) -> int:
        """Length of the union of both blocks."""
        return self.end - self.start + 1

    @property
    def overlap_length(self) -> int:
        """Number of positions shared by both blocks."""
        return min(self.ref.end, self.pred.end) - max(self.ref.start, self.pred.start) + 1