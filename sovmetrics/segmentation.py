"""Splitting sequences into blocks and pairing reference with predicted blocks."""

from __future__ import annotations

from itertools import groupby

from .regions import OverlapBlock, SSBlock


def split_blocks(sequence: str) -> list[SSBlock]:
    """Split a sequence into maximal runs of identical characters."""
    blocks = []
    position = 0
    for ss_class, run in groupby(sequence):
        length = sum(1 for _ in run)
        blocks.append(SSBlock(position, position + length - 1, ss_class))
        position += length
    return blocks


class Segmentation:
    """Block structure shared by the secondary-structure metrics."""

    def __init__(self, reference: str, predicted: str) -> None:
        self.ref_length = len(reference)
        self.pred_length = len(predicted)
        if self.ref_length < 1:
            raise ValueError("At least one of your sequences is empty")
        if self.ref_length != self.pred_length:
            raise ValueError("Reference and predicted sequences are not the same length")

        self.ref_blocks = split_blocks(reference)
        self.pred_blocks = split_blocks(predicted)
        self._classes: dict[str, None] = {}
        self._ref_lengths: dict[str, int] = {}
        self._overlapping: dict[str, list[OverlapBlock]] = {}
        self._non_overlapping: dict[str, list[SSBlock]] = {}
        self._pair_blocks()

    def _pair_blocks(self) -> None:
        ref_iter = iter(self.ref_blocks)
        pred_iter = iter(self.pred_blocks)
        ref = next(ref_iter, None)
        pred = next(pred_iter, None)
        had_overlap = False
        while ref is not None and pred is not None:
            if ref.ss_class == pred.ss_class:
                had_overlap = True
                self._overlapping.setdefault(ref.ss_class, []).append(OverlapBlock(ref, pred))

            if ref.end <= pred.end:
                if not had_overlap:
                    self._non_overlapping.setdefault(ref.ss_class, []).append(ref)
                self._classes[ref.ss_class] = None
                self._ref_lengths[ref.ss_class] = self._ref_lengths.get(ref.ss_class, 0) + ref.length
                if ref.end == pred.end:
                    pred = next(pred_iter, None)
                ref = next(ref_iter, None)
                had_overlap = False
            else:
                pred = next(pred_iter, None)

    @property
    def classes(self) -> tuple[str, ...]:
        """Secondary-structure classes present in the reference, in order of appearance."""
        return tuple(self._classes)

    def ref_length_of(self, ss_class: str) -> int:
        """Total reference length of a class; at least 1 so it can divide."""
        return max(self._ref_lengths.get(ss_class, 0), 1)

    def overlapping_blocks(self, ss_class: str) -> list[OverlapBlock]:
        return list(self._overlapping.get(ss_class, ()))

    def non_overlapping_blocks(self, ss_class: str) -> list[SSBlock]:
        return list(self._non_overlapping.get(ss_class, ()))


class Normalization:
    """Per-class normalisation values used by SOV'99 and SOV-refine."""

    def __init__(self, segmentation: Segmentation) -> None:
        self._values: dict[str, int] = {}
        for ss_class in segmentation.classes:
            overlapped = sum(b.ref.length for b in segmentation.overlapping_blocks(ss_class))
            unmatched = sum(b.length for b in segmentation.non_overlapping_blocks(ss_class))
            self._values[ss_class] = overlapped + unmatched
        self.total = sum(self._values.values())

    def value(self, ss_class: str) -> int:
        return self._values.get(ss_class, 0)