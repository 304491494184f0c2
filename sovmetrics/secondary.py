"""Secondary-structure comparison metrics: Q-accuracy, overlaps and SOV scores."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from functools import cached_property

from .regions import OverlapBlock
from .segmentation import Normalization, Segmentation


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


class SSMetric(ABC):
    """Base for metrics that compare a reference and a predicted structure string.

    A precomputed ``segmentation`` may be shared between metrics; when it is
    ``None`` the metric builds its own from the two sequences.
    """

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        segmentation: Segmentation | None = None,
    ) -> None:
        self.name = name
        self.segmentation = (
            segmentation if segmentation is not None else Segmentation(reference, predicted)
        )

    @property
    def classes(self) -> tuple[str, ...]:
        """Secondary-structure classes present in the reference."""
        return self.segmentation.classes

    @cached_property
    def _partial(self) -> dict[str, float]:
        return {ss_class: self._class_sum(ss_class) for ss_class in self.classes}

    def _class_sum(self, ss_class: str) -> float:
        return sum(
            self._block_score(block, ss_class)
            for block in self.segmentation.overlapping_blocks(ss_class)
        )

    @abstractmethod
    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        """Contribution of one overlapping block pair to its class sum."""

    def _class_denominator(self, ss_class: str) -> float:
        return self.segmentation.ref_length_of(ss_class)

    def _total_denominator(self) -> float:
        return self.segmentation.ref_length

    def calculate_class(self, ss_class: str) -> float:
        """Score restricted to one secondary-structure class."""
        return _ratio(self._partial.get(ss_class, 0.0), self._class_denominator(ss_class))

    def calculate_all(self) -> float:
        """Score over all classes."""
        return _ratio(sum(self._partial.values()), self._total_denominator())


class _NormalizedMetric(SSMetric):
    """Metric divided by the SOV'99 normalisation instead of the reference length."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        normalization: Normalization | None = None,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, segmentation)
        self.normalization = (
            normalization if normalization is not None else Normalization(self.segmentation)
        )

    def _class_denominator(self, ss_class: str) -> float:
        return self.normalization.value(ss_class)

    def _total_denominator(self) -> float:
        return self.normalization.total


class Accuracy(SSMetric):
    """Fraction of positions whose class is predicted correctly (Q3 and per-class Q)."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, segmentation)

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return block.overlap_length


class LooseOverlap(SSMetric):
    """Reference blocks counted as found when at least half of them is overlapped."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, segmentation)

    @staticmethod
    def _theta(block: OverlapBlock, ss_class: str) -> int:
        if ss_class != "C":
            return int(block.overlap_length >= math.ceil(block.ref.length / 2.0))
        return int(block.overlap_length >= 2)

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return self._theta(block, ss_class) * block.ref.length


class StrictOverlap(SSMetric):
    """Reference blocks counted as found only when their ends match closely."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        zero_delta: bool = False,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, segmentation)
        self.zero_delta = zero_delta

    def _delta_sov(self, block: OverlapBlock) -> float:
        if self.zero_delta:
            return 0.0
        return min(
            float(block.length - block.overlap_length),
            float(block.overlap_length),
            block.ref.length / 2.0,
        )

    @staticmethod
    def _delta_strict(block: OverlapBlock) -> int:
        if block.ref.length <= 5:
            return 1
        if block.ref.length <= 10:
            return 2
        return 3

    def _theta(self, block: OverlapBlock) -> int:
        tolerance = self._delta_strict(block)
        return int(
            abs(block.ref.length - block.pred.length) <= self._delta_sov(block)
            and abs(block.ref.start - block.pred.start) <= tolerance
            and abs(block.ref.end - block.pred.end) <= tolerance
        )

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return self._theta(block) * block.ref.length


class Sov94(SSMetric):
    """Segment overlap score as defined in 1994."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        zero_delta: bool = False,
        skip_duplicate_ref_blocks: bool = False,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, segmentation)
        self.zero_delta = zero_delta
        self.skip_duplicate_ref_blocks = skip_duplicate_ref_blocks

    def _delta(self, block: OverlapBlock) -> int:
        if self.zero_delta:
            return 0
        return min(
            block.length - block.overlap_length,
            block.overlap_length,
            block.ref.length // 2,
        )

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return (block.overlap_length + self._delta(block)) / block.length * block.ref.length

    def _class_sum(self, ss_class: str) -> float:
        if not self.skip_duplicate_ref_blocks:
            return super()._class_sum(ss_class)
        summation = 0.0
        previous_ref = None
        for block in self.segmentation.overlapping_blocks(ss_class):
            span = (block.ref.start, block.ref.end)
            if span == previous_ref:
                continue
            summation += self._block_score(block, ss_class)
            previous_ref = span
        return summation


class Sov99(_NormalizedMetric):
    """Segment overlap score as revised in 1999."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        zero_delta: bool = False,
        normalization: Normalization | None = None,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, normalization, segmentation)
        self.zero_delta = zero_delta

    def _delta(self, block: OverlapBlock) -> int:
        if self.zero_delta:
            return 0
        return min(
            block.length - block.overlap_length,
            block.overlap_length,
            block.ref.length // 2,
            block.pred.length // 2,
        )

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return (block.overlap_length + self._delta(block)) / block.length * block.ref.length


class SovRefine(_NormalizedMetric):
    """Refined segment overlap score with an adjustable scale parameter lambda."""

    def __init__(
        self,
        name: str,
        reference: str,
        predicted: str,
        zero_delta: bool = False,
        lambda_: float = 1.0,
        normalization: Normalization | None = None,
        segmentation: Segmentation | None = None,
    ) -> None:
        super().__init__(name, reference, predicted, normalization, segmentation)
        self.zero_delta = zero_delta
        self.lambda_ = lambda_
        ref_length = float(self.segmentation.ref_length)
        spread = sum((block.length / ref_length) ** 2 for block in self.segmentation.ref_blocks)
        self.delta_all = lambda_ * (len(self.segmentation.classes) / spread)

    def _delta(self, block: OverlapBlock) -> float:
        if self.zero_delta:
            return 0.0
        value = (
            self.delta_all
            * (block.ref.length / self.segmentation.ref_length)
            * (block.overlap_length / block.length)
        )
        return min(value, block.length - block.overlap_length)

    def _block_score(self, block: OverlapBlock, ss_class: str) -> float:
        return (block.overlap_length + self._delta(block)) / block.length * block.ref.length


def create_metrics(
    metric_name: str,
    reference: str,
    predicted: str,
    lambda_: float = 1.0,
    zero_delta: bool = False,
) -> list[SSMetric]:
    """Build the metrics selected by name ("all" for every one) over a shared segmentation."""
    key = metric_name.lower()
    segmentation = Segmentation(reference, predicted)
    if key == "all":
        normalization = Normalization(segmentation)
        return [
            LooseOverlap("LooseOverlap", reference, predicted, segmentation),
            StrictOverlap("StrictOverlap", reference, predicted, zero_delta, segmentation),
            Accuracy("Accuracy", reference, predicted, segmentation),
            Sov94("SOV_94", reference, predicted, zero_delta, False, segmentation),
            Sov99("SOV_99", reference, predicted, zero_delta, normalization, segmentation),
            SovRefine(
                "SOV_refine", reference, predicted, zero_delta, lambda_, normalization, segmentation
            ),
        ]
    if key == "accuracy":
        return [Accuracy("Accuracy", reference, predicted, segmentation)]
    if key == "sovrefine":
        return [SovRefine("SOV_refine", reference, predicted, zero_delta, lambda_, None, segmentation)]
    if key == "sov99":
        return [Sov99("SOV_99", reference, predicted, zero_delta, None, segmentation)]
    if key == "sov94":
        return [Sov94("SOV_94", reference, predicted, zero_delta, False, segmentation)]
    if key == "strictoverlap":
        return [StrictOverlap("StrictOverlap", reference, predicted, zero_delta, segmentation)]
    if key == "looseoverlap":
        return [LooseOverlap("LooseOverlap", reference, predicted, segmentation)]
    raise ValueError("Metric choice is invalid")