"""Metrics comparing how a prediction tracks the change from consensus to mutant."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from .secondary import Accuracy, LooseOverlap, Sov94, Sov99, SovRefine, SSMetric, StrictOverlap
from .segmentation import Segmentation
from .stats import ConfusionMatrix, stat_metric

_CONSISTENCY_SUB_METRICS = frozenset(
    {"sensitivity", "specificity", "ppv", "npv", "fpr", "fnr", "fdr", "for", "mcc"}
)


def _pair_positions(consensus: str, mutated: str) -> list[str]:
    if len(consensus) != len(mutated):
        raise ValueError("Consensus and mutated sequences are not the same length")
    return [c + m for c, m in zip(consensus, mutated)]


def _changes(consensus: str, mutated: str) -> str:
    if len(consensus) != len(mutated):
        raise ValueError("Consensus and mutated sequences are not the same length")
    return "".join("N" if c == m else "C" for c, m in zip(consensus, mutated))


class MutMetric(ABC):
    """A named mutation metric with the derived reference and prediction sequences."""

    def __init__(self, name: str, resulting_ref: str = "", resulting_pred: str = "") -> None:
        self.name = name
        self.resulting_ref = resulting_ref
        self.resulting_pred = resulting_pred

    @abstractmethod
    def calculate(self, sub_metric: str = "") -> float:
        """Value of the metric, optionally using a sub-metric."""


class MutAccuracy(MutMetric):
    """Fraction of positions whose (consensus, mutant) pair is predicted exactly."""

    def __init__(
        self,
        name: str,
        consensus_ref: str,
        mutated_ref: str,
        consensus_pred: str,
        mutated_pred: str,
    ) -> None:
        self._ref_pairs = _pair_positions(consensus_ref, mutated_ref)
        self._pred_pairs = _pair_positions(consensus_pred, mutated_pred)
        if len(self._ref_pairs) != len(self._pred_pairs):
            raise ValueError("Reference and predicted sequences are not the same length")
        super().__init__(name, " ".join(self._ref_pairs), " ".join(self._pred_pairs))

    def calculate(self, sub_metric: str = "") -> float:
        if not self._ref_pairs:
            return math.nan
        matches = sum(r == p for r, p in zip(self._ref_pairs, self._pred_pairs))
        return matches / len(self._ref_pairs)


class MutConsistency(MutMetric):
    """Binary agreement on which positions change ('C') or stay ('N')."""

    def __init__(
        self,
        name: str,
        consensus_ref: str,
        mutated_ref: str,
        consensus_pred: str,
        mutated_pred: str,
    ) -> None:
        super().__init__(
            name,
            _changes(consensus_ref, mutated_ref),
            _changes(consensus_pred, mutated_pred),
        )
        self.matrix = ConfusionMatrix.from_sequences(self.resulting_ref, self.resulting_pred, "C")

    def calculate(self, sub_metric: str = "") -> float:
        if sub_metric == "":
            key = "accuracy"
        elif sub_metric in _CONSISTENCY_SUB_METRICS:
            key = sub_metric
        else:
            raise ValueError("SubMetric choice is invalid")
        return stat_metric(key, self.matrix).calculate()


class MutPrecision(MutMetric):
    """Secondary-structure metric over interlaced consensus and mutant sequences."""

    def __init__(
        self,
        name: str,
        consensus_ref: str,
        mutated_ref: str,
        consensus_pred: str,
        mutated_pred: str,
        lambda_: float = 1.0,
        zero_delta: bool = False,
    ) -> None:
        super().__init__(
            name,
            "".join(_pair_positions(consensus_ref, mutated_ref)),
            "".join(_pair_positions(consensus_pred, mutated_pred)),
        )
        self.lambda_ = lambda_
        self.zero_delta = zero_delta

    def _metric(self, sub_metric: str, segmentation: Segmentation) -> SSMetric:
        ref, pred = self.resulting_ref, self.resulting_pred
        if sub_metric == "":
            return Accuracy("Accuracy", ref, pred, segmentation)
        if sub_metric == "sovrefine":
            return SovRefine(
                "SOV_refine", ref, pred, self.zero_delta, self.lambda_, None, segmentation
            )
        if sub_metric == "sov99":
            return Sov99("SOV_99", ref, pred, self.zero_delta, None, segmentation)
        if sub_metric == "sov94":
            return Sov94("SOV_94", ref, pred, self.zero_delta, False, segmentation)
        if sub_metric == "looseoverlap":
            return LooseOverlap("LooseOverlap", ref, pred, segmentation)
        if sub_metric == "strictoverlap":
            return StrictOverlap("StrictOverlap", ref, pred, self.zero_delta, segmentation)
        raise ValueError("SubMetric choice is invalid")

    def calculate(self, sub_metric: str = "") -> float:
        segmentation = Segmentation(self.resulting_ref, self.resulting_pred)
        return self._metric(sub_metric, segmentation).calculate_all()


def create_mutation_metrics(
    metric_name: str,
    consensus_ref: str,
    mutated_ref: str,
    consensus_pred: str,
    mutated_pred: str,
    lambda_: float = 1.0,
    zero_delta: bool = False,
) -> list[MutMetric]:
    """Build the mutation metric selected by name."""
    key = metric_name.lower()
    args = (consensus_ref, mutated_ref, consensus_pred, mutated_pred)
    if key == "accuracy":
        return [MutAccuracy("Accuracy", *args)]
    if key == "consistency":
        return [MutConsistency("Consistency", *args)]
    if key == "precision":
        return [MutPrecision("Precision", *args, lambda_, zero_delta)]
    raise ValueError("Metric choice is invalid")