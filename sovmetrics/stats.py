"""Two-class confusion matrix and the statistical metrics derived from it."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ConfusionMatrix:
    """Counts of a binary classification against a reference labelling."""

    tp: int
    fp: int
    tn: int
    fn: int
    positive_class: str
    negative_class: str = " "

    @classmethod
    def from_sequences(cls, reference: str, predicted: str, positive_class: str) -> ConfusionMatrix:
        """Count agreements per position; the reference may hold at most two classes."""
        if len(reference) != len(predicted):
            raise ValueError("Reference and predicted sequences are not the same length")
        tp = fp = tn = fn = 0
        for ref, pred in zip(reference, predicted):
            if ref == positive_class:
                if ref == pred:
                    tp += 1
                else:
                    fn += 1
            elif ref == pred:
                tn += 1
            else:
                fp += 1
        classes = dict.fromkeys(reference)
        if len(classes) > 2:
            raise ValueError("Statistical binary metrics are for two-class problems only")
        negative = next((c for c in classes if c != positive_class), " ")
        return cls(tp, fp, tn, fn, positive_class, negative)


def _ratio_or_zero(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


class StatMetric(ABC):
    """A named metric computed from a confusion matrix."""

    default_name: ClassVar[str] = ""

    def __init__(self, name: str, matrix: ConfusionMatrix) -> None:
        self.name = name
        self.matrix = matrix

    @property
    def tp(self) -> float:
        return float(self.matrix.tp)

    @property
    def fp(self) -> float:
        return float(self.matrix.fp)

    @property
    def tn(self) -> float:
        return float(self.matrix.tn)

    @property
    def fn(self) -> float:
        return float(self.matrix.fn)

    @abstractmethod
    def calculate(self) -> float:
        """Value of the metric."""


class StatAccuracy(StatMetric):
    default_name = "Accuracy"

    def calculate(self) -> float:
        total = self.tp + self.tn + self.fp + self.fn
        if total == 0:
            return math.nan
        return (self.tp + self.tn) / total


class StatSensitivity(StatMetric):
    default_name = "Sensitivity"

    def calculate(self) -> float:
        return _ratio_or_zero(self.tp, self.tp + self.fn)


class StatSpecificity(StatMetric):
    default_name = "Specificity"

    def calculate(self) -> float:
        return _ratio_or_zero(self.tn, self.tn + self.fp)


class StatPosPredVal(StatMetric):
    default_name = "PositivePredictiveValue"

    def calculate(self) -> float:
        return _ratio_or_zero(self.tp, self.tp + self.fp)


class StatNegPredVal(StatMetric):
    default_name = "NegativePredictiveValue"

    def calculate(self) -> float:
        return _ratio_or_zero(self.tn, self.tn + self.fn)


class StatFalsePosRate(StatMetric):
    default_name = "FalsePositiveRate"

    def calculate(self) -> float:
        return _ratio_or_zero(self.fp, self.fp + self.tn)


class StatFalseNegRate(StatMetric):
    default_name = "FalseNegativeRate"

    def calculate(self) -> float:
        return _ratio_or_zero(self.fn, self.tp + self.fn)


class StatFalseOmissionRate(StatMetric):
    default_name = "FalseOmissionRate"

    def calculate(self) -> float:
        return _ratio_or_zero(self.fn, self.fn + self.tn)


class StatFalseDiscoveryRate(StatMetric):
    default_name = "FalseDiscoveryRate"

    def calculate(self) -> float:
        return _ratio_or_zero(self.fp, self.fp + self.tp)


class StatMatthewsCorrelationCoefficient(StatMetric):
    default_name = "MatthewsCorrelationCoefficient"

    def calculate(self) -> float:
        denominator = math.sqrt(
            (self.tp + self.fp) * (self.tp + self.fn) * (self.tn + self.fp) * (self.tn + self.fn)
        )
        return _ratio_or_zero(self.tp * self.tn - self.fp * self.fn, denominator)


_STAT_METRICS: dict[str, type[StatMetric]] = {
    "accuracy": StatAccuracy,
    "sensitivity": StatSensitivity,
    "specificity": StatSpecificity,
    "ppv": StatPosPredVal,
    "npv": StatNegPredVal,
    "fpr": StatFalsePosRate,
    "fnr": StatFalseNegRate,
    "for": StatFalseOmissionRate,
    "fdr": StatFalseDiscoveryRate,
    "mcc": StatMatthewsCorrelationCoefficient,
}


def stat_metric(key: str, matrix: ConfusionMatrix) -> StatMetric:
    """Build the metric registered under a short key such as "ppv" or "mcc"."""
    try:
        metric_cls = _STAT_METRICS[key]
    except KeyError:
        raise ValueError("Metric choice is invalid") from None
    return metric_cls(metric_cls.default_name, matrix)


def create_stat_metrics(
    metric_name: str, reference: str, predicted: str, positive_class: str
) -> list[StatMetric]:
    """Build the metrics selected by name ("all" for every one) over one confusion matrix."""
    key = metric_name.lower()
    matrix = ConfusionMatrix.from_sequences(reference, predicted, positive_class)
    if key == "all":
        return [metric_cls(metric_cls.default_name, matrix) for metric_cls in _STAT_METRICS.values()]
    return [stat_metric(key, matrix)]