"""Command-line calculator for secondary-structure, mutational and binary metrics."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator, Sequence
from typing import TextIO

from .fasta import FastaRecord, check_file, has_fasta_ending, read_fasta
from .mutation import create_mutation_metrics
from .secondary import create_metrics
from .stats import create_stat_metrics

_FASTA_NAME_WARNING = (
    "WARNING: You are most likely (unintentionally) using the fasta FILENAME as a sequence "
    "itself. Please add -f flag to read the fasta file"
)
_SUB_METRIC_WARNING = (
    "WARNING: A sub-metric can also be used. Use -s or --subMetric with your choice. "
    "Use --help for a list of choices"
)


def run_default(
    metric_name: str,
    reference: str,
    predicted: str,
    lambda_: float = 1.0,
    zero_delta: bool = False,
    out: TextIO | None = None,
) -> None:
    """Print per-class and overall values of the selected secondary-structure metrics."""
    out = out if out is not None else sys.stdout
    for metric in create_metrics(metric_name, reference, predicted, lambda_, zero_delta):
        for ss_class in metric.classes:
            out.write(f"{metric.name}_i\t{ss_class}\t{metric.calculate_class(ss_class):.3f}\n")
        out.write(f"{metric.name}\t{metric.calculate_all():.3f}\n")


def run_mutation(
    metric_name: str,
    consensus_ref: str,
    mutated_ref: str,
    consensus_pred: str,
    mutated_pred: str,
    lambda_: float = 1.0,
    zero_delta: bool = False,
    sub_metric: str = "",
    out: TextIO | None = None,
) -> None:
    """Print the selected mutation metric and the sequences it was computed on."""
    out = out if out is not None else sys.stdout
    metrics = create_mutation_metrics(
        metric_name, consensus_ref, mutated_ref, consensus_pred, mutated_pred, lambda_, zero_delta
    )
    for metric in metrics:
        name = f"{metric.name}-{sub_metric}" if sub_metric else metric.name
        out.write(f"{name}\t{metric.calculate(sub_metric):.3f}\n")
        out.write(f">Resulting Reference sequence\n{metric.resulting_ref}\n")
        out.write(f">Resulting Prediction sequence\n{metric.resulting_pred}\n")


def run_statistics(
    metric_name: str,
    reference: str,
    predicted: str,
    positive_class: str,
    out: TextIO | None = None,
) -> None:
    """Print the selected two-class statistical metrics."""
    out = out if out is not None else sys.stdout
    for metric in create_stat_metrics(metric_name, reference, predicted, positive_class):
        out.write(f"{metric.name}\t{metric.calculate():.3f}\n")


def _single_char(value: str) -> str:
    if len(value) != 1:
        raise argparse.ArgumentTypeError("positive class must be a single character")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with the 2d, mutational and binary subcommands."""
    parser = argparse.ArgumentParser(description="Protein structure metric calculator")
    parser.add_argument(
        "-f",
        "--fasta",
        action="store_true",
        dest="use_fasta",
        help="Reference and predicted inputs are taken as fasta file paths",
    )
    subparsers = parser.add_subparsers(dest="command")

    ss = subparsers.add_parser("2d", help="Calculate secondary structure metrics")
    ss.add_argument("-r", "--reference", required=True,
                    help="Reference sequence (Add -f for fasta files)")
    ss.add_argument("-p", "--predicted", required=True,
                    help="Predicted sequence (Add -f for fasta files)")
    ss.add_argument(
        "-m", "--metric", dest="metric", default="all",
        help="Name of the metric to calculate. Ignore to calculate all metrics. Metric Choices: "
        "Accuracy, SOV94, SOV99, SOVrefine, LooseOverlap, StrictOverlap",
    )
    ss.add_argument("-l", "--lambda", dest="lambda_", type=float, default=1.0,
                    help="Adjustable scale parameter for SOVrefine")
    ss.add_argument("-z", "--zeroDelta", dest="zero_delta", action="store_true",
                    help="This will omit the delta value (delta = 0)")

    mutational = subparsers.add_parser("mutational", help="Calculate mutational metrics")
    mutational.add_argument("-r", "--reference", nargs=2, required=True,
                            metavar=("CONSENSUS", "MUTATED"),
                            help="Reference consensus and mutated sequences "
                            "(Add -f for fasta files)")
    mutational.add_argument("-p", "--predicted", nargs=2, required=True,
                            metavar=("CONSENSUS", "MUTATED"),
                            help="Predicted consensus and mutated sequences "
                            "(Add -f for fasta files)")
    mutational.add_argument("-m", "--metric", dest="metric", required=True,
                            help="Name of the metric to calculate. Metric Choices: "
                            "Accuracy, Consistency, Precision")
    mutational.add_argument("-l", "--lambda", dest="lambda_", type=float, default=1.0,
                            help="Adjustable scale parameter for SOVrefine in "
                            "MutationPrecision calculation")
    mutational.add_argument("-z", "--zeroDelta", dest="zero_delta", action="store_true",
                            help="This will omit the delta value (delta = 0) in "
                            "MutationPrecision calculation")
    mutational.add_argument("-s", "--subMetric", dest="sub_metric", default="",
                            help="Sub-metric to utilize in the calculation of the mutational "
                            "metric. Choices for consistency: Binary metrics. "
                            "Choices for precision: 2d metrics")

    binary = subparsers.add_parser("binary", help="Calculate two-class statistical metrics")
    binary.add_argument("-r", "--reference", required=True,
                        help="Reference sequence (Add -f for fasta files)")
    binary.add_argument("-p", "--predicted", required=True,
                        help="Predicted sequence (Add -f for fasta files)")
    binary.add_argument(
        "-m", "--metric", dest="metric", default="all",
        help="Name of the metric to calculate. Ignore to calculate all metrics. Metric Choices: "
        "Accuracy, Sensitivity, Specificity, PPV, NPV, FPR, FNR, FOR, FDR, MCC",
    )
    binary.add_argument("-c", "--class", dest="positive_class", type=_single_char,
                        required=True,
                        help="Positive class in your binary classification problem")
    return parser


def _paired_records(
    reference_path: str, predicted_path: str
) -> Iterator[tuple[FastaRecord, FastaRecord]]:
    ref_records = read_fasta(reference_path)
    pred_records = read_fasta(predicted_path)
    for ref in ref_records:
        pred = next(pred_records, None)
        if pred is None:
            raise ValueError("Reference fasta file contains more records than predicted file")
        yield ref, pred
    if next(pred_records, None) is not None:
        raise ValueError("Predicted fasta file contains more records than reference file")


def _warn_if_fasta_names(*values: str) -> None:
    if any(has_fasta_ending(value) for value in values):
        print(_FASTA_NAME_WARNING, file=sys.stderr)


def _default_calculator(args: argparse.Namespace, out: TextIO) -> int:
    if args.use_fasta:
        check_file("reference", args.reference)
        check_file("predicted", args.predicted)
        for ref, pred in _paired_records(args.reference, args.predicted):
            out.write(f"Metrics calculated for reference {ref.id} and prediction {pred.id}\n")
            run_default(args.metric, ref.sequence, pred.sequence, args.lambda_,
                        args.zero_delta, out)
    else:
        _warn_if_fasta_names(args.reference, args.predicted)
        run_default(args.metric, args.reference, args.predicted, args.lambda_,
                    args.zero_delta, out)
    return 0


def _mutational_calculator(args: argparse.Namespace, out: TextIO) -> int:
    consensus_ref, mutated_ref = args.reference
    consensus_pred, mutated_pred = args.predicted
    options = (args.lambda_, args.zero_delta, args.sub_metric)
    if not args.use_fasta:
        _warn_if_fasta_names(consensus_ref, mutated_ref, consensus_pred, mutated_pred)
        run_mutation(args.metric, consensus_ref, mutated_ref, consensus_pred, mutated_pred,
                     *options, out)
        return 0

    check_file("consensus reference", consensus_ref)
    check_file("consensus mutation", mutated_ref)
    check_file("predicted reference", consensus_pred)
    check_file("predicted mutation", mutated_pred)
    cons_ref_records = read_fasta(consensus_ref)
    mut_ref_records = read_fasta(mutated_ref)
    cons_pred_records = read_fasta(consensus_pred)
    mut_pred_records = read_fasta(mutated_pred)
    followers = (
        (mut_ref_records, "mutated reference file"),
        (cons_pred_records, "consensus prediction file"),
        (mut_pred_records, "mutated prediction file"),
    )
    for cons_ref in cons_ref_records:
        others = []
        for records, label in followers:
            record = next(records, None)
            if record is None:
                raise ValueError(
                    f"Consensus reference fasta file contains more records than {label}"
                )
            others.append(record)
        mut_ref, cons_pred, mut_pred = others
        out.write(
            f"Mutation metrics calculated for consensus ({cons_ref.id}, {mut_ref.id}) "
            f"and prediction ({cons_pred.id}, {mut_pred.id})\n"
        )
        run_mutation(args.metric, cons_ref.sequence, mut_ref.sequence, cons_pred.sequence,
                     mut_pred.sequence, *options, out)
    leftovers = (
        (mut_ref_records, "Mutated reference"),
        (cons_pred_records, "Consensus prediction"),
        (mut_pred_records, "Mutated prediction"),
    )
    for records, label in leftovers:
        if next(records, None) is not None:
            raise ValueError(
                f"{label} fasta file contains more records than consensus reference file"
            )
    return 0


def _statistical_calculator(args: argparse.Namespace, out: TextIO) -> int:
    if args.use_fasta:
        check_file("reference", args.reference)
        check_file("predicted", args.predicted)
        for ref, pred in _paired_records(args.reference, args.predicted):
            out.write(f"Mutation metrics calculated for {ref.id}\n")
            run_statistics(args.metric, ref.sequence, pred.sequence, args.positive_class, out)
    else:
        _warn_if_fasta_names(args.reference, args.predicted)
        run_statistics(args.metric, args.reference, args.predicted, args.positive_class, out)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the calculator; return 0 on success and 1 on a reported error."""
    args = build_parser().parse_args(argv)
    out = sys.stdout
    try:
        if args.command is None:
            raise ValueError("Please use one of the available subcommands")
        args.metric = args.metric.lower()
        if args.command == "binary":
            return _statistical_calculator(args, out)
        if args.command == "mutational":
            if args.metric in ("consistency", "precision") and args.sub_metric == "":
                print(_SUB_METRIC_WARNING, file=sys.stderr)
            return _mutational_calculator(args, out)
        return _default_calculator(args, out)
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())