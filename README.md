# sovmetrics

Metrics for judging protein structure predictions against a reference:

- **Secondary structure (2d)**: per-residue accuracy (Q3), loose and strict
  overlap, SOV'94, SOV'99 and SOV_refine, each reported per structure class
  and over all classes.
- **Mutational**: accuracy, consistency and precision of a prediction of how
  a mutation changes the structure, comparing consensus and mutated
  sequences.
- **Binary**: two-class statistics built from a confusion matrix: accuracy,
  sensitivity, specificity, PPV, NPV, FPR, FNR, FOR, FDR and the Matthews
  correlation coefficient.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Command line

The `sovmetrics` command has three subcommands: `2d`, `mutational` and
`binary`. Sequences are given directly on the command line. Add `-f`
(`--fasta`, placed before the subcommand) to read them from FASTA files
instead; records are then paired in file order, and a file with more records
than its partner is an error.

### Secondary structure

All metrics are computed unless `-m` is given:

```
sovmetrics 2d -r "CHHHHHHHHHHC" -p "CCCHHHHHCCCC"
sovmetrics 2d -r "CHHHHHHHHHHC" -p "CCCHHHHHCCCC" -m sovrefine -l 0.5
sovmetrics 2d -r "CHHHHHHHHHHC" -p "CCCHHHHHCCCC" -m sov99 -z
sovmetrics -f 2d -r reference.fasta -p predicted.fasta
```

Metric choices (case does not matter): `all` (the default), `accuracy`,
`sov94`, `sov99`, `sovrefine`, `looseoverlap`, `strictoverlap`.
`-l/--lambda` scales SOV_refine (default 1.0). `-z/--zeroDelta` sets delta to
zero in the metrics that use one.

Each metric prints one `<name>_i<TAB><class><TAB><value>` line per structure
class found in the reference, then `<name><TAB><value>` over all classes.

### Mutational

Mutational metrics take a consensus and a mutated sequence for both the
reference and the prediction:

```
sovmetrics mutational -r CCHHCC CCHECC -p CCHHCC CCHHCC -m accuracy
sovmetrics mutational -r CCHHCC CCHECC -p CCHHCC CCHECC -m consistency -s mcc
sovmetrics mutational -r CCHHCC CCHECC -p CCHHCC CCHECC -m precision -s sov99
```

`-m` is required: `accuracy`, `consistency` or `precision`.

- `accuracy` compares the (consensus, mutant) pair at each position.
- `consistency` marks each position as changed (`C`) or not (`N`) and scores
  the prediction with a binary metric; `-s` takes `sensitivity`,
  `specificity`, `ppv`, `npv`, `fpr`, `fnr`, `fdr`, `for` or `mcc`.
- `precision` interlaces consensus and mutant and scores the result with a
  2d metric; `-s` takes `sov94`, `sov99`, `sovrefine`, `looseoverlap` or
  `strictoverlap`, with `-l` and `-z` as for `2d`.

Sub-metric names are given in lower case. Without `-s` both `consistency` and
`precision` fall back to accuracy, and a reminder is printed to standard
error. Besides the value, the command prints the derived reference and
prediction sequences as `>Resulting Reference sequence` and
`>Resulting Prediction sequence` records.

### Binary

Binary metrics need the positive class, a single character:

```
sovmetrics binary -r "AABBAB" -p "AABABB" -c A
sovmetrics binary -r "AABBAB" -p "AABABB" -c A -m mcc
```

Metric choices: `all` (the default), `accuracy`, `sensitivity`,
`specificity`, `ppv`, `npv`, `fpr`, `fnr`, `for`, `fdr`, `mcc`. The reference
may contain at most two classes.

### Output and errors

Values are printed tab separated with three decimals. When a sequence given
without `-f` looks like a FASTA file name (`.fa`, `.fas`, `.faa`, `.fna`,
`.txt`, `.fasta`), a warning is printed to standard error. Invalid input
(sequences of differing length, empty sequences, more than two classes in a
binary problem, unknown metric or sub-metric names, missing files, mismatched
FASTA record counts) makes the command print the message to standard error
and exit with status 1.

## Library use

The modules are `sovmetrics.regions`, `sovmetrics.segmentation`,
`sovmetrics.secondary`, `sovmetrics.stats`, `sovmetrics.mutation`,
`sovmetrics.fasta` and `sovmetrics.cli`.

```python
from sovmetrics.secondary import Sov99, SovRefine, create_metrics
from sovmetrics.segmentation import Segmentation

ref = "CHHHHHHHHHHC"
pred = "CCCHHHHHHCCC"

sov = Sov99("SOV_99", ref, pred, False, None, None)
print(sov.calculate_all())
print(sov.calculate_class("H"))

# Share the block decomposition between several metrics.
seg = Segmentation(ref, pred)
refine = SovRefine("SOV_refine", ref, pred, False, 1.0, None, seg)
print(refine.calculate_all())

for metric in create_metrics("all", ref, pred):
    print(metric.name, metric.calculate_all())
```

```python
from sovmetrics.stats import ConfusionMatrix, stat_metric

matrix = ConfusionMatrix.from_sequences("AABBAB", "AABABB", "A")
print(matrix.tp, matrix.fp, matrix.tn, matrix.fn)
print(stat_metric("mcc", matrix).calculate())
```

```python
from sovmetrics.mutation import MutConsistency

metric = MutConsistency("Consistency", "CCHHCC", "CCHECC", "CCHHCC", "CCHECC")
print(metric.resulting_ref, metric.calculate("mcc"))
```

```python
from sovmetrics.fasta import read_fasta

for record in read_fasta("reference.fasta"):
    print(record.id, record.description, len(record.sequence))
```

`cli.run_default`, `cli.run_mutation` and `cli.run_statistics` write the same
report as the command to any text stream passed as `out`.

Invalid input raises `ValueError`; missing or unreadable files raise
`FileNotFoundError`, `IsADirectoryError` or `OSError`.