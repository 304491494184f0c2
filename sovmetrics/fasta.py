"""Reading FASTA records and recognising FASTA-like file names."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass

_LONG_ENDINGS = (".fa", ".fas", ".faa", ".fna", ".txt", ".fasta")
_MEDIUM_ENDINGS = (".fa", ".fas", ".faa", ".fna", ".txt")
_SHORT_ENDINGS = (".fa",)


@dataclass(frozen=True)
class FastaRecord:
    """One FASTA record: identifier, description and joined sequence."""

    id: str
    description: str
    sequence: str


def _parse(lines: Iterator[str]) -> Iterator[FastaRecord]:
    pending = next(lines, None)
    while pending is not None and pending.startswith(">"):
        identifier, _, description = pending[1:].partition(" ")
        parts: list[str] = []
        pending = next(lines, None)
        while pending is not None and not pending.startswith(">"):
            line = pending
            pending = next(lines, None)
            if not line:
                break
            parts.append(line)
        sequence = "".join(parts)
        if not sequence:
            raise ValueError("Input file format is incorrect: Contains empty record sequence")
        yield FastaRecord(identifier, description, sequence)


def read_fasta(path: str | os.PathLike[str]) -> Iterator[FastaRecord]:
    """Open a FASTA file and yield its records in order.

    Reading stops at the first line that does not start a record; an empty
    line ends the current record's sequence.
    """
    if os.path.isdir(path):
        raise IsADirectoryError(f"Input is a directory: {os.fspath(path)}")
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        raise OSError(f"Could not read file: {os.fspath(path)}") from exc
    return _parse(iter(text.split("\n")))


def has_fasta_ending(value: str) -> bool:
    """Whether a string looks like the name of a FASTA file."""
    if len(value) > len(".fasta"):
        endings = _LONG_ENDINGS
    elif len(value) > len(".fas"):
        endings = _MEDIUM_ENDINGS
    elif len(value) > len(".fa"):
        endings = _SHORT_ENDINGS
    else:
        return False
    return value.endswith(endings)


def check_file(input_name: str, path: str | os.PathLike[str]) -> None:
    """Raise FileNotFoundError when the given input path does not exist."""
    if not os.path.exists(path):
        raise FileNotFoundError(
            "Input for "
            + input_name
            + " is not a file. Did you mean to input a sequence? If so, remove the -f flag"
        )