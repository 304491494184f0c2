"""Secondary structure, mutational and binary metrics for protein structure predictions."""

__version__ = "1.0.0"

__all__ = ["regions", "segmentation", "secondary", "fasta", "stats", "mutation", "cli"]