"""
NWAlign
Needleman-Wunsch global alignment and center-star progressive MSA
"""

from .exceptions import (
    FastaFormatError,
    InvalidArgumentError,
    NWAlignError,
    SequenceValidationError
)
from .fasta_io import FastaEntry, parse_fasta, read_fasta, write_fasta
from .msa import MultipleAlignmentResult, ProgressiveAligner, progressive_msa
from .request import AlignmentRequest, ValidationPolicy
from .seq_alignment import (
    DEFAULT_SCORES,
    PairwiseAligner,
    PairwiseAlignmentResult,
    ScoreParameters,
    pairwise
)

__version__ = "0.1.0"

__all__ = [
    "PairwiseAligner",
    "PairwiseAlignmentResult",
    "pairwise",
    "ProgressiveAligner",
    "MultipleAlignmentResult",
    "progressive_msa",
    "ScoreParameters",
    "DEFAULT_SCORES",
    "AlignmentRequest",
    "ValidationPolicy",
    "FastaEntry",
    "parse_fasta",
    "read_fasta",
    "write_fasta",
    "NWAlignError",
    "InvalidArgumentError",
    "SequenceValidationError",
    "FastaFormatError"
]
