"""
Multiple Sequence Alignment Module
Center-star progressive alignment on top of the pairwise engine
"""

from .progressive import (
    MultipleAlignmentResult,
    ProgressiveAligner,
    column_identity,
    count_gaps,
    progressive_msa,
    sum_of_pairs_score
)

__all__ = [
    "MultipleAlignmentResult",
    "ProgressiveAligner",
    "progressive_msa",
    "column_identity",
    "count_gaps",
    "sum_of_pairs_score"
]
