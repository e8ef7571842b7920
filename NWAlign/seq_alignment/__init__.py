"""
Sequence Alignment Module
Provides global pairwise alignment and its scoring scheme
"""

from .pairwise import (
    PairwiseAligner,
    PairwiseAlignmentResult,
    pairwise
)
from .scoring import (
    DEFAULT_SCORES,
    GAP,
    ScoreParameters
)

__all__ = [
    "PairwiseAligner",
    "PairwiseAlignmentResult",
    "pairwise",
    "ScoreParameters",
    "DEFAULT_SCORES",
    "GAP"
]
