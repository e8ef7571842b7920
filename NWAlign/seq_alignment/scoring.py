"""
Linear scoring scheme shared by the pairwise and progressive aligners
"""
from dataclasses import dataclass
from typing import Dict

GAP = "-"


@dataclass(frozen=True)
class ScoreParameters:
    """Match reward, mismatch penalty and per-symbol gap penalty.

    No ordering between the three values is enforced; any integers,
    including non-penalizing ones, are accepted.
    """
    match: int = 1
    mismatch: int = -1
    gap: int = -1

    def substitution(self, a: str, b: str) -> int:
        """Score of aligning symbol ``a`` against symbol ``b``"""
        return self.match if a == b else self.mismatch

    def column_pair(self, a: str, b: str, gap_char: str = GAP) -> int:
        """Score of two symbols sharing an alignment column (sum-of-pairs)"""
        if a == gap_char or b == gap_char:
            return self.gap
        return self.substitution(a, b)


# Default scoring scheme per alignment mode
DEFAULT_SCORES: Dict[str, ScoreParameters] = {
    "fast": ScoreParameters(match=1, mismatch=-1, gap=-2),
    "report": ScoreParameters(match=1, mismatch=-1, gap=-2),
    "msa": ScoreParameters(match=1, mismatch=-1, gap=-1),
}
