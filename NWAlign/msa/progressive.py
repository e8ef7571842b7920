"""
Multiple Sequence Alignment (MSA) - Progressive (center-star)
- All-pairs global alignment scores
- Center chosen by lowest total pairwise score
- Every other sequence aligned to the evolving center and merged in
- Sum-of-pairs rescoring of the final alignment
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as _np

from ..exceptions import InvalidArgumentError
from ..seq_alignment.pairwise import (
    PairwiseAligner,
    PairwiseAlignmentResult,
    warn_on_gap_marker,
)
from ..seq_alignment.scoring import GAP, ScoreParameters


# -------------------------
# Data structures
# -------------------------
@dataclass(frozen=True, eq=False)
class MultipleAlignmentResult:
    aligned_sequences: Tuple[str, ...]   # center first, then the rest in input order
    identity: float                      # % of fully conserved, gap-free columns
    gap_count: int
    score: int                           # sum-of-pairs
    order: Tuple[int, ...]               # input index of each row in aligned_sequences
    center_index: int
    pairwise_scores: _np.ndarray         # symmetric, zero diagonal

    @property
    def alignment_length(self) -> int:
        return len(self.aligned_sequences[0]) if self.aligned_sequences else 0

    def in_input_order(self) -> List[str]:
        """Aligned rows re-ordered to match the input sequence order"""
        rows = [""] * len(self.order)
        for row, input_idx in zip(self.aligned_sequences, self.order):
            rows[input_idx] = row
        return rows

    def conservation_string(self) -> str:
        """``*`` under every fully conserved column, blank elsewhere"""
        return "".join(
            "*" if _is_conserved(col) else " "
            for col in zip(*self.aligned_sequences)
        )

    def to_text(
        self,
        width: int = 60,
        names: Optional[Sequence[str]] = None,
        input_order: bool = False
    ) -> str:
        """
        Alignment blocks of ``width`` columns with a conservation line

        Parameters:
        -----------
        names : sequence of str, optional
            Row labels indexed by input position (default seq1, seq2, ...)
        input_order : bool
            List rows in input order instead of center first
        """
        def label(idx: int) -> str:
            return f"seq{idx + 1}" if names is None else names[idx]

        if input_order:
            indices = range(len(self.order))
            rows = self.in_input_order()
        else:
            indices = self.order
            rows = self.aligned_sequences
        labels = [label(idx) for idx in indices]
        pad = max(len(lbl) for lbl in labels) + 2
        conservation = self.conservation_string()

        lines = [
            "",
            f"Sequences: {len(rows)}  Center: {label(self.center_index)}",
            f"Identity: {self.identity:.2f}%",
            f"Gaps: {self.gap_count}",
            f"Score: {self.score}",
            "",
        ]
        for start in range(0, self.alignment_length, width):
            end = min(start + width, self.alignment_length)
            for lbl, row in zip(labels, rows):
                lines.append(f"{lbl.ljust(pad)}{row[start:end]}")
            lines.append(" " * pad + conservation[start:end])
            lines.append("")
        return "\n".join(lines)

    def view(
        self,
        width: int = 60,
        names: Optional[Sequence[str]] = None,
        input_order: bool = False
    ) -> None:
        print(self.to_text(width, names, input_order))


# -------------------------
# Column statistics
# -------------------------
def _is_conserved(column: Sequence[str]) -> bool:
    return len(set(column)) == 1 and column[0] != GAP


def count_gaps(aligned: Iterable[str]) -> int:
    return sum(row.count(GAP) for row in aligned)


def column_identity(aligned: Sequence[str]) -> float:
    """Percentage of columns where every row holds the same non-gap symbol"""
    length = len(aligned[0]) if aligned else 0
    if length == 0:
        return 0.0
    conserved = sum(1 for col in zip(*aligned) if _is_conserved(col))
    return conserved / length * 100


def sum_of_pairs_score(aligned: Sequence[str], scores: ScoreParameters) -> int:
    """Sum over every column of the scores of all unordered row pairs"""
    n = len(aligned)
    total = 0
    for col in zip(*aligned):
        for i in range(n):
            for j in range(i + 1, n):
                total += scores.column_pair(col[i], col[j])
    return total


# -------------------------
# Center selection & merge
# -------------------------
def _pairwise_score_matrix(
    sequences: Sequence[str],
    aligner: PairwiseAligner
) -> _np.ndarray:
    n = len(sequences)
    S = _np.zeros((n, n), dtype=_np.int64)
    for i in range(n):
        for j in range(i + 1, n):
            S[i, j] = S[j, i] = aligner.align(sequences[i], sequences[j]).score
    return S


def _select_center(S: _np.ndarray) -> int:
    # lowest total wins; argmin keeps the first index on ties
    return int(_np.argmin(S.sum(axis=1)))


def _new_gap_columns(result: PairwiseAlignmentResult) -> List[bool]:
    """
    One flag per alignment column, True where the traceback moved left,
    i.e. where a gap was opened in the (already gapped) center row.
    """
    return [r1 == r0 for (r0, _), (r1, _) in zip(result.path, result.path[1:])]


def _merge_aligned(existing: Sequence[str], new_gap_columns: Sequence[bool]) -> List[str]:
    """Re-expand every working row to the columns of the newly aligned center"""
    merged = []
    for seq in existing:
        row = []
        k = 0
        for is_new_gap in new_gap_columns:
            if is_new_gap:
                row.append(GAP)
            else:
                row.append(seq[k])
                k += 1
        merged.append("".join(row))
    return merged


# -------------------------
# Orchestrator (MSA)
# -------------------------
class ProgressiveAligner:
    """Center-star progressive multiple aligner built on PairwiseAligner"""

    def __init__(self, match: int = 1, mismatch: int = -1, gap: int = -1):
        self.scores = ScoreParameters(match=match, mismatch=mismatch, gap=gap)
        self._pairwise = PairwiseAligner.from_scores(self.scores)

    @classmethod
    def from_scores(cls, scores: ScoreParameters) -> "ProgressiveAligner":
        return cls(match=scores.match, mismatch=scores.mismatch, gap=scores.gap)

    def align(self, sequences: Iterable[str], verbose: bool = False) -> MultipleAlignmentResult:
        """
        Build progressive MSA:
          1) all-pairs global alignment scores
          2) center = lowest total score
          3) align each remaining sequence to the current center, merge gaps

        Rows of the result are ordered center first, then the remaining
        sequences in input order; ``order`` maps rows back to inputs.
        """
        return self._align(sequences, verbose)

    def _align(self, sequences: Iterable[str], verbose: bool) -> MultipleAlignmentResult:
        sequences = list(sequences)
        if len(sequences) < 2:
            raise InvalidArgumentError(
                f"Need at least 2 sequences, got {len(sequences)}"
            )
        # warn_on_gap_marker <- _align <- align / progressive_msa <- caller
        warn_on_gap_marker(sequences, stacklevel=4)

        if verbose:
            print("\n" + "="*70)
            print("PROGRESSIVE MULTIPLE SEQUENCE ALIGNMENT")
            print("="*70)
            print(f"Sequences: {len(sequences)}")
            print(f"Match: {self.scores.match}, Mismatch: {self.scores.mismatch}, Gap: {self.scores.gap}")
            print("="*70)

        # 1) pairwise scores
        S = _pairwise_score_matrix(sequences, self._pairwise)
        S.flags.writeable = False

        # 2) center
        center_index = _select_center(S)
        if verbose:
            print(f"✓ Pairwise scores computed ({len(sequences) * (len(sequences) - 1) // 2} pairs)")
            print(f"Center sequence: {center_index + 1} (total score {int(S[center_index].sum())})")

        # 3) progressive merge
        current = [sequences[center_index]]
        order = [center_index]
        for idx, seq in enumerate(sequences):
            if idx == center_index:
                continue
            result = self._pairwise.align(current[0], seq)
            current = _merge_aligned(current, _new_gap_columns(result))
            current.append(result.seq2_aligned)
            order.append(idx)
            if verbose:
                print(f"  merged sequence {idx + 1} (alignment length {len(current[0])})")

        msa = MultipleAlignmentResult(
            aligned_sequences=tuple(current),
            identity=column_identity(current),
            gap_count=count_gaps(current),
            score=sum_of_pairs_score(current, self.scores),
            order=tuple(order),
            center_index=center_index,
            pairwise_scores=S
        )

        if verbose:
            print("\nMSA RESULTS")
            print("="*70)
            print(f"Length: {msa.alignment_length}")
            print(f"Identity: {msa.identity:.2f}%")
            print(f"Gaps: {msa.gap_count}")
            print(f"Score: {msa.score}")
            print("="*70 + "\n")

        return msa


def progressive_msa(
    sequences: Iterable[str],
    match: int = 1,
    mismatch: int = -1,
    gap: int = -1,
    scores: Optional[ScoreParameters] = None,
    verbose: bool = False
) -> MultipleAlignmentResult:
    """Functional wrapper around ProgressiveAligner"""
    if scores is None:
        scores = ScoreParameters(match=match, mismatch=mismatch, gap=gap)
    return ProgressiveAligner.from_scores(scores)._align(sequences, verbose)
