"""
Alignment requests with per-mode validation policies

A request bundles raw sequences, a scoring scheme and a mode. Each mode
maps to a ValidationPolicy; validators are plain callables so new rules
can be plugged in without subclassing.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from .exceptions import InvalidArgumentError, SequenceValidationError
from .fasta_io import read_fasta
from .msa.progressive import MultipleAlignmentResult, ProgressiveAligner
from .seq_alignment.pairwise import PairwiseAligner, PairwiseAlignmentResult
from .seq_alignment.scoring import DEFAULT_SCORES, ScoreParameters

# (index, sequence) -> None, raises SequenceValidationError
Validator = Callable[[int, str], None]

FAST_MODE_MAX_LENGTH = 20


# =========================
# Validators
# =========================
def non_empty(index: int, sequence: str) -> None:
    if not sequence:
        raise SequenceValidationError("sequence is empty", index)


def letters_only(index: int, sequence: str) -> None:
    if not all(ch.isalpha() for ch in sequence):
        raise SequenceValidationError("Please enter a valid sequence (letters only)", index)


def max_length(limit: int) -> Validator:
    """Reject sequences longer than ``limit`` symbols"""
    def _check(index: int, sequence: str) -> None:
        if len(sequence) > limit:
            raise SequenceValidationError(
                f"Sequence is too long ({len(sequence)} > {limit}). "
                "Use report mode for longer sequences.",
                index
            )
    return _check


@dataclass(frozen=True)
class ValidationPolicy:
    validators: Tuple[Validator, ...] = (non_empty, letters_only)
    min_sequences: int = 2
    max_sequences: Optional[int] = None

    def check(self, sequences: Sequence[str]) -> None:
        n = len(sequences)
        if n < self.min_sequences or (self.max_sequences is not None and n > self.max_sequences):
            if self.max_sequences == self.min_sequences:
                expected = f"exactly {self.min_sequences}"
            elif self.max_sequences is None:
                expected = f"at least {self.min_sequences}"
            else:
                expected = f"{self.min_sequences} to {self.max_sequences}"
            raise InvalidArgumentError(f"Need {expected} sequences, got {n}")

        for idx, seq in enumerate(sequences):
            for validator in self.validators:
                validator(idx, seq)


MODE_POLICIES: Dict[str, ValidationPolicy] = {
    "fast": ValidationPolicy(
        validators=(non_empty, letters_only, max_length(FAST_MODE_MAX_LENGTH)),
        min_sequences=2,
        max_sequences=2,
    ),
    "report": ValidationPolicy(min_sequences=2, max_sequences=2),
    "msa": ValidationPolicy(min_sequences=2),
}


# =========================
# Request
# =========================
@dataclass(frozen=True)
class AlignmentRequest:
    sequences: Tuple[str, ...]
    mode: str = "report"
    scores: Optional[ScoreParameters] = None
    policy: Optional[ValidationPolicy] = field(default=None, compare=False)

    def __post_init__(self):
        if self.mode not in MODE_POLICIES:
            raise InvalidArgumentError(
                f"Unknown mode: {self.mode!r} (expected one of {', '.join(MODE_POLICIES)})"
            )
        object.__setattr__(self, "sequences", tuple(self.sequences))
        if self.scores is None:
            object.__setattr__(self, "scores", DEFAULT_SCORES[self.mode])
        if self.policy is None:
            object.__setattr__(self, "policy", MODE_POLICIES[self.mode])

    @classmethod
    def from_fasta(
        cls,
        path: Union[str, Path],
        mode: str = "msa",
        scores: Optional[ScoreParameters] = None
    ) -> "AlignmentRequest":
        entries = read_fasta(path)
        return cls(tuple(e.sequence for e in entries), mode=mode, scores=scores)

    @property
    def is_multiple(self) -> bool:
        return self.mode == "msa"

    def normalized(self) -> "AlignmentRequest":
        """Copy with whitespace removed and sequences upper-cased"""
        clean = tuple("".join(seq.split()).upper() for seq in self.sequences)
        return replace(self, sequences=clean)

    def validate(self) -> "AlignmentRequest":
        """Normalize, then apply the mode's policy. Returns the normalized request."""
        request = self.normalized()
        request.policy.check(request.sequences)
        return request

    def run(self, verbose: bool = False) -> Union[PairwiseAlignmentResult, MultipleAlignmentResult]:
        request = self.validate()
        if request.is_multiple:
            return ProgressiveAligner.from_scores(request.scores).align(
                request.sequences, verbose=verbose
            )
        seq1, seq2 = request.sequences
        return PairwiseAligner.from_scores(request.scores).align(seq1, seq2, verbose=verbose)
