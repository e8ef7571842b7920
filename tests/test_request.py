from pytest import mark, raises

from NWAlign.exceptions import InvalidArgumentError, SequenceValidationError
from NWAlign.msa import MultipleAlignmentResult
from NWAlign.request import (
    FAST_MODE_MAX_LENGTH,
    MODE_POLICIES,
    AlignmentRequest,
    ValidationPolicy,
    letters_only,
    max_length,
    non_empty,
)
from NWAlign.seq_alignment import DEFAULT_SCORES, PairwiseAlignmentResult, ScoreParameters


class TestValidators:
    def test_letters_only_accepts_protein(self):
        letters_only(0, "HEAGAWGHEE")

    @mark.parametrize("sequence", ["AC-T", "AC1", "A C", "AC*"])
    def test_letters_only_rejects(self, sequence):
        with raises(SequenceValidationError, match="letters only"):
            letters_only(1, sequence)

    def test_error_carries_index(self):
        with raises(SequenceValidationError) as exc_info:
            non_empty(1, "")
        assert exc_info.value.index == 1
        assert str(exc_info.value).startswith("Sequence 2:")

    def test_max_length(self):
        check = max_length(3)
        check(0, "ACG")
        with raises(SequenceValidationError, match="too long"):
            check(0, "ACGT")


class TestModePolicies:
    def test_fast_mode_length_limit(self):
        long_seq = "A" * (FAST_MODE_MAX_LENGTH + 1)
        with raises(SequenceValidationError, match="report mode"):
            AlignmentRequest((long_seq, "ACGT"), mode="fast").validate()

    def test_fast_mode_at_limit(self):
        seq = "A" * FAST_MODE_MAX_LENGTH
        AlignmentRequest((seq, seq), mode="fast").validate()

    def test_report_mode_has_no_length_limit(self):
        seq = "ACGT" * 50
        AlignmentRequest((seq, seq), mode="report").validate()

    @mark.parametrize("mode", ["fast", "report"])
    def test_pairwise_modes_need_two_sequences(self, mode):
        with raises(InvalidArgumentError, match="exactly 2"):
            AlignmentRequest(("ACGT", "ACGT", "ACGT"), mode=mode).validate()

    def test_msa_needs_two_or_more(self):
        with raises(InvalidArgumentError, match="at least 2"):
            AlignmentRequest(("ACGT",), mode="msa").validate()

    @mark.parametrize("mode", sorted(MODE_POLICIES))
    def test_every_mode_rejects_gap_marker(self, mode):
        with raises(SequenceValidationError):
            AlignmentRequest(("AC-GT", "ACGT"), mode=mode).validate()

    @mark.parametrize("mode", sorted(MODE_POLICIES))
    def test_every_mode_rejects_empty(self, mode):
        with raises(SequenceValidationError, match="empty"):
            AlignmentRequest(("", "ACGT"), mode=mode).validate()

    def test_unknown_mode(self):
        with raises(InvalidArgumentError, match="Unknown mode"):
            AlignmentRequest(("A", "A"), mode="slow")

    def test_ranged_policy_message(self):
        policy = ValidationPolicy(min_sequences=2, max_sequences=4)
        with raises(InvalidArgumentError, match="2 to 4"):
            policy.check(["A"] * 5)


class TestAlignmentRequest:
    def test_default_scores_follow_mode(self):
        assert AlignmentRequest(("A", "A")).scores == DEFAULT_SCORES["report"]
        assert AlignmentRequest(("A", "A"), mode="msa").scores == ScoreParameters(1, -1, -1)
        assert AlignmentRequest(("A", "A"), mode="fast").scores.gap == -2

    def test_normalized(self):
        request = AlignmentRequest(("ac gt\n", " tt"), mode="report").normalized()
        assert request.sequences == ("ACGT", "TT")

    def test_validate_returns_normalized_copy(self):
        original = AlignmentRequest(["acgt", "agt"])
        checked = original.validate()
        assert checked.sequences == ("ACGT", "AGT")
        assert original.sequences == ("acgt", "agt")

    def test_run_pairwise(self):
        result = AlignmentRequest(("gattaca", "gcatgcu"),
                                  scores=ScoreParameters(1, -1, -1)).run()
        assert isinstance(result, PairwiseAlignmentResult)
        assert result.seq1_aligned == "G-ATTACA"
        assert result.score == 0

    def test_run_msa(self):
        result = AlignmentRequest(("aaa", "aaa", "aat"), mode="msa").run()
        assert isinstance(result, MultipleAlignmentResult)
        assert result.gap_count == 0
        assert result.alignment_length == 3

    def test_run_rejects_before_aligning(self):
        with raises(SequenceValidationError):
            AlignmentRequest(("AC1", "ACG")).run()

    def test_pluggable_policy(self):
        def dna_only(index, sequence):
            if set(sequence) - set("ACGT"):
                raise SequenceValidationError("not DNA", index)

        policy = ValidationPolicy(validators=(non_empty, dna_only), min_sequences=2)
        request = AlignmentRequest(("ACGT", "ACGU"), mode="msa", policy=policy)
        with raises(SequenceValidationError, match="not DNA"):
            request.validate()

    def test_from_fasta(self, fasta_file):
        request = AlignmentRequest.from_fasta(fasta_file)
        assert request.mode == "msa"
        assert request.sequences == ("ACGT", "AGT", "ACGT")
        result = request.run()
        assert result.aligned_sequences == ("A-GT", "ACGT", "ACGT")
