from pytest import mark

from NWAlign.cli import main, parse_args
from NWAlign.fasta_io import read_fasta


class TestPairwiseCommand:
    def test_aligns_sequences(self, capsys):
        code = main(["pairwise", "gattaca", "gcatgcu", "--gap", "-1"])
        out = capsys.readouterr().out
        assert code == 0
        assert "seq1: G-ATTACA" in out
        assert "Score: 0" in out

    def test_prints_matrix(self, capsys):
        assert main(["pairwise", "A", "A", "--matrix"]) == 0
        assert "1*" in capsys.readouterr().out

    def test_reads_first_record_of_fasta(self, capsys, fasta_file):
        code = main(["pairwise", "--fasta", str(fasta_file), str(fasta_file)])
        assert code == 0
        assert "Identity: 100.00%" in capsys.readouterr().out

    def test_invalid_sequence(self, capsys):
        assert main(["pairwise", "AC1", "ACG"]) == 1
        assert "letters only" in capsys.readouterr().err

    def test_fast_mode_limit(self, capsys):
        assert main(["pairwise", "A" * 21, "A", "--mode", "fast"]) == 1
        assert "too long" in capsys.readouterr().err

    def test_wrong_sequence_count(self, capsys):
        assert main(["pairwise", "ACGT"]) == 1
        assert "exactly 2" in capsys.readouterr().err

    def test_plot(self, tmp_path):
        out = tmp_path / "matrix.svg"
        assert main(["pairwise", "ACGT", "AGT", "--plot", str(out)]) == 0
        assert out.exists()

    def test_default_scores(self):
        args = parse_args(["pairwise", "A", "B"])
        assert args.match is None and args.gap is None
        assert args.mode == "report"


class TestMsaCommand:
    def test_center_first_output(self, capsys, fasta_file):
        assert main(["msa", str(fasta_file)]) == 0
        out = capsys.readouterr().out
        assert "Center: second" in out
        assert "Score: 8" in out

    def test_input_order_and_fasta_out(self, capsys, fasta_file, tmp_path):
        out = tmp_path / "aligned.fasta"
        assert main(["msa", str(fasta_file), "--input-order", "--out", str(out)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "Sequences: 3  Center: second" in lines
        rows = [line for line in lines if line.startswith(("first sequence", "second", "third"))]
        assert rows == ["first sequence  ACGT", "second          A-GT", "third           ACGT"]
        assert " " * 16 + "* **" in lines
        written = read_fasta(out)
        assert [e.header for e in written] == ["first sequence", "second", "third"]
        assert [e.sequence for e in written] == ["ACGT", "A-GT", "ACGT"]

    @mark.parametrize("order_flag", [[], ["--input-order"]])
    def test_width_applies_to_both_orders(self, capsys, fasta_file, order_flag):
        assert main(["msa", str(fasta_file), "--width", "2"] + order_flag) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [line.split()[-1] for line in lines if line.startswith("second")] == ["A-", "GT"]
        assert " " * 16 + "* " in lines

    def test_center_first_fasta_out(self, fasta_file, tmp_path):
        out = tmp_path / "aligned.fasta"
        assert main(["msa", str(fasta_file), "--out", str(out)]) == 0
        assert [e.header for e in read_fasta(out)] == ["second", "first sequence", "third"]

    def test_plot(self, fasta_file, tmp_path):
        out = tmp_path / "msa.png"
        assert main(["msa", str(fasta_file), "--plot", str(out), "--dpi", "40"]) == 0
        assert out.exists()

    def test_single_record_fails(self, capsys, tmp_path):
        path = tmp_path / "one.fasta"
        path.write_text(">only\nACGT\n")
        assert main(["msa", str(path)]) == 1
        assert "at least 2" in capsys.readouterr().err

    def test_missing_file(self, capsys, tmp_path):
        assert main(["msa", str(tmp_path / "nope.fasta")]) == 1
        assert "Error" in capsys.readouterr().err
