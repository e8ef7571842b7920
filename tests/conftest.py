import os
import tempfile

os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("MPLCONFIGDIR", os.path.join(tempfile.gettempdir(), "nwalign_mplconfig"))

import matplotlib  # noqa: E402

matplotlib.use("Agg", force=True)

from pytest import fixture  # noqa: E402


@fixture
def textbook_pair():
    return "GATTACA", "GCATGCU"


@fixture
def fasta_file(tmp_path):
    path = tmp_path / "input.fasta"
    path.write_text(
        ">first sequence\n"
        "acgt\n"
        "\n"
        ">second\n"
        "AG T\n"
        ">third\n"
        "AC\n"
        "GT\n"
    )
    return path
