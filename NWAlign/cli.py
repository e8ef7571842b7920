"""Command line front end: ``nwalign pairwise`` and ``nwalign msa``."""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import List, Optional, Sequence

from .exceptions import InvalidArgumentError
from .fasta_io import FastaEntry, read_fasta, write_fasta
from .request import AlignmentRequest
from .seq_alignment.scoring import DEFAULT_SCORES, ScoreParameters


def _add_score_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--match", type=int, default=None,
                        help="Score for identical aligned symbols (mode default if omitted)")
    parser.add_argument("--mismatch", type=int, default=None,
                        help="Score for differing aligned symbols (mode default if omitted)")
    parser.add_argument("--gap", type=int, default=None,
                        help="Score for every gap symbol (mode default if omitted)")
    parser.add_argument("--plot", default=None,
                        help="Write a figure to this path (.svg, .png or .pdf)")
    parser.add_argument("--dpi", type=int, default=150, help="Figure resolution")
    parser.add_argument("--width", type=int, default=60, help="Characters per alignment block")
    parser.add_argument("--verbose", "-v", action="store_true", default=False,
                        help="Print progress while aligning")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nwalign",
        description="Global pairwise and center-star multiple sequence alignment."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pw = subparsers.add_parser("pairwise", help="Align two sequences")
    pw.add_argument("sequences", nargs="*", default=[],
                    help="Sequences given directly on the command line")
    pw.add_argument(
        "--fasta", "-fa",
        nargs="+",
        action="extend",
        dest="fastas",
        default=[],
        help="FASTA files; the first record of each file is used"
    )
    pw.add_argument("--mode", choices=("fast", "report"), default="report",
                    help="fast limits sequences to 20 symbols")
    pw.add_argument("--matrix", action="store_true", default=False,
                    help="Print the score matrix with the traceback path marked")
    _add_score_arguments(pw)

    msa = subparsers.add_parser("msa", help="Align every sequence of a FASTA file")
    msa.add_argument("fasta", help="FASTA file with at least two records")
    msa.add_argument("--input-order", action="store_true", default=False,
                     help="List rows in input order instead of center first")
    msa.add_argument("--out", default=None, help="Write the aligned rows as FASTA")
    _add_score_arguments(msa)

    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _scores_from_args(args: argparse.Namespace, mode: str) -> ScoreParameters:
    overrides = {k: getattr(args, k) for k in ("match", "mismatch", "gap")
                 if getattr(args, k) is not None}
    return replace(DEFAULT_SCORES[mode], **overrides)


def _run_pairwise(args: argparse.Namespace) -> None:
    sequences: List[str] = list(args.sequences)
    for fasta in args.fastas:
        sequences.append(read_fasta(fasta)[0].sequence)
    if len(sequences) != 2:
        raise InvalidArgumentError(f"pairwise needs exactly 2 sequences, got {len(sequences)}")

    request = AlignmentRequest(tuple(sequences), mode=args.mode,
                               scores=_scores_from_args(args, args.mode))
    result = request.run(verbose=args.verbose)
    print(result.to_text(args.width))
    if args.matrix:
        print(result.score_matrix_table())

    if args.plot:
        from .plotting import plot_score_matrix, save_figure
        save_figure(plot_score_matrix(result), args.plot, dpi=args.dpi)


def _run_msa(args: argparse.Namespace) -> None:
    entries = read_fasta(args.fasta)
    names = [e.header for e in entries]
    request = AlignmentRequest(tuple(e.sequence for e in entries), mode="msa",
                               scores=_scores_from_args(args, "msa"))
    result = request.run(verbose=args.verbose)

    print(result.to_text(args.width, names, input_order=args.input_order))

    if args.out:
        rows = result.in_input_order() if args.input_order else result.aligned_sequences
        order = range(len(names)) if args.input_order else result.order
        write_fasta([FastaEntry(names[idx], row) for idx, row in zip(order, rows)], args.out)

    if args.plot:
        from .plotting import plot_msa, save_figure
        save_figure(plot_msa(result, names), args.plot, dpi=args.dpi)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        if args.command == "pairwise":
            _run_pairwise(args)
        else:
            _run_msa(args)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
