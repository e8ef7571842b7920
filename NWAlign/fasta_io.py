"""
FASTA reading and writing
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Union

from .exceptions import FastaFormatError

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class FastaEntry:
    header: str
    sequence: str


def parse_fasta(content: str) -> List[FastaEntry]:
    """
    Parse FASTA text into entries

    Every record starts with a ``>`` header line; the following non-blank
    lines are joined into the sequence, with all whitespace removed and
    letters upper-cased.

    Example:
        >>> parse_fasta(">s1\\nacg t\\nTT\\n")
        [FastaEntry(header='s1', sequence='ACGTTT')]
    """
    entries = []
    for record in content.strip().split(">"):
        if not record.strip():
            continue
        lines = [line for line in record.splitlines() if line.strip()]
        header = lines[0].strip()
        sequence = _WHITESPACE.sub("", "".join(lines[1:])).upper()
        if not sequence:
            raise FastaFormatError(f"Malformed FASTA: empty sequence for header: {header}")
        entries.append(FastaEntry(header, sequence))
    return entries


def read_fasta(path: Union[str, Path]) -> List[FastaEntry]:
    """Read and parse a FASTA file; a file without records is an error"""
    path = Path(path)
    entries = parse_fasta(path.read_text())
    if not entries:
        raise FastaFormatError(f"No sequences found in file: {path.name}")
    return entries


def write_fasta(
    records: Union[Mapping[str, str], Iterable[FastaEntry]],
    path: Union[str, Path],
    width: int = 80
) -> None:
    """Write ``{header: sequence}`` or FastaEntry records, wrapping at ``width``"""
    if isinstance(records, Mapping):
        items = list(records.items())
    else:
        items = [(e.header, e.sequence) for e in records]

    with open(path, "w") as f:
        for header, seq in items:
            f.write(f">{header}\n")
            for i in range(0, len(seq), width):
                f.write(seq[i:i+width] + "\n")
