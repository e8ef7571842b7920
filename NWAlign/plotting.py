"""
Alignment plotting and export (score-matrix heatmap, MSA colour grid)
"""
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgb

from .msa.progressive import MultipleAlignmentResult
from .seq_alignment.pairwise import PairwiseAlignmentResult
from .seq_alignment.scoring import GAP

NUCLEOTIDE_COLORS: Dict[str, str] = {
    "A": "#4daf4a",  # green
    "C": "#377eb8",  # blue
    "G": "#984ea3",  # purple
    "T": "#e41a1c",  # red
    "U": "#e41a1c",  # treat U like T
}
GAP_COLOR = "#ffffff"

SAVE_FORMATS = (".svg", ".png", ".pdf")

# above this many cells the heatmap is drawn without numbers
_MAX_ANNOTATED_CELLS = 900


# ---------- helpers ----------
def _symbol_colors(symbols) -> Dict[str, Tuple[float, float, float]]:
    """nucleotide palette first, tab20 for anything else (stable by sort order)"""
    palette = plt.get_cmap("tab20")
    colors = {GAP: to_rgb(GAP_COLOR)}
    others = sorted(s for s in set(symbols) if s != GAP and s not in NUCLEOTIDE_COLORS)
    for s in set(symbols):
        if s in NUCLEOTIDE_COLORS:
            colors[s] = to_rgb(NUCLEOTIDE_COLORS[s])
    for k, s in enumerate(others):
        colors[s] = palette(k % palette.N)[:3]
    return colors


# ---------- main API ----------
def plot_score_matrix(
    result: PairwiseAlignmentResult,
    annotate: bool = True,
    show_path: bool = True,
    figsize: Optional[Tuple[float, float]] = None,
    cmap: str = "viridis",
    font_size: int = 9,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Draw the dynamic-programming matrix as a heatmap.
    - Column labels (top) are ``-`` + seq2, row labels are ``-`` + seq1.
    - The traceback path is drawn over the cells it visits.
    """
    matrix = result.score_matrix
    rows, cols = matrix.shape
    if figsize is None:
        figsize = (max(4.0, 0.45 * cols + 1.5), max(3.0, 0.45 * rows + 1.0))

    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(matrix, cmap=cmap, aspect="equal")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_xticks(range(cols))
    ax.set_xticklabels(list(GAP + result.seq2_original), fontsize=font_size)
    ax.set_yticks(range(rows))
    ax.set_yticklabels(list(GAP + result.seq1_original), fontsize=font_size)
    ax.xaxis.tick_top()

    if annotate and rows * cols <= _MAX_ANNOTATED_CELLS:
        mid = (matrix.max() + matrix.min()) / 2.0
        for i in range(rows):
            for j in range(cols):
                ax.text(j, i, str(int(matrix[i, j])), ha="center", va="center",
                        fontsize=font_size - 1,
                        color="black" if matrix[i, j] > mid else "white")

    if show_path:
        ys = [r for r, _ in result.path]
        xs = [c for _, c in result.path]
        ax.plot(xs, ys, color="#e41a1c", lw=2, marker="o", markersize=4)

    if title is None:
        title = f"Score {result.score}  Identity {result.identity_percent:.1f}%  Gaps {result.gap_count}"
    ax.set_title(title, fontsize=font_size + 2, fontweight="bold", pad=20)

    plt.tight_layout()
    return fig


def plot_msa(
    result: MultipleAlignmentResult,
    names: Optional[Sequence[str]] = None,
    figsize: Optional[Tuple[float, float]] = None,
    font_size: int = 9,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Colour grid of a multiple alignment, one row per aligned sequence
    (center first), symbols written in each cell.
    ``names`` are indexed by input position, like ``result.order``.
    """
    rows = result.aligned_sequences
    n, length = len(rows), result.alignment_length
    if figsize is None:
        figsize = (max(4.0, 0.3 * length + 2.0), max(2.0, 0.4 * n + 1.0))
    labels = [f"seq{idx + 1}" if names is None else names[idx] for idx in result.order]

    fig, ax = plt.subplots(figsize=figsize)
    if length > 0:
        colors = _symbol_colors("".join(rows))
        grid = np.array([[colors[ch] for ch in row] for row in rows])
        ax.imshow(grid, aspect="auto")
        for i, row in enumerate(rows):
            for j, ch in enumerate(row):
                ax.text(j, i, ch, ha="center", va="center", fontsize=font_size)
        conservation = result.conservation_string()
        ax.set_xticks(range(length))
        ax.set_xticklabels(list(conservation), fontsize=font_size)
    else:
        ax.set_xticks([])
    ax.set_yticks(range(n))
    ax.set_yticklabels(labels, fontsize=font_size)

    if title is None:
        title = f"Identity {result.identity:.1f}%  Gaps {result.gap_count}  Score {result.score}"
    ax.set_title(title, fontsize=font_size + 2, fontweight="bold")

    plt.tight_layout()
    return fig


def save_figure(fig: plt.Figure, path: Union[str, Path], dpi: int = 150) -> Path:
    """Write ``fig`` as SVG, PNG or PDF (chosen by suffix) and close it"""
    path = Path(path)
    if path.suffix.lower() not in SAVE_FORMATS:
        raise ValueError(
            f"Unsupported image format: {path.suffix!r} (use one of {', '.join(SAVE_FORMATS)})"
        )
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path
