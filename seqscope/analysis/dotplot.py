"""
Windowed dot plots between two sequences.

Every pair of window starts (x in seq1, y in seq2) is scored by direct
positional identity of the two windows, without any shifting inside the
window. Window starts along seq1 are processed in blocks of rows, so
peak memory is bounded by BLOCK_CELLS rather than len(seq1) * len(seq2).
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from seqscope.config import get_settings

logger = logging.getLogger(__name__)

# Upper bound on match-matrix cells held at once per block
BLOCK_CELLS = 1 << 20


@dataclass(frozen=True)
class DotPlotPoint:
    x: int
    y: int
    score: float


def _encode(sequence: str) -> np.ndarray:
    return np.fromiter(map(ord, sequence), dtype=np.int64, count=len(sequence))


def _block_counts(
    codes1: np.ndarray,
    codes2: np.ndarray,
    start: int,
    stop: int,
    window_size: int
) -> np.ndarray:
    """Match counts for seq1 window starts in [start, stop) against all of seq2."""
    rows = stop - start
    ny = len(codes2) - window_size + 1
    matches = codes1[start:stop + window_size - 1, None] == codes2[None, :]

    counts = np.zeros((rows, ny), dtype=np.int64)
    for k in range(window_size):
        counts += matches[k:k + rows, k:k + ny]
    return counts


def _iter_blocks(
    seq1: str,
    seq2: str,
    window_size: int
) -> Iterator[Tuple[int, np.ndarray]]:
    nx = len(seq1) - window_size + 1
    ny = len(seq2) - window_size + 1
    if window_size <= 0 or nx <= 0 or ny <= 0:
        return

    codes1, codes2 = _encode(seq1), _encode(seq2)
    block_rows = max(1, BLOCK_CELLS // len(codes2))
    for start in range(0, nx, block_rows):
        stop = min(start + block_rows, nx)
        yield start, _block_counts(codes1, codes2, start, stop, window_size)


def window_identity_matrix(seq1: str, seq2: str, window_size: int) -> np.ndarray:
    """
    Matches per window pair.

    Builds the full matrix, so only use it for short sequences.

    Returns:
        Integer array of shape (len(seq1) - w + 1, len(seq2) - w + 1)
        whose [x, y] entry counts positions k < w with seq1[x+k] == seq2[y+k]
    """
    blocks = [counts for _, counts in _iter_blocks(seq1, seq2, window_size)]
    if not blocks:
        return np.zeros((0, 0), dtype=np.int64)
    return np.vstack(blocks)


def dot_plot(
    seq1: str,
    seq2: str,
    window_size: Optional[int] = None,
    threshold: Optional[float] = None
) -> List[DotPlotPoint]:
    """
    Compare two sequences window by window.

    Args:
        seq1: Sequence along the x axis
        seq2: Sequence along the y axis (pass seq1 again for a self plot)
        window_size: Window length; defaults to Settings.dotplot_window_size
        threshold: Minimum percent identity for a point to be kept;
            defaults to Settings.dotplot_threshold

    Returns:
        Points with score >= threshold, ordered by x then y

    Example:
        >>> dot_plot("ACGT", "ACGT", window_size=4, threshold=100)
        [DotPlotPoint(x=0, y=0, score=100.0)]
    """
    settings = get_settings()
    if window_size is None:
        window_size = settings.dotplot_window_size
    if threshold is None:
        threshold = settings.dotplot_threshold

    points = []
    for start, counts in _iter_blocks(seq1, seq2, window_size):
        scores = counts / window_size * 100
        xs, ys = np.nonzero(scores >= threshold)
        points.extend(
            DotPlotPoint(x=start + int(x), y=int(y), score=float(scores[x, y]))
            for x, y in zip(xs, ys)
        )

    logger.debug("Dot plot: %d window pairs at or above %.1f%%", len(points), threshold)
    return points
