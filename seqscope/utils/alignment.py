"""
Pairwise sequence alignment.

Implements global (Needleman-Wunsch) alignment with a linear gap
penalty, plus simple positional scoring helpers used by the viewers.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from seqscope.config import get_settings
from seqscope.utils.sequences import GAP

logger = logging.getLogger(__name__)

# Default scoring
MATCH_SCORE = 1
MISMATCH_SCORE = -1
GAP_PENALTY = -2

_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ScoringScheme:
    """Linear scoring: one score per match, mismatch and gap position."""
    match: float = MATCH_SCORE
    mismatch: float = MISMATCH_SCORE
    gap: float = GAP_PENALTY


@dataclass(frozen=True)
class PairwiseAlignment:
    """Result of a pairwise global alignment."""
    aligned_seq1: str
    aligned_seq2: str
    score: float

    @property
    def length(self) -> int:
        return len(self.aligned_seq1)

    def __str__(self) -> str:
        """Pretty print the alignment."""
        lines = []
        match_line = ""
        for c1, c2 in zip(self.aligned_seq1, self.aligned_seq2):
            if c1 == c2 and c1 != GAP:
                match_line += "|"
            elif c1 == GAP or c2 == GAP:
                match_line += " "
            else:
                match_line += "."

        # Split into chunks for display
        chunk_size = 60
        for i in range(0, len(self.aligned_seq1), chunk_size):
            lines.append(self.aligned_seq1[i:i + chunk_size])
            lines.append(match_line[i:i + chunk_size])
            lines.append(self.aligned_seq2[i:i + chunk_size])
            lines.append("")

        lines.append(f"Score: {self.score}")
        return "\n".join(lines)


@dataclass(frozen=True)
class AlignmentScore:
    """Positional score of two already-aligned rows."""
    score: float
    identity: float
    gaps: int


def estimate_alignment_cells(len1: int, len2: int) -> int:
    """Number of cells in the dynamic programming matrix."""
    return (len1 + 1) * (len2 + 1)


def is_expensive(len1: int, len2: int, max_cells: Optional[int] = None) -> bool:
    """
    Whether aligning sequences of these lengths exceeds the cost threshold.

    Args:
        len1: Length of the first sequence
        len2: Length of the second sequence
        max_cells: Matrix size threshold; defaults to Settings.pairwise_warn_cells
    """
    if max_cells is None:
        max_cells = get_settings().pairwise_warn_cells
    return estimate_alignment_cells(len1, len2) > max_cells


def _encode(sequence: str) -> np.ndarray:
    return np.fromiter(map(ord, sequence), dtype=np.int64, count=len(sequence))


def _close(x: float, y: float) -> bool:
    return abs(x - y) <= _TOLERANCE


def _score_matrix(
    seq1: str,
    seq2: str,
    match_score: float,
    mismatch_score: float,
    gap_penalty: float
) -> np.ndarray:
    """
    Fill the (len1+1) x (len2+1) global alignment score matrix.

    Each row is computed at once: the diagonal and vertical moves only
    depend on the previous row, and the horizontal recurrence
    cur[j] = max(best[j], cur[j-1] + gap) is a running maximum of
    best[k] - k*gap shifted back by j*gap.
    """
    m, n = len(seq1), len(seq2)
    codes1, codes2 = _encode(seq1), _encode(seq2)

    score_matrix = np.empty((m + 1, n + 1), dtype=np.float64)
    score_matrix[:, 0] = np.arange(m + 1) * gap_penalty
    score_matrix[0, :] = np.arange(n + 1) * gap_penalty

    if m == 0 or n == 0:
        return score_matrix

    column_gaps = np.arange(n + 1) * gap_penalty

    for i in range(1, m + 1):
        prev = score_matrix[i - 1]
        substitution = np.where(codes2 == codes1[i - 1], match_score, mismatch_score)
        best = np.maximum(prev[:-1] + substitution, prev[1:] + gap_penalty)

        row = np.empty(n + 1, dtype=np.float64)
        row[0] = score_matrix[i, 0]
        row[1:] = best
        score_matrix[i] = np.maximum.accumulate(row - column_gaps) + column_gaps

    return score_matrix


def needleman_wunsch(
    seq1: str,
    seq2: str,
    match_score: float = MATCH_SCORE,
    mismatch_score: float = MISMATCH_SCORE,
    gap_penalty: float = GAP_PENALTY
) -> PairwiseAlignment:
    """
    Global alignment using Needleman-Wunsch algorithm.

    Symbols are compared for exact equality, so sequences are aligned as
    given (no case folding). Traceback prefers the diagonal move, then a
    gap in seq2 (up), then a gap in seq1 (left).

    Args:
        seq1: First sequence
        seq2: Second sequence
        match_score: Score for identical symbols
        mismatch_score: Score for differing symbols
        gap_penalty: Penalty for each gap position (linear gap model)

    Returns:
        PairwiseAlignment with equal-length gapped rows and the optimal score

    Example:
        >>> result = needleman_wunsch("ATGC", "ATC")
        >>> result.aligned_seq2
        'AT-C'
    """
    m, n = len(seq1), len(seq2)

    if is_expensive(m, n):
        logger.warning(
            "Aligning %d x %d residues (%d matrix cells); this may be slow",
            m, n, estimate_alignment_cells(m, n)
        )

    score_matrix = _score_matrix(seq1, seq2, match_score, mismatch_score, gap_penalty)

    # Traceback
    aligned1, aligned2 = [], []
    i, j = m, n

    while i > 0 or j > 0:
        if i > 0 and j > 0:
            if seq1[i - 1] == seq2[j - 1]:
                current_score = match_score
            else:
                current_score = mismatch_score

            if _close(score_matrix[i, j], score_matrix[i - 1, j - 1] + current_score):
                aligned1.append(seq1[i - 1])
                aligned2.append(seq2[j - 1])
                i -= 1
                j -= 1
                continue

        if i > 0 and _close(score_matrix[i, j], score_matrix[i - 1, j] + gap_penalty):
            aligned1.append(seq1[i - 1])
            aligned2.append(GAP)
            i -= 1
        else:
            aligned1.append(GAP)
            aligned2.append(seq2[j - 1])
            j -= 1

    return PairwiseAlignment(
        aligned_seq1="".join(reversed(aligned1)),
        aligned_seq2="".join(reversed(aligned2)),
        score=float(score_matrix[m, n]),
    )


def pairwise_align(
    seq1: str,
    seq2: str,
    scoring: Optional[ScoringScheme] = None
) -> PairwiseAlignment:
    """Align two sequences globally with an optional scoring scheme."""
    if scoring is None:
        scoring = ScoringScheme()
    return needleman_wunsch(seq1, seq2, scoring.match, scoring.mismatch, scoring.gap)


def pairwise_identity(seq1: str, seq2: str) -> float:
    """
    Positional percent identity over the shorter of two sequences.

    No alignment is performed; characters are compared index by index.

    Example:
        >>> pairwise_identity("ATGC", "ATGA")
        75.0
    """
    length = min(len(seq1), len(seq2))
    if length == 0:
        return 0.0

    matches = sum(1 for c1, c2 in zip(seq1, seq2) if c1 == c2)
    return 100.0 * matches / length


def alignment_score(
    row1: str,
    row2: str,
    scoring: Optional[ScoringScheme] = None
) -> AlignmentScore:
    """
    Score two aligned rows column by column.

    A gap on either side, or an overhang where one row is shorter, costs
    the gap penalty.
    """
    if scoring is None:
        scoring = ScoringScheme()

    length = max(len(row1), len(row2))
    if length == 0:
        return AlignmentScore(score=0.0, identity=0.0, gaps=0)

    matches = 0
    gaps = 0
    score = 0.0

    for k in range(length):
        c1 = row1[k] if k < len(row1) else GAP
        c2 = row2[k] if k < len(row2) else GAP

        if c1 == GAP or c2 == GAP:
            gaps += 1
            score += scoring.gap
        elif c1 == c2:
            matches += 1
            score += scoring.match
        else:
            score += scoring.mismatch

    return AlignmentScore(score=score, identity=100.0 * matches / length, gaps=gaps)


def sum_of_pairs_score(
    rows: Sequence[str],
    scoring: Optional[ScoringScheme] = None
) -> float:
    """
    Calculate sum-of-pairs score for aligned sequences.

    Gap/gap pairs are skipped.

    Args:
        rows: Aligned sequences (same length)
        scoring: Scoring scheme (defaults to match 1, mismatch -1, gap -2)

    Returns:
        Sum of column scores over every pair of rows
    """
    if scoring is None:
        scoring = ScoringScheme()

    total_score = 0.0
    n_rows = len(rows)

    for i in range(n_rows):
        for j in range(i + 1, n_rows):
            for c1, c2 in zip(rows[i], rows[j]):
                if c1 == GAP and c2 == GAP:
                    continue
                elif c1 == GAP or c2 == GAP:
                    total_score += scoring.gap
                elif c1 == c2:
                    total_score += scoring.match
                else:
                    total_score += scoring.mismatch

    return total_score
