"""
Consensus and summary statistics for multiple sequence alignments.

Column votes count non-gap residues only. Among residues with the same
count, the one seen first (top row downwards) wins.
"""

from collections import Counter
from typing import List, Sequence, Union

from seqscope.msa.models import Alignment, AlignmentStats
from seqscope.utils.sequences import GAP

# Stand-in for columns with no residues when a consensus is only used
# as an alignment guide
PLACEHOLDER = "N"

# Columns with at most this many distinct residues count as conserved
CONSERVED_MAX_RESIDUES = 3

AlignmentLike = Union[Alignment, Sequence[str]]


def _rows(alignment: AlignmentLike) -> List[str]:
    if isinstance(alignment, Alignment):
        return alignment.rows
    return list(alignment)


def _column_counts(rows: List[str], index: int) -> Counter:
    return Counter(row[index] for row in rows if row[index] != GAP)


def majority_consensus(alignment: AlignmentLike, placeholder: str = PLACEHOLDER) -> str:
    """
    Guide consensus used when merging a new sequence into an alignment.

    Each column takes its most frequent residue; a column without any
    residue becomes the placeholder symbol.

    Example:
        >>> majority_consensus(["AT-C", "AG-G"])
        'ATNC'
    """
    rows = _rows(alignment)
    if not rows:
        return ""

    symbols = []
    for i in range(len(rows[0])):
        counts = _column_counts(rows, i)
        symbols.append(counts.most_common(1)[0][0] if counts else placeholder)
    return "".join(symbols)


def consensus(alignment: AlignmentLike) -> str:
    """
    Display consensus of an alignment.

    A column is a gap when more than half of the rows are gapped there;
    otherwise its most frequent residue wins.

    Args:
        alignment: Alignment or list of equal-length gapped rows

    Returns:
        Consensus string with one symbol per column

    Example:
        >>> consensus(["ATGC", "ATGG", "ATCC"])
        'ATGC'
    """
    rows = _rows(alignment)
    if not rows:
        return ""

    n_rows = len(rows)
    symbols = []
    for i in range(len(rows[0])):
        counts = _column_counts(rows, i)
        gap_count = n_rows - sum(counts.values())
        if gap_count > n_rows / 2:
            symbols.append(GAP)
        else:
            symbols.append(counts.most_common(1)[0][0])
    return "".join(symbols)


def alignment_stats(alignment: AlignmentLike) -> AlignmentStats:
    """
    Compute identity, gap and conservation statistics.

    A column is identical when every row carries the same residue and no
    row is gapped, gapped when any row is gapped, and conserved when it
    holds at most three distinct residues. Identity is a percentage of
    columns; the gap percentage divides gapped columns by rows x columns.

    Args:
        alignment: Alignment or list of equal-length gapped rows

    Returns:
        AlignmentStats; all percentages are 0 for an empty alignment
    """
    rows = _rows(alignment)
    n_rows = len(rows)
    length = len(rows[0]) if rows else 0

    identical = 0
    gapped = 0
    conserved = 0

    for i in range(length):
        counts = _column_counts(rows, i)
        residues = sum(counts.values())

        if len(counts) == 1 and residues == n_rows:
            identical += 1
        if residues < n_rows:
            gapped += 1
        if len(counts) <= CONSERVED_MAX_RESIDUES:
            conserved += 1

    if length == 0:
        return AlignmentStats(
            length=0, sequences=n_rows, identity=0.0, gaps=0.0, conserved_positions=0
        )

    return AlignmentStats(
        length=length,
        sequences=n_rows,
        identity=100.0 * identical / length,
        gaps=100.0 * gapped / (length * n_rows),
        conserved_positions=conserved,
    )
