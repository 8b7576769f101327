"""
Multiple sequence alignment.

- Alignment data model (rows, consensus, statistics)
- Progressive alignment against a running majority consensus
- Display consensus and alignment-wide statistics
"""

from seqscope.msa.models import (
    AlignedSequence,
    Alignment,
    AlignmentStats,
)

from seqscope.msa.consensus import (
    consensus,
    majority_consensus,
    alignment_stats,
)

from seqscope.msa.progressive import (
    ProgressiveAligner,
    progressive_align,
    merge_sequence,
    insert_gap_columns,
)

__all__ = [
    "AlignedSequence",
    "Alignment",
    "AlignmentStats",
    "consensus",
    "majority_consensus",
    "alignment_stats",
    "ProgressiveAligner",
    "progressive_align",
    "merge_sequence",
    "insert_gap_columns",
]
