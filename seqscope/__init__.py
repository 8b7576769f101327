"""
Seqscope: sequence analysis and alignment engine for genome viewers

This package provides:
- Pairwise global alignment (Needleman-Wunsch)
- Progressive multiple sequence alignment with consensus and statistics
- Background alignment jobs with progress and cancellation
- ORF detection, restriction site scanning, windowed GC content
- Windowed dot plots

Built on top of NumPy for the dynamic programming and windowed scans.
"""

import logging

__version__ = "0.1.0"
__author__ = "Seqscope Contributors"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from seqscope.utils import (
    reverse_complement,
    translate,
    gc_content,
    search_sequence,
    pairwise_align,
    needleman_wunsch,
    ScoringScheme,
    PairwiseAlignment,
    SequenceRecord,
)

from seqscope.msa import (
    Alignment,
    AlignmentStats,
    ProgressiveAligner,
    consensus,
    alignment_stats,
)

from seqscope.analysis import (
    find_orfs,
    find_restriction_sites,
    windowed_gc,
    dot_plot,
)

from seqscope.worker import (
    AlignmentCoordinator,
    AlignmentJob,
)

__all__ = [
    # Sequence utilities
    "reverse_complement",
    "translate",
    "gc_content",
    "search_sequence",
    "SequenceRecord",
    # Alignment
    "pairwise_align",
    "needleman_wunsch",
    "ScoringScheme",
    "PairwiseAlignment",
    "Alignment",
    "AlignmentStats",
    "ProgressiveAligner",
    "consensus",
    "alignment_stats",
    # Analyses
    "find_orfs",
    "find_restriction_sites",
    "windowed_gc",
    "dot_plot",
    # Background jobs
    "AlignmentCoordinator",
    "AlignmentJob",
]
