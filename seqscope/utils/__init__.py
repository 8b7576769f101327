"""
Sequence manipulation and pairwise alignment utilities.

This module provides common operations for DNA/RNA/protein sequences:
- Kind detection and cleaning
- Complement and reverse complement
- Codon translation
- GC content
- Literal and regex searching
- Needleman-Wunsch global alignment and positional scoring
"""

from seqscope.utils.sequences import (
    SequenceKind,
    SequenceRecord,
    detect_sequence_kind,
    clean_sequence,
    ungap,
    complement,
    reverse_complement,
    gc_content,
    translate,
    hamming_distance,
    search_sequence,
    CODON_TABLE,
    START_CODONS,
    STOP_CODONS,
    GAP,
)

from seqscope.utils.alignment import (
    ScoringScheme,
    PairwiseAlignment,
    AlignmentScore,
    needleman_wunsch,
    pairwise_align,
    pairwise_identity,
    alignment_score,
    sum_of_pairs_score,
    estimate_alignment_cells,
    is_expensive,
)

__all__ = [
    "SequenceKind",
    "SequenceRecord",
    "detect_sequence_kind",
    "clean_sequence",
    "ungap",
    "complement",
    "reverse_complement",
    "gc_content",
    "translate",
    "hamming_distance",
    "search_sequence",
    "CODON_TABLE",
    "START_CODONS",
    "STOP_CODONS",
    "GAP",
    "ScoringScheme",
    "PairwiseAlignment",
    "AlignmentScore",
    "needleman_wunsch",
    "pairwise_align",
    "pairwise_identity",
    "alignment_score",
    "sum_of_pairs_score",
    "estimate_alignment_cells",
    "is_expensive",
]
