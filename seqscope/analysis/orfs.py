"""
Open reading frame detection across all six reading frames.

Each frame is scanned codon by codon: the first ATG after the previous
ORF closed opens a new ORF, which closes at the next in-frame stop codon.
Start codons inside an open ORF are ignored. Reverse-strand ORFs are
reported in forward-strand, 0-indexed, half-open coordinates.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from seqscope.config import get_settings
from seqscope.utils.sequences import (
    START_CODONS,
    STOP_CODONS,
    reverse_complement,
    translate,
)

logger = logging.getLogger(__name__)


class Strand(str, Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass(frozen=True)
class ORF:
    """
    An open reading frame.

    Attributes:
        start: Inclusive forward-strand start
        end: Exclusive forward-strand end
        strand: Strand the ORF is read from
        frame: Codon offset (0-2) on its own strand
        sequence: Nucleotides as read on its own strand, ATG through stop
        protein: Translation, with the stop codon as '*'
    """
    start: int
    end: int
    strand: Strand
    frame: int
    sequence: str
    protein: str

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def orf_id(self) -> str:
        return f"ORF_{self.start}_{self.end}_{self.strand.value}"


def _scan_frame(seq: str, frame: int) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) spans of start-to-stop ORFs in one frame."""
    start = -1
    for i in range(frame, len(seq) - 2, 3):
        codon = seq[i:i + 3]
        if start == -1:
            if codon in START_CODONS:
                start = i
        elif codon in STOP_CODONS:
            yield start, i + 3
            start = -1


def find_orfs(sequence: str, min_length: Optional[int] = None) -> List[ORF]:
    """
    Find ORFs on both strands of a DNA sequence.

    Args:
        sequence: DNA sequence (case-insensitive)
        min_length: Minimum ORF length in nucleotides, stop codon included;
            defaults to Settings.min_orf_length

    Returns:
        ORFs sorted by forward-strand start; forward-strand ORFs come
        before reverse-strand ones with the same start

    Example:
        >>> orfs = find_orfs("ATGAAATGA", min_length=9)
        >>> orfs[0].protein
        'MK*'
    """
    if min_length is None:
        min_length = get_settings().min_orf_length

    seq = sequence.upper()
    seq_len = len(seq)
    orfs = []

    strands = [
        (Strand.FORWARD, seq),
        (Strand.REVERSE, reverse_complement(seq)),
    ]

    for strand, strand_seq in strands:
        for frame in range(3):
            for start, end in _scan_frame(strand_seq, frame):
                if end - start < min_length:
                    continue

                orf_seq = strand_seq[start:end]
                if strand is Strand.REVERSE:
                    start, end = seq_len - end, seq_len - start

                orfs.append(ORF(
                    start=start,
                    end=end,
                    strand=strand,
                    frame=frame,
                    sequence=orf_seq,
                    protein=translate(orf_seq),
                ))

    orfs.sort(key=lambda orf: orf.start)
    logger.debug("Found %d ORFs >= %d bp", len(orfs), min_length)
    return orfs
