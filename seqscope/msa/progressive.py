"""
Progressive multiple sequence alignment.

Sequences are added one at a time: the first two are aligned pairwise,
then every further sequence is aligned against the majority consensus of
the rows built so far. Gap columns opened in the consensus are opened in
every existing row, so rows stay equal length and earlier rows are never
realigned.
"""

import logging
import threading
import time
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from seqscope.exceptions import AlignmentCancelled, InvalidInputError
from seqscope.msa.consensus import consensus, majority_consensus
from seqscope.msa.models import Alignment, AlignedSequence
from seqscope.utils.alignment import ScoringScheme, pairwise_align
from seqscope.utils.sequences import GAP, SequenceRecord

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]
RecordLike = Union[SequenceRecord, Tuple[str, str]]


def as_record_pairs(records: Iterable[RecordLike]) -> List[Tuple[str, str]]:
    pairs = []
    for i, record in enumerate(records):
        if isinstance(record, SequenceRecord):
            name, sequence = record.name, record.sequence
        else:
            name, sequence = record
        pairs.append((name or f"Seq{i + 1}", sequence))
    return pairs


def insert_gap_columns(rows: Sequence[str], aligned_guide: str) -> List[str]:
    """
    Open a gap column in every row wherever the aligned guide has a gap.

    The guide, with its gaps removed, must have the same length as the rows.

    Example:
        >>> insert_gap_columns(["AC", "AG"], "A-C")
        ['A-C', 'A-G']
    """
    merged = []
    for row in rows:
        residues = iter(row)
        merged.append("".join(GAP if c == GAP else next(residues) for c in aligned_guide))
    return merged


def merge_sequence(
    rows: Sequence[str],
    sequence: str,
    scoring: Optional[ScoringScheme] = None
) -> List[str]:
    """
    Add one raw sequence to a set of aligned rows.

    Args:
        rows: Existing equal-length aligned rows
        sequence: New ungapped sequence
        scoring: Pairwise scoring used against the guide consensus

    Returns:
        New list of rows with the aligned sequence appended last
    """
    guide = majority_consensus(rows)
    result = pairwise_align(guide, sequence, scoring)

    merged = insert_gap_columns(rows, result.aligned_seq1)
    merged.append(result.aligned_seq2)
    return merged


class ProgressiveAligner:
    """
    Builds an Alignment from an ordered list of sequences.

    Cancellation is cooperative: the flag is checked before each merge
    step and once more before the result is returned. Any object with
    set() and is_set() works as the flag, including a
    multiprocessing.Event shared with another process.

    Example:
        >>> aligner = ProgressiveAligner()
        >>> alignment = aligner.build([("a", "ATGC"), ("b", "ATC")])
        >>> alignment.rows
        ['ATGC', 'AT-C']
    """

    def __init__(
        self,
        scoring: Optional[ScoringScheme] = None,
        cancel_flag=None
    ):
        self.scoring = scoring if scoring is not None else ScoringScheme()
        self._cancel_flag = cancel_flag if cancel_flag is not None else threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_flag.is_set()

    def cancel(self) -> None:
        """Request cancellation at the next merge-step boundary."""
        self._cancel_flag.set()

    def _check_cancelled(self) -> None:
        if self._cancel_flag.is_set():
            raise AlignmentCancelled("Alignment cancelled")

    def build(
        self,
        records: Iterable[RecordLike],
        progress: Optional[ProgressCallback] = None,
        name: Optional[str] = None
    ) -> Alignment:
        """
        Align all sequences progressively.

        Args:
            records: SequenceRecord objects or (name, sequence) pairs, in merge order
            progress: Called with the completed fraction (i+1)/N after each sequence
            name: Alignment name; defaults to a timestamped label

        Returns:
            Alignment whose rows follow the input order, with its consensus

        Raises:
            InvalidInputError: If no sequences are given
            AlignmentCancelled: If cancel() was called before completion
        """
        pairs = as_record_pairs(records)
        if not pairs:
            raise InvalidInputError("At least one sequence is required to build an alignment")

        names = [n for n, _ in pairs]
        sequences = [s for _, s in pairs]
        total = len(sequences)
        logger.info("Building progressive alignment of %d sequences", total)

        rows = [sequences[0]]
        self._report(progress, 1, total)

        for i in range(1, total):
            self._check_cancelled()
            if i == 1:
                result = pairwise_align(sequences[0], sequences[1], self.scoring)
                rows = [result.aligned_seq1, result.aligned_seq2]
            else:
                rows = merge_sequence(rows, sequences[i], self.scoring)
            logger.debug("Merged %s; alignment length %d", names[i], len(rows[0]))
            self._report(progress, i + 1, total)

        self._check_cancelled()

        if name is None:
            name = f"Alignment ({time.strftime('%H:%M:%S')})"

        return Alignment(
            sequences=tuple(AlignedSequence(n, r) for n, r in zip(names, rows)),
            name=name,
            consensus=consensus(rows),
        )

    @staticmethod
    def _report(progress: Optional[ProgressCallback], done: int, total: int) -> None:
        if progress is not None:
            progress(done / total)


def progressive_align(
    records: Iterable[RecordLike],
    scoring: Optional[ScoringScheme] = None,
    progress: Optional[ProgressCallback] = None
) -> Alignment:
    """Build an alignment synchronously in the calling thread."""
    return ProgressiveAligner(scoring=scoring).build(records, progress=progress)
