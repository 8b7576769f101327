import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional, Tuple

from seqscope.exceptions import AlignmentError
from seqscope.utils.sequences import GAP


@dataclass(frozen=True)
class AlignedSequence:
    """One row of an alignment; '-' marks a gap."""
    name: str
    sequence: str

    def __len__(self) -> int:
        return len(self.sequence)

    @property
    def ungapped(self) -> str:
        return self.sequence.replace(GAP, "")


@dataclass(frozen=True)
class Alignment:
    """
    An immutable multiple sequence alignment.

    Rows keep their insertion order, which decides display order and
    consensus tie-breaks. Changing the contents means building a new
    Alignment.

    Attributes:
        sequences: Aligned rows, all of the same length
        name: Display name
        consensus: Optional precomputed consensus of the same length
        id: Unique identifier
        created_at: Creation time in seconds since the epoch
    """
    sequences: Tuple[AlignedSequence, ...]
    name: str = ""
    consensus: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, "sequences", tuple(self.sequences))
        lengths = {len(row) for row in self.sequences}
        if len(lengths) > 1:
            raise AlignmentError(f"Aligned rows have differing lengths: {sorted(lengths)}")
        if self.consensus is not None and self.sequences and len(self.consensus) != self.length:
            raise AlignmentError(
                f"Consensus length {len(self.consensus)} does not match alignment length {self.length}"
            )

    @classmethod
    def from_rows(
        cls,
        names: List[str],
        rows: List[str],
        name: str = ""
    ) -> "Alignment":
        """Build an alignment from parallel lists of names and gapped rows."""
        if len(names) != len(rows):
            raise AlignmentError("Number of names does not match number of rows")
        return cls(
            sequences=tuple(AlignedSequence(n, r) for n, r in zip(names, rows)),
            name=name,
        )

    @property
    def length(self) -> int:
        """Number of columns."""
        return len(self.sequences[0]) if self.sequences else 0

    @property
    def rows(self) -> List[str]:
        return [row.sequence for row in self.sequences]

    @property
    def names(self) -> List[str]:
        return [row.name for row in self.sequences]

    def __len__(self) -> int:
        return len(self.sequences)

    def __iter__(self) -> Iterator[AlignedSequence]:
        return iter(self.sequences)

    def column(self, index: int) -> List[str]:
        """Symbols of every row at one column."""
        return [row.sequence[index] for row in self.sequences]

    def with_consensus(self, consensus: str) -> "Alignment":
        """Return a copy carrying the given consensus string."""
        return replace(self, consensus=consensus)


@dataclass(frozen=True)
class AlignmentStats:
    """
    Alignment-wide summary metrics.

    Attributes:
        length: Number of columns
        sequences: Number of rows
        identity: Percent of columns where every row has the same residue
        gaps: Gapped columns as a percent of all rows x columns cells
        conserved_positions: Columns with at most 3 distinct residues
    """
    length: int
    sequences: int
    identity: float
    gaps: float
    conserved_positions: int
