"""
Messages exchanged with the background alignment worker.

Everything here is plain picklable data: requests carry owned copies of
the input sequences, and events carry the job id they belong to.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from seqscope.msa.models import Alignment
from seqscope.utils.alignment import ScoringScheme


@dataclass(frozen=True)
class AlignRequest:
    job_id: str
    records: List[Tuple[str, str]]
    scoring: ScoringScheme


@dataclass(frozen=True)
class ProgressEvent:
    """Fraction of sequences merged so far, (i+1)/N."""
    job_id: str
    fraction: float

    @property
    def percent(self) -> int:
        return round(self.fraction * 100)


@dataclass(frozen=True)
class ResultEvent:
    job_id: str
    alignment: Alignment


@dataclass(frozen=True)
class ErrorEvent:
    job_id: str
    message: str


@dataclass(frozen=True)
class CancelledEvent:
    """Worker acknowledgement that a job stopped; never shown to callers."""
    job_id: str


JobEvent = Union[ProgressEvent, ResultEvent, ErrorEvent]
WorkerEvent = Union[ProgressEvent, ResultEvent, ErrorEvent, CancelledEvent]
