"""
Exception hierarchy for seqscope.

Pure analysis functions never raise for well-formed sequence strings;
these exceptions cover invalid job submissions, malformed alignments and
failures reported back from the background worker.
"""


class SeqscopeError(Exception):
    """Base class for all seqscope errors."""


class InvalidInputError(SeqscopeError, ValueError):
    """Input rejected synchronously, before any work is started."""


class AlignmentError(SeqscopeError, ValueError):
    """An Alignment whose rows do not share a common length."""


class AlignmentCancelled(SeqscopeError):
    """Raised inside the progressive builder when a cancel was requested."""


class JobInProgressError(SeqscopeError):
    """A coordinator already has a live alignment job."""


class AlignmentJobError(SeqscopeError):
    """A background alignment job terminated with an error event."""

    def __init__(self, job_id: str, message: str):
        super().__init__(f"Alignment job {job_id} failed: {message}")
        self.job_id = job_id
        self.message = message
