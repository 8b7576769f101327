"""
Background alignment jobs.

Progressive alignment runs in a separate worker process; callers hold an
AlignmentJob handle to follow progress, fetch the result or cancel.
"""

from seqscope.worker.messages import (
    ProgressEvent,
    ResultEvent,
    ErrorEvent,
    JobEvent,
)

from seqscope.worker.coordinator import (
    AlignmentCoordinator,
    AlignmentJob,
)

__all__ = [
    "ProgressEvent",
    "ResultEvent",
    "ErrorEvent",
    "JobEvent",
    "AlignmentCoordinator",
    "AlignmentJob",
]
