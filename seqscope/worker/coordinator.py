"""
Background execution of progressive alignments.

An AlignmentCoordinator owns at most one worker process, started on the
first submit and reused for later jobs, one job at a time. Requests and
events travel over multiprocessing queues; cancellation is a
multiprocessing.Event that the worker checks between merge steps.

Typical use:

    with AlignmentCoordinator() as coordinator:
        job = coordinator.submit([("a", "ATGC"), ("b", "ATC")])
        for event in job.events():
            if isinstance(event, ProgressEvent):
                print(event.percent)
        alignment = job.result()
"""

import logging
import multiprocessing
import queue
import uuid
from collections import deque
from typing import Iterable, Iterator, Optional

from seqscope.config import Settings, get_settings
from seqscope.exceptions import (
    AlignmentCancelled,
    AlignmentJobError,
    InvalidInputError,
    JobInProgressError,
)
from seqscope.msa.models import Alignment
from seqscope.msa.progressive import ProgressiveAligner, RecordLike, as_record_pairs
from seqscope.utils.alignment import ScoringScheme
from seqscope.utils.sequences import clean_sequence
from seqscope.worker.messages import (
    AlignRequest,
    CancelledEvent,
    ErrorEvent,
    JobEvent,
    ProgressEvent,
    ResultEvent,
    WorkerEvent,
)

logger = logging.getLogger(__name__)


def run_request(request: AlignRequest, events, cancel_flag) -> None:
    """Run one alignment request and publish its events."""
    aligner = ProgressiveAligner(scoring=request.scoring, cancel_flag=cancel_flag)

    def report(fraction: float) -> None:
        events.put(ProgressEvent(request.job_id, fraction))

    try:
        alignment = aligner.build(request.records, progress=report)
    except AlignmentCancelled:
        logger.info("Alignment job %s cancelled", request.job_id)
        events.put(CancelledEvent(request.job_id))
        return
    except Exception as e:
        logger.exception("Alignment job %s failed", request.job_id)
        events.put(ErrorEvent(request.job_id, str(e) or type(e).__name__))
        return

    events.put(ResultEvent(request.job_id, alignment))


def worker_main(requests, events, cancel_flag) -> None:
    """Worker process loop; a None request shuts it down."""
    while True:
        request = requests.get()
        if request is None:
            break
        run_request(request, events, cancel_flag)


class AlignmentJob:
    """
    Handle for one submitted alignment.

    events() yields ProgressEvent objects in increasing order followed by
    exactly one ResultEvent or ErrorEvent. A cancelled job yields nothing
    further: no result and no error.
    """

    def __init__(self, job_id: str, coordinator: "AlignmentCoordinator", size: int):
        self.job_id = job_id
        self.size = size
        self._coordinator = coordinator
        self._cancelled = False
        self._done = False
        self._outcome: Optional[JobEvent] = None
        self._pending: deque = deque()

    def __repr__(self) -> str:
        return f"AlignmentJob({self.job_id!r}, size={self.size}, done={self._done})"

    @property
    def done(self) -> bool:
        return self._done

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation; honoured at the next merge-step boundary."""
        self._coordinator.cancel(self)

    def events(self) -> Iterator[JobEvent]:
        """Iterate over the job's events, blocking until it terminates."""
        while not self._done:
            if self._pending:
                event = self._pending.popleft()
            else:
                event = self._coordinator._next_event(self)

            if isinstance(event, ProgressEvent):
                if not self._cancelled:
                    yield event
                continue

            self._done = True
            if self._cancelled or isinstance(event, CancelledEvent):
                return
            self._outcome = event
            yield event

    def result(self) -> Optional[Alignment]:
        """
        Wait for the job to finish.

        Returns:
            The Alignment, or None if the job was cancelled

        Raises:
            AlignmentJobError: If the job reported an error
        """
        for _ in self.events():
            pass

        if isinstance(self._outcome, ResultEvent):
            return self._outcome.alignment
        if isinstance(self._outcome, ErrorEvent):
            raise AlignmentJobError(self.job_id, self._outcome.message)
        return None


class AlignmentCoordinator:
    """
    Runs progressive alignments off the calling thread.

    Only one job may be live at a time. The coordinator keeps no state
    across jobs apart from the active job handle and its worker process.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else get_settings()
        self._context = multiprocessing.get_context(self.settings.worker_start_method)
        self._process = None
        self._requests = None
        self._events = None
        self._cancel_flag = None
        self._active: Optional[AlignmentJob] = None

    def __enter__(self) -> "AlignmentCoordinator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    @property
    def active_job(self) -> Optional[AlignmentJob]:
        return self._active

    @property
    def worker_pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    def get_job(self, job_id: str) -> Optional[AlignmentJob]:
        """Find the active job by id."""
        if self._active is not None and self._active.job_id == job_id:
            return self._active
        return None

    def submit(
        self,
        records: Iterable[RecordLike],
        scoring: Optional[ScoringScheme] = None,
        normalize: Optional[bool] = None
    ) -> AlignmentJob:
        """
        Start aligning sequences in the background.

        Args:
            records: SequenceRecord objects or (name, sequence) pairs
            scoring: Pairwise scoring; defaults to the configured scores
            normalize: Strip whitespace and uppercase sequences first;
                defaults to Settings.normalize_sequences

        Returns:
            Handle for the new job

        Raises:
            InvalidInputError: No sequences, or more residues than allowed
            JobInProgressError: Another job is still running
        """
        pairs = as_record_pairs(records)
        if not pairs:
            raise InvalidInputError("At least one sequence is required to build an alignment")

        if normalize is None:
            normalize = self.settings.normalize_sequences
        if normalize:
            pairs = [(name, clean_sequence(seq)) for name, seq in pairs]

        total_residues = sum(len(seq) for _, seq in pairs)
        limit = self.settings.max_alignment_residues
        if limit and total_residues > limit:
            raise InvalidInputError(
                f"Alignment request has {total_residues} residues; the limit is {limit}"
            )

        active = self._active
        if active is not None and not active.done:
            if active.cancelled:
                active.result()
            elif not self._finished(active):
                raise JobInProgressError(f"Alignment job {active.job_id} is still running")

        if scoring is None:
            scoring = ScoringScheme(
                match=self.settings.match_score,
                mismatch=self.settings.mismatch_score,
                gap=self.settings.gap_penalty,
            )

        self._ensure_worker()
        self._cancel_flag.clear()

        job = AlignmentJob(str(uuid.uuid4()), self, len(pairs))
        self._active = job
        self._requests.put(AlignRequest(job.job_id, pairs, scoring))
        logger.info(
            "Submitted alignment job %s (%d sequences, %d residues)",
            job.job_id, len(pairs), total_residues
        )
        return job

    def cancel(self, job: AlignmentJob) -> None:
        """Cancel a job; a finished job is left untouched."""
        if job.done or job.cancelled:
            return
        job._cancelled = True
        if job is self._active and self._cancel_flag is not None:
            self._cancel_flag.set()
        logger.info("Cancellation requested for alignment job %s", job.job_id)

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop the worker process, cancelling any live job."""
        if self._active is not None and not self._active.done:
            self.cancel(self._active)

        if self._process is not None and self._process.is_alive():
            self._requests.put(None)
            self._process.join(timeout)
        self._discard_worker()

    def _ensure_worker(self) -> None:
        if self._process is not None and self._process.is_alive():
            return
        self._discard_worker()

        self._requests = self._context.Queue()
        self._events = self._context.Queue()
        self._cancel_flag = self._context.Event()
        self._process = self._context.Process(
            target=worker_main,
            args=(self._requests, self._events, self._cancel_flag),
            name="seqscope-align-worker",
            daemon=True,
        )
        self._process.start()
        logger.debug("Started alignment worker pid %d", self._process.pid)

    def _discard_worker(self) -> None:
        if self._process is not None:
            if self._process.is_alive():
                self._process.terminate()
                self._process.join()
            logger.debug("Alignment worker pid %s stopped", self._process.pid)
        for q in (self._requests, self._events):
            if q is not None:
                q.close()
        self._process = None
        self._requests = None
        self._events = None
        self._cancel_flag = None

    def _finished(self, job: AlignmentJob) -> bool:
        """
        Buffer events the worker already published for job, without blocking.

        Returns True once the job's terminal event has arrived or the
        worker has died; the job's own events() still yields the buffer.
        """
        while self._events is not None:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            if event.job_id == job.job_id:
                job._pending.append(event)

        if any(not isinstance(e, ProgressEvent) for e in job._pending):
            return True
        if self._process is None or not self._process.is_alive():
            job._pending.append(ErrorEvent(job.job_id, "Alignment worker exited unexpectedly"))
            self._discard_worker()
            return True
        return False

    def _next_event(self, job: AlignmentJob) -> WorkerEvent:
        """Block until the worker publishes the next event for this job."""
        while True:
            if self._events is None:
                return ErrorEvent(job.job_id, "Alignment worker is not running")
            try:
                event = self._events.get(timeout=self.settings.worker_poll_interval)
            except queue.Empty:
                if not self._process.is_alive():
                    logger.error("Alignment worker exited during job %s", job.job_id)
                    self._discard_worker()
                    return ErrorEvent(job.job_id, "Alignment worker exited unexpectedly")
                continue

            if event.job_id != job.job_id:
                logger.debug("Dropping event for stale job %s", event.job_id)
                continue
            return event
