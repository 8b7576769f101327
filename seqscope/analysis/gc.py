import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from seqscope.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GCPoint:
    position: int
    gc: float


def windowed_gc(
    sequence: str,
    window_size: Optional[int] = None,
    step: Optional[int] = None
) -> List[GCPoint]:
    """
    GC percentage in a sliding window.

    Windows start at 0 and advance by step while a full window still fits,
    so the last window starts at or before len(sequence) - window_size.

    Args:
        sequence: DNA or RNA sequence (case-insensitive)
        window_size: Window length in nucleotides; defaults to
            Settings.gc_window_size
        step: Distance between consecutive window starts; defaults to
            Settings.gc_step

    Returns:
        One GCPoint per window; empty when no full window fits or when
        window_size or step is not positive

    Example:
        >>> windowed_gc("GGCC", 4, 1)
        [GCPoint(position=0, gc=100.0)]
    """
    settings = get_settings()
    if window_size is None:
        window_size = settings.gc_window_size
    if step is None:
        step = settings.gc_step

    if window_size <= 0 or step <= 0 or len(sequence) < window_size:
        return []

    upper = sequence.upper()
    is_gc = np.fromiter((base in "GC" for base in upper), dtype=np.int64, count=len(upper))
    cumulative = np.concatenate(([0], np.cumsum(is_gc)))

    positions = np.arange(0, len(upper) - window_size + 1, step)
    counts = cumulative[positions + window_size] - cumulative[positions]

    return [
        GCPoint(position=int(p), gc=100.0 * int(c) / window_size)
        for p, c in zip(positions, counts)
    ]
