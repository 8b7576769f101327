#!/usr/bin/env python3
"""
Example: Sequence Analysis with Seqscope

This example walks through the analysis engine:
- Pairwise global alignment
- Progressive multiple alignment in a background worker
- Consensus and alignment statistics
- ORF finding, restriction sites, GC windows and dot plots

Set SEQSCOPE_LOG_LEVEL=DEBUG to see the engine's own logging.
"""

from seqscope.analysis import (
    dot_plot,
    find_orfs,
    find_restriction_sites,
    group_sites_by_enzyme,
    windowed_gc,
)
from seqscope.logging_config import setup_logging
from seqscope.msa import alignment_stats, consensus
from seqscope.utils import gc_content, pairwise_align, reverse_complement, translate
from seqscope.worker import AlignmentCoordinator, ProgressEvent, ResultEvent, ErrorEvent


def banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def demo_sequence_properties():
    """Demonstrate sequence property calculations."""
    banner("SEQUENCE PROPERTIES")

    seq = "ATGCATGCATGCTAGCTGATCGATCGATCGATCG"
    print(f"\nSequence: {seq}")
    print(f"Length: {len(seq)} bp")
    print(f"GC Content: {gc_content(seq):.1f}%")

    points = windowed_gc(seq, window_size=10, step=5)
    print(f"Sliding GC (window=10, step=5): {[p.gc for p in points]}")

    print(f"\nReverse complement: {reverse_complement(seq)}")
    print(f"Translation (frame 0): {translate(seq)}")


def demo_pairwise():
    """Demonstrate pairwise alignment."""
    banner("PAIRWISE ALIGNMENT")

    result = pairwise_align("ACGTACGTACGT", "ACGACGTAGT")
    print()
    print(result)


def demo_background_alignment():
    """Demonstrate a progressive alignment job."""
    banner("PROGRESSIVE ALIGNMENT")

    records = [
        ("seq1", "ATGCGTACGTTAGC"),
        ("seq2", "ATGCGTACGTAGC"),
        ("seq3", "ATGCTACGTTAGC"),
        ("seq4", "ATGCGTACCGTTAGC"),
    ]

    with AlignmentCoordinator() as coordinator:
        job = coordinator.submit(records)
        for event in job.events():
            if isinstance(event, ProgressEvent):
                print(f"  progress: {event.percent}%")
            elif isinstance(event, ResultEvent):
                alignment = event.alignment
                print()
                for row in alignment:
                    print(f"  {row.name:<6} {row.sequence}")
                print(f"  {'cons':<6} {consensus(alignment)}")
                stats = alignment_stats(alignment)
                print(f"\n  Identity: {stats.identity:.1f}%  Gaps: {stats.gaps:.1f}%  "
                      f"Conserved: {stats.conserved_positions}")
            elif isinstance(event, ErrorEvent):
                print(f"  failed: {event.message}")


def demo_features():
    """Demonstrate ORFs and restriction sites."""
    banner("ORFS AND RESTRICTION SITES")

    seq = "GGATCCATGAAACCCGGGTTTAAATGCCCAAAGGGTTTTGAGAATTCGATCGATG"
    print(f"\nSequence: {seq}")

    for orf in find_orfs(seq, min_length=9):
        print(f"  ORF {orf.start}-{orf.end} {orf.strand.value} frame {orf.frame}: {orf.protein}")

    sites = find_restriction_sites(seq)
    for enzyme, positions in group_sites_by_enzyme(sites).items():
        print(f"  {enzyme}: {positions}")


def demo_dot_plot():
    """Demonstrate a self dot plot."""
    banner("DOT PLOT")

    seq = "ACGTACGTTTACGTACGT"
    points = dot_plot(seq, seq, window_size=4, threshold=100)
    print(f"\n{len(points)} matching windows, off-diagonal repeats:")
    for point in points:
        if point.x != point.y:
            print(f"  ({point.x}, {point.y})")


def main():
    setup_logging()

    print("=" * 60)
    print("Seqscope Sequence Analysis Demo")
    print("=" * 60)

    demo_sequence_properties()
    demo_pairwise()
    demo_background_alignment()
    demo_features()
    demo_dot_plot()

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
