"""
Sequence analyses for the interactive views.

All functions are pure and total over sequence strings: unexpected
symbols, empty input or windows larger than the sequence give empty
results rather than errors.
"""

from seqscope.analysis.orfs import (
    ORF,
    Strand,
    find_orfs,
)

from seqscope.analysis.restriction import (
    RestrictionEnzyme,
    RestrictionSite,
    COMMON_ENZYMES,
    get_enzyme,
    find_restriction_sites,
    group_sites_by_enzyme,
)

from seqscope.analysis.gc import (
    GCPoint,
    windowed_gc,
)

from seqscope.analysis.dotplot import (
    DotPlotPoint,
    dot_plot,
    window_identity_matrix,
)

__all__ = [
    "ORF",
    "Strand",
    "find_orfs",
    "RestrictionEnzyme",
    "RestrictionSite",
    "COMMON_ENZYMES",
    "get_enzyme",
    "find_restriction_sites",
    "group_sites_by_enzyme",
    "GCPoint",
    "windowed_gc",
    "DotPlotPoint",
    "dot_plot",
    "window_identity_matrix",
]
