"""
Restriction site scanning.

Recognition sites are matched exactly and case-insensitively on the
forward strand, overlapping matches included. Every enzyme in the
built-in catalogue is palindromic, so its site reads the same on the
reverse strand.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from seqscope.utils.sequences import search_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestrictionEnzyme:
    """
    A Type II restriction enzyme.

    Attributes:
        name: Enzyme name
        site: Recognition sequence (5' to 3')
        cut_position: Cut offset from the start of the site on the top strand
    """
    name: str
    site: str
    cut_position: int


@dataclass(frozen=True)
class RestrictionSite:
    """A recognition site found in a sequence."""
    enzyme: str
    position: int
    site: str
    cut_position: int

    @property
    def end(self) -> int:
        return self.position + len(self.site)


COMMON_ENZYMES = (
    RestrictionEnzyme("EcoRI", "GAATTC", 1),
    RestrictionEnzyme("BamHI", "GGATCC", 1),
    RestrictionEnzyme("HindIII", "AAGCTT", 1),
    RestrictionEnzyme("PstI", "CTGCAG", 5),
    RestrictionEnzyme("SmaI", "CCCGGG", 3),
    RestrictionEnzyme("KpnI", "GGTACC", 5),
    RestrictionEnzyme("SacI", "GAGCTC", 5),
    RestrictionEnzyme("SalI", "GTCGAC", 1),
    RestrictionEnzyme("XbaI", "TCTAGA", 1),
    RestrictionEnzyme("NotI", "GCGGCCGC", 2),
    RestrictionEnzyme("XhoI", "CTCGAG", 1),
    RestrictionEnzyme("NdeI", "CATATG", 2),
    RestrictionEnzyme("NcoI", "CCATGG", 1),
    RestrictionEnzyme("BglII", "AGATCT", 1),
    RestrictionEnzyme("SpeI", "ACTAGT", 1),
    RestrictionEnzyme("EcoRV", "GATATC", 3),
    RestrictionEnzyme("NheI", "GCTAGC", 1),
    RestrictionEnzyme("ClaI", "ATCGAT", 2),
    RestrictionEnzyme("ApaI", "GGGCCC", 5),
    RestrictionEnzyme("MluI", "ACGCGT", 1),
)

_ENZYME_INDEX = {enzyme.name.lower(): enzyme for enzyme in COMMON_ENZYMES}

EnzymeLike = Union[RestrictionEnzyme, str]
EnzymeSelection = Union[EnzymeLike, Iterable[EnzymeLike]]


def get_enzyme(name: str) -> Optional[RestrictionEnzyme]:
    """Look up a catalogue enzyme by name, ignoring case."""
    return _ENZYME_INDEX.get(name.lower())


def _resolve_enzymes(enzymes: Optional[EnzymeSelection]) -> List[RestrictionEnzyme]:
    if enzymes is None:
        return list(COMMON_ENZYMES)
    if isinstance(enzymes, (str, RestrictionEnzyme)):
        enzymes = [enzymes]

    resolved = []
    for enzyme in enzymes:
        if isinstance(enzyme, RestrictionEnzyme):
            resolved.append(enzyme)
            continue
        found = get_enzyme(enzyme)
        if found is None:
            logger.warning("Unknown restriction enzyme %r skipped", enzyme)
        else:
            resolved.append(found)
    return resolved


def find_restriction_sites(
    sequence: str,
    enzymes: Optional[EnzymeSelection] = None
) -> List[RestrictionSite]:
    """
    Find recognition sites of a set of enzymes.

    Args:
        sequence: DNA sequence to scan
        enzymes: Enzymes or enzyme names, or a single one; defaults to
            COMMON_ENZYMES

    Returns:
        Sites sorted by position; sites at the same position keep the
        order of the enzyme list

    Example:
        >>> [s.enzyme for s in find_restriction_sites("ttGAATTCaa")]
        ['EcoRI']
    """
    sites = []
    for enzyme in _resolve_enzymes(enzymes):
        for position in search_sequence(sequence, enzyme.site):
            sites.append(RestrictionSite(
                enzyme=enzyme.name,
                position=position,
                site=enzyme.site,
                cut_position=position + enzyme.cut_position,
            ))

    sites.sort(key=lambda site: site.position)
    return sites


def group_sites_by_enzyme(sites: Iterable[RestrictionSite]) -> Dict[str, List[int]]:
    """Map each enzyme to its site positions, in order of first appearance."""
    grouped: Dict[str, List[int]] = {}
    for site in sites:
        grouped.setdefault(site.enzyme, []).append(site.position)
    return grouped
