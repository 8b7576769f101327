"""
Unit tests for restriction site scanning.
"""

import pytest

from seqscope.analysis import (
    COMMON_ENZYMES,
    RestrictionEnzyme,
    find_restriction_sites,
    get_enzyme,
    group_sites_by_enzyme,
)
from seqscope.utils.sequences import reverse_complement


@pytest.mark.unit
class TestEnzymeCatalogue:

    def test_catalogue_size(self):
        assert len(COMMON_ENZYMES) >= 15
        assert len({e.name for e in COMMON_ENZYMES}) == len(COMMON_ENZYMES)

    def test_sites_are_palindromic(self):
        for enzyme in COMMON_ENZYMES:
            assert reverse_complement(enzyme.site) == enzyme.site, enzyme.name

    def test_lookup_ignores_case(self):
        assert get_enzyme("ecori").site == "GAATTC"
        assert get_enzyme("NoSuchEnzyme") is None


@pytest.mark.unit
class TestFindRestrictionSites:

    def test_ecori_at_literal_position(self):
        sites = find_restriction_sites("AAAA" + "GAATTC" + "TT")
        assert [(s.enzyme, s.position) for s in sites] == [("EcoRI", 4)]
        assert sites[0].site == "GAATTC"
        assert sites[0].cut_position == 5
        assert sites[0].end == 10

    def test_case_insensitive(self):
        sites = find_restriction_sites("aaaagaattctt", ["EcoRI"])
        assert [s.position for s in sites] == [4]

    def test_overlapping_matches(self):
        sites = find_restriction_sites("GCGGCCGCGGCCGC", ["NotI"])
        assert [s.position for s in sites] == [0, 6]

    def test_sorted_by_position(self):
        sites = find_restriction_sites("GGATCCAAGAATTC")
        assert [(s.enzyme, s.position) for s in sites] == [("BamHI", 0), ("EcoRI", 8)]

    def test_enzyme_subset(self):
        sites = find_restriction_sites("GGATCCAAGAATTC", ["EcoRI"])
        assert [s.enzyme for s in sites] == ["EcoRI"]

    def test_custom_enzyme(self):
        custom = RestrictionEnzyme("Test", "AAT", 0)
        sites = find_restriction_sites("GAATAAT", [custom])
        assert [s.position for s in sites] == [1, 4]

    def test_unknown_enzyme_skipped(self):
        sites = find_restriction_sites("GAATTC", ["NoSuchEnzyme", "EcoRI"])
        assert [s.enzyme for s in sites] == ["EcoRI"]

    def test_no_sites(self):
        assert find_restriction_sites("") == []
        assert find_restriction_sites("MKVLWEEHHQ") == []

    def test_group_by_enzyme(self):
        sites = find_restriction_sites("GAATTCGGATCCGAATTC", ["EcoRI", "BamHI"])
        assert group_sites_by_enzyme(sites) == {"EcoRI": [0, 12], "BamHI": [6]}
        assert list(group_sites_by_enzyme(sites)) == ["EcoRI", "BamHI"]

    def test_single_enzyme_name(self):
        sites = find_restriction_sites("GGATCCAAGAATTC", "EcoRI")
        assert [(s.enzyme, s.position) for s in sites] == [("EcoRI", 8)]

    def test_single_enzyme_object(self):
        sites = find_restriction_sites("GAATTC", get_enzyme("EcoRI"))
        assert [s.position for s in sites] == [0]
