"""
Unit tests for the six-frame ORF finder.
"""

import pytest

from seqscope.analysis import Strand, find_orfs
from seqscope.utils.sequences import STOP_CODONS, reverse_complement


@pytest.mark.unit
class TestFindOrfs:

    def test_forward_orf(self):
        orfs = find_orfs("ATGATGATGTAA", min_length=9)
        assert len(orfs) == 1
        orf = orfs[0]
        assert (orf.start, orf.end) == (0, 12)
        assert orf.strand is Strand.FORWARD
        assert orf.frame == 0
        assert orf.protein == "MMM*"

    def test_inner_start_codons_ignored(self):
        """Only the first ATG of an open interval starts an ORF."""
        orfs = find_orfs("ATGATGATGTAA", min_length=3)
        assert [(o.start, o.end) for o in orfs] == [(0, 12)]

    def test_min_length_includes_stop_codon(self):
        assert len(find_orfs("ATGAAATGA", min_length=9)) == 1
        assert find_orfs("ATGAAATGA", min_length=10) == []

    def test_translation(self):
        orfs = find_orfs("ATGAAATGA", min_length=9)
        assert orfs[0].protein == "MK*"
        assert orfs[0].length == 9

    def test_reverse_strand_coordinates(self):
        seq = reverse_complement("ATGAAATGA")
        orfs = find_orfs(seq, min_length=9)
        assert len(orfs) == 1
        orf = orfs[0]
        assert orf.strand is Strand.REVERSE
        assert (orf.start, orf.end) == (0, 9)
        assert orf.sequence == "ATGAAATGA"
        assert reverse_complement(seq[orf.start:orf.end]) == orf.sequence

    def test_sorted_by_start_across_strands(self):
        seq = "TCATTTCAT" + "ATGAAATGA"
        orfs = find_orfs(seq, min_length=9)
        assert [(o.start, o.strand) for o in orfs] == [
            (0, Strand.REVERSE),
            (9, Strand.FORWARD),
        ]

    def test_lowercase_input(self):
        orfs = find_orfs("atgaaatga", min_length=9)
        assert orfs[0].sequence == "ATGAAATGA"

    def test_unclosed_orf_not_reported(self):
        assert find_orfs("ATGAAAAAAAAA", min_length=3) == []

    def test_ambiguous_codon_translates_to_x(self):
        orfs = find_orfs("ATGNNNTAA", min_length=9)
        assert orfs[0].protein == "MX*"

    def test_degenerate_inputs(self):
        assert find_orfs("", min_length=3) == []
        assert find_orfs("MKVLWEEHHQ", min_length=3) == []

    def test_orf_properties(self, random_dna):
        seq = random_dna(900)
        orfs = find_orfs(seq, min_length=30)

        assert [o.start for o in orfs] == sorted(o.start for o in orfs)
        for orf in orfs:
            assert orf.sequence.startswith("ATG")
            assert orf.sequence[-3:] in STOP_CODONS
            assert len(orf.sequence) % 3 == 0
            assert len(orf.sequence) >= 30
            assert orf.length == len(orf.sequence)
            assert orf.protein.endswith("*")
            assert orf.protein.count("*") == 1
            assert 0 <= orf.frame <= 2

            span = seq[orf.start:orf.end]
            if orf.strand is Strand.FORWARD:
                assert span == orf.sequence
                assert orf.start % 3 == orf.frame
            else:
                assert reverse_complement(span) == orf.sequence
                assert (len(seq) - orf.end) % 3 == orf.frame

    def test_orf_id(self):
        orf = find_orfs("ATGAAATGA", min_length=9)[0]
        assert orf.orf_id == "ORF_0_9_forward"
