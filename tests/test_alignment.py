"""
Unit tests for pairwise alignment.
"""

import pytest

from seqscope.utils.alignment import (
    PairwiseAlignment,
    ScoringScheme,
    alignment_score,
    estimate_alignment_cells,
    is_expensive,
    needleman_wunsch,
    pairwise_align,
    pairwise_identity,
    sum_of_pairs_score,
)
from seqscope.utils.sequences import ungap


def naive_score(a: str, b: str, match=1, mismatch=-1, gap=-2) -> float:
    """Reference cell-by-cell fill of the global alignment matrix."""
    rows = [[0.0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        rows[i][0] = i * gap
    for j in range(len(b) + 1):
        rows[0][j] = j * gap
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            s = match if a[i - 1] == b[j - 1] else mismatch
            rows[i][j] = max(rows[i - 1][j - 1] + s, rows[i - 1][j] + gap, rows[i][j - 1] + gap)
    return rows[len(a)][len(b)]


def column_score(row1: str, row2: str, match=1, mismatch=-1, gap=-2) -> float:
    total = 0.0
    for c1, c2 in zip(row1, row2):
        if c1 == "-" or c2 == "-":
            total += gap
        elif c1 == c2:
            total += match
        else:
            total += mismatch
    return total


@pytest.mark.unit
class TestNeedlemanWunsch:

    def test_gap_placed_before_tail(self):
        """ATGC vs ATC aligns the G against a gap, score 1."""
        result = needleman_wunsch("ATGC", "ATC")
        assert result.aligned_seq1 == "ATGC"
        assert result.aligned_seq2 == "AT-C"
        assert result.score == 1

    def test_row_swap_symmetry(self):
        forward = needleman_wunsch("ATGC", "ATC")
        backward = needleman_wunsch("ATC", "ATGC")
        assert backward.aligned_seq1 == forward.aligned_seq2
        assert backward.aligned_seq2 == forward.aligned_seq1
        assert backward.score == forward.score

    def test_score_symmetric(self, random_dna):
        for _ in range(10):
            a, b = random_dna(15), random_dna(11)
            assert needleman_wunsch(a, b).score == needleman_wunsch(b, a).score

    def test_empty_sequence_is_all_gaps(self):
        result = needleman_wunsch("", "ACG")
        assert result.aligned_seq1 == "---"
        assert result.aligned_seq2 == "ACG"
        assert result.score == -6

        swapped = needleman_wunsch("ACG", "")
        assert swapped.aligned_seq1 == "ACG"
        assert swapped.aligned_seq2 == "---"

    def test_both_empty(self):
        result = needleman_wunsch("", "")
        assert result.aligned_seq1 == ""
        assert result.aligned_seq2 == ""
        assert result.score == 0

    def test_single_residues(self):
        assert needleman_wunsch("A", "A").score == 1
        mismatch = needleman_wunsch("A", "C")
        assert (mismatch.aligned_seq1, mismatch.aligned_seq2) == ("A", "C")
        assert mismatch.score == -1

    def test_foreign_symbols_compare_by_equality(self):
        assert needleman_wunsch("XZ", "XZ").score == 2
        assert needleman_wunsch("xz", "XZ").score == -2

    def test_round_trip(self, random_dna):
        for length1, length2 in [(0, 5), (7, 3), (20, 25), (40, 31)]:
            a, b = random_dna(length1), random_dna(length2)
            result = needleman_wunsch(a, b)
            assert len(result.aligned_seq1) == len(result.aligned_seq2)
            assert ungap(result.aligned_seq1) == a
            assert ungap(result.aligned_seq2) == b

    def test_score_matches_reference_fill(self, random_dna):
        for length1, length2 in [(1, 9), (6, 6), (12, 8), (17, 13)]:
            a, b = random_dna(length1), random_dna(length2)
            result = needleman_wunsch(a, b)
            assert result.score == naive_score(a, b)
            assert column_score(result.aligned_seq1, result.aligned_seq2) == result.score

    def test_custom_scoring(self):
        result = pairwise_align("AAA", "AAA", ScoringScheme(match=2))
        assert result.score == 6

        gap_heavy = needleman_wunsch("ACGT", "AGT", 2, -1, -1)
        assert gap_heavy.score == naive_score("ACGT", "AGT", 2, -1, -1)

    def test_default_scoring(self):
        assert pairwise_align("ATGC", "ATC") == needleman_wunsch("ATGC", "ATC")

    def test_pretty_print(self):
        text = str(PairwiseAlignment("AT-C", "ATGC", 1.0))
        assert "AT-C" in text
        assert "|| |" in text
        assert "Score: 1.0" in text


@pytest.mark.unit
class TestCost:

    def test_cell_estimate(self):
        assert estimate_alignment_cells(3, 4) == 20

    def test_is_expensive(self):
        assert is_expensive(10, 10, max_cells=50)
        assert not is_expensive(3, 3, max_cells=100)


@pytest.mark.unit
class TestPositionalScores:

    def test_pairwise_identity(self):
        assert pairwise_identity("ATGC", "ATGA") == 75.0
        assert pairwise_identity("ATGC", "AT") == 100.0
        assert pairwise_identity("", "ATG") == 0.0

    def test_alignment_score(self):
        result = alignment_score("AT-C", "ATGC")
        assert result.score == 1
        assert result.identity == 75.0
        assert result.gaps == 1

    def test_alignment_score_overhang_counts_as_gap(self):
        result = alignment_score("ATG", "AT")
        assert result.gaps == 1
        assert result.score == 0

    def test_alignment_score_empty(self):
        assert alignment_score("", "").identity == 0.0

    def test_sum_of_pairs(self):
        assert sum_of_pairs_score(["AT", "AT", "A-"]) == 0
        assert sum_of_pairs_score(["A-", "A-"]) == 1
