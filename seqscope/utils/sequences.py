"""
Core sequence manipulation utilities.

Functions for working with DNA, RNA and protein sequences: kind
detection, complementation, translation, composition and searching.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# DNA complement mapping
DNA_COMPLEMENT = {
    "A": "T", "T": "A", "G": "C", "C": "G",
    "a": "t", "t": "a", "g": "c", "c": "g",
    "N": "N", "n": "n",
    # IUPAC ambiguity codes
    "R": "Y", "Y": "R", "S": "S", "W": "W",
    "K": "M", "M": "K", "B": "V", "V": "B",
    "D": "H", "H": "D",
}

# RNA complement mapping
RNA_COMPLEMENT = {
    "A": "U", "U": "A", "G": "C", "C": "G",
    "a": "u", "u": "a", "g": "c", "c": "g",
    "N": "N", "n": "n",
}

# Standard genetic code (DNA codons)
CODON_TABLE = {
    "TTT": "F", "TTC": "F", "TTA": "L", "TTG": "L",
    "TCT": "S", "TCC": "S", "TCA": "S", "TCG": "S",
    "TAT": "Y", "TAC": "Y", "TAA": "*", "TAG": "*",
    "TGT": "C", "TGC": "C", "TGA": "*", "TGG": "W",
    "CTT": "L", "CTC": "L", "CTA": "L", "CTG": "L",
    "CCT": "P", "CCC": "P", "CCA": "P", "CCG": "P",
    "CAT": "H", "CAC": "H", "CAA": "Q", "CAG": "Q",
    "CGT": "R", "CGC": "R", "CGA": "R", "CGG": "R",
    "ATT": "I", "ATC": "I", "ATA": "I", "ATG": "M",
    "ACT": "T", "ACC": "T", "ACA": "T", "ACG": "T",
    "AAT": "N", "AAC": "N", "AAA": "K", "AAG": "K",
    "AGT": "S", "AGC": "S", "AGA": "R", "AGG": "R",
    "GTT": "V", "GTC": "V", "GTA": "V", "GTG": "V",
    "GCT": "A", "GCC": "A", "GCA": "A", "GCG": "A",
    "GAT": "D", "GAC": "D", "GAA": "E", "GAG": "E",
    "GGT": "G", "GGC": "G", "GGA": "G", "GGG": "G",
}

START_CODONS = {"ATG"}
STOP_CODONS = {"TAA", "TAG", "TGA"}

NUCLEOTIDE_SYMBOLS = set("ACGTUN")
GAP = "-"


class SequenceKind(str, Enum):
    """Closed set of sequence kinds accepted at ingestion."""
    DNA = "dna"
    RNA = "rna"
    PROTEIN = "protein"

    @property
    def is_nucleic(self) -> bool:
        return self is not SequenceKind.PROTEIN


@dataclass(frozen=True)
class SequenceRecord:
    """
    A named raw sequence handed to the analysis engine.

    Attributes:
        name: Display name of the sequence
        sequence: Residue string, never mutated by the engine
        kind: DNA, RNA or protein
    """
    name: str
    sequence: str
    kind: SequenceKind = SequenceKind.DNA

    def __len__(self) -> int:
        return len(self.sequence)

    @classmethod
    def from_string(cls, name: str, sequence: str) -> "SequenceRecord":
        """Build a record, detecting the kind from its composition."""
        return cls(name=name, sequence=sequence, kind=detect_sequence_kind(sequence))


def detect_sequence_kind(sequence: str) -> SequenceKind:
    """
    Guess whether a sequence is DNA, RNA or protein.

    A sequence is nucleic when more than 90% of its symbols are in ACGTUN;
    it is RNA when it contains U and no T.

    Example:
        >>> detect_sequence_kind("ACGU")
        <SequenceKind.RNA: 'rna'>
    """
    upper = sequence.upper()
    if not upper:
        return SequenceKind.DNA

    nucleic = sum(1 for c in upper if c in NUCLEOTIDE_SYMBOLS)
    if nucleic / len(upper) <= 0.9:
        return SequenceKind.PROTEIN
    if "U" in upper and "T" not in upper:
        return SequenceKind.RNA
    return SequenceKind.DNA


def clean_sequence(sequence: str) -> str:
    """Strip all whitespace and uppercase a pasted sequence."""
    return re.sub(r"\s+", "", sequence).upper()


def ungap(aligned: str) -> str:
    """Remove gap characters from an aligned row."""
    return aligned.replace(GAP, "")


def complement(sequence: str, rna: bool = False) -> str:
    """
    Complement a DNA or RNA sequence without reversing it.

    Unknown characters are passed through unchanged.

    Example:
        >>> complement("ATGC")
        'TACG'
    """
    complement_map = RNA_COMPLEMENT if rna else DNA_COMPLEMENT
    return "".join(complement_map.get(base, base) for base in sequence)


def reverse_complement(sequence: str, rna: bool = False) -> str:
    """
    Get the reverse complement of a DNA or RNA sequence.

    Args:
        sequence: DNA or RNA sequence string
        rna: If True, treat as RNA (use U instead of T)

    Returns:
        Reverse complement sequence

    Example:
        >>> reverse_complement("ATGC")
        'GCAT'
        >>> reverse_complement("AACG")
        'CGTT'
    """
    return complement(sequence, rna=rna)[::-1]


def gc_content(sequence: str) -> float:
    """
    Calculate the GC content of a sequence as a percentage.

    Example:
        >>> gc_content("ATGC")
        50.0
        >>> gc_content("")
        0.0
    """
    sequence = sequence.upper()
    total = len(sequence)

    if total == 0:
        return 0.0

    gc_count = sequence.count("G") + sequence.count("C")
    return 100.0 * gc_count / total


def translate(
    sequence: str,
    frame: int = 0,
    codon_table: Optional[Dict[str, str]] = None,
    stop_symbol: str = "*",
    to_stop: bool = False
) -> str:
    """
    Translate a DNA sequence to protein.

    Args:
        sequence: DNA or RNA sequence; trailing partial codons are ignored
        frame: Offset (0, 1 or 2) of the first codon
        codon_table: Custom codon table (defaults to standard)
        stop_symbol: Symbol to use for stop codons
        to_stop: If True, stop translation at first stop codon

    Returns:
        Amino acid sequence, X for codons missing from the table

    Example:
        >>> translate("ATGGCC")
        'MA'
        >>> translate("CATGGCC", frame=1)
        'MA'
        >>> translate("ATGTAA")
        'M*'
    """
    if codon_table is None:
        codon_table = CODON_TABLE

    sequence = sequence.upper().replace("U", "T")[frame:]

    protein = []
    for i in range(0, len(sequence) - 2, 3):
        aa = codon_table.get(sequence[i:i + 3], "X")

        if aa == "*":
            if to_stop:
                break
            aa = stop_symbol

        protein.append(aa)

    return "".join(protein)


def hamming_distance(seq1: str, seq2: str) -> int:
    """
    Calculate Hamming distance between two sequences.

    Sequences must be of equal length.

    Example:
        >>> hamming_distance("ACGT", "ACGA")
        1
    """
    if len(seq1) != len(seq2):
        raise ValueError("Sequences must be of equal length")

    return sum(c1 != c2 for c1, c2 in zip(seq1.upper(), seq2.upper()))


def search_sequence(
    sequence: str,
    query: str,
    regex: bool = False,
    case_sensitive: bool = False
) -> List[int]:
    """
    Find all start positions of a query in a sequence.

    Literal queries report overlapping matches. A malformed regular
    expression is treated as having no matches.

    Args:
        sequence: Sequence to search
        query: Literal substring or regular expression
        regex: Interpret query as a regular expression
        case_sensitive: Match case exactly

    Returns:
        List of 0-indexed start positions in ascending order

    Example:
        >>> search_sequence("ATGCATGC", "atg")
        [0, 4]
    """
    if not query or not sequence:
        return []

    if regex:
        flags = 0 if case_sensitive else re.IGNORECASE
        try:
            pattern = re.compile(query, flags)
        except re.error as e:
            logger.debug("Invalid search pattern %r: %s", query, e)
            return []
        return [m.start() for m in pattern.finditer(sequence)]

    if not case_sensitive:
        sequence = sequence.upper()
        query = query.upper()

    positions = []
    pos = sequence.find(query)
    while pos != -1:
        positions.append(pos)
        pos = sequence.find(query, pos + 1)

    return positions
