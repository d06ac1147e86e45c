"""Symbol alphabets, lookup tables, and sequence-format classification.

Nucleotide input uses the four bases, the six IUPAC two-base ambiguity codes,
and three missing-data markers. Binary input uses SNAPP's ternary code:
"0" and "2" for opposite homozygotes, "1" for heterozygotes.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from snapp_prep.errors import SequenceFormatError

logger = logging.getLogger(__name__)

BASES = "ACGT"
MISSING_SYMBOLS = frozenset("-?N")
BINARY_SYMBOLS = frozenset("012")
GAP = "-"
HOMOZYGOUS_CODE_0 = "0"
HETEROZYGOUS_CODE = "1"
HOMOZYGOUS_CODE_2 = "2"

AMBIGUITY_CODE_TO_BASES = {
    "R": frozenset("AG"),
    "Y": frozenset("CT"),
    "S": frozenset("CG"),
    "W": frozenset("AT"),
    "K": frozenset("GT"),
    "M": frozenset("AC"),
}
AMBIGUITY_CODES = frozenset(AMBIGUITY_CODE_TO_BASES)
NUCLEOTIDE_SYMBOLS = frozenset(BASES) | AMBIGUITY_CODES

# Bases contributed by each symbol. Missing markers contribute none.
SYMBOL_TO_BASES: dict[str, frozenset[str]] = {
    **{base: frozenset(base) for base in BASES},
    **AMBIGUITY_CODE_TO_BASES,
    **{symbol: frozenset() for symbol in MISSING_SYMBOLS},
}

# Unordered pair of alleles -> symbol. Homozygotes map to the plain base.
BASE_PAIR_TO_SYMBOL: dict[frozenset[str], str] = {
    **{frozenset(base): base for base in BASES},
    **{bases: code for code, bases in AMBIGUITY_CODE_TO_BASES.items()},
}

TRANSITION_PAIRS = frozenset({frozenset("AG"), frozenset("CT")})
TRANSVERSION_PAIRS = frozenset(
    {frozenset("AC"), frozenset("AT"), frozenset("CG"), frozenset("GT")}
)


class SequenceFormat(str, Enum):

    """Coding of the symbols in an input alignment."""

    BINARY = "binary"
    NUCLEOTIDE = "nucleotide"


def symbol_for_alleles(allele_1: str, allele_2: str) -> str:
    """Return the symbol for an unordered pair of resolved alleles.

    Raises
    ------
    KeyError
        If the pair does not correspond to a base or an ambiguity code.

    """
    symbol = BASE_PAIR_TO_SYMBOL[frozenset((allele_1, allele_2))]
    return symbol


def is_transition(bases: frozenset[str]) -> bool:
    """Return True if a two-base set is a transition, False if a transversion.

    Raises
    ------
    ValueError
        If bases is not a pair of distinct nucleotides.

    """
    if bases in TRANSITION_PAIRS:
        return True
    elif bases in TRANSVERSION_PAIRS:
        return False
    else:
        raise ValueError(f"Not a pair of distinct bases: {sorted(bases)}")


def classify_sequence_format(sequences: Iterable[str]) -> SequenceFormat:
    """Classify sequences as binary or nucleotide.

    Missing-data markers are ignored. When the remaining symbols are valid in
    both alphabets (i.e., when there are none), the input is considered binary.

    Raises
    ------
    SequenceFormatError
        If the symbols match neither alphabet.

    """
    observed_symbols: set[str] = set()
    for sequence in sequences:
        observed_symbols.update(sequence)

    observed_symbols -= MISSING_SYMBOLS
    if observed_symbols <= BINARY_SYMBOLS:
        sequence_format = SequenceFormat.BINARY
    elif observed_symbols <= NUCLEOTIDE_SYMBOLS:
        sequence_format = SequenceFormat.NUCLEOTIDE
    else:
        observed = "".join(sorted(observed_symbols))
        raise SequenceFormatError(
            "Sequence format could not be recognized as either "
            f'"nucleotide" or "binary"\n    Observed symbols: {observed}'
        )

    logger.info(f"Sequence format: {sequence_format.value}\n")
    return sequence_format
