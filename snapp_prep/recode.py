"""Define SiteRecoder class, which translates alignments into SNAPP's code.

SNAPP expects one of three states per specimen and site:
"0" and "2" for the two homozygous genotypes and "1" for the heterozygote.
Missing data are coded as a gap, "-".

Binary input is already in this code. Its bi- and tri-state columns are
retained verbatim. Nucleotide input is recoded at bi-allelic sites only.

"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from snapp_prep.alphabet import (
    AMBIGUITY_CODES,
    BINARY_SYMBOLS,
    GAP,
    HETEROZYGOUS_CODE,
    HOMOZYGOUS_CODE_0,
    HOMOZYGOUS_CODE_2,
    MISSING_SYMBOLS,
    SYMBOL_TO_BASES,
    SequenceFormat,
    is_transition,
)
from snapp_prep.diagnostics import ExclusionCategory, ExclusionTally
from snapp_prep.errors import GenotypeDataError

logger = logging.getLogger(__name__)

NUM_BASES_TO_EXCLUSION_CATEGORY = {
    0: ExclusionCategory.MISSING,
    1: ExclusionCategory.MONOMORPHIC,
    3: ExclusionCategory.TRIALLELIC,
    4: ExclusionCategory.TETRAALLELIC,
}


class SiteRecoder:

    """Classify each site of an alignment and recode the informative ones.

    Attributes
    ----------
    rng : np.random.Generator
        Source of the random choice of which base of each bi-allelic site
        is coded "0". Any object with a compatible `integers` method will do.
    transversions_only : bool
        Exclude transitions.
    transitions_only : bool
        Exclude transversions.

    """

    def __init__(
        self,
        rng: np.random.Generator,
        transversions_only: bool = False,
        transitions_only: bool = False,
    ):
        if transversions_only and transitions_only:
            raise ValueError("Cannot restrict to both transversions and transitions")

        self.rng = rng
        self.transversions_only = transversions_only
        self.transitions_only = transitions_only

    def __repr__(self) -> str:
        """Return string representation."""

        return (
            f"<{__name__}.{self.__class__.__name__}: "
            f"transversions_only={self.transversions_only}, "
            f"transitions_only={self.transitions_only}>"
        )

    def recode(
        self,
        symbol_array: NDArray[np.str_],
        sequence_format: SequenceFormat,
        tally: ExclusionTally,
    ) -> NDArray[np.str_]:
        """Recode an alignment.

        Parameters
        ----------
        symbol_array : NDArray[np.str_]
            Input symbols. Rows: specimens. Columns: sites.
        sequence_format : SequenceFormat
            Coding of the input symbols.
        tally : ExclusionTally
            Incremented for each site excluded.

        Returns
        -------
        recoded_array : NDArray[np.str_]
            Retained sites, in the SNAPP code, in their original order.

        """
        if sequence_format == SequenceFormat.BINARY:
            recoded_array = self.recode_binary(symbol_array, tally)
        elif sequence_format == SequenceFormat.NUCLEOTIDE:
            recoded_array = self.recode_nucleotide(symbol_array, tally)
        else:
            raise ValueError(f"Unknown sequence format: {sequence_format}")

        logger.info(
            f"Recoding: {recoded_array.shape[1]} of {symbol_array.shape[1]} "
            "sites retained\n"
        )
        return recoded_array

    def recode_binary(
        self,
        symbol_array: NDArray[np.str_],
        tally: ExclusionTally,
    ) -> NDArray[np.str_]:
        """Retain binary-coded sites with at least two distinct states.

        Also record the proportion of "0" among "0" and "2" states retained,
        which is expected to be near one half when polarity is arbitrary.

        """
        num_states = np.zeros(symbol_array.shape[1], dtype=int)
        for state in sorted(BINARY_SYMBOLS):
            num_states += (symbol_array == state).any(axis=0)

        tally.increment(ExclusionCategory.MISSING, int((num_states == 0).sum()))
        tally.increment(ExclusionCategory.MONOMORPHIC, int((num_states == 1).sum()))
        recoded_array = symbol_array[:, num_states >= 2]

        num_0 = int((recoded_array == HOMOZYGOUS_CODE_0).sum())
        num_2 = int((recoded_array == HOMOZYGOUS_CODE_2).sum())
        if num_0 + num_2 > 0:
            tally.proportion_0 = num_0 / (num_0 + num_2)

        return recoded_array

    def recode_nucleotide(
        self,
        symbol_array: NDArray[np.str_],
        tally: ExclusionTally,
    ) -> NDArray[np.str_]:
        """Recode bi-allelic nucleotide sites, excluding all others."""

        recoded_columns = []
        for position in range(symbol_array.shape[1]):
            recoded_column = self.recode_nucleotide_site(
                symbol_array[:, position],
                position,
                tally,
            )
            if recoded_column is not None:
                recoded_columns.append(recoded_column)

        if recoded_columns:
            recoded_array = np.column_stack(recoded_columns)
        else:
            recoded_array = np.empty((symbol_array.shape[0], 0), dtype="<U1")

        return recoded_array

    def recode_nucleotide_site(
        self,
        column: NDArray[np.str_],
        position: int,
        tally: ExclusionTally,
    ) -> Optional[NDArray[np.str_]]:
        """Recode one site, or return None if it is excluded.

        Raises
        ------
        GenotypeDataError
            If a symbol is not a base, an ambiguity code, or a missing-data marker.

        """
        symbol_set = set(column.tolist())
        base_set: set[str] = set()
        for symbol in symbol_set:
            try:
                base_set |= SYMBOL_TO_BASES[symbol]
            except KeyError:
                raise GenotypeDataError(f"Found unexpected base: {symbol}", position)

        num_bases = len(base_set)
        if num_bases in NUM_BASES_TO_EXCLUSION_CATEGORY:
            tally.increment(NUM_BASES_TO_EXCLUSION_CATEGORY[num_bases])
            return None
        elif num_bases != 2:
            raise GenotypeDataError(
                f"Found unexpected number of alleles: {num_bases}", position
            )

        base_pair = frozenset(base_set)
        if is_transition(base_pair):
            if self.transversions_only:
                tally.increment(ExclusionCategory.TRANSITION)
                return None
        elif self.transitions_only:
            tally.increment(ExclusionCategory.TRANSVERSION)
            return None

        base_0, base_2 = self.assign_polarity(base_pair)
        symbol_to_code = {base_0: HOMOZYGOUS_CODE_0, base_2: HOMOZYGOUS_CODE_2}
        for symbol in symbol_set - symbol_to_code.keys():
            if symbol in MISSING_SYMBOLS:
                symbol_to_code[symbol] = GAP
            elif symbol in AMBIGUITY_CODES:
                symbol_to_code[symbol] = HETEROZYGOUS_CODE
            else:
                raise GenotypeDataError(f"Found unexpected base: {symbol}", position)

        recoded_column = np.array(
            [symbol_to_code[symbol] for symbol in column.tolist()],
            dtype="<U1",
        )
        return recoded_column

    def assign_polarity(self, base_pair: frozenset[str]) -> tuple[str, str]:
        """Randomly order the two bases of a site, to be coded "0" and "2"."""

        base_0, base_2 = sorted(base_pair)
        if self.rng.integers(2):
            base_0, base_2 = base_2, base_0

        return base_0, base_2
