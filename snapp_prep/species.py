"""Define SpeciesTable class and the species-completeness filter.

SNAPP treats all specimens of a species as draws from one population.
A site is useless to SNAPP if some species has no data there,
so such sites are removed.

"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from snapp_prep.alphabet import MISSING_SYMBOLS
from snapp_prep.diagnostics import ExclusionCategory, ExclusionTally
from snapp_prep.errors import SequenceFormatError, SpecimenMismatchError
from snapp_prep.utils.loaders import read_lines

logger = logging.getLogger(__name__)

HEADER_SPECIES_LABELS = {"species"}
HEADER_SPECIMEN_LABELS = {"specimen", "specimens", "sample", "samples"}
COLUMNS = ["species", "specimen"]


class SpeciesTable:

    """Class representing the assignment of specimens to species.

    Attributes
    ----------
    species_df : pd.DataFrame
        One row per table line.
        Columns:
        - species: Species identifier.
        - specimen: Specimen identifier.

    """

    def __init__(self, species_df: pd.DataFrame):
        """Instantiate SpeciesTable.

        Raises
        ------
        SpecimenMismatchError
            If a specimen is assigned to more than one species.

        """
        self.species_df = species_df.reset_index(drop=True)[COLUMNS]

        species_per_specimen = self.species_df.groupby("specimen")["species"].nunique()
        conflicting_specimens = sorted(
            species_per_specimen.index[species_per_specimen > 1]
        )
        if conflicting_specimens:
            raise SpecimenMismatchError(
                "Specimens assigned to more than one species: "
                + ", ".join(conflicting_specimens)
            )

        self.specimen_to_species: dict[str, str] = dict(
            zip(self.species_df["specimen"], self.species_df["species"])
        )

    def __repr__(self) -> str:
        """Return string representation."""

        return (
            f"<{__name__}.{self.__class__.__name__}: "
            f"{self.num_specimens} specimens, {len(self.species_list)} species>"
        )

    @property
    def num_specimens(self) -> int:
        return len(self.species_df)

    @property
    def species_list(self) -> list[str]:
        """Return unique species identifiers, in order of first appearance."""

        return list(self.species_df["species"].unique())

    @classmethod
    def from_file(cls, table_fp: str) -> SpeciesTable:
        """Load a whitespace-delimited table of species and specimens.

        Header lines are skipped wherever they occur. A header line has
        "species" as its first token and "specimen", "specimens", "sample",
        or "samples" as its second, regardless of case.

        Raises
        ------
        SequenceFormatError
            If a non-blank line has fewer than two tokens.

        """
        rows = []
        for line in read_lines(table_fp):
            tokens = line.split()
            if not tokens:
                continue
            elif len(tokens) < 2:
                raise SequenceFormatError(
                    f"Expected a species identifier and a specimen identifier "
                    f"in {table_fp}:\n    {line}"
                )
            elif is_header(tokens):
                continue

            rows.append(tokens[:2])

        species_table = cls(pd.DataFrame(rows, columns=COLUMNS, dtype=str))
        logger.info(
            f"Loaded species table:\n    {table_fp}\n"
            f"    {species_table.num_specimens:5d} specimens\n"
            f"    {len(species_table.species_list):5d} species\n"
        )

        return species_table

    def check_specimens(self, specimen_ids: Sequence[str], table_fp: str = "") -> None:
        """Check that table specimens and input specimens are identical multisets.

        Raises
        ------
        SpecimenMismatchError
            If the multisets differ.

        """
        table_counter = Counter(self.species_df["specimen"])
        input_counter = Counter(specimen_ids)
        if table_counter != input_counter:
            only_in_table = sorted((table_counter - input_counter).elements())
            only_in_input = sorted((input_counter - table_counter).elements())
            table_description = f"file {table_fp}" if table_fp else "the species table"
            raise SpecimenMismatchError(
                f"The specimens listed in {table_description} and those included "
                "in the input file are not identical\n"
                f"    Only in table: {', '.join(only_in_table) or '-'}\n"
                f"    Only in input: {', '.join(only_in_input) or '-'}"
            )

    def species_ids_for(self, specimen_ids: Sequence[str]) -> list[str]:
        """Return the species of each specimen."""

        return [self.specimen_to_species[specimen_id] for specimen_id in specimen_ids]


def is_header(tokens: Sequence[str]) -> bool:
    """Return True if the first two tokens of a line form a table header."""

    header = (
        tokens[0].lower() in HEADER_SPECIES_LABELS
        and tokens[1].lower() in HEADER_SPECIMEN_LABELS
    )
    return header


def filter_incomplete_species(
    recoded_array: NDArray[np.str_],
    specimen_ids: Sequence[str],
    species_table: SpeciesTable,
    tally: ExclusionTally,
) -> NDArray[np.str_]:
    """Remove sites at which one or more species have only missing data.

    A species without any specimens counts as having only missing data.

    Parameters
    ----------
    recoded_array : NDArray[np.str_]
        Recoded symbols. Rows: specimens. Columns: sites.
    specimen_ids : Sequence[str]
        Specimen identifier of each row.
    species_table : SpeciesTable
        Assignment of specimens to species.
    tally : ExclusionTally
        Incremented for each site excluded.

    Returns
    -------
    filtered_array : NDArray[np.str_]
        Sites at which every species has data, in their original order.

    """
    species_ids = np.array(species_table.species_ids_for(specimen_ids), dtype=object)
    is_called = ~np.isin(recoded_array, list(MISSING_SYMBOLS))
    keep = np.ones(recoded_array.shape[1], dtype=bool)
    for species in species_table.species_list:
        keep &= is_called[species_ids == species].any(axis=0)

    tally.increment(ExclusionCategory.SPECIES_INCOMPLETE, int((~keep).sum()))
    filtered_array = recoded_array[:, keep]
    logger.info(
        f"Species completeness: {filtered_array.shape[1]} of "
        f"{recoded_array.shape[1]} sites retained\n"
    )

    return filtered_array
