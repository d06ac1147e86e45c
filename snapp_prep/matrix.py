"""Define SnappMatrix class, the final product of a run."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from snapp_prep.alphabet import SequenceFormat

logger = logging.getLogger(__name__)

NEXUS_SYMBOLS = "012"


class SnappMatrix:

    """Class representing a recoded SNP matrix, ready for SNAPP.

    Attributes
    ----------
    specimen_ids : list[str]
        Specimen identifier of each row, in input order.
    species_ids : list[str]
        Species identifier of each row.
    recoded_array : NDArray[np.str_]
        Recoded symbols. Rows: specimens. Columns: sites.
    sequence_format : SequenceFormat
        Coding of the input from which the matrix was derived.
    input_fp : str
        Path of the input file.

    """

    def __init__(
        self,
        specimen_ids: Sequence[str],
        species_ids: Sequence[str],
        recoded_array: NDArray[np.str_],
        sequence_format: SequenceFormat,
        input_fp: str = "",
    ):
        if not (len(specimen_ids) == len(species_ids) == recoded_array.shape[0]):
            raise ValueError(
                "Expecting one specimen identifier and one species identifier "
                f"per row: {len(specimen_ids)}, {len(species_ids)}, "
                f"{recoded_array.shape[0]}"
            )

        self.specimen_ids = list(specimen_ids)
        self.species_ids = list(species_ids)
        self.recoded_array = recoded_array
        self.recoded_array.flags.writeable = False
        self.sequence_format = sequence_format
        self.input_fp = input_fp

    def __repr__(self) -> str:
        """Return string representation."""

        return (
            f"<{__name__}.{self.__class__.__name__}: "
            f"ntax={self.num_specimens}, nchar={self.num_sites}>"
        )

    @property
    def num_specimens(self) -> int:
        return self.recoded_array.shape[0]

    @property
    def num_sites(self) -> int:
        return self.recoded_array.shape[1]

    @property
    def sequences(self) -> list[str]:
        """Return one recoded sequence per specimen."""

        return ["".join(row) for row in self.recoded_array.tolist()]

    @property
    def taxon_labels(self) -> list[str]:
        """Return row labels of the form <specimen>_<species>."""

        return [
            f"{specimen_id}_{species_id}"
            for specimen_id, species_id in zip(self.specimen_ids, self.species_ids)
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """Return a DataFrame of recoded sequences.

        Returns
        -------
        matrix_df : pd.DataFrame
            Index: Specimen identifier.
            Columns:
            - species: Species identifier.
            - sequence: Recoded sequence.

        """
        matrix_df = pd.DataFrame(
            {
                "specimen": self.specimen_ids,
                "species": self.species_ids,
                "sequence": self.sequences,
            }
        ).set_index("specimen")

        return matrix_df

    def to_nexus(self, annotate: bool = True) -> str:
        """Return the matrix in NEXUS format.

        Parameters
        ----------
        annotate : bool, optional
            When True, include a comment naming the input file.

        """
        lines = ["#NEXUS", ""]
        if annotate:
            if self.sequence_format == SequenceFormat.BINARY:
                comment = f"[The SNP data matrix, taken from file {self.input_fp}.]"
            else:
                comment = (
                    "[The SNP data matrix, converted to binary format "
                    f"from file {self.input_fp}.]"
                )

            lines.extend(["", comment, ""])

        lines.extend(
            [
                "Begin data;",
                f"\tDimensions ntax={self.num_specimens} nchar={self.num_sites};",
                f"\tFormat datatype=integerdata symbols='{NEXUS_SYMBOLS}' gap=-;",
                "\tMatrix",
            ]
        )
        lines.extend(
            f"{label}\t{sequence}"
            for label, sequence in zip(self.taxon_labels, self.sequences)
        )
        lines.extend(["\t;", "End;"])

        nexus_str = "\n".join(lines) + "\n"
        return nexus_str

    def write_nexus(self, nexus_fp: str, annotate: bool = True) -> None:
        """Write the matrix in NEXUS format."""

        with open(nexus_fp, "w") as nexus_file:
            nexus_file.write(self.to_nexus(annotate=annotate))

        logger.info(f"Wrote SNAPP input in NEXUS format:\n    {nexus_fp}\n")
