"""Define ExclusionTally and Diagnostics classes.

An ExclusionTally is created once per run and passed through every stage of
the pipeline, each of which increments the counts of the sites it excludes.
Diagnostics reads the final tally to compose warning and info messages.

"""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

BALANCE_GOAL = 0.5
BALANCE_TOLERANCE = 0.01


class ExclusionCategory(str, Enum):

    """Reason for which a site was excluded."""

    MISSING = "missing"
    MONOMORPHIC = "monomorphic"
    TRIALLELIC = "tri-allelic"
    TETRAALLELIC = "tetra-allelic"
    INDEL = "indel"
    TRANSITION = "excluded-transition"
    TRANSVERSION = "excluded-transversion"
    SPECIES_INCOMPLETE = "species-incomplete"
    OVER_CAP = "over-cap"


# Categories of alignment columns removed after normalization
COLUMN_CATEGORIES = (
    ExclusionCategory.MISSING,
    ExclusionCategory.MONOMORPHIC,
    ExclusionCategory.TRIALLELIC,
    ExclusionCategory.TETRAALLELIC,
    ExclusionCategory.TRANSITION,
    ExclusionCategory.TRANSVERSION,
    ExclusionCategory.SPECIES_INCOMPLETE,
)

# Categories of VCF records skipped during normalization.
# These records never become alignment columns.
RECORD_CATEGORIES = (
    ExclusionCategory.INDEL,
    ExclusionCategory.TRIALLELIC,
    ExclusionCategory.TETRAALLELIC,
)

# Warning message templates, in reporting order
CATEGORY_WARNING_TEMPLATES = {
    ExclusionCategory.MISSING: "Excluded {num} site{s} with only missing data.",
    ExclusionCategory.SPECIES_INCOMPLETE: (
        "Excluded {num} site{s} with only missing data in one or more species."
    ),
    ExclusionCategory.MONOMORPHIC: "Excluded {num} monomorphic site{s}.",
    ExclusionCategory.TRANSITION: "Excluded {num} transition site{s}.",
    ExclusionCategory.TRANSVERSION: "Excluded {num} transversion site{s}.",
    ExclusionCategory.TRIALLELIC: "Excluded {num} tri-allelic site{s}.",
    ExclusionCategory.TETRAALLELIC: "Excluded {num} tetra-allelic site{s}.",
    ExclusionCategory.INDEL: "Excluded {num} indel site{s}.",
}


class ExclusionTally:

    """Counts of excluded sites, plus other facts worth reporting.

    Attributes
    ----------
    counts : Counter[ExclusionCategory]
        Number of alignment columns excluded for each reason.
    record_counts : Counter[ExclusionCategory]
        Number of VCF records skipped for each reason before normalization.
    num_half_call_sites : int
        Number of VCF sites with at least one half-missing genotype.
    proportion_0 : float | None
        Proportion of "0" among "0" and "2" states in retained binary input.
        None unless the input was binary and had at least one such state.
    max_sites_not_applied : bool
        True when a maximum number of sites was requested but was not
        smaller than the number of sites available.

    """

    def __init__(self):
        self.counts: Counter[ExclusionCategory] = Counter()
        self.record_counts: Counter[ExclusionCategory] = Counter()
        self.num_half_call_sites = 0
        self.proportion_0: Optional[float] = None
        self.max_sites_not_applied = False

    def __repr__(self) -> str:
        """Return string representation."""

        nonzero = ", ".join(
            f"{category.value}={self[category]}"
            for category in ExclusionCategory
            if self[category] > 0
        )
        return f"<{__name__}.{self.__class__.__name__}: {nonzero}>"

    def __getitem__(self, category: ExclusionCategory) -> int:
        """Return the number of columns and records excluded for one reason."""

        return self.counts[category] + self.record_counts[category]

    def increment(self, category: ExclusionCategory, num: int = 1) -> None:
        """Add to the count of sites excluded for one reason."""

        if num < 0:
            raise ValueError(f"Exclusion counts cannot decrease: {category} {num}")

        self.counts[category] += num

    def increment_record(self, category: ExclusionCategory) -> None:
        """Count one VCF record skipped before it became an alignment column."""

        if category not in RECORD_CATEGORIES:
            raise ValueError(f"Not a VCF record exclusion category: {category}")

        self.record_counts[category] += 1

    @property
    def num_excluded_columns(self) -> int:
        """Return the number of alignment columns excluded before capping."""

        return sum(self.counts[category] for category in COLUMN_CATEGORIES)

    @property
    def num_excluded_records(self) -> int:
        """Return the number of VCF records skipped before normalization."""

        return sum(self.record_counts.values())


class Diagnostics:

    """Warning and info messages composed from a final ExclusionTally."""

    def __init__(
        self,
        tally: ExclusionTally,
        num_sites: int,
        max_sites: Optional[int] = None,
        transversions_only: bool = False,
        transitions_only: bool = False,
    ):
        """Instantiate Diagnostics.

        Parameters
        ----------
        tally : ExclusionTally
            Counts accumulated over the run.
        num_sites : int
            Number of sites in the final matrix.
        max_sites : int | None, optional
            Maximum number of sites requested, if any.
        transversions_only : bool, optional
            Whether only transversions were retained.
        transitions_only : bool, optional
            Whether only transitions were retained.

        """
        self.tally = tally
        self.num_sites = num_sites
        self.max_sites = max_sites
        self.transversions_only = transversions_only
        self.transitions_only = transitions_only

    @property
    def warning_lines(self) -> list[str]:
        """Return warning messages, one per line."""

        warning_lines = []
        proportion_0 = self.tally.proportion_0
        if (
            proportion_0 is not None
            and abs(proportion_0 - BALANCE_GOAL) > BALANCE_TOLERANCE
        ):
            warning_lines.append(
                "The number of '0' and '2' in the data set is expected to be "
                "similar, however, they differ by more than "
                f"{BALANCE_TOLERANCE * 100:.0f} percent."
            )

        if self.tally.max_sites_not_applied:
            warning_lines.append(
                f"The maximum number of SNPs has been set to {self.max_sites}, "
                "which is not smaller than the number of bi-allelic SNPs "
                "with sufficient information for SNAPP."
            )

        num_half_call_sites = self.tally.num_half_call_sites
        if num_half_call_sites > 0:
            warning_lines.append(
                f"Found {num_half_call_sites} site{plural_s(num_half_call_sites)} "
                "with genotypes that were half missing. "
                "These genotypes were ignored."
            )

        for category, template in CATEGORY_WARNING_TEMPLATES.items():
            num = self.tally[category]
            if num > 0:
                warning_lines.append(template.format(num=num, s=plural_s(num)))

        warning_lines = [f"WARNING. {line}" for line in warning_lines]
        return warning_lines

    @property
    def info_line(self) -> str:
        """Return a summary of the number of sites retained or removed."""

        if self.max_sites is not None:
            num_removed = self.tally[ExclusionCategory.OVER_CAP]
            info_line = (
                f"Removed {num_removed} bi-allelic sites due to specified "
                f"maximum number of {self.max_sites} sites."
            )
        else:
            if self.transversions_only:
                site_type = "transversion "
            elif self.transitions_only:
                site_type = "transition "
            else:
                site_type = ""

            info_line = f"Retained {self.num_sites} bi-allelic {site_type}sites."

        return info_line

    def log(self) -> None:
        """Log warnings, then the info line."""

        warning_lines = self.warning_lines
        if warning_lines:
            logger.warning("\n".join(warning_lines) + "\n")

        logger.info(f"{self.info_line}\n")

    def to_dict(self) -> dict[str, Any]:
        """Return counts and messages as a dictionary of builtin types."""

        summary = {
            "num_sites": self.num_sites,
            "max_sites": self.max_sites,
            "excluded_sites": {
                category.value: self.tally[category] for category in ExclusionCategory
            },
            "excluded_vcf_records": {
                category.value: self.tally.record_counts[category]
                for category in RECORD_CATEGORIES
            },
            "num_half_call_sites": self.tally.num_half_call_sites,
            "proportion_0": self.tally.proportion_0,
            "warnings": self.warning_lines,
            "info": self.info_line,
        }
        return summary

    def write_summary(
        self,
        summary_fp: str,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """Write a YAML summary of the run."""

        summary = dict(extra) if extra else {}
        summary.update(self.to_dict())
        with open(summary_fp, "w") as summary_file:
            yaml.safe_dump(summary, summary_file, sort_keys=False)

        logger.info(f"Wrote run summary:\n    {summary_fp}\n")


def plural_s(num: int) -> str:
    """Return "s" if num calls for a plural noun."""

    return "s" if num > 1 else ""
