"""VCF utilities.

Only the subset of VCF needed to extract bi-allelic SNPs is supported:
meta-information lines ("##"), one header line ("#CHROM ..."),
and whitespace-delimited records with a GT subfield in the FORMAT column.

"""

from __future__ import annotations

from typing import NamedTuple

from snapp_prep.errors import SequenceFormatError

NUM_FIXED_COLUMNS = 9  # CHROM POS ID REF ALT QUAL FILTER INFO FORMAT
GENOTYPE_SEPARATORS = ("/", "|")
ALLELE_INDEXES = {"0", "1", "."}
MISSING_ALLELE_INDEX = "."


class VariantRecord(NamedTuple):

    """Fields of one VCF record used for SNP extraction."""

    chrom: str
    pos: str
    ref: str
    alt: str
    format: str
    sample_fields: list[str]


def parse_record(line: str) -> VariantRecord:
    """Split a VCF data line into a VariantRecord.

    Raises
    ------
    SequenceFormatError
        If the line has fewer than the nine fixed columns.

    """
    fields = line.split()
    if len(fields) < NUM_FIXED_COLUMNS:
        raise SequenceFormatError(
            f"Expected at least {NUM_FIXED_COLUMNS} columns in VCF record, "
            f"but found {len(fields)}:\n    {line}"
        )

    record = VariantRecord(
        chrom=fields[0],
        pos=fields[1],
        ref=fields[3].upper(),
        alt=fields[4].upper(),
        format=fields[8],
        sample_fields=fields[NUM_FIXED_COLUMNS:],
    )
    return record


def get_gt_index(format_str: str) -> int:
    """Return the index of the GT subfield in a FORMAT string.

    Raises
    ------
    SequenceFormatError
        If the FORMAT string lacks a GT subfield.

    """
    try:
        gt_index = format_str.split(":").index("GT")
    except ValueError:
        raise SequenceFormatError(
            f'Expected "GT" in FORMAT field but could not find it: {format_str}'
        )

    return gt_index


def split_genotype(sample_field: str, gt_index: int) -> tuple[str, str]:
    """Extract the GT subfield of a sample column and split it into allele indexes.

    Raises
    ------
    SequenceFormatError
        If the GT subfield is absent, lacks a "/" or "|" separator,
        or includes an allele index other than 0, 1, or ".".

    """
    subfields = sample_field.split(":")
    if gt_index >= len(subfields):
        raise SequenceFormatError(
            f"Missing GT subfield in sample field: {sample_field}"
        )

    genotype = subfields[gt_index]
    for separator in GENOTYPE_SEPARATORS:
        if separator in genotype:
            allele_indexes = genotype.split(separator)
            break
    else:
        raise SequenceFormatError(
            'Expected alleles to be separated by "/" or "|", '
            f"but found no such separator: {genotype}"
        )

    index_1, index_2 = allele_indexes[0], allele_indexes[1]
    if index_1 not in ALLELE_INDEXES or index_2 not in ALLELE_INDEXES:
        raise SequenceFormatError(
            "Expected genotypes to be bi-allelic and contain only 0s and/or 1s "
            f'or missing data marked with ".", but found {index_1} and {index_2}'
        )

    return index_1, index_2


def count_alleles(ref: str, alt: str) -> int:
    """Return the number of REF and ALT alleles of a comma-containing record."""

    num_alleles = ref.count(",") + alt.count(",") + 2
    return num_alleles
