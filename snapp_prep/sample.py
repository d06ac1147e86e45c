"""Define Sample class and subclasses specific to various input formats.

Classes defined herein include:
* Sample
* PhylipSample
* VCFSample

Each subclass knows how to load all samples from one input format.
Both produce a NormalizedInput: specimen identifiers and equal-length
sequences of nucleotide, ambiguity, binary, or missing-data symbols.

"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from snapp_prep.alphabet import (
    SequenceFormat,
    classify_sequence_format,
    symbol_for_alleles,
)
from snapp_prep.config import Config
from snapp_prep.diagnostics import ExclusionCategory, ExclusionTally
from snapp_prep.errors import GenotypeDataError, SequenceFormatError
from snapp_prep.utils.loaders import open_text, read_lines
from snapp_prep.utils.vcf import (
    MISSING_ALLELE_INDEX,
    NUM_FIXED_COLUMNS,
    VariantRecord,
    count_alleles,
    get_gt_index,
    parse_record,
    split_genotype,
)

logger = logging.getLogger(__name__)


class NormalizedInput(NamedTuple):

    """Samples loaded from one input file, with the format of their symbols."""

    samples: list[Sample]
    sequence_format: SequenceFormat
    input_fp: str

    @property
    def specimen_ids(self) -> list[str]:
        return [sample.specimen_id for sample in self.samples]

    @property
    def sequences(self) -> list[str]:
        return [sample.sequence for sample in self.samples]

    @property
    def num_sites(self) -> int:
        return len(self.samples[0].sequence)

    def to_array(self) -> NDArray[np.str_]:
        """Return symbols as a 2D array. Rows: samples. Columns: sites."""

        symbol_array = np.array(
            [list(sample.sequence) for sample in self.samples],
            dtype="<U1",
        ).reshape(len(self.samples), self.num_sites)

        return symbol_array


def load_samples_from_config(
    config: Config,
    tally: ExclusionTally,
) -> NormalizedInput:
    """Load samples from the input file named in a Config instance."""

    if config.run_from_phylip:
        normalized_input = PhylipSample.load(config.input_fp, tally)
    elif config.run_from_vcf:
        normalized_input = VCFSample.load(config.input_fp, tally)
    else:
        raise ValueError("Config specifies neither PHYLIP nor VCF input")

    return normalized_input


class Sample:

    """Class representing a specimen and its aligned sequence.

    Attributes
    ----------
    specimen_id : str
        Specimen identifier.
    sequence : str
        One symbol per site.

    """

    def __init__(self, specimen_id: str, sequence: str = ""):
        """Instantiate Sample.

        Parameters
        ----------
        specimen_id : str
            Specimen identifier.
        sequence : str, optional
            One symbol per site.

        """
        self.specimen_id = specimen_id
        self.sequence = sequence

    def __repr__(self) -> str:
        """Return string representation."""

        return (
            f"<{__name__}.{self.__class__.__name__}: "
            f"specimen_id={self.specimen_id}, num_sites={len(self.sequence)}>"
        )

    def __len__(self) -> int:
        return len(self.sequence)

    @classmethod
    def load(cls, input_fp: str, tally: ExclusionTally) -> NormalizedInput:
        """Load all samples from an input file. Subclasses must override."""

        raise NotImplementedError

    @classmethod
    def check_sequence_lengths(cls, samples: Sequence[Sample]) -> None:
        """Check that at least one sample is present and all lengths are equal.

        Raises
        ------
        SequenceFormatError
            If there are no samples, or if sequence lengths differ.

        """
        if not samples:
            raise SequenceFormatError("No specimens found in input file")

        lengths = {len(sample) for sample in samples}
        if len(lengths) > 1:
            raise SequenceFormatError(
                f"Sequences have different lengths: {sorted(lengths)}"
            )


class PhylipSample(Sample):

    """Class representing a specimen whose data are in a PHYLIP file.

    Expected input format:
    - Line 1: Header (ignored)
    - Other non-blank lines: Specimen identifier, whitespace, sequence

    """

    @classmethod
    def load(cls, phylip_fp: str, tally: ExclusionTally) -> NormalizedInput:
        """Load samples from a PHYLIP file and classify their sequence format.

        Raises
        ------
        SequenceFormatError
            If a line lacks a sequence, if sequence lengths differ,
            or if the alphabet is neither binary nor nucleotide.

        """
        logger.info(f"Mode: PHYLIP\n\nLoading sequences from:\n    {phylip_fp}\n")

        phylip_samples = []
        for line in read_lines(phylip_fp)[1:]:
            tokens = line.split()
            if not tokens:
                continue
            elif len(tokens) < 2:
                raise SequenceFormatError(
                    f"Expected a specimen identifier and a sequence:\n    {line}"
                )

            phylip_samples.append(cls(tokens[0], tokens[1].upper()))

        cls.check_sequence_lengths(phylip_samples)
        sequence_format = classify_sequence_format(
            sample.sequence for sample in phylip_samples
        )
        logger.info(
            f"Loaded {len(phylip_samples)} specimens "
            f"with {len(phylip_samples[0])} sites each\n"
        )

        return NormalizedInput(phylip_samples, sequence_format, phylip_fp)


class VCFSample(Sample):

    """Class representing a specimen whose data are in a VCF file.

    Sequences are built one site at a time. Each diploid genotype at a
    bi-allelic SNP becomes a base (homozygote), an ambiguity code (heterozygote),
    or a missing-data symbol.

    """

    missing_symbol = "N"

    def __init__(self, specimen_id: str):
        super().__init__(specimen_id)
        self.symbol_list: list[str] = []

    def put_symbol(self, symbol: str) -> None:
        """Append the symbol for one site."""

        self.symbol_list.append(symbol)

    def finalize(self) -> None:
        """Join symbols into the sequence."""

        self.sequence = "".join(self.symbol_list)
        self.symbol_list.clear()

    @classmethod
    def load(cls, vcf_fp: str, tally: ExclusionTally) -> NormalizedInput:
        """Load samples from a VCF file.

        Sites that are not single-nucleotide bi-allelic variants are counted
        in the tally and skipped.

        Raises
        ------
        SequenceFormatError
            If the header is absent, or if a record is malformed.
        GenotypeDataError
            If a genotype resolves to an unexpected pair of alleles.

        """
        logger.info(f"Mode: VCF\n\nLoading genotypes from:\n    {vcf_fp}\n")

        vcf_samples: Optional[list[VCFSample]] = None
        num_records = 0
        with open_text(vcf_fp) as vcf_file:
            for line in vcf_file:
                if line.startswith("##") or not line.strip():
                    continue
                elif line.startswith("#"):
                    if vcf_samples is None:
                        specimen_ids = line.split()[NUM_FIXED_COLUMNS:]
                        vcf_samples = [cls(specimen_id) for specimen_id in specimen_ids]
                elif vcf_samples is None:
                    raise SequenceFormatError(
                        'Expected a VCF header line beginning with "#CHROM" '
                        "but could not find it"
                    )
                else:
                    num_records += 1
                    cls.process_record(parse_record(line), vcf_samples, tally)

        if vcf_samples is None:
            raise SequenceFormatError(
                'Expected a VCF header line beginning with "#CHROM" '
                "but could not find it"
            )

        for vcf_sample in vcf_samples:
            vcf_sample.finalize()

        cls.check_sequence_lengths(vcf_samples)
        logger.info(
            f"Loaded {len(vcf_samples)} specimens from {num_records} records, "
            f"{len(vcf_samples[0])} of which are bi-allelic SNPs\n"
        )

        return NormalizedInput(list(vcf_samples), SequenceFormat.NUCLEOTIDE, vcf_fp)

    @classmethod
    def process_record(
        cls,
        record: VariantRecord,
        vcf_samples: list[VCFSample],
        tally: ExclusionTally,
    ) -> None:
        """Append one symbol per sample for a SNP, or tally a non-SNP record."""

        ref, alt = record.ref, record.alt
        if len(ref) == 1 and len(alt) == 1:
            cls.process_snp(record, vcf_samples, tally)
        elif len(ref) > 1 and "," not in ref:
            tally.increment_record(ExclusionCategory.INDEL)
        elif len(alt) > 1 and "," not in alt:
            tally.increment_record(ExclusionCategory.INDEL)
        elif "," in ref or "," in alt:
            num_alleles = count_alleles(ref, alt)
            if num_alleles == 3:
                tally.increment_record(ExclusionCategory.TRIALLELIC)
            elif num_alleles == 4:
                tally.increment_record(ExclusionCategory.TETRAALLELIC)
            else:
                raise SequenceFormatError(
                    "Unexpected combination of REF and ALT alleles "
                    f"at {record.chrom}:{record.pos} (REF: {ref}; ALT: {alt})"
                )
        else:
            raise SequenceFormatError(
                f"Empty REF or ALT allele at {record.chrom}:{record.pos}"
            )

    @classmethod
    def process_snp(
        cls,
        record: VariantRecord,
        vcf_samples: list[VCFSample],
        tally: ExclusionTally,
    ) -> None:
        """Append one symbol per sample for a single-nucleotide variant."""

        if len(record.sample_fields) != len(vcf_samples):
            raise SequenceFormatError(
                f"Expected {len(vcf_samples)} genotype fields "
                f"at {record.chrom}:{record.pos}, "
                f"but found {len(record.sample_fields)}"
            )

        gt_index = get_gt_index(record.format)
        index_to_allele = {"0": record.ref, "1": record.alt}
        found_half_call = False
        for vcf_sample, sample_field in zip(vcf_samples, record.sample_fields):
            index_1, index_2 = split_genotype(sample_field, gt_index)
            if index_1 == MISSING_ALLELE_INDEX or index_2 == MISSING_ALLELE_INDEX:
                if index_1 != index_2:
                    found_half_call = True

                symbol = cls.missing_symbol
            else:
                allele_1 = index_to_allele.get(index_1, index_1)
                allele_2 = index_to_allele.get(index_2, index_2)
                try:
                    symbol = symbol_for_alleles(allele_1, allele_2)
                except KeyError:
                    raise GenotypeDataError(
                        f"Unexpected genotype at {record.chrom}:{record.pos}: "
                        f"{allele_1} and {allele_2}"
                    )

            vcf_sample.put_symbol(symbol)

        if found_half_call:
            tally.num_half_call_sites += 1
