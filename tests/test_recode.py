import numpy as np
import pytest

from snapp_prep.alphabet import (
    AMBIGUITY_CODE_TO_BASES,
    SequenceFormat,
    symbol_for_alleles,
)
from snapp_prep.diagnostics import ExclusionCategory, ExclusionTally
from snapp_prep.errors import GenotypeDataError
from snapp_prep.recode import SiteRecoder
from tests.common import FixedPolarityRng


def to_array(sequences):
    return np.array([list(sequence) for sequence in sequences], dtype="<U1")


def to_sequences(array):
    return ["".join(row) for row in array.tolist()]


def test_nucleotide_example_excludes_everything():
    tally = ExclusionTally()
    site_recoder = SiteRecoder(np.random.default_rng())
    recoded_array = site_recoder.recode(
        to_array(["ACGT", "ACGA", "ACGC"]),
        SequenceFormat.NUCLEOTIDE,
        tally,
    )
    assert recoded_array.shape == (3, 0)
    assert tally[ExclusionCategory.MONOMORPHIC] == 3
    assert tally[ExclusionCategory.TRIALLELIC] == 1
    assert tally.num_excluded_columns == 4


def test_nucleotide_allele_counts():
    tally = ExclusionTally()
    site_recoder = SiteRecoder(FixedPolarityRng())
    recoded_array = site_recoder.recode(
        to_array(["A-MRA", "N?KYG", "-NGWA"]),
        SequenceFormat.NUCLEOTIDE,
        tally,
    )
    # Columns: monomorphic, missing, tetra-allelic, tetra-allelic, A/G
    assert tally[ExclusionCategory.MONOMORPHIC] == 1
    assert tally[ExclusionCategory.MISSING] == 1
    assert tally[ExclusionCategory.TRIALLELIC] == 0
    assert tally[ExclusionCategory.TETRAALLELIC] == 2
    assert to_sequences(recoded_array) == ["0", "2", "0"]


def test_homozygotes_get_opposite_codes():
    for seed in range(20):
        site_recoder = SiteRecoder(np.random.default_rng(seed))
        recoded_array = site_recoder.recode(
            to_array(["A", "R", "G", "N"]),
            SequenceFormat.NUCLEOTIDE,
            ExclusionTally(),
        )
        ref_code, het_code, alt_code, missing_code = recoded_array[:, 0]
        assert {ref_code, alt_code} == {"0", "2"}
        assert het_code == "1"
        assert missing_code == "-"


def test_polarity_is_random():
    site_recoder = SiteRecoder(np.random.default_rng(0))
    recoded_array = site_recoder.recode(
        to_array(["A" * 200, "G" * 200]),
        SequenceFormat.NUCLEOTIDE,
        ExclusionTally(),
    )
    assert set(recoded_array[0]) == {"0", "2"}
    assert (recoded_array[0] != recoded_array[1]).all()


def test_recoding_preserves_genotypes():
    rng = np.random.default_rng(42)
    pairs = ["AC", "AG", "AT", "CG", "CT", "GT"]
    num_specimens, num_sites = 8, 60
    columns = []
    for _ in range(num_sites):
        base_0, base_2 = pairs[rng.integers(len(pairs))]
        code = symbol_for_alleles(base_0, base_2)
        column = [base_0, base_2] + list(
            rng.choice([base_0, base_2, code, "N", "-"], size=num_specimens - 2)
        )
        columns.append(column)

    symbol_array = np.array(columns, dtype="<U1").T
    site_recoder = SiteRecoder(np.random.default_rng(7))
    recoded_array = site_recoder.recode(
        symbol_array,
        SequenceFormat.NUCLEOTIDE,
        ExclusionTally(),
    )
    assert recoded_array.shape == symbol_array.shape

    for position in range(num_sites):
        column, recoded_column = symbol_array[:, position], recoded_array[:, position]
        base_0 = column[0] if recoded_column[0] == "0" else column[1]
        base_2 = column[1] if base_0 == column[0] else column[0]
        decoded = {"0": base_0, "2": base_2, "1": symbol_for_alleles(base_0, base_2)}
        for symbol, recoded_symbol in zip(column, recoded_column):
            if symbol in "N-":
                assert recoded_symbol == "-"
            else:
                assert decoded[recoded_symbol] == symbol


@pytest.mark.parametrize(
    "transversions_only, transitions_only, expected_sequences, category",
    [
        (True, False, ["2", "0"], ExclusionCategory.TRANSITION),
        (False, True, ["00", "22"], ExclusionCategory.TRANSVERSION),
    ],
)
def test_site_type_restrictions(
    transversions_only,
    transitions_only,
    expected_sequences,
    category,
):
    tally = ExclusionTally()
    site_recoder = SiteRecoder(
        FixedPolarityRng(),
        transversions_only=transversions_only,
        transitions_only=transitions_only,
    )
    recoded_array = site_recoder.recode(
        to_array(["AAC", "GGA"]),
        SequenceFormat.NUCLEOTIDE,
        tally,
    )
    assert to_sequences(recoded_array) == expected_sequences
    assert tally[category] == 3 - len(expected_sequences[0])


def test_conflicting_site_type_restrictions():
    with pytest.raises(ValueError):
        SiteRecoder(FixedPolarityRng(), transversions_only=True, transitions_only=True)


def test_unexpected_symbol():
    site_recoder = SiteRecoder(FixedPolarityRng())
    with pytest.raises(GenotypeDataError, match="Position 2: Found unexpected base: X"):
        site_recoder.recode(
            to_array(["AX", "AC"]),
            SequenceFormat.NUCLEOTIDE,
            ExclusionTally(),
        )


def test_ambiguity_codes_are_heterozygous():
    for code, bases in AMBIGUITY_CODE_TO_BASES.items():
        site_recoder = SiteRecoder(FixedPolarityRng(1))
        recoded_array = site_recoder.recode(
            to_array(sorted(bases) + [code]),
            SequenceFormat.NUCLEOTIDE,
            ExclusionTally(),
        )
        assert to_sequences(recoded_array) == ["2", "0", "1"]


def test_binary_pass_through():
    sequences = ["0120-0?2", "0121-002", "2100-202", "2102-0N2"]
    tally = ExclusionTally()
    site_recoder = SiteRecoder(FixedPolarityRng())
    symbol_array = to_array(sequences)
    recoded_array = site_recoder.recode(symbol_array, SequenceFormat.BINARY, tally)
    assert to_sequences(recoded_array) == ["0200", "0210", "2002", "2020"]
    assert (recoded_array == symbol_array[:, [0, 2, 3, 5]]).all()
    assert tally[ExclusionCategory.MISSING] == 1
    assert tally[ExclusionCategory.MONOMORPHIC] == 3
    assert tally.proportion_0 == pytest.approx(9 / 15)


def test_binary_missing_data_retained_verbatim():
    site_recoder = SiteRecoder(FixedPolarityRng())
    recoded_array = site_recoder.recode(
        to_array(["0?", "N2", "2-"]),
        SequenceFormat.BINARY,
        ExclusionTally(),
    )
    assert to_sequences(recoded_array) == ["0", "N", "2"]


def test_binary_without_homozygotes_has_no_proportion():
    tally = ExclusionTally()
    site_recoder = SiteRecoder(FixedPolarityRng())
    site_recoder.recode(to_array(["1", "-"]), SequenceFormat.BINARY, tally)
    assert tally.proportion_0 is None
