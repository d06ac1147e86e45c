import pytest
import yaml

from snapp_prep.diagnostics import (
    Diagnostics,
    ExclusionCategory,
    ExclusionTally,
    plural_s,
)


def make_tally(counts=None, **attributes):
    tally = ExclusionTally()
    for category, num in (counts or {}).items():
        tally.increment(category, num)

    for name, value in attributes.items():
        setattr(tally, name, value)

    return tally


@pytest.mark.parametrize("num, expected", [(1, ""), (2, "s"), (10, "s")])
def test_plural_s(num, expected):
    assert plural_s(num) == expected


def test_increment():
    tally = ExclusionTally()
    tally.increment(ExclusionCategory.MONOMORPHIC)
    tally.increment(ExclusionCategory.MONOMORPHIC, 2)
    tally.increment(ExclusionCategory.INDEL, 0)
    assert tally[ExclusionCategory.MONOMORPHIC] == 3
    assert tally[ExclusionCategory.INDEL] == 0
    with pytest.raises(ValueError):
        tally.increment(ExclusionCategory.MISSING, -1)


def test_num_excluded_columns():
    tally = make_tally(
        {
            ExclusionCategory.MISSING: 1,
            ExclusionCategory.MONOMORPHIC: 2,
            ExclusionCategory.SPECIES_INCOMPLETE: 3,
            ExclusionCategory.INDEL: 10,
            ExclusionCategory.OVER_CAP: 20,
        }
    )
    assert tally.num_excluded_columns == 6


def test_increment_record():
    tally = ExclusionTally()
    tally.increment_record(ExclusionCategory.TRIALLELIC)
    tally.increment(ExclusionCategory.TRIALLELIC, 2)
    assert tally[ExclusionCategory.TRIALLELIC] == 3
    assert tally.num_excluded_records == 1
    assert tally.num_excluded_columns == 2
    with pytest.raises(ValueError):
        tally.increment_record(ExclusionCategory.MONOMORPHIC)


def test_no_warnings():
    diagnostics = Diagnostics(ExclusionTally(), num_sites=12)
    assert diagnostics.warning_lines == []
    assert diagnostics.info_line == "Retained 12 bi-allelic sites."


def test_warning_order_and_wording():
    tally = make_tally(
        {
            ExclusionCategory.INDEL: 2,
            ExclusionCategory.TETRAALLELIC: 1,
            ExclusionCategory.TRIALLELIC: 3,
            ExclusionCategory.MONOMORPHIC: 1,
            ExclusionCategory.SPECIES_INCOMPLETE: 4,
            ExclusionCategory.MISSING: 2,
        },
        num_half_call_sites=1,
        proportion_0=0.25,
        max_sites_not_applied=True,
    )
    diagnostics = Diagnostics(tally, num_sites=5, max_sites=10)
    assert diagnostics.warning_lines == [
        "WARNING. The number of '0' and '2' in the data set is expected to be "
        "similar, however, they differ by more than 1 percent.",
        "WARNING. The maximum number of SNPs has been set to 10, which is not "
        "smaller than the number of bi-allelic SNPs with sufficient information "
        "for SNAPP.",
        "WARNING. Found 1 site with genotypes that were half missing. "
        "These genotypes were ignored.",
        "WARNING. Excluded 2 sites with only missing data.",
        "WARNING. Excluded 4 sites with only missing data in one or more species.",
        "WARNING. Excluded 1 monomorphic site.",
        "WARNING. Excluded 3 tri-allelic sites.",
        "WARNING. Excluded 1 tetra-allelic site.",
        "WARNING. Excluded 2 indel sites.",
    ]


@pytest.mark.parametrize(
    "proportion_0, warns",
    [(0.5, False), (0.505, False), (0.52, True)],
)
def test_balance_warning(proportion_0, warns):
    tally = make_tally(proportion_0=proportion_0)
    diagnostics = Diagnostics(tally, num_sites=1)
    assert bool(diagnostics.warning_lines) == warns


def test_site_type_warnings():
    tally = make_tally(
        {
            ExclusionCategory.TRANSITION: 1,
            ExclusionCategory.TRANSVERSION: 2,
        }
    )
    diagnostics = Diagnostics(tally, num_sites=1)
    assert diagnostics.warning_lines == [
        "WARNING. Excluded 1 transition site.",
        "WARNING. Excluded 2 transversion sites.",
    ]


@pytest.mark.parametrize(
    "transversions_only, transitions_only, expected_info_line",
    [
        (False, False, "Retained 7 bi-allelic sites."),
        (True, False, "Retained 7 bi-allelic transversion sites."),
        (False, True, "Retained 7 bi-allelic transition sites."),
    ],
)
def test_info_line(transversions_only, transitions_only, expected_info_line):
    diagnostics = Diagnostics(
        ExclusionTally(),
        num_sites=7,
        transversions_only=transversions_only,
        transitions_only=transitions_only,
    )
    assert diagnostics.info_line == expected_info_line


def test_info_line_with_cap():
    tally = make_tally({ExclusionCategory.OVER_CAP: 13})
    diagnostics = Diagnostics(tally, num_sites=5, max_sites=5)
    assert diagnostics.info_line == (
        "Removed 13 bi-allelic sites due to specified maximum number of 5 sites."
    )
    assert diagnostics.warning_lines == []


def test_log(caplog):
    tally = make_tally({ExclusionCategory.MONOMORPHIC: 2})
    diagnostics = Diagnostics(tally, num_sites=3)
    with caplog.at_level("INFO"):
        diagnostics.log()

    assert "WARNING. Excluded 2 monomorphic sites." in caplog.text
    assert "Retained 3 bi-allelic sites." in caplog.text


def test_write_summary(tmpdir):
    tally = make_tally(
        {ExclusionCategory.MONOMORPHIC: 2, ExclusionCategory.INDEL: 1},
        num_half_call_sites=3,
    )
    tally.increment_record(ExclusionCategory.TETRAALLELIC)
    diagnostics = Diagnostics(tally, num_sites=4)
    summary_fp = str(tmpdir.join("summary.yaml"))
    diagnostics.write_summary(summary_fp, extra={"input_fp": "input.phy"})

    with open(summary_fp) as summary_file:
        summary = yaml.safe_load(summary_file)

    assert summary["input_fp"] == "input.phy"
    assert summary["num_sites"] == 4
    assert summary["max_sites"] is None
    assert summary["num_half_call_sites"] == 3
    assert summary["proportion_0"] is None
    assert summary["excluded_sites"]["monomorphic"] == 2
    assert summary["excluded_sites"]["indel"] == 1
    assert summary["excluded_sites"]["over-cap"] == 0
    assert summary["excluded_sites"]["tetra-allelic"] == 1
    assert summary["excluded_vcf_records"] == {
        "indel": 0,
        "tri-allelic": 0,
        "tetra-allelic": 1,
    }
    assert set(summary["excluded_sites"]) == {
        category.value for category in ExclusionCategory
    }
    assert summary["warnings"] == diagnostics.warning_lines
    assert summary["info"] == "Retained 4 bi-allelic sites."
    assert list(summary)[0] == "input_fp"
