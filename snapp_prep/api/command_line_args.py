"""Command-line arguments."""

import argparse

from snapp_prep import __version__

DESCRIPTION = """
snapp_prep prepares NEXUS input files for SNAPP (BEAST2), given a PHYLIP
alignment or a VCF of SNP genotypes and a table linking species and specimens.

Nucleotide data are recoded as "0", "1", and "2", where "1" is heterozygous.
Sites that are not bi-allelic, and sites at which one or more species have
only missing data, are excluded.

Example:
    snapp_prep -p example.phy -t example.spc.txt -x snapp.nex
"""

DEFAULT_TABLE_FP = "example.spc.txt"
DEFAULT_NEXUS_FP = "snapp.nex"


def positive_int(value: str) -> int:
    """Parse a positive integer command-line value."""

    try:
        int_value = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer, got: {value}")

    if int_value <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got: {value}")

    return int_value


def get_command_line_args(set_defaults: bool = False) -> argparse.Namespace:
    """Process command-line arguments or set defaults.

    Parameters
    ----------
    set_defaults : bool
        When True, ignore command-line arguments and return defaults.

    Returns
    -------
    args : argparse.Namespace
        Command-line options and arguments.

    """
    parser = argparse.ArgumentParser(
        description=DESCRIPTION,
        formatter_class=RawTextWithDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"snapp_prep {__version__}",
    )

    group = parser.add_argument_group(
        "Input",
        "Exactly one of --phylip and --vcf is required.",
    )
    group.add_argument(
        "-p",
        "--phylip",
        dest="phylip_fp",
        metavar="file_name",
        help="File with SNP data in PHYLIP format.\n"
        "Line 1 is ignored. Each other line: specimen ID, sequence.\n"
        "Sequences may be nucleotide (A, C, G, T, IUPAC ambiguity\n"
        'codes R, Y, S, W, K, M) or binary ("0", "1", "2").\n'
        'Missing data: "-", "?", or "N"',
    )
    group.add_argument(
        "-v",
        "--vcf",
        dest="vcf_fp",
        metavar="file_name",
        help="File with SNP data in VCF format (.vcf or .vcf.gz)",
    )
    group.add_argument(
        "-t",
        "--table",
        dest="table_fp",
        metavar="file_name",
        default=DEFAULT_TABLE_FP,
        help="File with table linking species and specimens.\n"
        "Each line: species ID, specimen ID. Optional header row",
    )

    group = parser.add_argument_group("Example data")
    group.add_argument(
        "-ex-phy",
        "--example_phylip",
        action="store_true",
        help="Run on a small example PHYLIP alignment and species table",
    )
    group.add_argument(
        "-ex-vcf",
        "--example_vcf",
        action="store_true",
        help="Run on a small example VCF and species table",
    )

    group = parser.add_argument_group("Site selection")
    group.add_argument(
        "-m",
        "--max_snps",
        dest="max_sites",
        metavar="number",
        type=positive_int,
        help="Maximum number of SNPs to be used (default: no maximum)",
    )
    group.add_argument(
        "-r",
        "--transversions",
        dest="transversions_only",
        action="store_true",
        help="Use transversions only",
    )
    group.add_argument(
        "-i",
        "--transitions",
        dest="transitions_only",
        action="store_true",
        help="Use transitions only",
    )
    group.add_argument(
        "--seed",
        dest="seed",
        metavar="integer",
        type=int,
        help="Seed for random 0/2 assignment and SNP subsampling\n"
        "(default: unseeded)",
    )

    group = parser.add_argument_group("Output")
    group.add_argument(
        "-x",
        "--nex",
        dest="nexus_fp",
        metavar="file_name",
        default=DEFAULT_NEXUS_FP,
        help="Output file in NEXUS format",
    )
    group.add_argument(
        "-n",
        "--no_annotation",
        action="store_true",
        help="Omit the comment naming the input file",
    )
    group.add_argument(
        "-s",
        "--summary",
        dest="summary_fp",
        metavar="file_name",
        help="Write a YAML summary of excluded sites",
    )

    if set_defaults:
        # Set default values for all options and arguments
        args = parser.parse_args([])
    else:
        # Read options and arguments from from sys.argv[1:]
        args = parser.parse_args()

    return args


def get_command_line_arg_defaults() -> argparse.Namespace:
    """Get default values of command-line arguments.

    Returns
    -------
    args : argparse.Namespace
        Default values of all command-line options and arguments.

    """
    args = get_command_line_args(set_defaults=True)

    return args


class RawTextWithDefaultsHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Help message formatter that retains formatting and adds defaults.

    Combines argparse.RawTextHelpFormatter and argparse.ArgumentDefaultsHelpFormatter.

    """

    def _split_lines(self, text, _):
        return text.splitlines()

    def _get_help_string(self, action):
        help_message = action.help
        if "%(default)" not in action.help and "(default:" not in action.help:
            if action.default is not argparse.SUPPRESS:
                defaulting_nargs = [argparse.OPTIONAL, argparse.ZERO_OR_MORE]
                if action.option_strings or action.nargs in defaulting_nargs:
                    help_message += "\n(default: %(default)s)"

        return help_message
