"""Define Config class, which includes command-line arguments."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

import numpy as np

from snapp_prep import __version__
from snapp_prep.api.command_line_args import get_command_line_arg_defaults
from snapp_prep.errors import ConfigurationError
from snapp_prep.utils.loaders import DataFile, get_data_path

DASHED_LINE = "-" * 72 + "\n"

logger = logging.getLogger(__name__)


class Config:
    """snapp_prep configuration class.

    This class is a container for parameters, constants, filenames,
    and the random number generators used in a run.

    """

    # Example input files
    # ----------------------------------------------------------------------
    example_phylip_data_file = DataFile(
        "example",
        "example.phy",
        "Example PHYLIP alignment",
    )
    example_vcf_data_file = DataFile("example", "example.vcf", "Example VCF")
    example_table_data_file = DataFile(
        "example",
        "example.spc.txt",
        "Example species table",
    )

    # Output files
    # ----------------------------------------------------------------------
    log_fn_tp = "{nexus_root}.log"

    def __init__(
        self,
        command_line_args: Optional[argparse.Namespace] = None,
        suppress_output: bool = False,
        nexus_fp: Optional[str] = None,
        recoding_rng: Optional[np.random.Generator] = None,
        sampling_rng: Optional[np.random.Generator] = None,
        root_logger: Optional[logging.Logger] = None,
    ):
        """Instantiate Config.

        Parameters
        ----------
        command_line_args : argparse.Namespace | None, optional
            Command-line arguments.
        suppress_output : bool, optional
            When True, do not write the NEXUS file, summary, or log.
        nexus_fp : str | None, optional
            Output file path.
            When not None, override command_line_args value.
        recoding_rng : np.random.Generator | None, optional
            Random source for assigning "0" and "2" to the alleles of each site.
            When None, derived from the seed argument.
        sampling_rng : np.random.Generator | None, optional
            Random source for subsampling sites to the maximum number.
            When None, derived from the seed argument.
        root_logger : logging.Logger | None, optional
            If supplied, add a file handler.
            To populate the log file, set the logging level to INFO or lower.

        Raises
        ------
        ConfigurationError
            If input options are missing or conflicting.

        """
        self.args = (
            command_line_args
            if command_line_args is not None
            else get_command_line_arg_defaults()
        )
        self.invoked_from_command_line = command_line_args is not None
        self.suppress_output = suppress_output

        self.set_params_general(nexus_fp)
        self.set_params_based_on_input_type()
        self.set_random_number_generators(recoding_rng, sampling_rng)
        self.set_log_file_path(root_logger)
        self.log_welcome_message()

    def __repr__(self) -> str:
        """Return string representation."""

        return f"<{__name__}.{self.__class__.__name__}: command_line_args={self.args}>"

    def set_params_general(self, nexus_fp: Optional[str]) -> None:
        """Set general parameters and check for conflicting site-type options."""

        self.nexus_fp = nexus_fp if nexus_fp is not None else self.args.nexus_fp
        self.summary_fp = self.args.summary_fp
        self.annotate = not self.args.no_annotation
        self.max_sites = self.args.max_sites
        self.transversions_only = self.args.transversions_only
        self.transitions_only = self.args.transitions_only

        if self.transversions_only and self.transitions_only:
            raise ConfigurationError(
                "Only one of the two options --transversions (-r) "
                "and --transitions (-i) can be used"
            )

        if self.max_sites is not None and self.max_sites <= 0:
            raise ConfigurationError(
                f"Maximum number of SNPs must be positive: {self.max_sites}"
            )

    def set_params_based_on_input_type(self) -> None:
        """Set input file path and mode, resolving example data if requested."""

        if self.args.example_phylip or self.args.example_vcf:
            if self.args.example_phylip and self.args.example_vcf:
                raise ConfigurationError(
                    "Only one of --example_phylip and --example_vcf can be used"
                )

            if self.args.example_phylip:
                self.args.phylip_fp = get_data_path(type(self).example_phylip_data_file)
            else:
                self.args.vcf_fp = get_data_path(type(self).example_vcf_data_file)

            self.args.table_fp = get_data_path(type(self).example_table_data_file)

        phylip_fp, vcf_fp = self.args.phylip_fp, self.args.vcf_fp
        if phylip_fp is None and vcf_fp is None:
            raise ConfigurationError(
                "An input file must be provided, either in PHYLIP format "
                "with option --phylip (-p) or in VCF format with option --vcf (-v)"
            )
        elif phylip_fp is not None and vcf_fp is not None:
            raise ConfigurationError(
                "Only one of the two options --phylip (-p) and --vcf (-v) can be used"
            )

        self.run_from_phylip = phylip_fp is not None
        self.run_from_vcf = vcf_fp is not None
        self.input_fp: str = phylip_fp if self.run_from_phylip else vcf_fp
        self.table_fp: str = self.args.table_fp

    def set_random_number_generators(
        self,
        recoding_rng: Optional[np.random.Generator],
        sampling_rng: Optional[np.random.Generator],
    ) -> None:
        """Set independent random number generators for recoding and sampling."""

        recoding_seed_seq, sampling_seed_seq = np.random.SeedSequence(
            self.args.seed
        ).spawn(2)
        self.recoding_rng = (
            recoding_rng
            if recoding_rng is not None
            else np.random.default_rng(recoding_seed_seq)
        )
        self.sampling_rng = (
            sampling_rng
            if sampling_rng is not None
            else np.random.default_rng(sampling_seed_seq)
        )

    def set_log_file_path(
        self,
        root_logger: Optional[logging.Logger] = None,
    ) -> None:
        """Set log file path.

        If (and only if) `root_logger` is supplied, add a file handler.
        In general, library code should not be in the business of adding
        handlers, but we (conditionally) do so here since the log filepath
        is dynamically determined.

        Parameters
        ----------
        root_logger : logging.Logger | None, optional
            If supplied, add a file handler.

        """
        nexus_root = os.path.splitext(self.nexus_fp)[0]
        self.log_fp = type(self).log_fn_tp.format(nexus_root=nexus_root)
        self.root_logger = root_logger
        if self.root_logger is not None and not self.suppress_output:
            self.root_logger.addHandler(logging.FileHandler(self.log_fp, "w"))

    def log_welcome_message(self) -> None:
        """Log welcome message."""

        logger.info(
            f"\n{DASHED_LINE}   snapp_prep {__version__} "
            "| SNAPP input preparation"
        )

        if self.invoked_from_command_line:
            command = os.path.basename(sys.argv[0])
            args = " ".join(sys.argv[1:])
            logger.info(f"      Command: {command} {args}")

        if self.root_logger is not None and not self.suppress_output:
            logger.info(f"      Log:     {self.log_fp}")

        logger.info(DASHED_LINE)
