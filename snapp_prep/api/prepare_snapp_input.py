"""Prepare SNAPP input."""

import argparse
import logging
from typing import Optional

import numpy as np

from snapp_prep.config import Config
from snapp_prep.pipeline import PipelineResult, prepare_snapp_input_from_config


def prepare_snapp_input(
    command_line_args: Optional[argparse.Namespace] = None,
    suppress_output: bool = False,
    nexus_fp: Optional[str] = None,
    recoding_rng: Optional[np.random.Generator] = None,
    sampling_rng: Optional[np.random.Generator] = None,
    root_logger: Optional[logging.Logger] = None,
) -> PipelineResult:
    """Configure run, recode and filter sites, and write SNAPP input.

    Parameters
    ----------
    command_line_args : argparse.Namespace | None, optional
        Command-line arguments.
    suppress_output : bool, optional
        When True, do not generate output files.
    nexus_fp : str | None, optional
        Output file path.
        When not None, override command_line_args value.
    recoding_rng : np.random.Generator | None, optional
        Random source for assigning "0" and "2" to the alleles of each site.
    sampling_rng : np.random.Generator | None, optional
        Random source for subsampling sites to the maximum number.
    root_logger : logging.Logger | None, optional
        If supplied, add a file handler.
        To populate the log file, set the logging level to INFO or lower.

    Returns
    -------
    pipeline_result : PipelineResult
        - matrix: SnappMatrix with recoded sequences, specimen and species
              identifiers. Use matrix.to_dataframe() for a tabular view.
        - diagnostics: Diagnostics with exclusion counts and messages.

    """
    config = Config(
        command_line_args=command_line_args,
        suppress_output=suppress_output,
        nexus_fp=nexus_fp,
        recoding_rng=recoding_rng,
        sampling_rng=sampling_rng,
        root_logger=root_logger,
    )
    pipeline_result = prepare_snapp_input_from_config(config)

    return pipeline_result
