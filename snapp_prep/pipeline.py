"""Run all stages of SNAPP input preparation.

Stages, in order:
1. Load and normalize samples (PHYLIP or VCF)
2. Load the species table and check it against the samples
3. Recode sites, excluding those that are not bi-allelic
4. Exclude sites at which a species has only missing data
5. Subsample sites to the maximum number, if specified
6. Report exclusions and write output

"""

from __future__ import annotations

import logging
from typing import NamedTuple

from snapp_prep.config import Config
from snapp_prep.diagnostics import Diagnostics, ExclusionTally
from snapp_prep.matrix import SnappMatrix
from snapp_prep.recode import SiteRecoder
from snapp_prep.sample import load_samples_from_config
from snapp_prep.sampler import cap_sites
from snapp_prep.species import SpeciesTable, filter_incomplete_species
from snapp_prep.utils.context_managers import timed_stage

logger = logging.getLogger(__name__)

STAGE_LOAD = "load input"
STAGE_TABLE = "check species table"
STAGE_RECODE = "recode sites"
STAGE_SPECIES_FILTER = "filter incomplete species"
STAGE_CAP = "cap sites"


class PipelineResult(NamedTuple):

    """Recoded matrix and the diagnostics of the run that produced it."""

    matrix: SnappMatrix
    diagnostics: Diagnostics


def prepare_snapp_input_from_config(config: Config) -> PipelineResult:
    """Prepare SNAPP input as specified by a Config instance.

    Parameters
    ----------
    config : Config
        snapp_prep Config instance.

    Returns
    -------
    pipeline_result : PipelineResult
        Recoded matrix and diagnostics.

    """
    tally = ExclusionTally()
    stage_seconds: dict[str, float] = {}
    with timed_stage(STAGE_LOAD, stage_seconds):
        normalized_input = load_samples_from_config(config, tally)
        specimen_ids = normalized_input.specimen_ids

    with timed_stage(STAGE_TABLE, stage_seconds):
        species_table = SpeciesTable.from_file(config.table_fp)
        species_table.check_specimens(specimen_ids, config.table_fp)

    with timed_stage(STAGE_RECODE, stage_seconds):
        site_recoder = SiteRecoder(
            config.recoding_rng,
            transversions_only=config.transversions_only,
            transitions_only=config.transitions_only,
        )
        recoded_array = site_recoder.recode(
            normalized_input.to_array(),
            normalized_input.sequence_format,
            tally,
        )

    with timed_stage(STAGE_SPECIES_FILTER, stage_seconds):
        recoded_array = filter_incomplete_species(
            recoded_array,
            specimen_ids,
            species_table,
            tally,
        )

    with timed_stage(STAGE_CAP, stage_seconds):
        recoded_array = cap_sites(
            recoded_array,
            config.max_sites,
            config.sampling_rng,
            tally,
        )

    snapp_matrix = SnappMatrix(
        specimen_ids,
        species_table.species_ids_for(specimen_ids),
        recoded_array,
        normalized_input.sequence_format,
        normalized_input.input_fp,
    )
    diagnostics = Diagnostics(
        tally,
        snapp_matrix.num_sites,
        max_sites=config.max_sites,
        transversions_only=config.transversions_only,
        transitions_only=config.transitions_only,
    )
    diagnostics.log()

    if not config.suppress_output:
        logger.info("Output\n")
        snapp_matrix.write_nexus(config.nexus_fp, annotate=config.annotate)
        if config.summary_fp:
            diagnostics.write_summary(
                config.summary_fp,
                extra={
                    "input_fp": normalized_input.input_fp,
                    "table_fp": config.table_fp,
                    "sequence_format": normalized_input.sequence_format.value,
                    "num_specimens": snapp_matrix.num_specimens,
                    "stage_seconds": stage_seconds,
                },
            )

    return PipelineResult(snapp_matrix, diagnostics)
