"""Subsample sites to a maximum number."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from snapp_prep.diagnostics import ExclusionCategory, ExclusionTally

logger = logging.getLogger(__name__)


def cap_sites(
    recoded_array: NDArray[np.str_],
    max_sites: Optional[int],
    rng: np.random.Generator,
    tally: ExclusionTally,
) -> NDArray[np.str_]:
    """Randomly select at most max_sites sites, preserving their order.

    Parameters
    ----------
    recoded_array : NDArray[np.str_]
        Recoded symbols. Rows: specimens. Columns: sites.
    max_sites : int | None
        Maximum number of sites to retain. When None, retain all sites.
    rng : np.random.Generator
        Source of the random selection.
    tally : ExclusionTally
        Incremented by the number of sites removed. If max_sites is not
        smaller than the number of sites, flagged for a warning instead.

    Returns
    -------
    capped_array : NDArray[np.str_]
        Selected sites, sampled uniformly without replacement,
        in their original order.

    """
    if max_sites is None:
        return recoded_array

    num_sites = recoded_array.shape[1]
    if max_sites >= num_sites:
        tally.max_sites_not_applied = True
        return recoded_array

    selected_indexes = np.sort(rng.choice(num_sites, size=max_sites, replace=False))
    capped_array = recoded_array[:, selected_indexes]
    tally.increment(ExclusionCategory.OVER_CAP, num_sites - max_sites)
    logger.info(f"Subsampled {max_sites} of {num_sites} sites\n")

    return capped_array
