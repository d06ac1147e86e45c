"""Prepare SNAPP input.

For details, run:
    snapp_prep --help

"""

import logging
import sys

from snapp_prep.api.command_line_args import get_command_line_args
from snapp_prep.api.prepare_snapp_input import prepare_snapp_input
from snapp_prep.errors import SnappPrepError

root_logger = logging.getLogger()


def main() -> None:
    """Configure logging and prepare SNAPP input."""

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    command_line_args = get_command_line_args()
    try:
        prepare_snapp_input(
            command_line_args=command_line_args,
            root_logger=root_logger,
        )
    except (SnappPrepError, FileNotFoundError) as error:
        sys.exit(f"\nERROR. {error}\n")


if __name__ == "__main__":
    main()
