"""Data loaders."""

from __future__ import annotations

import gzip
import importlib.resources
import logging
import os
from typing import NamedTuple, TextIO

DATA_SUBPACKAGE = __package__.replace("utils", "data")

logger = logging.getLogger(__name__)


class DataFile(NamedTuple):

    """Attributes of a snapp_prep data file."""

    data_subdir: str
    filename: str
    description: str = "Data"


def get_data_path(data_file: DataFile) -> str:
    """Return the file-system path of a packaged data file.

    Raises
    ------
    FileNotFoundError
        When the data file is not present in the installed package.

    """
    package = f"{DATA_SUBPACKAGE}.{data_file.data_subdir}"
    data_path = str(importlib.resources.files(package).joinpath(data_file.filename))
    if not os.path.isfile(data_path):
        raise FileNotFoundError(
            f'Failed to locate "{data_file.filename}" in {package}.\n'
            f"{data_file.description} file is missing from the installation.\n"
        )

    return data_path


def open_text(file_path: str) -> TextIO:
    """Open a plain or gzipped text file for reading.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.

    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Input file not found: {file_path}")

    if os.path.splitext(file_path)[1] == ".gz":
        text_file = gzip.open(file_path, "rt")  # noqa SIM115
    else:
        text_file = open(file_path)  # noqa SIM115

    return text_file


def read_lines(file_path: str) -> list[str]:
    """Read all lines of a plain or gzipped text file, without line endings."""

    with open_text(file_path) as text_file:
        lines = [line.rstrip("\r\n") for line in text_file]

    return lines
