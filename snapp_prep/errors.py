"""Exceptions raised while preparing SNAPP input.

Every exception derives from SnappPrepError and from the builtin exception
closest in meaning, so callers may catch either.

"""

from __future__ import annotations


class SnappPrepError(Exception):

    """Base class for fatal snapp_prep errors."""


class ConfigurationError(SnappPrepError, ValueError):

    """Missing or conflicting options."""


class SequenceFormatError(SnappPrepError, ValueError):

    """Input file content that cannot be parsed or classified."""


class SpecimenMismatchError(SnappPrepError, ValueError):

    """Species table inconsistent with the specimens of the input file."""


class GenotypeDataError(SnappPrepError, RuntimeError):

    """Unexpected base or base combination encountered.

    This indicates that input normalization let through a symbol
    that recoding cannot handle.

    """

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"Position {position + 1}: {message}"

        super(GenotypeDataError, self).__init__(message)
        self.position = position
