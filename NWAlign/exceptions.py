"""
Exception types raised by NWAlign
"""
from typing import Optional


class NWAlignError(ValueError):
    """Base class for every error raised by the package"""


class InvalidArgumentError(NWAlignError):
    """An engine was called with arguments it cannot work with"""


class SequenceValidationError(NWAlignError):
    """A sequence was rejected by a validation policy"""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"Sequence {index + 1}: {message}"
        super().__init__(message)


class FastaFormatError(NWAlignError):
    """FASTA text could not be turned into entries"""
