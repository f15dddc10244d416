"""
Exception types raised by the Transcriptometer pipeline.
"""

class TranscriptometerError(Exception):
    """
    Base class for all pipeline errors.
    """

class UsageError(TranscriptometerError):
    """
    Raised when the command line does not contain exactly one input path.
    """

class InputNotFound(TranscriptometerError, FileNotFoundError):
    """
    Raised when the input FASTA path does not exist or is not a regular file.
    """

class MalformedInput(TranscriptometerError, ValueError):
    """
    Raised when sequence data precedes the first header line or the input holds no records.
    """

class EmptyAssembly(TranscriptometerError, ValueError):
    """
    Raised when statistics are requested for an empty list of lengths.
    """

class ThresholdUnreachable(TranscriptometerError, RuntimeError):
    """
    Raised when a cumulative length scan never reaches the requested fraction.
    This indicates an internal inconsistency, not a user error.
    """
