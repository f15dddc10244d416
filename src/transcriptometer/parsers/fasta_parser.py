"""
FASTA file parser for Transcriptometer.
Streams sequence records lazily; the file is never read into a single buffer.
"""

import gzip
import itertools
import logging
from pathlib import Path
from typing import IO, Iterable, Iterator, Union

from Bio.SeqIO.FastaIO import SimpleFastaParser

from transcriptometer.core.errors import InputNotFound, MalformedInput
from transcriptometer.core.models import SequenceRecord

logger = logging.getLogger(__name__)

def validate_input(fasta_path: Union[str, Path]) -> Path:
    """
    Check that the input FASTA exists and is a readable regular file.

    :param fasta_path: Path to the FASTA file.
    :return: The path as a Path object.
    """
    path = Path(fasta_path)
    if not path.is_file():
        raise InputNotFound(f"File {path} not found!")
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise InputNotFound(f"File {path} not found! ({e.strerror})") from e
    return path

def open_fasta(fasta_path: Union[str, Path]) -> IO[str]:
    """
    Open a plain or gzip-compressed FASTA file in text mode.
    """
    path = str(fasta_path)
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")

def iter_records(handle: Iterable[str]) -> Iterator[SequenceRecord]:
    """
    Parse FASTA records from an iterable of text lines.

    Multi-line sequence bodies are concatenated with line breaks removed.
    Blank lines before the first header are skipped.

    :param handle: Open text handle or any iterable of lines.
    :return: A lazy, single-use iterator of SequenceRecord objects.
    """
    lines = iter(handle)
    for first_line in lines:
        if not first_line.strip():
            continue
        if not first_line.startswith(">"):
            raise MalformedInput(
                f"Sequence data found before the first header line: {first_line.strip()[:60]!r}"
            )
        break
    else:
        raise MalformedInput("No FASTA records found in input")

    for title, sequence in SimpleFastaParser(itertools.chain([first_line], lines)):
        yield SequenceRecord(header=title, sequence=sequence)

def read_fasta(fasta_path: Union[str, Path]) -> Iterator[SequenceRecord]:
    """
    Stream the records of a FASTA file.

    :param fasta_path: Path to the FASTA file (optionally .gz).
    :return: A lazy iterator of SequenceRecord objects.
    """
    logger.debug(f"Opening FASTA file {fasta_path}")
    with open_fasta(fasta_path) as handle:
        yield from iter_records(handle)
