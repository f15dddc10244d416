"""
Base composition for Transcriptometer.
Counts are folded record by record so no running counter is shared across the stream.
"""

from collections import Counter
from functools import reduce
from typing import Iterable

from transcriptometer.core.models import CompositionCounts

def count_bases(sequence: str) -> CompositionCounts:
    """
    Count A, C, G, T and N case-insensitively. Any other character
    (IUPAC ambiguity codes, gaps) is counted as 'other'.

    :param sequence: Raw sequence characters.
    :return: CompositionCounts for the sequence.
    """
    counts = Counter(sequence.upper())
    a, c, g, t, n = (counts.pop(base, 0) for base in "ACGTN")
    return CompositionCounts(a=a, c=c, g=g, t=t, n=n, other=sum(counts.values()))

def accumulate_composition(counts: Iterable[CompositionCounts]) -> CompositionCounts:
    """
    Fold per-record counts into global counts for the whole assembly.
    """
    return reduce(lambda total, item: total + item, counts, CompositionCounts())

def gc_ratio(sequence: str) -> float:
    """
    G+C over the sequence length; 0.0 for an empty sequence.
    """
    return count_bases(sequence).gc_ratio
