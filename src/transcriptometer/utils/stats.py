"""
Assembly statistics calculation utilities.
Includes length summaries, Nx/Lx queries and cumulative curve data.
"""

from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

import numpy as np

from transcriptometer.core.errors import EmptyAssembly, ThresholdUnreachable
from transcriptometer.core.models import LengthStats, NxResult

def calculate_median(sorted_lengths: Sequence[int]):
    """
    Median of an ascending list. Odd counts return the middle element,
    even counts the mean of the two middle elements.
    """
    count = len(sorted_lengths)
    if count == 0:
        raise EmptyAssembly("Cannot compute the median of an empty assembly")
    middle = count // 2
    if count % 2 == 1:
        return sorted_lengths[middle]
    return (sorted_lengths[middle - 1] + sorted_lengths[middle]) / 2

def calculate_length_stats(lengths: Sequence[int], sorted_lengths: Optional[Sequence[int]] = None) -> LengthStats:
    """
    Calculate count, total, min, max, mean and median sequence length.

    :param lengths: List of sequence lengths (any order).
    :param sorted_lengths: The same lengths sorted ascending, if already available.
    :return: LengthStats with unrounded mean and median.
    """
    if not lengths:
        raise EmptyAssembly("No sequences found; assembly is empty")

    if sorted_lengths is None:
        sorted_lengths = sorted(lengths)

    count = len(lengths)
    total = sum(lengths)
    return LengthStats(
        count=count,
        total=total,
        minimum=min(lengths),
        maximum=max(lengths),
        mean=total / count,
        median=calculate_median(sorted_lengths)
    )

def calculate_cumulative(lengths_desc: Sequence[int]) -> np.ndarray:
    """
    Running sum of lengths sorted in descending order.
    """
    return np.cumsum(np.asarray(lengths_desc, dtype=np.int64))

def calculate_nx(lengths_desc: Sequence[int], fraction: float, cumulative: Optional[np.ndarray] = None) -> NxResult:
    """
    Find Nx and Lx for a fraction of the total assembly length.

    Returns the length and 1-based rank of the first sequence (longest first)
    at which the running sum reaches fraction x total. The fraction is taken
    at its decimal value so that e.g. 0.9 of 10000 is exactly 9000.

    :param lengths_desc: Lengths sorted in descending order.
    :param fraction: Fraction in (0, 1].
    :param cumulative: Precomputed running sum of lengths_desc.
    :return: NxResult.
    """
    if not 0 < fraction <= 1:
        raise ValueError(f"Nx fraction must be in (0, 1], got {fraction}")
    if len(lengths_desc) == 0:
        raise EmptyAssembly("Cannot compute Nx for an empty assembly")
    if cumulative is None:
        cumulative = calculate_cumulative(lengths_desc)

    total = int(cumulative[-1])
    ratio = Fraction(str(fraction))
    # smallest integer running sum that satisfies sum >= ratio * total
    target = -(-total * ratio.numerator // ratio.denominator)

    index = int(np.searchsorted(cumulative, target, side="left"))
    if index >= len(cumulative):
        raise ThresholdUnreachable(
            f"Cumulative length {total} never reached {target} for fraction {fraction}"
        )
    if ratio == 1:
        # N100 covers every sequence, trailing zero-length records included
        index = len(cumulative) - 1
    return NxResult(fraction=fraction, length=int(lengths_desc[index]), rank=index + 1)

def calculate_nx_table(lengths_desc: Sequence[int], fractions: Sequence[float], cumulative: Optional[np.ndarray] = None) -> List[NxResult]:
    """
    Calculate Nx/Lx for several fractions sharing one cumulative array.
    """
    if cumulative is None:
        cumulative = calculate_cumulative(lengths_desc)
    return [calculate_nx(lengths_desc, f, cumulative) for f in sorted(fractions)]

def calculate_cumulative_curve(lengths_desc: Sequence[int], cumulative: Optional[np.ndarray] = None) -> List[Tuple[int, int]]:
    """
    Calculate data for the Nx curve (cumulative assembly size by rank).

    :param lengths_desc: Lengths sorted in descending order.
    :return: List of (rank, cumulative_length) pairs, rank ascending from 1.
    """
    if cumulative is None:
        cumulative = calculate_cumulative(lengths_desc)
    return [(rank, int(running)) for rank, running in enumerate(cumulative.tolist(), start=1)]
