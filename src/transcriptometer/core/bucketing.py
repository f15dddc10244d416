"""
Length distribution buckets used in the summary and per-sequence table.
"""

from typing import Dict, Iterable

import numpy as np
import pandas as pd

# (label, inclusive lower bound), smallest range first
LENGTH_BUCKETS = (
    ("<500bp", 0),
    ("500bp-1k", 500),
    ("1k-5k", 1000),
    ("5k-10k", 5000),
    ("10k+", 10000),
)
BUCKET_LABELS = tuple(label for label, _ in LENGTH_BUCKETS)

def classify_length(length: int) -> str:
    """
    Map a length to its bucket label, checking the largest range first.
    """
    for label, lower in reversed(LENGTH_BUCKETS):
        if length >= lower:
            return label
    raise ValueError(f"Sequence length cannot be negative: {length}")

def bucket_lengths(lengths: Iterable[int]) -> Dict[str, int]:
    """
    Count sequences per length bucket.

    :param lengths: Sequence lengths.
    :return: Dictionary of every bucket label (ascending range order) to its count.
    """
    edges = [lower for _, lower in LENGTH_BUCKETS] + [np.inf]
    binned = pd.cut(
        pd.Series(list(lengths), dtype="int64"),
        bins=edges,
        labels=list(BUCKET_LABELS),
        right=False
    )
    counts = binned.value_counts().reindex(list(BUCKET_LABELS), fill_value=0)
    return {label: int(counts[label]) for label in BUCKET_LABELS}
