import pytest
from transcriptometer.core.composition import accumulate_composition, count_bases, gc_ratio
from transcriptometer.core.models import CompositionCounts, SKEW_EPSILON
from transcriptometer.utils.formatting import format_fixed

def test_balanced_sequence():
    counts = count_bases("GGCCAATT")

    assert counts.gc == 4
    assert counts.at == 4
    assert counts.ambiguous == 0
    assert counts.gc_percent == 50.0
    assert counts.at_percent == 50.0
    assert counts.gc_skew == 0.0
    assert counts.at_skew == 0.0
    assert format_fixed(counts.gc_skew, 3) == "0.000"

def test_counts_are_case_insensitive():
    assert count_bases("acgtn") == count_bases("ACGTN")
    assert count_bases("aCgTn") == CompositionCounts(a=1, c=1, g=1, t=1, n=1)

def test_ambiguous_and_other_characters():
    # N is ambiguous; other IUPAC codes are counted separately
    counts = count_bases("ACGTNNRYK-")

    assert counts.ambiguous == 2
    assert counts.other == 4
    assert counts.length == 10
    # Percentages only use G+C+A+T
    assert counts.gc_percent == 50.0

def test_gc_and_at_percent_sum_to_100():
    counts = count_bases("ATGCGCGATTTANNNGCGCTA")
    total = float(format_fixed(counts.gc_percent, 2)) + float(format_fixed(counts.at_percent, 2))
    assert total == pytest.approx(100.0, abs=0.01)

def test_skew_uses_epsilon():
    counts = count_bases("GGGC")
    assert counts.gc_skew == pytest.approx((3 - 1) / (4 + SKEW_EPSILON))

    # No A/T at all: skew is guarded, not a division error
    assert counts.at_skew == 0.0

def test_only_ambiguous_bases():
    counts = count_bases("NNNN")
    assert counts.gc_percent == 0.0
    assert counts.at_percent == 0.0
    assert counts.gc_skew == 0.0
    assert counts.gc_ratio == 0.0

def test_per_record_gc_ratio():
    # GC ratio uses the whole record length, including N
    assert gc_ratio("GGCCNNNN") == 0.5
    assert gc_ratio("atat") == 0.0
    assert gc_ratio("") == 0.0

def test_accumulate_composition_matches_concatenation():
    sequences = ["ACGTN", "ggcc", "", "ATTA", "RY"]

    folded = accumulate_composition(count_bases(s) for s in sequences)

    assert folded == count_bases("".join(sequences))
    assert accumulate_composition([]) == CompositionCounts()
