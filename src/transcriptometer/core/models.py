"""
Data models for Transcriptometer.
Defines sequence records, composition counts and the assembled report.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

# Added to skew denominators so sequences without G+C or A+T never divide by zero.
SKEW_EPSILON = 1e-4

DEFAULT_OUTPUT_DIR = Path("./assembly_metrics")
DEFAULT_NX_FRACTIONS = (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)

@dataclass(frozen=True)
class SequenceRecord:
    """
    A single FASTA record: the header (without '>') and its concatenated sequence.
    """
    header: str
    sequence: str

    @property
    def id(self) -> str:
        parts = self.header.split(None, 1)
        return parts[0] if parts else ""

    def __len__(self) -> int:
        return len(self.sequence)

@dataclass(frozen=True)
class CompositionCounts:
    """
    Base counts accumulated over one or more sequences.
    Percentages and skews are always derived from the counts.
    """
    a: int = 0
    c: int = 0
    g: int = 0
    t: int = 0
    n: int = 0
    other: int = 0

    def __add__(self, other: "CompositionCounts") -> "CompositionCounts":
        if not isinstance(other, CompositionCounts):
            return NotImplemented
        return CompositionCounts(
            a=self.a + other.a,
            c=self.c + other.c,
            g=self.g + other.g,
            t=self.t + other.t,
            n=self.n + other.n,
            other=self.other + other.other
        )

    @property
    def gc(self) -> int:
        return self.g + self.c

    @property
    def at(self) -> int:
        return self.a + self.t

    @property
    def ambiguous(self) -> int:
        return self.n

    @property
    def length(self) -> int:
        return self.gc + self.at + self.n + self.other

    @property
    def gc_percent(self) -> float:
        """GC bases as a percentage of G+C+A+T (ambiguous bases excluded)."""
        informative = self.gc + self.at
        return 100.0 * self.gc / informative if informative else 0.0

    @property
    def at_percent(self) -> float:
        informative = self.gc + self.at
        return 100.0 * self.at / informative if informative else 0.0

    @property
    def gc_skew(self) -> float:
        return (self.g - self.c) / (self.g + self.c + SKEW_EPSILON)

    @property
    def at_skew(self) -> float:
        return (self.a - self.t) / (self.a + self.t + SKEW_EPSILON)

    @property
    def gc_ratio(self) -> float:
        """G+C over the full sequence length, 0.0 for an empty sequence."""
        return self.gc / self.length if self.length else 0.0

@dataclass(frozen=True)
class LengthStats:
    count: int
    total: int
    minimum: int
    maximum: int
    mean: float
    median: Union[int, float]

@dataclass(frozen=True)
class NxResult:
    """
    Result of an Nx query: the length at the first rank whose cumulative
    length reaches `fraction` of the total, and that 1-based rank (Lx).
    """
    fraction: float
    length: int
    rank: int

    @property
    def label(self) -> str:
        return f"N{self.fraction * 100:g}"

    @property
    def rank_label(self) -> str:
        return f"L{self.fraction * 100:g}"

@dataclass(frozen=True)
class SequenceSummary:
    sequence_id: str
    length: int
    gc_ratio: float
    ambiguous: int

@dataclass
class AnalysisConfig:
    """
    Runtime options for one analysis, built from the command line.
    """
    output_dir: Path = DEFAULT_OUTPUT_DIR
    nx_fractions: Tuple[float, ...] = DEFAULT_NX_FRACTIONS
    make_plots: bool = True
    make_html: bool = True

@dataclass
class AssemblyReport:
    """
    Everything computed for one input file, ready for rendering.
    """
    input_path: Path
    length_stats: LengthStats
    n50: NxResult
    n90: NxResult
    composition: CompositionCounts
    buckets: Dict[str, int]
    lengths_ascending: List[int]
    lengths_descending: List[int]
    cumulative_curve: List[Tuple[int, int]]
    gc_ratios: List[float]
    sequences: List[SequenceSummary] = field(default_factory=list)
    nx_table: List[NxResult] = field(default_factory=list)
