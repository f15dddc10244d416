"""
Report assembly for Transcriptometer.
Runs the reader, statistics, composition and bucketing steps over one FASTA file.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from transcriptometer.core.bucketing import bucket_lengths
from transcriptometer.core.composition import accumulate_composition, count_bases
from transcriptometer.core.models import AnalysisConfig, AssemblyReport, SequenceRecord, SequenceSummary
from transcriptometer.parsers.fasta_parser import read_fasta
from transcriptometer.utils.stats import (
    calculate_length_stats,
    calculate_cumulative,
    calculate_cumulative_curve,
    calculate_nx,
    calculate_nx_table
)

logger = logging.getLogger(__name__)

def summarize_records(records: Iterable[SequenceRecord], input_path: Path, config: Optional[AnalysisConfig] = None) -> AssemblyReport:
    """
    Consume a record stream once and compute every statistic of the report.

    Only derived values (lengths, per-record counts) are kept; each record is
    dropped as soon as it has been measured.

    :param records: Iterator of SequenceRecord objects.
    :param input_path: Input file the records came from (for the report banner).
    :param config: Analysis options.
    :return: AssemblyReport.
    """
    config = config or AnalysisConfig()

    lengths = []
    gc_ratios = []
    sequences = []
    record_counts = []
    empty_ids = []
    for record in records:
        counts = count_bases(record.sequence)
        length = len(record)
        if length == 0:
            empty_ids.append(record.id)
        lengths.append(length)
        gc_ratios.append(counts.gc_ratio)
        record_counts.append(counts)
        sequences.append(SequenceSummary(
            sequence_id=record.id,
            length=length,
            gc_ratio=counts.gc_ratio,
            ambiguous=counts.ambiguous
        ))
    logger.info(f"Parsed {len(lengths)} sequences from {input_path}")
    if empty_ids:
        shown = ", ".join(empty_ids[:5]) + (", ..." if len(empty_ids) > 5 else "")
        logger.warning(
            f"{len(empty_ids)} records have no sequence and count as length 0 with GC ratio 0: {shown}"
        )

    lengths_ascending = sorted(lengths)
    length_stats = calculate_length_stats(lengths, lengths_ascending)
    lengths_descending = lengths_ascending[::-1]

    cumulative = calculate_cumulative(lengths_descending)
    composition = accumulate_composition(record_counts)
    logger.debug(f"Composition counts: {composition}")

    return AssemblyReport(
        input_path=input_path,
        length_stats=length_stats,
        n50=calculate_nx(lengths_descending, 0.5, cumulative),
        n90=calculate_nx(lengths_descending, 0.9, cumulative),
        composition=composition,
        buckets=bucket_lengths(lengths),
        lengths_ascending=lengths_ascending,
        lengths_descending=lengths_descending,
        cumulative_curve=calculate_cumulative_curve(lengths_descending, cumulative),
        gc_ratios=gc_ratios,
        sequences=sequences,
        nx_table=calculate_nx_table(lengths_descending, config.nx_fractions, cumulative)
    )

def assemble_report(fasta_path: Path, config: Optional[AnalysisConfig] = None) -> AssemblyReport:
    """
    Build the full AssemblyReport for a FASTA file.
    Raises MalformedInput or EmptyAssembly before anything is written.
    """
    logger.info(f"Reading sequences from {fasta_path}...")
    return summarize_records(read_fasta(fasta_path), Path(fasta_path), config)
