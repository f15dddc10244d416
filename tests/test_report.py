import logging
import pytest
import pandas as pd
import plotly.graph_objects as go
from pathlib import Path
from transcriptometer.core.assembler import assemble_report, summarize_records
from transcriptometer.core.errors import EmptyAssembly, MalformedInput
from transcriptometer.core.models import AnalysisConfig, SequenceRecord
from transcriptometer.visualization.plots import PLOT_FILES, build_figures, render_plots
from transcriptometer.visualization.report_generator import (
    render_summary,
    write_report_tables,
    write_sequence_summary,
    generate_html_report
)

def make_records():
    # Lengths 1000, 2000, 3000, 4000 in file order 2000, 4000, 1000, 3000
    return [
        SequenceRecord("c1", "GC" * 1000),
        SequenceRecord("c2 desc", "AT" * 1500 + "N" * 1000),
        SequenceRecord("c3", "ACGT" * 250),
        SequenceRecord("c4", "G" * 3000),
    ]

@pytest.fixture
def report():
    return summarize_records(iter(make_records()), Path("assembly.fasta"))

def test_summarize_records(report):
    stats = report.length_stats
    assert (stats.count, stats.total, stats.minimum, stats.maximum) == (4, 10000, 1000, 4000)
    assert stats.median == 2500.0

    assert (report.n50.length, report.n50.rank) == (3000, 2)
    assert (report.n90.length, report.n90.rank) == (2000, 3)

    assert report.lengths_ascending == [1000, 2000, 3000, 4000]
    assert report.lengths_descending == [4000, 3000, 2000, 1000]
    assert report.cumulative_curve[-1] == (4, 10000)

    # Per-record GC ratios stay in file order
    assert report.gc_ratios == [1.0, 0.0, 0.5, 1.0]
    assert [s.sequence_id for s in report.sequences] == ["c1", "c2", "c3", "c4"]

    comp = report.composition
    assert comp.ambiguous == 1000
    assert comp.gc == 2000 + 500 + 3000
    assert comp.at == 3000 + 500

    assert report.buckets == {"<500bp": 0, "500bp-1k": 0, "1k-5k": 4, "5k-10k": 0, "10k+": 0}
    assert [nx.label for nx in report.nx_table][-1] == "N100"

def test_zero_length_record_counts_as_zero():
    records = [SequenceRecord("a", "G" * 40), SequenceRecord("empty", ""), SequenceRecord("b", "AT")]
    report = summarize_records(iter(records), Path("x.fa"))

    assert report.length_stats.count == 3
    assert report.length_stats.minimum == 0
    assert report.length_stats.median == 2
    assert report.gc_ratios == [1.0, 0.0, 0.0]

    # N100 still spans every record, the empty one included
    n100 = report.nx_table[-1]
    assert n100.label == "N100"
    assert (n100.length, n100.rank) == (0, 3)
    assert report.cumulative_curve[-1] == (3, 42)

def test_empty_records_logged_once(caplog):
    records = [SequenceRecord(f"empty_{i}", "") for i in range(20)] + [SequenceRecord("a", "ACGT")]

    with caplog.at_level(logging.WARNING):
        summarize_records(iter(records), Path("x.fa"))

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "20 records have no sequence" in warnings[0].getMessage()

def test_empty_record_stream():
    with pytest.raises(EmptyAssembly):
        summarize_records(iter([]), Path("x.fa"))

def test_assemble_report_malformed(tmp_path):
    fasta = tmp_path / "bad.fasta"
    fasta.write_text("ACGT\n>a\nACGT\n", encoding="utf-8")
    with pytest.raises(MalformedInput):
        assemble_report(fasta, AnalysisConfig(output_dir=tmp_path / "out"))
    assert not (tmp_path / "out").exists()

def test_render_summary_field_order(report):
    text = render_summary(report, Path("assembly_metrics"))
    lines = text.splitlines()

    assert lines[0] == "===== Assembly Analysis: assembly.fasta ====="
    assert "  - Total sequences        : 4" in lines
    assert "  - Total length (bp)      : 10000" in lines
    assert "  - Min/Avg/Median/Max     : 1000 / 2500.00 / 2500.0 / 4000" in lines
    assert "  - N50                    : 3000 (L50: 2)" in lines
    assert "  - N90                    : 2000 (L90: 3)" in lines
    assert "  - Ambiguous bases (N)    : 1000" in lines
    assert "  - 1k-5k: 4 contigs" in lines
    assert "  - Nx curve            : assembly_metrics/nx_curve.png" in lines

    markers = [
        "1. GENERAL ASSEMBLY STATISTICS:",
        "2. Nx STATISTICS:",
        "3. BASE COMPOSITION:",
        "4. CONTIG LENGTH DISTRIBUTION:",
        "===== ANALYSIS COMPLETE =====",
        "Graphical Reports:",
    ]
    positions = [lines.index(m) for m in markers]
    assert positions == sorted(positions)

    bucket_lines = [l for l in lines if l.endswith(" contigs")]
    assert [l.split(":")[0].strip(" -") for l in bucket_lines] == ["<500bp", "500bp-1k", "1k-5k", "5k-10k", "10k+"]

def test_write_report_tables(report, tmp_path):
    tables = write_report_tables(report, tmp_path)

    assert set(tables) == {"seq_lens.txt", "lengths.txt", "nx_data.txt", "gc_values.txt"}
    assert (tmp_path / "seq_lens.txt").read_text().split() == ["4000", "3000", "2000", "1000"]
    assert (tmp_path / "lengths.txt").read_text().split() == ["1000", "2000", "3000", "4000"]
    assert (tmp_path / "nx_data.txt").read_text().splitlines() == ["1 4000", "2 7000", "3 9000", "4 10000"]

    gc_values = [float(v) for v in (tmp_path / "gc_values.txt").read_text().split()]
    assert gc_values == [1.0, 0.0, 0.5, 1.0]

def test_write_sequence_summary(report, tmp_path):
    path = write_sequence_summary(report, tmp_path)
    df = pd.read_csv(path, sep="\t")

    assert list(df.columns) == ["sequence_id", "length", "gc_ratio", "ambiguous", "bucket"]
    assert df["length"].tolist() == [2000, 4000, 1000, 3000]
    assert df.loc[df["sequence_id"] == "c2", "ambiguous"].item() == 1000
    assert set(df["bucket"]) == {"1k-5k"}

def test_build_figures_and_html(report, tmp_path):
    write_report_tables(report, tmp_path)
    figures = build_figures(tmp_path)

    assert set(figures) == set(PLOT_FILES)
    assert all(isinstance(fig, go.Figure) for fig in figures.values())

    html_path = generate_html_report(report, tmp_path, figures)
    html = html_path.read_text(encoding="utf-8")
    assert "Assembly Analysis: assembly.fasta" in html
    assert "N50" in html and "L90" in html
    assert html.count("Plotly.newPlot") == 3

def test_build_figures_missing_tables(tmp_path):
    # Nothing written yet: every figure fails, none raises
    assert build_figures(tmp_path) == {}

def test_render_plots_failure_is_not_fatal(report, tmp_path, monkeypatch):
    write_report_tables(report, tmp_path)
    figures = build_figures(tmp_path)

    def broken_write_image(self, *args, **kwargs):
        raise RuntimeError("no image export engine")

    monkeypatch.setattr(go.Figure, "write_image", broken_write_image)

    assert render_plots(figures, tmp_path) == {}
    assert not any((tmp_path / name).exists() for name in PLOT_FILES)
