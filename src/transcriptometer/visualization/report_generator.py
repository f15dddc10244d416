"""
Report generation module for Transcriptometer.
Generates the text summary, the tabular plot inputs, the per-sequence TSV and the HTML dashboard.
"""

import logging
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from jinja2 import Environment, FileSystemLoader, select_autoescape

from transcriptometer.core.bucketing import classify_length
from transcriptometer.core.models import AssemblyReport
from transcriptometer.utils.formatting import format_fixed, format_median
from transcriptometer.visualization.plots import GC_PLOT, LENGTH_PLOT, NX_PLOT

logger = logging.getLogger(__name__)

RULE = "-------------------------------------"

def render_summary(report: AssemblyReport, output_dir: Path) -> str:
    """
    Render the human-readable summary printed to standard output.

    :param report: Computed AssemblyReport.
    :param output_dir: Directory holding the derived files.
    :return: The summary text, lines in fixed order.
    """
    stats = report.length_stats
    comp = report.composition
    out = str(output_dir)

    lines: List[str] = [
        f"===== Assembly Analysis: {report.input_path} =====",
        RULE,
        "1. GENERAL ASSEMBLY STATISTICS:",
        f"  - Total sequences        : {stats.count}",
        f"  - Total length (bp)      : {stats.total}",
        f"  - Min/Avg/Median/Max     : {stats.minimum} / {format_fixed(stats.mean, 2)} / "
        f"{format_median(stats.median)} / {stats.maximum}",
        "",
        "2. Nx STATISTICS:",
        f"  - N50                    : {report.n50.length} (L50: {report.n50.rank})",
        f"  - N90                    : {report.n90.length} (L90: {report.n90.rank})",
        "",
        "3. BASE COMPOSITION:",
        f"  - GC Content             : {format_fixed(comp.gc_percent, 2)}%",
        f"  - AT Content             : {format_fixed(comp.at_percent, 2)}%",
        f"  - GC Skew (G-C)/(G+C)    : {format_fixed(comp.gc_skew, 3)}",
        f"  - AT Skew (A-T)/(A+T)    : {format_fixed(comp.at_skew, 3)}",
        f"  - Ambiguous bases (N)    : {comp.ambiguous}",
        "",
        "4. CONTIG LENGTH DISTRIBUTION:",
    ]
    lines += [f"  - {label}: {count} contigs" for label, count in report.buckets.items()]
    lines += [
        "",
        "===== ANALYSIS COMPLETE =====",
        f"Results saved to: {out}/",
        RULE,
        "Graphical Reports:",
        f"  - Length distribution : {out}/{LENGTH_PLOT}",
        f"  - Nx curve            : {out}/{NX_PLOT}",
        f"  - GC distribution     : {out}/{GC_PLOT}",
    ]
    return "\n".join(lines)

def write_report_tables(report: AssemblyReport, output_dir: Path) -> Dict[str, Path]:
    """
    Write the whitespace-separated tables consumed by the plotting step.

    :param report: Computed AssemblyReport.
    :param output_dir: Existing output directory.
    :return: Mapping of table filename to path.
    """
    tables = {
        'seq_lens.txt': output_dir / 'seq_lens.txt',
        'lengths.txt': output_dir / 'lengths.txt',
        'nx_data.txt': output_dir / 'nx_data.txt',
        'gc_values.txt': output_dir / 'gc_values.txt',
    }
    np.savetxt(tables['seq_lens.txt'], np.asarray(report.lengths_descending, dtype=np.int64), fmt='%d')
    np.savetxt(tables['lengths.txt'], np.asarray(report.lengths_ascending, dtype=np.int64), fmt='%d')
    np.savetxt(
        tables['nx_data.txt'],
        np.asarray(report.cumulative_curve, dtype=np.int64).reshape(-1, 2),
        fmt='%d %d'
    )
    np.savetxt(tables['gc_values.txt'], np.asarray(report.gc_ratios, dtype=float), fmt='%.6f')

    for name, path in tables.items():
        logger.debug(f"Wrote {name} to {path}")
    return tables

def write_sequence_summary(report: AssemblyReport, output_dir: Path) -> Path:
    """
    Write one row per sequence with its length, GC ratio, N count and length bucket.

    :param report: Computed AssemblyReport.
    :param output_dir: Existing output directory.
    :return: Path to sequence_summary.tsv.
    """
    df = pd.DataFrame([
        {
            'sequence_id': s.sequence_id,
            'length': s.length,
            'gc_ratio': round(s.gc_ratio, 6),
            'ambiguous': s.ambiguous,
            'bucket': classify_length(s.length)
        }
        for s in report.sequences
    ], columns=['sequence_id', 'length', 'gc_ratio', 'ambiguous', 'bucket'])
    summary_path = output_dir / 'sequence_summary.tsv'
    df.to_csv(summary_path, sep='\t', index=False, encoding='utf-8')
    return summary_path

def generate_html_report(report: AssemblyReport, output_dir: Path, figures: Dict[str, go.Figure]) -> Path:
    """
    Render the interactive HTML dashboard.

    :param report: Computed AssemblyReport.
    :param output_dir: Existing output directory.
    :param figures: Plotly figures keyed by image filename; missing figures are skipped.
    :return: Path to report.html.
    """
    stats = report.length_stats
    comp = report.composition

    general = {
        "Total sequences": stats.count,
        "Total length (bp)": stats.total,
        "Minimum length": stats.minimum,
        "Average length": format_fixed(stats.mean, 2),
        "Median length": format_median(stats.median),
        "Maximum length": stats.maximum,
    }
    composition = {
        "GC Content (%)": format_fixed(comp.gc_percent, 2),
        "AT Content (%)": format_fixed(comp.at_percent, 2),
        "GC Skew": format_fixed(comp.gc_skew, 3),
        "AT Skew": format_fixed(comp.at_skew, 3),
        "Ambiguous bases (N)": comp.ambiguous,
        "Other IUPAC characters": comp.other,
    }
    nx_rows = [(nx.label, nx.length, nx.rank_label, nx.rank) for nx in report.nx_table]
    plots_json = {name: fig.to_json() for name, fig in figures.items()}

    template_dir = Path(__file__).parent / 'templates'
    env = Environment(loader=FileSystemLoader(str(template_dir)), autoescape=select_autoescape(['html']))
    template = env.get_template('report.html')

    html_content = template.render(
        input_path=str(report.input_path),
        general=general,
        composition=composition,
        nx_rows=nx_rows,
        buckets=report.buckets,
        plots_json=plots_json
    )

    report_path = output_dir / 'report.html'
    with open(report_path, 'w', encoding='utf-8') as f:
        f.write(html_content)
    return report_path
