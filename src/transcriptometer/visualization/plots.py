"""
Plot generation for Transcriptometer.
Builds plotly figures from the tabular intermediates and exports them as PNG.
Plotting is best-effort: failures are logged and never abort the run.
"""

import logging
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

LENGTH_PLOT = "length_distribution.png"
NX_PLOT = "nx_curve.png"
GC_PLOT = "gc_distribution.png"
PLOT_FILES = (LENGTH_PLOT, NX_PLOT, GC_PLOT)

def read_column_table(path: Path, names) -> pd.DataFrame:
    """
    Read a whitespace-separated table without a header line.
    """
    return pd.read_csv(path, sep=r"\s+", header=None, names=names, encoding='utf-8')

def build_length_histogram(lengths_path: Path, bins: int = 50) -> go.Figure:
    """
    Length distribution histogram on a log-scaled x axis.

    :param lengths_path: Path to lengths.txt (one length per line).
    :param bins: Number of logarithmically spaced bins.
    :return: plotly Figure.
    """
    df = read_column_table(lengths_path, ['length'])
    lengths = df['length'].to_numpy()
    # log axis cannot show zero-length records
    lengths = lengths[lengths > 0]

    fig = go.Figure()
    if len(lengths):
        low, high = np.log10(lengths.min()), np.log10(lengths.max())
        if low == high:
            high = low + 1
        edges = np.logspace(low, high, bins + 1)
        counts, edges = np.histogram(lengths, bins=edges)
        centers = np.sqrt(edges[:-1] * edges[1:])
        fig.add_trace(go.Bar(
            x=centers.tolist(),
            y=counts.tolist(),
            width=(edges[1:] - edges[:-1]).tolist(),
            marker_color="#4CAF50",
            name='Sequences'
        ))
    fig.update_layout(
        title="Sequence Length Distribution (log scale)",
        xaxis_type="log",
        xaxis_title="Length (bp)",
        yaxis_title="Count",
        bargap=0
    )
    return fig

def build_nx_curve(nx_path: Path) -> go.Figure:
    """
    Cumulative assembly length against sequence rank.

    :param nx_path: Path to nx_data.txt (rank, cumulative length).
    :return: plotly Figure.
    """
    df = read_column_table(nx_path, ['rank', 'cumulative'])
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['rank'].tolist(),
        y=df['cumulative'].tolist(),
        mode='lines',
        line=dict(color="#2196F3", width=2),
        name='Cumulative Length'
    ))
    fig.update_layout(
        title="Nx Curve (Cumulative Assembly)",
        xaxis_type="log",
        xaxis_title="Number of Contigs (log scale)",
        yaxis_title="Cumulative Length (bp)"
    )
    return fig

def build_gc_histogram(gc_path: Path, bin_width: float = 2.0) -> go.Figure:
    """
    Histogram of per-sequence GC content.

    :param gc_path: Path to gc_values.txt (ratio 0.0-1.0 per line).
    :param bin_width: Bin width in percent.
    :return: plotly Figure.
    """
    df = read_column_table(gc_path, ['gc_ratio'])
    fig = go.Figure()
    fig.add_trace(go.Histogram(
        x=(df['gc_ratio'] * 100).tolist(),
        xbins=dict(start=0, end=100 + bin_width, size=bin_width),
        marker_color="#FF5722",
        name='GC Content'
    ))
    fig.update_layout(
        title="GC Content Distribution",
        xaxis_title="GC Content (%)",
        yaxis_title="Frequency"
    )
    return fig

def build_figures(output_dir: Path) -> Dict[str, go.Figure]:
    """
    Build all figures that can be built from the tables in output_dir.

    :param output_dir: Directory holding lengths.txt, nx_data.txt and gc_values.txt.
    :return: Mapping of image filename to Figure; failed figures are omitted.
    """
    builders = {
        LENGTH_PLOT: (build_length_histogram, output_dir / 'lengths.txt'),
        NX_PLOT: (build_nx_curve, output_dir / 'nx_data.txt'),
        GC_PLOT: (build_gc_histogram, output_dir / 'gc_values.txt'),
    }
    figures = {}
    for filename, (builder, table_path) in builders.items():
        try:
            figures[filename] = builder(table_path)
        except Exception as e:
            logger.warning(f"Could not build plot {filename} from {table_path}: {e}")
    return figures

def render_plots(figures: Dict[str, go.Figure], output_dir: Path) -> Dict[str, Path]:
    """
    Export figures as PNG images.

    :param figures: Mapping of image filename to Figure.
    :param output_dir: Directory to save images.
    :return: Mapping of image filename to written path, for images that succeeded.
    """
    written = {}
    for filename, fig in figures.items():
        image_path = output_dir / filename
        try:
            fig.write_image(str(image_path), width=900, height=600)
            written[filename] = image_path
            logger.debug(f"Wrote {image_path}")
        except Exception as e:
            logger.warning(f"Could not write {image_path}: {e}")
    return written
