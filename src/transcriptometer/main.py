"""
Main entry point for the Transcriptometer command-line tool.
This module orchestrates the whole analysis, from streaming the FASTA file
to writing the summary, the tabular plot inputs and the graphical reports.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcriptometer.core.assembler import assemble_report
from transcriptometer.core.errors import InputNotFound, TranscriptometerError, UsageError
from transcriptometer.core.models import AnalysisConfig, DEFAULT_OUTPUT_DIR
from transcriptometer.parsers.fasta_parser import validate_input
from transcriptometer.utils.logging import setup_logging, attach_log_file
from transcriptometer.visualization.plots import build_figures, render_plots
from transcriptometer.visualization.report_generator import (
    render_summary,
    write_report_tables,
    write_sequence_summary,
    generate_html_report
)

class ArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser that raises UsageError instead of exiting with status 2.
    """
    def error(self, message):
        raise UsageError(message)

def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="transcriptometer",
        description="Transcriptometer: summary statistics and plots for a transcriptome/genome assembly FASTA.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Mandatory
    parser.add_argument("fasta", help="Assembly FASTA file (optionally gzip-compressed)")

    # Optional
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT_DIR), help="Output directory for tables, plots and logs")
    parser.add_argument("--no-plots", action="store_true", help="Skip PNG image export")
    parser.add_argument("--no-html", action="store_true", help="Skip the interactive HTML report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages on the console")
    return parser

def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    log_buffer = setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        fasta_path = validate_input(args.fasta)
    except InputNotFound as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    config = AnalysisConfig(
        output_dir=Path(args.output),
        make_plots=not args.no_plots,
        make_html=not args.no_html
    )

    try:
        logger.info("Starting Transcriptometer analysis...")

        # Step 1: Statistics (nothing is written until this succeeds)
        logger.info("Step 1: Computing assembly statistics...")
        report = assemble_report(fasta_path, config)

        # Step 2: Tabular outputs
        logger.info("Step 2: Writing tables...")
        output_dir = config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        attach_log_file(log_buffer, output_dir)
        write_report_tables(report, output_dir)
        write_sequence_summary(report, output_dir)

        # Step 3: Graphical reports (best-effort)
        figures = {}
        if config.make_plots or config.make_html:
            logger.info("Step 3: Generating graphs...")
            figures = build_figures(output_dir)
        if config.make_plots:
            images = render_plots(figures, output_dir)
            logger.info(f"Wrote {len(images)} of {len(figures)} images")
        if config.make_html:
            try:
                html_path = generate_html_report(report, output_dir, figures)
                logger.info(f"HTML report: {html_path}")
            except Exception as e:
                logger.warning(f"Could not generate HTML report: {e}")

        print(render_summary(report, output_dir))
        logger.info(f"Analysis complete. Results saved in {output_dir}")
    except TranscriptometerError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Critical failure: {e}")
        sys.exit(1)
    finally:
        logging.shutdown()

if __name__ == "__main__":
    main()
