"""
Logging utilities for Transcriptometer.
Sets up multi-level logging to console and file.
"""

import logging
import sys
from logging.handlers import MemoryHandler
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(verbose: bool = False) -> MemoryHandler:
    """
    Setup logging to stderr (INFO, or DEBUG when verbose) and an in-memory buffer (DEBUG).

    The output directory is only created once the statistics have been
    computed, so DEBUG records are buffered until attach_log_file is called.

    :param verbose: Show DEBUG messages on the console.
    :return: The buffering handler to pass to attach_log_file.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler (INFO); stdout is reserved for the summary
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(formatter)

    # Buffer (DEBUG); never flushes on its own until a target is set
    buffer_handler = MemoryHandler(capacity=1000, flushLevel=logging.CRITICAL + 1)
    buffer_handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Remove existing handlers
    for h in root.handlers[:]:
        root.removeHandler(h)
    root.addHandler(console_handler)
    root.addHandler(buffer_handler)

    return buffer_handler

def attach_log_file(buffer_handler: MemoryHandler, output_dir: Path) -> Path:
    """
    Start writing log.txt in the output directory, including everything buffered so far.

    :param buffer_handler: Handler returned by setup_logging.
    :param output_dir: Existing output directory.
    :return: Path to the log file.
    """
    log_file = output_dir / "log.txt"

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    buffer_handler.setTarget(file_handler)
    buffer_handler.flush()

    root = logging.getLogger()
    root.removeHandler(buffer_handler)
    buffer_handler.setTarget(None)
    buffer_handler.close()
    root.addHandler(file_handler)

    root.info(f"Logging to file: {log_file}")
    return log_file
