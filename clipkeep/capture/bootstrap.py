"""Composition root for the capture pipeline, plus logging setup.

The analyzer is built here and handed to the pipeline explicitly; there is
no module-level analyzer instance.

Usage:
    config = load_config()
    configure_logging_from_config(config)
    pipeline = build_pipeline(config, source=MacClipboard(), attribution=FrontmostApp())
    clipboard_listener.subscribe(pipeline.process_event)
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from clipkeep.analysis.analyzer import HtmlAnalyzer
from clipkeep.capture.interfaces import (
    ClipboardSource,
    ProducerAttributionSource,
    StorageSink,
)
from clipkeep.capture.pipeline import CapturePipeline
from clipkeep.config.schema import Config
from clipkeep.core.constants import get_default_db_path, get_default_log_dir
from clipkeep.core.secure_io import secure_mkdir
from clipkeep.storage.history import HistoryStorage

logger = logging.getLogger(__name__)

LOGGER_NAMESPACE = "clipkeep"
LOG_FILE_NAME = "clipkeep.log"


def configure_logging(
    log_dir: Path,
    level: int = logging.INFO,
    console_level: int = logging.WARNING,
) -> Path:
    """Configure file and console logging for the clipkeep namespace.

    Logs are written to `{log_dir}/clipkeep.log` with automatic rotation
    (max 5MB per file, 3 backup files). Calling this again replaces the
    handlers instead of stacking duplicates.

    Args:
        log_dir: Directory for the log file. Created if doesn't exist.
        level: Logging level for file output (default INFO).
        console_level: Logging level for stderr output (default WARNING).

    Returns:
        Path to the log file.
    """
    secure_mkdir(log_dir)
    log_file = log_dir / LOG_FILE_NAME

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))

    clipkeep_logger = logging.getLogger(LOGGER_NAMESPACE)
    clipkeep_logger.setLevel(min(level, console_level))

    for handler in list(clipkeep_logger.handlers):
        clipkeep_logger.removeHandler(handler)
        handler.close()

    clipkeep_logger.addHandler(file_handler)
    clipkeep_logger.addHandler(console_handler)
    clipkeep_logger.propagate = False

    logger.info("Logging configured: %s", log_file)
    return log_file


def configure_logging_from_config(config: Config) -> Path:
    """configure_logging() with levels and directory taken from config."""
    log_dir = (
        Path(config.logging.log_dir).expanduser()
        if config.logging.log_dir
        else get_default_log_dir()
    )
    return configure_logging(
        log_dir,
        level=logging.getLevelName(config.logging.level),
        console_level=logging.getLevelName(config.logging.console_level),
    )


def build_pipeline(
    config: Config,
    source: ClipboardSource,
    sink: StorageSink | None = None,
    attribution: ProducerAttributionSource | None = None,
) -> CapturePipeline:
    """Wire analyzer, storage and collaborators into a CapturePipeline.

    Args:
        config: Loaded configuration.
        source: Platform clipboard.
        sink: Storage override. Defaults to HistoryStorage at the
            configured (or default) database path.
        attribution: Optional frontmost-application lookup.

    Returns:
        A ready-to-use pipeline.

    Raises:
        StorageError: If the default history database cannot be opened.
    """
    if sink is None:
        db_path = (
            Path(config.storage.db_path).expanduser()
            if config.storage.db_path
            else get_default_db_path()
        )
        sink = HistoryStorage(db_path)
        logger.debug("History database: %s", db_path)

    return CapturePipeline(
        source,
        sink,
        HtmlAnalyzer(config.analysis),
        attribution=attribution,
        preview_chars=config.capture.preview_chars,
    )
