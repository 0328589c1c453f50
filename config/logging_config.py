"""
Centralized logging configuration for the knowledge base gateway.

This module provides a function to set up process-wide logging with one JSON
object per line, written to the console and optionally to a rotating file.
"""

import json
import logging
import logging.handlers  # Required for RotatingFileHandler
import sys
from typing import Optional


class StructuredLogFormatter(logging.Formatter):
    """
    Formatter that renders each record as a single JSON object.

    Features:
    - Includes `operation` and `file_id` if present in extra fields
    - Merges any `extra_fields` mapping passed by the caller
    - Preserves standard log fields (timestamp, level, logger)
    - Appends formatted exception info when present
    """

    def format(self, record):
        log_data = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if hasattr(record, 'operation'):
            log_data['operation'] = record.operation

        if hasattr(record, 'file_id'):
            log_data['file_id'] = record.file_id

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


DEFAULT_LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_app_logging(config: Optional[dict] = None, default_level=logging.INFO) -> None:
    """
    Set up logging for the entire application.

    Configures the root logger with a console handler and, when a file path is
    given, a size-rotated file handler. Existing root handlers are replaced so
    repeated calls (e.g. from tests) do not duplicate output.

    Args:
        config (dict, optional): Logging configuration. Expected keys:
            - 'level': Log level name (e.g., "DEBUG", "INFO").
            - 'file_path': Path to the log file; empty disables file logging.
            - 'max_bytes': Max size of the log file before rotation.
            - 'backup_count': Number of rotated files to keep.
            - 'date_format': Timestamp format.
        default_level (int, optional): Level used when none (or an invalid one)
            is configured. Defaults to logging.INFO.
    """
    if config is None:
        config = {}

    log_level_str = str(config.get('level') or logging.getLevelName(default_level)).upper()
    numeric_log_level = getattr(logging, log_level_str, default_level)
    if not isinstance(numeric_log_level, int):
        print(f"Warning: Invalid log level string '{log_level_str}'. Using default level {logging.getLevelName(default_level)}.", file=sys.stderr)
        numeric_log_level = default_level

    formatter = StructuredLogFormatter(datefmt=config.get('date_format', DEFAULT_LOG_DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = config.get('file_path')
    if log_file_path:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file_path,
                maxBytes=int(config.get('max_bytes', 5 * 1024 * 1024)),
                backupCount=int(config.get('backup_count', 3)),
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"Error setting up file logging to {log_file_path}: {e}. File logging will be disabled.", file=sys.stderr)

    logging.getLogger("LoggingConfig").info("Application logging setup complete. Level: %s", log_level_str)
