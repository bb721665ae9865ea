# pound/utils/logging_config.py
"""pound.utils.logging_config
============================

Logging configuration for the Pound editor. It defines the global logger
objects and a single setup function, `setup_logging`, which installs the
application-wide handlers and levels from a configuration dictionary.

Features:
    - Rotating file logging for general editor events (editor.log).
    - Optional console logging to stderr with a configurable level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log), enabled by the POUND_KEYTRACE
      environment variable.
    - Safe reconfiguration: existing handlers are cleared, so calling the
      function twice does not duplicate records.
    - Never raises; handler set-up failures are reported to stderr.

Globals:
    logger: Main application logger ("pound").
    KEY_LOGGER: Logger for key event traces ("pound.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import time, unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("pound")
KEY_LOGGER = logging.getLogger("pound.keyevents")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int, level: int, formatter: logging.Formatter
) -> Optional[logging.Handler]:
    try:
        log_dir = os.path.dirname(filename)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e:
        print(f"Error setting up log file '{filename}': {e}", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are installed:

    1. File handler: rotating editor.log from `file_level` (default DEBUG) up.
       Falls back to a file in the system temp directory if editor.log
       cannot be opened.
    2. Console handler: optional stderr output at `console_level`
       (default WARNING).
    3. Error-file handler: optional rotating error.log, ERROR and above.
    4. Key-event handler: rotating keytrace.log attached to
       ``pound.keyevents`` when ``POUND_KEYTRACE`` is ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is read; recognised keys are
            ``file_level``, ``console_level``, ``log_to_console`` and
            ``separate_error_log``.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    file_level = getattr(logging, str(logging_config.get("file_level", "DEBUG")).upper(), logging.DEBUG)
    file_formatter = logging.Formatter(FILE_FORMAT)

    log_filename = "editor.log"
    file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, file_level, file_formatter)
    if file_handler is None:
        log_filename = os.path.join(tempfile.gettempdir(), "pound.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, file_level, file_formatter)

    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level = getattr(
            logging, str(logging_config.get("console_level", "WARNING")).upper(), logging.WARNING
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_level)

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_file_handler = _rotating_handler(
            "error.log", 1 * 1024 * 1024, 3, logging.ERROR, file_formatter
        )

    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(file_level)

    # Key Event Logger
    key_event_logger = logging.getLogger("pound.keyevents")
    key_event_logger.propagate = False
    key_event_logger.setLevel(logging.DEBUG)
    key_event_logger.handlers = []
    key_event_logger.disabled = False

    key_trace_handler = None
    if os.environ.get("POUND_KEYTRACE", "").lower() in {"1", "true", "yes"}:
        key_trace_handler = _rotating_handler(
            "keytrace.log", 1 * 1024 * 1024, 3, logging.DEBUG, logging.Formatter("%(asctime)s - %(message)s")
        )
    if key_trace_handler:
        key_event_logger.addHandler(key_trace_handler)
        logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
    else:
        key_event_logger.addHandler(logging.NullHandler())
        key_event_logger.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
