"""
Logging Setup
=============

Configures the root logger for scripts and long-running hosts.
Library modules never configure logging themselves; they only call
``logging.getLogger(__name__)``.
"""

import logging
import os
from typing import Optional


CONSOLE_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'
FILE_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the root logger.

    Args:
        level: Console log level name (e.g. 'INFO', 'DEBUG')
        log_file: Optional path for a DEBUG-level file log

    Returns:
        The configured root logger
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Re-running a script in the same interpreter must not duplicate output
    for handler in list(root.handlers):
        if getattr(handler, '_graph_handler', False):
            root.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    console_handler._graph_handler = True
    root.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler._graph_handler = True
        root.addHandler(file_handler)

    # matplotlib is chatty at DEBUG (font cache scans)
    logging.getLogger('matplotlib').setLevel(logging.WARNING)

    return root
