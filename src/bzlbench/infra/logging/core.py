from __future__ import annotations

"""
Logging setup for generation runs.

Emission workers log from many threads at once, so records are funnelled
through a single QueueHandler on the root logger and written by one
QueueListener thread. Each record is labelled with the worker that
produced it.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from bzlbench.domain.constants import EMIT_WORKER_PREFIX

LOG_FILE_MAX_BYTES = 2 * 1024 * 1024
LOG_FILE_BACKUPS = 3

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
DEBUG_CONSOLE_FORMAT = "%(levelname)s | %(worker)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(worker)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_queue_handler: Optional[QueueHandler] = None
_listener: Optional[QueueListener] = None


# ==============================================================================
# FORMATTING
# ==============================================================================

class WorkerFormatter(logging.Formatter):
    """Formatter exposing a short ``worker`` field derived from the thread name."""

    def format(self, record: logging.LogRecord) -> str:
        record.worker = worker_label(record.threadName)
        return super().format(record)


def worker_label(thread_name: Optional[str]) -> str:
    """
    Map a thread name to the label shown in log lines.

    Pool threads are named ``EmitWorker_<n>``; they become ``worker-<n>``.
    Anything else is reported as ``main``.
    """
    prefix = f"{EMIT_WORKER_PREFIX}_"
    if thread_name and thread_name.startswith(prefix):
        return f"worker-{thread_name[len(prefix):]}"
    return "main"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route all records through a queue to stderr and, optionally, a log file.

    Calling it again replaces the previous setup.

    Args:
        debug: Lower the threshold to DEBUG and show worker labels on stderr.
        log_file: Optional path of a rotating log file.

    Returns:
        logging.Logger: The root logger.
    """
    global _queue_handler, _listener

    shutdown_logging()

    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(WorkerFormatter(DEBUG_CONSOLE_FORMAT if debug else CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console]

    if log_file:
        file_handler = _open_log_file(log_file)
        if file_handler:
            handlers.append(file_handler)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    _queue_handler = QueueHandler(log_queue)
    _listener = QueueListener(log_queue, *handlers)
    _listener.start()
    root.addHandler(_queue_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Drain the queue, close the handlers and detach from the root logger."""
    global _queue_handler, _listener

    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler.close()
        _queue_handler = None

    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None


atexit.register(shutdown_logging)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _open_log_file(log_file: str) -> Optional[RotatingFileHandler]:
    # A log file that cannot be opened never stops a run
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Log file unavailable at '{log_file}': {e}\n")
        return None

    handler.setFormatter(WorkerFormatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler
