from __future__ import annotations

from .core import WorkerFormatter, configure_logging, get_logger, shutdown_logging, worker_label

__all__ = [
    "WorkerFormatter",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
    "worker_label",
]
