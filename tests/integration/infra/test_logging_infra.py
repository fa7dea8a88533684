from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, reconfiguration without handler
leaks, worker labels in persisted records and log file fallback.
"""

import logging
import threading
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from bzlbench.infra.logging import configure_logging, shutdown_logging, worker_label
from bzlbench.infra.logging import core as logging_core


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _queue_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, QueueHandler)]


def test_reconfigure_does_not_duplicate_handlers() -> None:
    configure_logging()
    configure_logging()

    assert len(_queue_handlers()) == 1


def test_debug_flag_sets_level() -> None:
    configure_logging(debug=True)
    assert logging.getLogger().level == logging.DEBUG

    configure_logging()
    assert logging.getLogger().level == logging.INFO


@pytest.mark.parametrize("thread_name, label", [
    ("EmitWorker_0", "worker-0"),
    ("EmitWorker_12", "worker-12"),
    ("MainThread", "main"),
    (None, "main"),
])
def test_worker_label(thread_name, label: str) -> None:
    assert worker_label(thread_name) == label


def test_file_records_carry_worker_label(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "bzlbench.log"
    configure_logging(debug=True, log_file=str(log_file))

    logger = logging.getLogger("bzlbench.test")
    worker = threading.Thread(target=logger.debug, args=("Handling pkg_1/lib_1",), name="EmitWorker_0")
    worker.start()
    worker.join()
    logger.info("Generation finished")

    shutdown_logging()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("| worker-0 |" in line and "Handling pkg_1/lib_1" in line for line in lines)
    assert any("| main |" in line and "Generation finished" in line for line in lines)


def test_unwritable_log_file_falls_back_to_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    configure_logging(log_file=str(blocker / "bzlbench.log"))

    assert "Log file unavailable" in capsys.readouterr().err
    assert len(_queue_handlers()) == 1
    assert len(logging_core._listener.handlers) == 1


def test_shutdown_clears_state() -> None:
    configure_logging()
    shutdown_logging()

    assert logging_core._listener is None
    assert logging_core._queue_handler is None
    assert _queue_handlers() == []
