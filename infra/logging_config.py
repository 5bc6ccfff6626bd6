# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import user_data_dir
from infra.operational_support import (
    TraceIdLogFilter,
    get_operational_support,
    install_global_exception_hooks,
)


def setup_logging(level: int = logging.INFO, console: bool = True) -> Path:
    """
    Configure application logging.
    Logs go to the per-user data directory and rotate at 1 MB.
    """
    log_dir: Path = user_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "scope_burndown.log"

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    trace_filter = TraceIdLogFilter()
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    if console:
        stream = logging.StreamHandler()
        stream.addFilter(trace_filter)
        stream.setLevel(logging.WARNING)
        stream.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
        logger.addHandler(stream)

    logger.info("Logging initialized. Log file at %s", log_file)
    install_global_exception_hooks()
    get_operational_support().emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file)},
    )
    return log_file
