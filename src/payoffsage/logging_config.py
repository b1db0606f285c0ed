"""Structured logging configuration with JSON output and rotation."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import BaseConfig

ROOT_LOGGER_NAME = "payoffsage"


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields are nested under ``extra``."""

    # Attributes every LogRecord carries, whatever the interpreter version
    _RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        extra = {k: v for k, v in vars(record).items() if k not in self._RESERVED}
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(config: BaseConfig, *, level: int = logging.INFO) -> logging.Logger:
    """Send ``payoffsage.*`` records to stderr and to ``DATA_DIR/logs/payoffsage.log``.

    The file gets JSON lines at *level*. The console shows the same records in
    dev mode and only warnings otherwise. Calling it again replaces the
    handlers instead of stacking them.
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "payoffsage.log"

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level if config.DEV_MODE else logging.WARNING)
    console.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
    )

    rotating = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setLevel(level)
    rotating.setFormatter(JSONFormatter())

    package_logger.addHandler(console)
    package_logger.addHandler(rotating)
    package_logger.info(
        "Logging initialized",
        extra={"dev_mode": config.DEV_MODE, "log_file": str(log_file)},
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, e.g. ``get_logger("services.payoff")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
