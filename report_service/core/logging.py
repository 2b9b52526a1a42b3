"""Logging setup shared by the API process and the scheduler worker."""
from __future__ import annotations

import logging.config
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"
SERVICE_LOGGERS = ("report_service", "workers")


def load_logging_config(config_path: Path, level: str) -> dict[str, Any]:
    """Read the ``dictConfig`` mapping and apply ``level`` to the service loggers."""
    with config_path.open("r", encoding="utf-8") as config_file:
        config = yaml.safe_load(config_file) or {}
    loggers = config.setdefault("loggers", {})
    for name in SERVICE_LOGGERS:
        loggers.setdefault(name, {})["level"] = level.upper()
    return config


def configure_logging(config_path: str | Path | None = None, level: str = "INFO") -> None:
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        logging.basicConfig(level=level.upper())
        logging.getLogger(__name__).warning("Logging config %s not found, using basicConfig", path)
        return
    logging.config.dictConfig(load_logging_config(path, level))


__all__ = ["DEFAULT_CONFIG_PATH", "configure_logging", "load_logging_config"]
