"""Настройка журналирования по RELNORM_LOG_LEVEL и RELNORM_LOG_FILE"""
import logging
import os
from pathlib import Path
from typing import Optional

_CONFIGURED = False


def configure_logging(level: Optional[int] = None) -> None:
    """
    Однократная настройка журналирования

    Уровень: 0 - журнал отключен, 1 - INFO, 2 и выше - DEBUG. Без
    RELNORM_LOG_FILE записи выводятся в stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if level is None:
        level = _read_level(os.getenv("RELNORM_LOG_LEVEL", "0"))
    log_path = os.getenv("RELNORM_LOG_FILE")

    _CONFIGURED = True
    if level is None or level <= 0:
        logging.getLogger("relnorm").addHandler(logging.NullHandler())
        return

    options = {
        "level": _map_level(level),
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    }
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        options["filename"] = log_file
        options["filemode"] = "a"
    logging.basicConfig(**options)


def _read_level(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO
