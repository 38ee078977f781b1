from __future__ import annotations
import logging
import sys
from typing import Optional

import structlog

from .config import settings


def _processors(fmt: str) -> list:
    renderer = (structlog.processors.JSONRenderer() if fmt == "json"
                else structlog.dev.ConsoleRenderer(colors=False))
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        renderer,
    ]


def _configure_structlog(fmt: str) -> None:
    structlog.configure(
        processors=_processors(fmt),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Для застосунків і демо: stderr-хендлер + рівень.
    Сама бібліотека хендлерів не чіпає.
    """
    level = (level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("cg2d").setLevel(level)
    _configure_structlog(fmt or settings.log_format)


def get_logger(name: str):
    # structlog тут не налаштовується; процесори беруться з глобальної конфігурації на кожен виклик
    return structlog.wrap_logger(logging.getLogger(name))
