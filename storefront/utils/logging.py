# storefront/utils/logging.py
"""
Wspolna konfiguracja logowania.

    from storefront.utils.logging import get_logger
    logger = get_logger(__name__)
"""
import logging
import sys
from functools import cache

from storefront.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> None:
    root = logging.getLogger()

    #jesli ktos (np. uvicorn albo pytest) juz skonfigurowal handlery to nie dublujemy
    if root.handlers:
        return

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    #mniej szumu z klienta http
    logging.getLogger("urllib3").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
