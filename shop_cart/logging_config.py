import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_initialized = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Настраивает логгер пакета shop_cart один раз за процесс.
    Повторные вызовы только меняют уровень.
    """
    global _initialized

    logger = logging.getLogger("shop_cart")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not _initialized:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _initialized = True

    return logger
