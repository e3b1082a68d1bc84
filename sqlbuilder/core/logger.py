import logging
import sys

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Один консольный хендлер на корневом логгере пакета.
    Повторный вызов только меняет уровень.
    """
    logger = logging.getLogger("sqlbuilder")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger
