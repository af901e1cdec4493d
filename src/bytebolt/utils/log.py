import logging

LOG_FILE = "/tmp/bytebolt_engine.log"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, log_file: str = LOG_FILE) -> logging.Logger:
    """
    Route the package logger to a file. The TUI owns the terminal, so
    nothing is written to stderr.
    """
    logger = logging.getLogger("bytebolt")
    logger.setLevel(level)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        try:
            handler = logging.FileHandler(log_file)
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
