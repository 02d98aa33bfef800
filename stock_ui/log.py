import logging

from stock_ui.config import get_settings

FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call on every Streamlit rerun: the handler is only added once.
    """
    logger = logging.getLogger("stock_ui")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level or get_settings().log_level)
    return logger
