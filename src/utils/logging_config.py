import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "INFO", logger_name: Optional[str] = None) -> logging.Logger:
    """Configure console logging once and return the requested logger.

    Streamlit re-executes the app script on every interaction, so the handler
    is only attached the first time.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_locale_app_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._locale_app_handler = True
        root.addHandler(handler)

    return logging.getLogger(logger_name or "locale_app")
