"""
Logging setup for Upcraft.

One stderr handler on the ``upcraft`` logger, short ``[name] LEVEL message``
lines so Streamlit's own console output stays readable.
"""
import logging
import sys

LOG_FORMAT = "[%(name)s] %(levelname)s %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the ``upcraft`` logger once per process (Streamlit reruns the script)."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("upcraft")
    logger.setLevel(level.upper())
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not name.startswith("upcraft"):
        name = f"upcraft.{name}"
    return logging.getLogger(name)
