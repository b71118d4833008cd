import logging
import sys

from core import config


def setup_logging(level=None):
    """Send log records to stdout with timestamps."""
    logging.basicConfig(
        level=level if level is not None else config.LOG_LEVEL,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
