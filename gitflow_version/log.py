import logging
import sys
from typing import Optional, TextIO

logger = logging.getLogger("gitflow_version")

HANDLER_NAME = "gitflow_version"
DEFAULT_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(
    debug: bool = False, stream: Optional[TextIO] = None, fmt: Optional[str] = None
):
    """
    Configures the package logger based on the debug flag.

    Messages go to stdout unless another stream is given. Debug output
    names the emitting module so resolution steps can be told apart.
    Calling this again replaces the handler it installed before; handlers
    added by the host application are left alone.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(fmt or (DEBUG_FORMAT if debug else DEFAULT_FORMAT))
    )

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
    logger.addHandler(handler)
