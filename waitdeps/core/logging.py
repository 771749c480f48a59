import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "waitdeps"


def configure_logging(verbose: bool = True, colour: bool = False) -> logging.Logger:
    """Route the ``waitdeps`` logger to stderr; failures stay visible when not verbose."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if colour:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True, force_terminal=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    logger.propagate = False
    return logger
