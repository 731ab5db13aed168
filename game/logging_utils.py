"""Root logging setup for the command line."""

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """ERROR and up with ``quiet``, DEBUG with ``verbose``, INFO otherwise."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    # no-op when the root logger already has handlers
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
