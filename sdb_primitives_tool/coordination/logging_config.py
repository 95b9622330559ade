"""
Logging configuration for coordination commands.

Verbosity follows the -v count of the CLI:
    0 -> WARNING, 1 -> INFO, 2 -> DEBUG, 3+ -> DEBUG including boto3/botocore.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LIBRARY_LOGGERS = ("boto3", "botocore", "urllib3")


def setup_logging(verbose: int = 0) -> None:
    """
    Configure root logging for a CLI invocation.

    Args:
        verbose: Number of -v flags given
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)

    # AWS SDK chatter only at TRACE
    library_level = logging.DEBUG if verbose >= 3 else logging.WARNING
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
