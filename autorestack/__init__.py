"""
autorestack: keep stacked pull requests up to date after a squash merge.
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(verbose: int = 0) -> None:
    """Send log records to stderr.

    Every git and GitHub call is logged at INFO, so INFO is the floor;
    `-vv` (verbose >= 2) adds DEBUG output such as per-PR listings.
    """
    level = logging.DEBUG if verbose >= 2 else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    # Replace, don't stack, handlers when called again from the CLI
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root.addHandler(handler)

setup_logging()
