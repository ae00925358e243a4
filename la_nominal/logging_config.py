import logging
import sys


def setup_logging(verbose: bool = False):
    """Routes library logging to stderr so JSON written to stdout stays clean."""
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
    )
