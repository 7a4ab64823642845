"""CLI Utility Functions"""

import logging
import sys


def setup_logging(verbose: bool) -> None:
    """Send diagnostic logging to stderr; DEBUG with --verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
