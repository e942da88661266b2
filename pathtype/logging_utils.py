from __future__ import annotations

import logging

_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int = 0) -> None:
    """Console logging for the CLI. Library code only ever calls getLogger."""

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_FORMAT)
