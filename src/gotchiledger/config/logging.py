"""Root logger setup for the command-line jobs."""

from __future__ import annotations

import logging

# Transport loggers that would otherwise print one line per subgraph or RPC call.
QUIET_LOGGERS = ("httpx", "httpcore", "httpx_retries")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Log to stderr at INFO, or DEBUG with ``verbose``.

    Pass ``force=True`` to replace handlers installed by an earlier call.
    """

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
