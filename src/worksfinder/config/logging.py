"""Root logging setup for the worksfinder CLI."""

from __future__ import annotations

import logging

# Per-request chatter from the HTTP stack stays out of discovery logs.
HTTP_LOGGERS = ("httpx", "httpcore", "hishel", "httpx_retries")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Log INFO and above to stderr; ``verbose`` adds worksfinder's own DEBUG detail.

    Verbose output covers per-page collection and per-work enrichment lines.
    The HTTP client libraries are held at WARNING either way.
    """

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    logging.getLogger("worksfinder").setLevel(logging.DEBUG if verbose else logging.INFO)
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
