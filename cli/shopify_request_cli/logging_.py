from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LIBRARY_LOGGER = "shopify_request"
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # request/response lines come from the library's transport logger
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(level)
