from __future__ import annotations

import logging

from shopify_request_cli.logging_ import setup_logging


def test_setup_logging_verbose_enables_transport_debug() -> None:
    setup_logging(True)
    assert logging.getLogger("shopify_request.transport").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_setup_logging_quiet_by_default() -> None:
    setup_logging(False)
    assert logging.getLogger("shopify_request").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
