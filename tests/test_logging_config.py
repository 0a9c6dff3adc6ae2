"""Tests for the package logging setup."""

from __future__ import annotations

import json
import logging

from portal_cache.config import ObservabilityConfig
from portal_cache.logging_config import PACKAGE_LOGGER, JsonFormatter, configure_logging


def _own_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if getattr(h, "_portal_cache", False)]


def test_configure_logging_is_idempotent():
    logger = configure_logging(ObservabilityConfig(level="debug"))
    configure_logging(ObservabilityConfig(level="debug"))

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert len(_own_handlers(logger)) == 1


def test_structured_logging_uses_json():
    logger = configure_logging(ObservabilityConfig(structured=True))
    assert isinstance(_own_handlers(logger)[0].formatter, JsonFormatter)


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "portal_cache.test", logging.INFO, __file__, 1, "Cache created", None, None
    )
    record.cache = "PageCacheService"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Cache created"
    assert payload["level"] == "INFO"
    assert payload["cache"] == "PageCacheService"
