"""Tests for logger configuration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from ai_providers.utils.logging_setup import JSONFormatter, configure_logging
from ai_providers.utils.settings import LoggingSettings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def target_logger() -> Iterator[logging.Logger]:
    """Provide an isolated logger and close its handlers afterwards."""
    logger = logging.getLogger(f"ai_providers.tests.{uuid4().hex}")
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_json_formatter_emits_json() -> None:
    """Records should be serialised as single JSON objects."""
    record = logging.LogRecord(
        name="ai_providers.llm.selector",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="%s not available",
        args=("Perplexity",),
        exc_info=None,
    )

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "WARNING"
    assert entry["logger"] == "ai_providers.llm.selector"
    assert entry["message"] == "Perplexity not available"
    assert "timestamp" in entry


def test_configure_logging_writes_file(
    target_logger: logging.Logger,
    tmp_path: Path,
) -> None:
    """A configured log file should receive formatted records."""
    log_file = tmp_path / "providers.log"
    settings = LoggingSettings(
        log_level="DEBUG",
        log_format="json",
        log_file_path=str(log_file),
        _env_file=None,  # type: ignore[call-arg]
    )

    configure_logging(settings, target_logger)
    target_logger.debug("hello %s", "world")
    for handler in target_logger.handlers:
        handler.flush()

    assert target_logger.level == logging.DEBUG
    assert len(target_logger.handlers) == 2
    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["message"] == "hello world"


def test_configure_logging_replaces_handlers(target_logger: logging.Logger) -> None:
    """Configuring twice should not duplicate handlers."""
    settings = LoggingSettings(log_level="WARNING", _env_file=None)  # type: ignore[call-arg]

    configure_logging(settings, target_logger)
    configure_logging(settings, target_logger)

    assert len(target_logger.handlers) == 1
    assert target_logger.level == logging.WARNING
