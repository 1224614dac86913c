"""Tests for the package's diagnostic logging setup."""

from __future__ import annotations

import io
import logging

import pytest

from promptlog import logging as plog


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger("promptlog")
    handlers = list(root.handlers)
    level = root.level
    yield
    plog.enable()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogger:
    def test_prefixes_package_name(self) -> None:
        assert plog.get_logger("progress").name == "promptlog.progress"

    def test_keeps_qualified_name(self) -> None:
        assert plog.get_logger("promptlog.tui.keys").name == "promptlog.tui.keys"


class TestSetupLogging:
    def test_writes_to_stream(self) -> None:
        stream = io.StringIO()
        plog.setup_logging("DEBUG", format="%(name)s %(message)s", stream=stream)

        plog.get_logger("progress").debug("ticker started")

        assert stream.getvalue() == "promptlog.progress ticker started\n"

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        plog.setup_logging("WARNING", stream=stream)

        plog.get_logger("logger").info("hidden")

        assert stream.getvalue() == ""

    def test_set_level(self) -> None:
        plog.set_level("error")
        assert logging.getLogger("promptlog").level == logging.ERROR

    def test_disable_and_enable(self) -> None:
        stream = io.StringIO()
        plog.setup_logging("DEBUG", format="%(message)s", stream=stream)

        plog.disable()
        plog.get_logger("logger").debug("dropped")
        plog.enable()
        plog.get_logger("logger").debug("kept")

        assert stream.getvalue() == "kept\n"
