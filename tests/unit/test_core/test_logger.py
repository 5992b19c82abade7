# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import json
import logging

import pytest

from fakes.fake_logger import FakeLogger
from vsnapctl.core.logger import TRACE, ContextLoggerAdapter, EmojiFormatter, JsonFormatter, Log, LogStyle


@pytest.mark.unit
class TestLevels:
    @pytest.mark.parametrize(
        "verbose,quiet,level",
        [
            (0, 0, logging.INFO),
            (1, 0, logging.INFO),
            (2, 0, logging.DEBUG),
            (3, 0, TRACE),
            (0, 1, logging.WARNING),
            (3, 2, logging.ERROR),
        ],
    )
    def test_level_from_flags(self, verbose, quiet, level):
        assert Log._level_from_flags(verbose, quiet) == level


@pytest.mark.unit
class TestBind:
    def test_bind_merges_context(self):
        base = logging.getLogger("test.bind")
        log = Log.bind(Log.bind(base, guest="vm1"), op="create")
        assert isinstance(log, ContextLoggerAdapter)
        assert log.extra["ctx"] == {"guest": "vm1", "op": "create"}

    def test_json_formatter_carries_context(self):
        record = logging.LogRecord("vsnapctl", logging.INFO, __file__, 1, "created %s", ("s1",), None)
        record.ctx = {"guest": "vm1"}
        line = json.loads(JsonFormatter().format(record))
        assert line["msg"] == "created s1"
        assert line["level"] == "INFO"


@pytest.mark.unit
class TestMarkers:
    def test_fail_and_warn_leave_the_level_emoji_to_the_formatter(self):
        log = FakeLogger()
        Log.fail(log, "connect failed")
        Log.warn(log, "Continuing with 1 of 2 guests")
        assert log.records == [("error", "connect failed"), ("warning", "Continuing with 1 of 2 guests")]

    def test_formatted_error_has_one_emoji(self):
        record = logging.LogRecord("vsnapctl", logging.ERROR, __file__, 1, "%s", ("connect failed",), None)
        line = EmojiFormatter(LogStyle(color=False)).format(record)
        assert line.count("💥") == 1
        assert line.endswith("ERROR    connect failed")


@pytest.mark.unit
def test_setup_writes_log_file(tmp_path):
    fp = tmp_path / "logs" / "vsnapctl.log"
    logger = Log.setup(2, str(fp), logger_name="vsnapctl.test")
    Log.bind(logger, guest="vm1").info("hello file")
    for h in logger.handlers:
        h.flush()
    text = fp.read_text(encoding="utf-8")
    assert "hello file" in text
    assert "guest=vm1" in text
