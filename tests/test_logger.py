"""Prefix-coloured console logger and file sink."""

import io

from utils.console import set_color_enabled
from utils.logger import Logger, format_console, split_prefix


class TestSplitPrefix:

    def test_prefix(self):
        assert split_prefix("[state] loaded") == ("state", "loaded")

    def test_no_prefix(self):
        assert split_prefix("plain text") == (None, "plain text")

    def test_empty_brackets(self):
        assert split_prefix("[] x") == (None, "[] x")


class TestLogger:

    def setup_method(self):
        set_color_enabled(False)

    def teardown_method(self):
        set_color_enabled(True)

    def test_plain_console_when_color_disabled(self):
        assert format_console("[temple] GET", level="info") == "[temple] GET"

    def test_level_filter(self):
        out = io.StringIO()
        logger = Logger(stream=out, level="warn")
        logger.info("[state] hidden")
        logger.warn("[state] shown")
        assert out.getvalue() == "[state] shown\n"

    def test_console_muted(self):
        out = io.StringIO()
        logger = Logger(stream=out)
        logger.console = False
        logger.error("nothing")
        assert out.getvalue() == ""

    def test_file_sink(self, tmp_path):
        path = tmp_path / "tracker.log"
        logger = Logger(stream=io.StringIO(), path=str(path))
        logger.warn("[state] fetch failed")
        line = path.read_text(encoding="utf-8").strip()
        assert line.endswith("WARN  [state] fetch failed")
