"""Tests for helper utilities."""

import logging

import pytest

from pagequill.exceptions import PageQuillError
from pagequill.utils import Cache, add_file_handler, get_logger
from pagequill.utils.font_utils import resolve_base_family, resolve_font_variant


class TestCache:
    def test_get_and_set(self):
        cache = Cache(max_size=2)
        cache.set("a", 1)

        assert cache.get("a") == 1
        assert cache.get("missing") is None
        assert (cache.hits, cache.misses) == (1, 1)

    def test_least_recently_used_entry_is_evicted(self):
        cache = Cache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert cache.has("a")
        assert not cache.has("b")
        assert len(cache) == 2

    def test_get_or_set_calls_factory_once(self):
        cache = Cache()
        calls = []

        def factory():
            calls.append(1)
            return 7.5

        assert cache.get_or_set("k", factory) == 7.5
        assert cache.get_or_set("k", factory) == 7.5
        assert len(calls) == 1

    def test_clear(self):
        cache = Cache()
        cache.set("a", 1)
        cache.clear()

        assert len(cache) == 0


class TestFontUtils:
    def test_css_family_lists(self):
        assert resolve_base_family("'Segoe UI', Roboto, sans-serif") == "Helvetica"
        assert resolve_base_family("Times New Roman") == "Times-Roman"
        assert resolve_base_family(None) == "Helvetica"

    def test_variants(self):
        assert resolve_font_variant("Courier", bold=True, italic=True) == "Courier-BoldOblique"
        assert resolve_font_variant("serif", italic=True) == "Times-Italic"


class TestLogger:
    def test_get_logger(self):
        assert get_logger("pagequill.test").name == "pagequill.test"
        with pytest.raises(ValueError):
            get_logger("")

    def test_add_file_handler_writes_records(self, temp_dir):
        log_file = temp_dir / "logs" / "pagequill.log"
        logger = logging.getLogger("pagequill.test.file")

        handler = add_file_handler(logger, str(log_file), "DEBUG")
        try:
            logger.debug("written to file")
            handler.flush()
            assert "written to file" in log_file.read_text(encoding="utf-8")
        finally:
            logger.removeHandler(handler)
            handler.close()
            logger.setLevel(logging.NOTSET)

    def test_add_file_handler_lowers_filtering_logger_level(self, temp_dir):
        logger = logging.getLogger("pagequill.test.level")
        logger.setLevel(logging.WARNING)

        handler = add_file_handler(logger, str(temp_dir / "x.log"), "INFO")
        try:
            assert logger.level == logging.INFO
            assert handler.level == logging.INFO
        finally:
            logger.removeHandler(handler)
            handler.close()
            logger.setLevel(logging.NOTSET)

    def test_invalid_level(self, temp_dir):
        with pytest.raises(ValueError):
            add_file_handler(logging.getLogger("pagequill.test"), str(temp_dir / "x.log"), "LOUD")

    def test_add_file_handler_requires_logger(self, temp_dir):
        with pytest.raises(ValueError):
            add_file_handler("not a logger", str(temp_dir / "x.log"))


class TestExceptions:
    def test_message_and_details(self):
        error = PageQuillError("Cannot lay out", "page 3")

        assert str(error) == "Cannot lay out: page 3"
        assert error.details == "page 3"
        assert str(PageQuillError("plain")) == "plain"
