import logging

import pytest

from firecrawl_client.logging_utils import configure_logging, resolve_level


def test_resolve_level_accepts_names_and_numbers():
    assert resolve_level("info") == logging.INFO
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(10) == logging.DEBUG


def test_resolve_level_rejects_unknown_names():
    with pytest.raises(ValueError, match="chatty"):
        resolve_level("chatty")


def test_configure_logging_writes_file_and_quiets_httpx(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    saved_httpx = logging.getLogger("httpx").level
    log_file = tmp_path / "logs" / "client.log"
    try:
        configure_logging(log_file, "debug")
        logging.getLogger("firecrawl_client.client").info("Starting crawl for URL: https://example.com")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert "| INFO | firecrawl_client.client | Starting crawl" in log_file.read_text()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.getLogger("httpx").setLevel(saved_httpx)
