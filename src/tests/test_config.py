"""Unit tests for application configuration and logging setup."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from tagwiki.config import Settings
from tagwiki.logging_setup import setup_logging


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.data_dir == Path("data")
            assert s.page_extension == ".md"
            assert s.tag_marker == "#"
            assert s.tag_match == "substring"
            assert s.client_dir is None
            assert s.cors_origins == ["*"]
            assert s.port == 3000
            assert s.debug is False
            assert s.app_title == "TagWiki"

    def test_from_env(self):
        env = {
            "TAGWIKI_DATA_DIR": "/tmp/wiki",
            "TAGWIKI_TAG_MATCH": "token",
            "TAGWIKI_PORT": "8080",
            "TAGWIKI_DEBUG": "true",
            "TAGWIKI_CORS_ORIGINS": '["http://localhost:5173"]',
            "TAGWIKI_CLIENT_DIR": "client/build",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.data_dir == Path("/tmp/wiki")
            assert s.tag_match == "token"
            assert s.port == 8080
            assert s.debug is True
            assert s.cors_origins == ["http://localhost:5173"]
            assert s.client_dir == Path("client/build")

    def test_invalid_tag_match(self):
        with patch.dict("os.environ", {"TAGWIKI_TAG_MATCH": "fuzzy"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_marker_must_be_single_character(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, tag_marker="##")

    def test_extension_needs_dot(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, page_extension="md")


class TestLogging:
    def test_setup_is_idempotent(self):
        logger = setup_logging("DEBUG")
        count = len(logger.handlers)
        setup_logging("WARNING")
        assert len(logger.handlers) == count
        assert logger.level == logging.WARNING
