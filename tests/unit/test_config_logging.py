"""
Unit tests for settings and logging setup.
"""

import logging

import pytest

from tmpl_funcs.config import Settings
from tmpl_funcs.fn_logging import BindErrorFormatter, configure_logging, get_logger
from tmpl_funcs.lib.errors import ArityError


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TMPL_FUNCS_LOG_LEVEL", raising=False)
        monkeypatch.delenv("TMPL_FUNCS_RANDOM_SEED", raising=False)
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "WARNING"
        assert s.RANDOM_SEED is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TMPL_FUNCS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TMPL_FUNCS_RANDOM_SEED", "99")
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "DEBUG"
        assert s.RANDOM_SEED == 99

    def test_negative_seed_rejected(self, monkeypatch):
        monkeypatch.setenv("TMPL_FUNCS_RANDOM_SEED", "-1")
        with pytest.raises(ValueError):
            Settings(_env_file=None)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() so later tests still see records through caplog."""
    root = logging.getLogger("tmpl_funcs")
    saved = (list(root.handlers), root.propagate, root.level)
    yield root
    root.handlers[:] = saved[0]
    root.propagate = saved[1]
    root.setLevel(saved[2])


class TestLogging:
    def test_logger_names(self):
        assert get_logger().name == "tmpl_funcs"
        assert get_logger("tmpl_funcs.lib.runtime.binding").name == "tmpl_funcs.binding"

    def test_configure_is_idempotent(self, restore_root_logger):
        root = configure_logging("INFO")
        configure_logging("DEBUG")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_formatter_layout(self):
        record = logging.LogRecord("tmpl_funcs.binding", logging.INFO, __file__, 1, "[CALL] trim", None, None)
        assert BindErrorFormatter().format(record) == "INFO  tmpl_funcs.binding: [CALL] trim"

    def test_formatter_renders_bind_error(self):
        err = ArityError("abbrev", 2, 1)
        record = logging.LogRecord("tmpl_funcs.binding", logging.DEBUG, __file__, 1, "[BIND] failed", None, None)
        record.bind_error = err
        line = BindErrorFormatter().format(record)
        assert line.endswith("[BIND] failed [category=arity_error function=abbrev]")
