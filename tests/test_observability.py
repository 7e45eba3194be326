"""
Tests for logging setup — level precedence and the optional log file.
"""

import logging
from pathlib import Path

from hostprep.core.observability.logging_config import resolve_level, setup_logging


class TestResolveLevel:
    """Tests for console level precedence."""

    def test_flags_win_over_env(self):
        """CLI flags override HOSTPREP_LOG_LEVEL."""
        env = {"HOSTPREP_LOG_LEVEL": "ERROR"}
        assert resolve_level(debug=True, environ=env) == "DEBUG"
        assert resolve_level(verbose=True, environ=env) == "INFO"

    def test_env(self):
        """HOSTPREP_LOG_LEVEL applies without flags."""
        assert resolve_level(environ={"HOSTPREP_LOG_LEVEL": "INFO"}) == "INFO"

    def test_default(self):
        """Default level is WARNING."""
        assert resolve_level(environ={}) == "WARNING"

    def test_quiet(self):
        """--quiet lowers output to errors."""
        assert resolve_level(quiet=True, environ={}) == "ERROR"


class TestSetupLogging:
    """Tests for root logger configuration."""

    def teardown_method(self):
        setup_logging("WARNING")

    def test_repeated_calls_do_not_stack_handlers(self):
        """Reconfiguring replaces handlers instead of adding."""
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_unknown_level_falls_back(self):
        """An unknown level name falls back to WARNING."""
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_gets_more_detail(self, tmp_path: Path):
        """The log file can record below the console level."""
        log_file = tmp_path / "logs" / "install.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="INFO")

        logging.getLogger("hostprep.test").info("nvim → fetch")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.INFO
        assert "nvim → fetch" in log_file.read_text(encoding="utf-8")
