"""
Tests for logging setup — level resolution, formats, and optional file output.
"""

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkgscript.core.observability.logging_config import LOG_LEVEL_VAR, _parse_level, resolve_level, setup_logging
from pkgscript.main import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback_to_warning(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING
        assert _parse_level("chatty") == logging.WARNING


class TestResolveLevel:
    def test_flags_in_precedence_order(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, environ={}) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, environ={}) == "INFO"
        assert resolve_level(quiet=True, environ={LOG_LEVEL_VAR: "DEBUG"}) == "ERROR"

    def test_environment_then_default(self):
        assert resolve_level(environ={LOG_LEVEL_VAR: "info"}) == "info"
        assert resolve_level(environ={LOG_LEVEL_VAR: ""}) == "WARNING"
        assert resolve_level(environ={}) == "WARNING"


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    def test_minimal_format_at_warning(self):
        setup_logging("WARNING")
        handler = logging.getLogger().handlers[0]
        assert handler.formatter._fmt.startswith("pkgscript:")

    def test_verbose_format_names_the_module(self):
        setup_logging("INFO")
        assert "%(name)s" in logging.getLogger().handlers[0].formatter._fmt

    def test_file_handler_with_lower_level(self, tmp_path: Path):
        log_file = tmp_path / "pkgscript.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("pkgscript.test").debug("only in the file")
        for handler in root.handlers:
            handler.flush()
        assert "only in the file" in log_file.read_text(encoding="utf-8")


class TestCLILogging:
    def test_debug_flag(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["--debug"], env={"npm_config_argv": None, "npm_lifecycle_event": None})
        assert logging.getLogger().level == logging.DEBUG

    def test_env_level(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        env = {"npm_config_argv": None, "npm_lifecycle_event": None, "PKGSCRIPT_LOG_LEVEL": "ERROR"}
        runner.invoke(cli, [], env=env)
        assert logging.getLogger().level == logging.ERROR

    def test_flag_beats_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        env = {"npm_config_argv": None, "npm_lifecycle_event": None, "PKGSCRIPT_LOG_LEVEL": "ERROR"}
        runner.invoke(cli, ["--verbose"], env=env)
        assert logging.getLogger().level == logging.INFO
