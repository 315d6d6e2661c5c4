"""
Tests for logging setup: console levels and the append-mode run log.
"""

import logging

from devstack.core.observability.logging_config import (
    _parse_level,
    run_log_path,
    setup_logging,
    start_run_log,
)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("INFO") == logging.INFO

    def test_fallback(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("chatty") == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO", log_file=None)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_run_log_records_info_below_console_level(self, tmp_path):
        log_file = tmp_path / "install_log.txt"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="INFO")
        logging.getLogger("devstack.test").info("git is already installed. Skipping...")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "git is already installed" in log_file.read_text(encoding="utf-8")

    def test_run_log_appends(self, tmp_path):
        log_file = tmp_path / "install_log.txt"
        log_file.write_text("previous run\n", encoding="utf-8")
        setup_logging("WARNING", log_file=str(log_file))
        logging.getLogger("devstack.test").info("second run")
        for h in logging.getLogger().handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert text.startswith("previous run\n")
        assert "second run" in text

    def test_reconfigure_replaces_handlers(self, tmp_path):
        setup_logging("WARNING")
        setup_logging("WARNING", log_file=str(tmp_path / "run.log"))
        assert len(logging.getLogger().handlers) == 2

    def test_run_log_parent_created(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "install_log.txt"
        setup_logging("WARNING", log_file=log_file)
        logging.getLogger("devstack.test").info("created")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "created" in log_file.read_text(encoding="utf-8")


class TestRunLog:
    def test_configured_path_by_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEVSTACK_LOG_FILE", raising=False)
        assert run_log_path(tmp_path / "install_log.txt") == tmp_path / "install_log.txt"

    def test_env_overrides_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEVSTACK_LOG_FILE", str(tmp_path / "other.log"))
        assert run_log_path(tmp_path / "install_log.txt") == tmp_path / "other.log"

    def test_start_run_log_attaches_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEVSTACK_LOG_FILE", raising=False)
        monkeypatch.setenv("DEVSTACK_LOG_FILE_LEVEL", "DEBUG")
        path = start_run_log("WARNING", tmp_path / "install_log.txt")
        assert path == tmp_path / "install_log.txt"
        file_handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG
