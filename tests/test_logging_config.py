"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from repo_heatmap.logging_config import get_logger, setup_logging


class TestGetLogger:
    def test_module_name_kept(self):
        assert get_logger("repo_heatmap.heatmap.tree").name == "repo_heatmap.heatmap.tree"

    def test_bare_name_is_namespaced(self):
        assert get_logger("tree").name == "repo_heatmap.tree"

    def test_lookalike_prefix_is_namespaced(self):
        assert get_logger("repo_heatmapper").name == "repo_heatmap.repo_heatmapper"

    def test_package_logger(self):
        assert get_logger().name == "repo_heatmap"
        assert get_logger("repo_heatmap").name == "repo_heatmap"


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging().level == logging.WARNING
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        setup_logging()
        handlers = logging.getLogger().handlers
        assert sum(isinstance(h, RichHandler) for h in handlers) == 1

    def test_log_file(self, tmp_path):
        log = tmp_path / "run.log"
        setup_logging(verbose=True, log_file=str(log))
        get_logger("tests").debug("hello [not markup]")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "repo_heatmap.tests - DEBUG - hello [not markup]" in log.read_text()
