"""
Tests for settings and logging setup.
"""

import json
import logging
import sys

import pytest

from seqscope.analysis import DotPlotPoint, dot_plot, find_orfs, windowed_gc
from seqscope.config import Settings
from seqscope.logging_config import ROOT_LOGGER_NAME, JSONFormatter, get_logger, setup_logging


@pytest.mark.unit
class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert (settings.match_score, settings.mismatch_score, settings.gap_penalty) == (1, -1, -2)
        assert settings.min_orf_length == 100
        assert settings.normalize_sequences is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SEQSCOPE_GAP_PENALTY", "-3")
        monkeypatch.setenv("SEQSCOPE_MAX_ALIGNMENT_RESIDUES", "0")
        settings = Settings(_env_file=None)
        assert settings.gap_penalty == -3
        assert settings.max_alignment_residues == 0


@pytest.fixture
def restore_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.unit
class TestLogging:

    def test_json_log_file(self, tmp_path, restore_logger):
        log_file = tmp_path / "logs" / "seqscope.jsonl"
        setup_logging("WARNING", log_file=log_file, json_format=True)

        get_logger("worker").info("job started", extra={"job_id": "abc"})
        for handler in restore_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["message"] == "job started"
        assert entry["logger"] == "seqscope.worker"
        assert entry["job_id"] == "abc"
        assert entry["level"] == "INFO"

    def test_get_logger_names(self):
        assert get_logger("worker").name == "seqscope.worker"
        assert get_logger("seqscope.msa").name == "seqscope.msa"

    def test_formatter_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "seqscope", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        assert "ValueError: boom" in json.loads(JSONFormatter().format(record))["exception"]


@pytest.mark.unit
class TestConfiguredDefaults:

    def test_min_orf_length(self, env_settings):
        env_settings(min_orf_length=9)
        assert [o.protein for o in find_orfs("ATGAAATGA")] == ["MK*"]

        env_settings(min_orf_length=12)
        assert find_orfs("ATGAAATGA") == []
        assert len(find_orfs("ATGAAATGA", min_length=9)) == 1

    def test_gc_window(self, env_settings):
        env_settings(gc_window_size=4, gc_step=2)
        assert [p.position for p in windowed_gc("ATGCATGC")] == [0, 2, 4]
        assert len(windowed_gc("ATGCATGC", step=4)) == 2

    def test_dot_plot_window(self, env_settings):
        env_settings(dotplot_window_size=4, dotplot_threshold=75)
        assert dot_plot("ACGT", "ACGA") == [DotPlotPoint(0, 0, 75.0)]
        assert dot_plot("ACGT", "ACGA", threshold=80) == []

    def test_log_level(self, env_settings, restore_logger):
        env_settings(log_level="error")
        logger = setup_logging()
        assert logger.handlers[0].level == logging.ERROR
