# -*- coding: utf-8 -*-
"""Tests for the action log."""

import logging
import re

from upclean.logging_setup import BestEffortFileHandler, action_log, setup_logging

LINE_RE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\] \[(INFO|WARNING|ERROR)\] .+$")


def test_action_log_format_and_append(tmp_path):
    log_file = tmp_path / "upclean.log"
    log_file.write_text("[2024-01-01T00:00:00] [INFO] earlier run\n", encoding="utf-8")
    setup_logging(verbose=False, log_file=str(log_file))
    action_log.info("QUEUED [Safe] Clear package cache: apt-get clean")
    action_log.error("OUTCOME failed (exit 1) [Safe] Clear package cache: apt-get clean")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[2024-01-01T00:00:00] [INFO] earlier run"
    assert len(lines) == 3
    for line in lines[1:]:
        assert LINE_RE.match(line), line
    assert lines[1].endswith("QUEUED [Safe] Clear package cache: apt-get clean")
    assert "[ERROR]" in lines[2]


def test_debug_only_when_verbose(tmp_path):
    log_file = tmp_path / "upclean.log"
    setup_logging(verbose=False, log_file=str(log_file))
    logging.getLogger("upclean").debug("hidden detail")
    assert "hidden detail" not in log_file.read_text(encoding="utf-8")


def test_unopenable_log_file_does_not_raise(tmp_path, capsys):
    setup_logging(verbose=False, log_file=str(tmp_path / "missing-dir" / "upclean.log"))
    action_log.info("still fine")
    assert "Failed to open log file" in capsys.readouterr().err


def test_write_errors_are_dropped(tmp_path, capsys):
    handler = BestEffortFileHandler(str(tmp_path / "x.log"))
    record = logging.LogRecord("upclean.actions", logging.INFO, __file__, 1, "msg", None, None)
    handler.handleError(record)
    handler.close()
    assert capsys.readouterr().err == ""


def test_non_string_log_file_does_not_raise(capsys):
    setup_logging(verbose=False, log_file=5)
    action_log.info("still fine")
    assert "Failed to open log file" in capsys.readouterr().err
