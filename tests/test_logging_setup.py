"""Tests for logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

import logging_setup


@pytest.fixture
def bare_root():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)


def test_stream_only_without_log_dir(monkeypatch, bare_root) -> None:
    monkeypatch.delenv(logging_setup.LEVEL_ENV, raising=False)
    assert logging_setup.init_logging() is None
    installed = logging_setup.installed_handlers()
    assert len(installed) == 1
    assert not isinstance(installed[0], logging.FileHandler)
    assert bare_root.level == logging.INFO


def test_foreign_stream_handler_does_not_block_console(bare_root) -> None:
    foreign = logging.StreamHandler()
    bare_root.addHandler(foreign)

    logging_setup.init_logging()

    assert foreign in bare_root.handlers
    assert len(logging_setup.installed_handlers(logging.StreamHandler)) == 1
    assert foreign not in logging_setup.installed_handlers()


def test_rotating_file_with_log_dir(tmp_path: Path, bare_root) -> None:
    log_dir = tmp_path / "logs"
    log_path = logging_setup.init_logging(log_dir)

    assert log_path == log_dir / "app.log"
    rotating = logging_setup.installed_handlers(RotatingFileHandler)
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 2_000_000
    assert rotating[0].backupCount == 5


def test_init_twice_adds_no_duplicates(tmp_path: Path, bare_root) -> None:
    logging_setup.init_logging(tmp_path)
    logging_setup.init_logging(tmp_path)
    assert len(logging_setup.installed_handlers()) == 2


def test_level_from_environment(monkeypatch, bare_root) -> None:
    monkeypatch.setenv(logging_setup.LEVEL_ENV, "debug")
    logging_setup.init_logging()
    assert bare_root.level == logging.DEBUG


def test_invalid_level_defaults_to_info(monkeypatch, bare_root) -> None:
    monkeypatch.setenv(logging_setup.LEVEL_ENV, "notalevel")
    logging_setup.init_logging()
    assert bare_root.level == logging.INFO


def test_set_console_level_adjusts_stream_only(tmp_path: Path, bare_root) -> None:
    stream_handler = logging.StreamHandler()
    file_handler = logging.FileHandler(tmp_path / "app.log")
    stream_handler.setLevel(logging.INFO)
    file_handler.setLevel(logging.INFO)
    bare_root.addHandler(stream_handler)
    bare_root.addHandler(file_handler)

    logging_setup.set_console_level(logging.ERROR)

    assert stream_handler.level == logging.ERROR
    assert file_handler.level == logging.INFO
