"""
Shared fixtures for the rsyncwatch tests.
"""

import io
import os

import pytest

from rsyncwatch.config.models import AppConfig, WatchSpec
from rsyncwatch.utils.logger import setup_logging


@pytest.fixture
def source_root(tmp_path) -> str:
    path = tmp_path / "src"
    path.mkdir()
    return str(path) + os.sep


@pytest.fixture
def dest_root(tmp_path) -> str:
    path = tmp_path / "dst"
    path.mkdir()
    return str(path) + os.sep


@pytest.fixture
def watch_spec(source_root, dest_root) -> WatchSpec:
    return WatchSpec(source_root=source_root, dest_root=dest_root)


@pytest.fixture
def app_config(watch_spec) -> AppConfig:
    return AppConfig(watch=watch_spec)


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return setup_logging("DEBUG", "json", stream=log_stream)
