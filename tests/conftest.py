# -*- coding: utf-8 -*-
"""Shared fixtures for upclean tests."""

import logging
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from upclean.actions import ActionRegistry, Tier
from upclean.logging_setup import BestEffortFileHandler
from upclean.mode import RunMode
from upclean.system.packages import PackageSnapshot


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they do not leak between tests."""
    yield
    root = logging.getLogger()
    for h in root.handlers[:]:
        if isinstance(h, BestEffortFileHandler) or type(h) is logging.StreamHandler:
            root.removeHandler(h)
            h.close()


@pytest.fixture
def temp_config_dir(tmp_path, mocker):
    """Point the config directory at a temporary location."""
    config_dir = tmp_path / ".config" / "upclean"
    config_dir.mkdir(parents=True, exist_ok=True)
    mocker.patch("upclean.config.config_dir", return_value=config_dir)
    return config_dir


@pytest.fixture
def mock_subprocess(mocker):
    """Mock subprocess calls."""
    mock_run = mocker.patch("subprocess.run")
    mock_run.return_value = Mock(returncode=0, stdout=b"", stderr=b"")

    mock_check_output = mocker.patch("subprocess.check_output")
    mock_check_output.return_value = ""

    return {"run": mock_run, "check_output": mock_check_output}


@pytest.fixture
def mock_root_user(mocker):
    """Mock root user check."""
    mocker.patch("os.geteuid", return_value=0)


@pytest.fixture
def mock_non_root_user(mocker):
    """Mock non-root user check."""
    mocker.patch("os.geteuid", return_value=1000)


@pytest.fixture
def snapshot():
    return PackageSnapshot(
        kernels=[
            ("linux-image-5.15.0-91-generic", "5.15.0-91-generic"),
            ("linux-image-5.10.0-20-generic", "5.10.0-20-generic"),
        ],
        orphaned=["libfoo1", "oldtool"],
    )


@pytest.fixture
def mixed_registry():
    """Actions enqueued out of tier order."""
    reg = ActionRegistry()
    reg.enqueue(Tier.UNSAFE, "u1", ["false"], "dangerous")
    reg.enqueue(Tier.WARNING, "w1", ["echo", "w1"], "risky")
    reg.enqueue(Tier.SAFE, "s1", ["echo", "s1"])
    reg.enqueue(Tier.WARNING, "w2", ["echo", "w2"], "risky too")
    reg.enqueue(Tier.SAFE, "s2", ["echo", "s2"])
    return reg


@pytest.fixture
def execute_mode():
    return RunMode(execute=True)
