#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Helper utility functions for upclean.
"""

from __future__ import annotations
import os
import shlex
import subprocess
from typing import Sequence

from upclean.logging_setup import logger


def printable(cmd: Sequence[str]) -> str:
    """Render an argument vector the way a shell user would type it."""
    return " ".join(shlex.quote(x) for x in cmd)


def run(cmd: Sequence[str]) -> subprocess.CompletedProcess:
    """
    Execute a command without a shell, streaming its output to the terminal.

    Args:
        cmd: Command and arguments as list

    Returns:
        CompletedProcess instance

    Raises:
        OSError: If the program cannot be started.
    """
    logger.debug(f"Executing command: {printable(cmd)}")
    result = subprocess.run(list(cmd), check=False)
    logger.debug(f"Command completed with return code: {result.returncode}")
    return result


def capture(cmd: Sequence[str]) -> str:
    """
    Execute a read-only command and capture its output.

    Args:
        cmd: Command and arguments as list

    Returns:
        Command output as string (stripped)

    Raises:
        OSError: If the program cannot be started.
        subprocess.CalledProcessError: If the program exits non-zero.
    """
    logger.debug(f"Capturing output: {printable(cmd)}")
    result = subprocess.check_output(list(cmd), text=True, stderr=subprocess.DEVNULL).strip()
    logger.debug(f"Captured {len(result)} bytes")
    return result


def is_root() -> bool:
    """Check if running as root."""
    return os.geteuid() == 0


def confirm(msg: str) -> bool:
    """
    Ask user for confirmation.

    Args:
        msg: Confirmation message to display

    Returns:
        True if user confirmed. End of input counts as no.
    """
    try:
        ans = input(f"{msg} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return ans in ("y", "yes")
