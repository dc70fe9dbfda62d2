#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Read-only snapshot of the dpkg database and the running kernel.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from upclean.helpers import capture
from upclean.logging_setup import logger

KERNEL_IMAGE_RE = re.compile(r"^linux-image-[0-9]+")
KERNEL_PREFIX = "linux-image-"

DPKG_QUERY_FORMAT = "${db:Status-Abbrev}\t${binary:Package}\t${Version}\n"
# dpkg current-state letters for packages with no files unpacked
INSTALLED_NONE = ("n", "c")


@dataclass(frozen=True)
class PackageSnapshot:
    """
    What the package manager reported at analysis time.

    Attributes:
        kernels: Installed kernel image packages as (name, version suffix).
        orphaned: Packages removed with their configuration files left behind.
        available: False when the package database could not be read.
    """

    kernels: List[Tuple[str, str]] = field(default_factory=list)
    orphaned: List[str] = field(default_factory=list)
    available: bool = True

    @property
    def kernel_names(self) -> List[str]:
        return [name for name, _ in self.kernels]


def kernel_version_from_pkg(pkg: str) -> Optional[str]:
    if not pkg.startswith(KERNEL_PREFIX):
        return None
    return pkg.replace(KERNEL_PREFIX, "", 1)


def is_kernel_image(pkg: str) -> bool:
    return KERNEL_IMAGE_RE.match(pkg) is not None


def parse_dpkg_query(out: str) -> PackageSnapshot:
    """
    Parse ``dpkg-query -W`` output produced with DPKG_QUERY_FORMAT.

    A kernel image counts whenever dpkg has its files on disk, including
    half-installed, unpacked or half-configured ones (``iH``, ``iU``,
    ``iF``). A kernel left in ``rc`` state is an orphaned config like any
    other package.
    """
    kernels: List[Tuple[str, str]] = []
    orphaned: List[str] = []
    for line in out.splitlines():
        parts = line.split("\t")
        if len(parts) < 2:
            continue
        status, name = parts[0], parts[1].strip()
        if not name or len(status) < 2:
            continue
        if status.startswith("rc"):
            orphaned.append(name)
        elif status[1] not in INSTALLED_NONE and is_kernel_image(name):
            kernels.append((name, kernel_version_from_pkg(name) or ""))
    return PackageSnapshot(kernels=kernels, orphaned=orphaned)


def read_package_snapshot() -> PackageSnapshot:
    """Query dpkg once; any failure degrades to an empty, unavailable snapshot."""
    try:
        out = capture(["dpkg-query", "-W", "-f", DPKG_QUERY_FORMAT])
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not read package state, skipping package checks: {e}")
        return PackageSnapshot(available=False)
    return parse_dpkg_query(out)


def running_kernel() -> Optional[str]:
    """Release string of the running kernel, e.g. ``5.15.0-91-generic``."""
    try:
        release = capture(["uname", "-r"])
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not determine the running kernel: {e}")
        return None
    return release or None
