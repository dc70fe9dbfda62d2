#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Read-only analysis that fills an ActionRegistry with update and cleanup actions.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from upclean.actions import ActionRegistry, Tier
from upclean.constants import console
from upclean.logging_setup import logger
from upclean.mode import RunMode
from upclean.output import line_do, line_ok, line_warn, table
from upclean.system.packages import (
    PackageSnapshot, is_kernel_image, read_package_snapshot, running_kernel,
)

FLAVOR_SUFFIX_RE = re.compile(r"-[a-z]*$")


def kernel_base(current: str) -> str:
    """Drop one trailing flavor token: ``5.15.0-91-generic`` -> ``5.15.0-91``."""
    return FLAVOR_SUFFIX_RE.sub("", current)


def find_old_kernels(installed: Iterable[str], current: str) -> List[str]:
    """Kernel image packages that do not belong to the running kernel, in input order."""
    base = kernel_base(current)
    return [pkg for pkg in installed if is_kernel_image(pkg) and base not in pkg]


def classify_kernel_removal(old_kernels: List[str], current: str) -> Optional[Tuple[Tier, str]]:
    """
    Pick the tier and reason for removing ``old_kernels``.

    Returns None when there is nothing to remove. A removal list that still
    mentions the running kernel is escalated to UNSAFE.
    """
    if not old_kernels:
        return None
    names = ", ".join(old_kernels)
    if any(current in pkg for pkg in old_kernels):
        return Tier.UNSAFE, f"current kernel detected in removal list ({current}): {names}"
    return Tier.WARNING, f"removes kernel packages: {names}"


def analyze_update(registry: ActionRegistry, mode: RunMode) -> None:
    if not mode.update_enabled:
        return
    registry.enqueue(Tier.SAFE, "Refresh package index", ["apt-get", "update"])
    registry.enqueue(Tier.SAFE, "Upgrade installed packages", ["apt-get", "-y", "upgrade"])
    logger.debug("Queued package index refresh and upgrade")


def analyze_kernels(registry: ActionRegistry, snapshot: PackageSnapshot,
                    current: Optional[str], verbose: bool = False) -> None:
    if current is None:
        line_warn("Running kernel unknown; skipping old kernel check")
        return
    installed = snapshot.kernel_names
    old_kernels = find_old_kernels(installed, current)
    logger.debug(f"Running kernel {current} (base {kernel_base(current)}); "
                 f"installed images: {installed}; old: {old_kernels}")
    if verbose:
        line_do(f"Running kernel: {current} (base {kernel_base(current)})")
        if snapshot.kernels:
            rows = [[name, version, "old" if name in old_kernels else "kept"]
                    for name, version in snapshot.kernels]
            console.print(table("Installed kernel images", ["Package", "Version", "Status"], rows))

    decision = classify_kernel_removal(old_kernels, current)
    if decision is None:
        line_ok("No old kernels found to remove")
        return
    tier, reason = decision
    registry.enqueue(tier, "Remove old kernels", ["apt-get", "-y", "purge", *old_kernels], reason)
    if tier == Tier.UNSAFE:
        logger.warning(f"Kernel removal escalated to Unsafe: {reason}")
        line_warn(f"Old kernels: {len(old_kernels)} (escalated: current kernel in list)")
    else:
        line_do(f"Old kernels: {len(old_kernels)}")


def analyze_orphaned_configs(registry: ActionRegistry, snapshot: PackageSnapshot,
                             verbose: bool = False) -> None:
    orphaned = snapshot.orphaned
    if verbose and orphaned:
        for pkg in orphaned:
            line_do(f"Orphaned: {pkg}")
    if not orphaned:
        line_ok("No orphaned package configuration files to remove")
        return
    registry.enqueue(
        Tier.WARNING,
        "Purge orphaned configuration files",
        ["dpkg", "--purge", *orphaned],
        f"{len(orphaned)} package(s) removed with configuration files left behind",
    )
    line_do(f"Orphaned configuration files: {len(orphaned)} package(s)")


def analyze_clean(registry: ActionRegistry, mode: RunMode,
                  snapshot: Optional[PackageSnapshot] = None,
                  current: Optional[str] = None) -> None:
    """
    Queue cleanup actions: safe apt housekeeping, then old kernels and orphaned configs.

    ``snapshot`` and ``current`` are read from the system when not given.
    """
    if not mode.clean_enabled:
        return
    registry.enqueue(Tier.SAFE, "Remove unused packages", ["apt-get", "-y", "autoremove"])
    registry.enqueue(Tier.SAFE, "Clear package cache", ["apt-get", "clean"])
    registry.enqueue(Tier.SAFE, "Purge packages marked for removal",
                     ["apt-get", "-y", "autoremove", "--purge"])

    if snapshot is None:
        snapshot = read_package_snapshot()
    if not snapshot.available:
        line_warn("Package database unavailable; kernel and orphaned config checks found nothing")
    if current is None:
        current = running_kernel()

    analyze_kernels(registry, snapshot, current, verbose=mode.verbose)
    analyze_orphaned_configs(registry, snapshot, verbose=mode.verbose)


def analyze(mode: RunMode) -> ActionRegistry:
    registry = ActionRegistry()
    analyze_update(registry, mode)
    analyze_clean(registry, mode)
    logger.info(f"Analysis queued {len(registry)} action(s): "
                + ", ".join(f"{t.label}={registry.count_by_tier(t)}" for t in Tier))
    return registry
