#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Run mode: the process-wide switches fixed once arguments are parsed.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Dict

from upclean.actions import Tier


@dataclass(frozen=True)
class RunMode:
    update_enabled: bool = True
    clean_enabled: bool = True
    execute: bool = False
    skip_warnings: bool = False
    skip_unsafe: bool = False
    auto_approve_warnings: bool = False
    auto_approve_unsafe: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace, config: Dict[str, Any]) -> "RunMode":
        """Merge parsed CLI flags with the [execute] defaults of the config file."""
        defaults = config.get("execute", {})
        update = bool(args.update)
        clean = bool(args.clean)
        if args.all or not (update or clean):
            update = clean = True
        return cls(
            update_enabled=update,
            clean_enabled=clean,
            execute=bool(args.execute),
            skip_warnings=bool(args.skip_warnings or defaults.get("skip_warnings", False)),
            skip_unsafe=bool(args.skip_unsafe or defaults.get("skip_unsafe", False)),
            auto_approve_warnings=bool(args.do_warnings or defaults.get("auto_approve_warnings", False)),
            auto_approve_unsafe=bool(args.do_unsafe or defaults.get("auto_approve_unsafe", False)),
            verbose=bool(args.verbose),
        )

    def skips(self, tier: Tier) -> bool:
        if tier == Tier.WARNING:
            return self.skip_warnings
        if tier == Tier.UNSAFE:
            return self.skip_unsafe
        return False

    def auto_approves(self, tier: Tier) -> bool:
        if tier == Tier.WARNING:
            return self.auto_approve_warnings
        if tier == Tier.UNSAFE:
            return self.auto_approve_unsafe
        return True

    def policy(self, tier: Tier) -> str:
        """Describe how a tier is handled during execution. Skip wins over approve."""
        if tier == Tier.SAFE:
            return "run"
        if self.skips(tier):
            return "skip"
        if self.auto_approves(tier):
            return "auto-approve"
        return "prompt"
