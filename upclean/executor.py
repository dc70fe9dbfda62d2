#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tiered execution of a planned ActionRegistry.

SAFE actions run without confirmation. WARNING and UNSAFE actions are
skipped, auto-approved or confirmed according to the RunMode, with skip
winning over auto-approve. A failed action never stops the actions after
it, and nothing is rolled back.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from upclean.actions import Action, ActionRegistry, Tier
from upclean.helpers import confirm, run
from upclean.logging_setup import action_log, logger
from upclean.mode import RunMode
from upclean.output import line_do, line_fail, line_ok, line_skip, section

Confirmer = Callable[[Action], bool]
Runner = Callable[[Sequence[str]], int]


class ActionState(enum.Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass(frozen=True)
class ActionOutcome:
    action: Action
    state: ActionState
    returncode: Optional[int] = None
    detail: Optional[str] = None


def prompt_confirm(action: Action) -> bool:
    return confirm(f"{action.tier.label}: {action.name} ({action.reason})? Run `{action.printable}`")


def always_approve(action: Action) -> bool:
    return True


def always_deny(action: Action) -> bool:
    return False


def run_command(cmd: Sequence[str]) -> int:
    return run(cmd).returncode


def _describe(action: Action) -> str:
    return f"[{action.tier.label}] {action.name}: {action.printable}"


def decide(action: Action, mode: RunMode, confirm_fn: Confirmer) -> bool:
    """Return True if the action should run."""
    policy = mode.policy(action.tier)
    if policy == "skip":
        return False
    if policy in ("run", "auto-approve"):
        return True
    return bool(confirm_fn(action))


def execute_action(action: Action, mode: RunMode, confirm_fn: Confirmer, runner: Runner) -> ActionOutcome:
    desc = _describe(action)
    action_log.info(f"QUEUED {desc}")

    policy = mode.policy(action.tier)
    if not decide(action, mode, confirm_fn):
        why = "skipped by policy" if policy == "skip" else "declined by operator"
        action_log.info(f"DECISION skip ({why}) {desc}")
        line_skip(f"{action.name}: {why}")
        return ActionOutcome(action, ActionState.SKIPPED, detail=why)

    approval = {"run": "safe tier", "auto-approve": "auto-approved"}.get(policy, "confirmed by operator")
    action_log.info(f"DECISION run ({approval}) {desc}")
    line_do(f"{action.name}: {action.printable}")

    try:
        rc = runner(action.command)
    except OSError as e:
        action_log.error(f"OUTCOME failed ({e}) {desc}")
        line_fail(f"{action.name}: {e}")
        return ActionOutcome(action, ActionState.FAILED, detail=str(e))

    if rc != 0:
        action_log.error(f"OUTCOME failed (exit {rc}) {desc}")
        line_fail(f"{action.name}: exit code {rc}")
        return ActionOutcome(action, ActionState.FAILED, returncode=rc)

    action_log.info(f"OUTCOME executed {desc}")
    line_ok(action.name)
    return ActionOutcome(action, ActionState.EXECUTED, returncode=rc)


def execute_plan(registry: ActionRegistry, mode: RunMode,
                 confirm_fn: Confirmer = prompt_confirm,
                 runner: Optional[Runner] = None) -> List[ActionOutcome]:
    """
    Run every queued action once, SAFE tier first, then WARNING, then UNSAFE.

    Args:
        registry: Planned actions.
        mode: Run mode; nothing runs unless ``mode.execute`` is set.
        confirm_fn: Asked for WARNING/UNSAFE actions that are neither skipped nor auto-approved.
        runner: Runs an argument vector and returns its exit code; defaults to run_command.

    Returns:
        One outcome per action, in execution order.
    """
    if not mode.execute:
        logger.debug("Dry run: no actions executed")
        return []

    if runner is None:
        runner = run_command
    outcomes: List[ActionOutcome] = []
    for tier in sorted(Tier):
        actions = registry.actions_for(tier)
        if not actions:
            continue
        section(f"{tier.label} actions ({mode.policy(tier)})")
        for action in actions:
            outcomes.append(execute_action(action, mode, confirm_fn, runner))

    failed = sum(1 for o in outcomes if o.state == ActionState.FAILED)
    if failed:
        logger.warning(f"{failed} action(s) failed; see the action log for details")
    return outcomes
