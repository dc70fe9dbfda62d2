#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rendering of the planned actions and of execution results.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, List, Tuple

from rich.console import Console, Group, RenderableType
from rich.text import Text

from upclean.actions import ActionRegistry, Tier
from upclean.mode import RunMode
from upclean.output import kv_table, table

if TYPE_CHECKING:
    from upclean.executor import ActionOutcome

TIER_STYLES = {Tier.SAFE: "green", Tier.WARNING: "yellow", Tier.UNSAFE: "red"}


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def mode_rows(mode: RunMode) -> List[Tuple[str, str]]:
    rows = [
        ("Update", _yes_no(mode.update_enabled)),
        ("Clean", _yes_no(mode.clean_enabled)),
        ("Mode", "execute" if mode.execute else "dry run"),
    ]
    rows.extend((f"{t.label} tier", mode.policy(t)) for t in Tier)
    return rows


def render_summary(registry: ActionRegistry, mode: RunMode) -> RenderableType:
    parts: List[RenderableType] = [kv_table("Run mode", mode_rows(mode))]

    for tier in Tier:
        actions = registry.actions_for(tier)
        if not actions:
            continue
        rows = [[str(i), a.name, a.printable, a.reason or ""] for i, a in enumerate(actions, 1)]
        t = table(f"{tier.label} actions", ["#", "Action", "Command", "Reason"], rows)
        t.title_style = f"bold {TIER_STYLES[tier]}"
        parts.append(t)

    counts = " | ".join(f"{t.label}: {registry.count_by_tier(t)}" for t in Tier)
    if registry.is_empty():
        parts.append(Text("Nothing to do."))
    parts.append(Text(f"Planned actions: {len(registry)} ({counts})"))

    if not mode.execute:
        parts.append(Text("Dry run complete - no changes made", style="bold"))
        parts.append(Text(
            "Run with --execute to apply these actions. Warning and Unsafe actions "
            "are confirmed one by one; add --do-warnings / --do-unsafe to approve "
            "them without prompting, or --skip-warnings / --skip-unsafe to leave them out."
        ))
    return Group(*parts)


def render_outcomes(outcomes: List["ActionOutcome"]) -> RenderableType:
    rows = []
    for i, o in enumerate(outcomes, 1):
        rc = "" if o.returncode is None else str(o.returncode)
        rows.append([str(i), o.action.tier.label, o.action.name, o.state.value, rc])
    totals = {}
    for o in outcomes:
        totals[o.state.value] = totals.get(o.state.value, 0) + 1
    line = " | ".join(f"{k}: {v}" for k, v in sorted(totals.items())) or "no actions run"
    return Group(
        table("Results", ["#", "Tier", "Action", "Outcome", "Exit code"], rows),
        Text(line),
    )


def to_text(renderable: RenderableType, width: int = 100) -> str:
    """Plain-text rendering, independent of the terminal."""
    buf = io.StringIO()
    Console(file=buf, width=width, color_system=None, highlight=False).print(renderable)
    return buf.getvalue()


def summary_text(registry: ActionRegistry, mode: RunMode, width: int = 100) -> str:
    return to_text(render_summary(registry, mode), width=width)
