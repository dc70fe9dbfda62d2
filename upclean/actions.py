#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Maintenance actions and the per-tier registry they are queued in.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from upclean.helpers import printable


class Tier(enum.IntEnum):
    """Risk tier of an action. Lower tiers run first."""

    SAFE = 0
    WARNING = 1
    UNSAFE = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ActionValidationError(ValueError):
    """Raised when an action breaks the tier/reason rule."""


@dataclass(frozen=True)
class Action:
    """
    A single unit of maintenance work.

    Attributes:
        name: Short human label, unique within one run.
        command: Argument vector, executed without a shell.
        tier: Risk tier deciding the confirmation policy.
        reason: Justification, required for WARNING and UNSAFE.
    """

    name: str
    command: Tuple[str, ...]
    tier: Tier
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ActionValidationError("Action name cannot be empty")
        if not self.command:
            raise ActionValidationError(f"Action '{self.name}' has an empty command")
        if self.tier != Tier.SAFE and not (self.reason and self.reason.strip()):
            raise ActionValidationError(
                f"Action '{self.name}' is {self.tier.label} and needs a reason"
            )

    @property
    def printable(self) -> str:
        return printable(self.command)


class ActionRegistry:
    """Ordered queues of actions, one per tier."""

    def __init__(self) -> None:
        self._queues: Dict[Tier, List[Action]] = {tier: [] for tier in Tier}

    def enqueue(self, tier: Tier, name: str, command: Sequence[str],
                reason: Optional[str] = None) -> Action:
        """
        Validate and queue an action at the end of its tier.

        Raises:
            ActionValidationError: If a WARNING/UNSAFE action has no reason.
        """
        tier = Tier(tier)
        action = Action(
            name=name,
            command=tuple(command),
            tier=tier,
            reason=reason if tier != Tier.SAFE else None,
        )
        self._queues[tier].append(action)
        return action

    def count_by_tier(self, tier: Tier) -> int:
        return len(self._queues[Tier(tier)])

    def actions_for(self, tier: Tier) -> List[Action]:
        return list(self._queues[Tier(tier)])

    def all_actions(self) -> List[Action]:
        """All actions, SAFE first, then WARNING, then UNSAFE."""
        return [a for tier in sorted(Tier) for a in self._queues[tier]]

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues.values())
