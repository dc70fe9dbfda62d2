#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console output helpers for upclean.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from rich import box
from rich.markup import escape
from rich.table import Table

from upclean.constants import BANNER, TAGLINE, console


def p(text: str = "") -> None:
    console.print(text, highlight=False)


def print_banner(banner_style: Optional[str] = None) -> None:
    console.print(BANNER, style=banner_style, highlight=False, markup=False)
    p("")
    p(escape(TAGLINE))
    p("")


def section(s: str) -> None:
    console.print(f"\n[bold cyan]➤ {escape(s)}[/bold cyan]")
    console.rule("", style="bold cyan")


def line_ok(s: str) -> None:
    console.print(f"[bold green]✓[/bold green] {escape(s)}", highlight=False)


def line_do(s: str) -> None:
    console.print(f"[cyan]→[/cyan] {escape(s)}", highlight=False)


def line_skip(s: str) -> None:
    console.print(f"[dim]○ {escape(s)}[/dim]", highlight=False)


def line_warn(s: str) -> None:
    console.print(f"[bold yellow]! {escape(s)}[/bold yellow]", highlight=False)


def line_fail(s: str) -> None:
    console.print(f"[bold red]✗ {escape(s)}[/bold red]", highlight=False)


def kv_table(title_str: str, rows: List[Tuple[str, str]]) -> Table:
    t = Table(title=title_str, box=box.SIMPLE_HEAVY, show_header=False, title_style="bold")
    t.add_column("Key", style="bold")
    t.add_column("Value")
    for k, v in rows:
        t.add_row(escape(k), escape(v))
    return t


def table(title_str: str, headers: List[str], rows: List[List[str]]) -> Table:
    t = Table(title=title_str, box=box.SIMPLE_HEAVY, header_style="bold", title_style="bold")
    for h in headers:
        t.add_column(h, overflow="fold")
    for r in rows:
        t.add_row(*(escape(c) for c in r))
    return t
