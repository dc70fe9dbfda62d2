#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line entry point for upclean.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from rich.markup import escape

from upclean.analysis import analyze
from upclean.config import load_config
from upclean.constants import VERSION, console
from upclean.executor import execute_plan, prompt_confirm
from upclean.helpers import confirm, is_root
from upclean.logging_setup import action_log, logger, setup_logging
from upclean.mode import RunMode
from upclean.output import line_fail, line_warn, p, print_banner, section
from upclean.summary import render_outcomes, render_summary


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    ap = ArgumentParser(
        prog="upclean",
        description="Update and clean an APT-based system. Dry run unless --execute is given.",
        add_help=False,
        allow_abbrev=False,
    )
    ap.add_argument("-u", "--update", action="store_true", help="Only update packages.")
    ap.add_argument("-c", "--clean", action="store_true", help="Only clean up.")
    ap.add_argument("-a", "--all", action="store_true", help="Update and clean (default).")
    ap.add_argument("-i", "--ask", action="store_true", help="Ask whether to update and whether to clean.")
    ap.add_argument("--execute", action="store_true", help="Perform the actions instead of previewing them.")
    ap.add_argument("--skip-warnings", action="store_true", help="Do not run Warning actions.")
    ap.add_argument("--skip-unsafe", action="store_true", help="Do not run Unsafe actions.")
    ap.add_argument("--do-warnings", action="store_true", help="Run Warning actions without prompting.")
    ap.add_argument("--do-unsafe", action="store_true", help="Run Unsafe actions without prompting.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show analysis details (DEBUG logging).")
    ap.add_argument("--log-file", type=str, metavar="PATH", help="Append the action log to PATH.")
    ap.add_argument("--config", type=Path, metavar="PATH", help="Read configuration from PATH.")
    ap.add_argument("-h", "--help", action="store_true", help="Show help and exit.")
    ap.add_argument("-V", "--version", action="store_true", help="Show version and exit.")
    return ap


def print_help(ap: ArgumentParser) -> None:
    print_banner(banner_style="bold cyan")
    p(escape(ap.format_help()))
    p("EXAMPLES")
    p("  sudo upclean                          preview update and cleanup")
    p("  sudo upclean --clean --verbose        preview cleanup with details")
    p("  sudo upclean --execute                run, confirming risky actions")
    p("  sudo upclean --execute --do-warnings --skip-unsafe")


def ask_intents() -> Tuple[bool, bool]:
    """Interactive intent selection, one yes/no question per intent."""
    update = confirm("Do you want to update?")
    if not update:
        p("Update skipped.")
    clean = confirm("Do you want to clean up?")
    if not clean:
        p("Cleanup skipped.")
    return update, clean


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    try:
        args = ap.parse_args(argv)
    except UsageError as e:
        ap.print_usage(sys.stderr)
        line_fail(f"Error: {e}")
        return 1

    if args.help:
        print_help(ap)
        return 0
    if args.version:
        p(f"upclean {VERSION}")
        return 0

    setup_logging(verbose=args.verbose)
    if not is_root():
        line_fail("This tool must be run with sudo or as root.")
        return 1

    config = load_config(args.config)
    log_file = args.log_file or config["log"].get("file")
    setup_logging(verbose=args.verbose, log_file=log_file)
    logger.debug(f"Command invoked: {' '.join(sys.argv)}")

    if args.ask:
        args.update, args.clean = ask_intents()
        args.all = False
        if not (args.update or args.clean):
            p("Nothing selected.")
            return 0
    mode = RunMode.from_args(args, config)
    action_log.info(f"Run started: {mode}")

    try:
        section("Analysis")
        registry = analyze(mode)

        section("Plan")
        console.print(render_summary(registry, mode))

        if mode.execute:
            outcomes = execute_plan(registry, mode, confirm_fn=prompt_confirm)
            section("Results")
            console.print(render_outcomes(outcomes))
    except KeyboardInterrupt:
        action_log.warning("Run interrupted by operator")
        line_warn("Interrupted; the plan may be partially applied. Re-run to finish.")
        return 130

    action_log.info("Run finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
