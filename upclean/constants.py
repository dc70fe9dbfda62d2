#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Constants and shared console for upclean.
"""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False)

BANNER = r"""  _   _       ____ _
 | | | |_ __ / ___| | ___  __ _ _ __
 | | | | '_ \ |   | |/ _ \/ _` | '_ \
 | |_| | |_) | |___| |  __/ (_| | | | |
  \___/| .__/ \____|_|\___|\__,_|_| |_|
       |_|"""
TAGLINE = "Update and clean APT systems, one reviewed tier at a time."
VERSION = "1.0.0"

DEFAULT_LOG_FILE = "/var/log/upclean.log"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"
