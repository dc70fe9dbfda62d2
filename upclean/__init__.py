# -*- coding: utf-8 -*-
"""
upclean - update and clean APT-based systems with tiered, reviewable actions.
"""

from upclean.constants import VERSION

__version__ = VERSION
