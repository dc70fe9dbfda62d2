# -*- coding: utf-8 -*-
"""Read-only inspection of system package state."""
