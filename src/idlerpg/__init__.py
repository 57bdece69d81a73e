"""Stat aggregation, loot generation and combat resolution for an idle RPG."""
from __future__ import annotations

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
