"""
Utility functions for draft calculations.

This package provides snake draft order math and the shared
rounding helpers used by the AI scoring modules.
"""

from .snake_draft import SnakeDraftCalculator, generate_draft_order
from .rounding import clamp, round_half_up

__all__ = [
    "SnakeDraftCalculator",
    "generate_draft_order",
    "clamp",
    "round_half_up",
]
