"""
API module for treasurechest.

This module provides the high-level game wrapper used by presentation layers.
"""

from treasurechest.api.game import TreasureChestGame

__all__ = ["TreasureChestGame"]
