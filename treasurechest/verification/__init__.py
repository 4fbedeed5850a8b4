"""
Verification tools for treasurechest.

This package provides statistical checks on the engine's random deals.
"""

from treasurechest.verification.statistics import (
    DealFairnessReport,
    analyze_deal_fairness,
)

__all__ = ["DealFairnessReport", "analyze_deal_fairness"]
