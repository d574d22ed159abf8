"""
Statistical analysis helpers for the parlor games.
"""

from parlor.analysis.statistics import (
    DECK_SIZE,
    calculate_chi_square,
    card_index,
    draw_uniformity,
    first_draw_frequencies,
    simulate_dealer_totals,
)

__all__ = [
    "DECK_SIZE",
    "calculate_chi_square",
    "card_index",
    "draw_uniformity",
    "first_draw_frequencies",
    "simulate_dealer_totals",
]
