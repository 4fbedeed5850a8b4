"""Treasure chest constants and value mappings."""

from treasurechest.common.card import Rank, Suit

# Ranks in the order chests are detected and reported
RANK_ORDER = tuple(Rank)

ALL_SUITS = frozenset(Suit)

# A chest holds one card of every suit
CHEST_SIZE = len(ALL_SUITS)

DEFAULT_NUM_PLAYERS = 4
MIN_PLAYERS = 2

# A player can hold at most one card per suit of a given rank
MIN_GUESS_QUANTITY = 1
MAX_GUESS_QUANTITY = CHEST_SIZE


def default_player_name(index: int) -> str:
    """Display name used when no name is given for seat ``index``."""
    return f"Player {index + 1}"

