"""
Treasure chest card game module.

This module provides the implementation for the treasure chest guessing game,
including state models, guess input, chest detection and state transitions.
"""

from treasurechest.game.state import (
    GameState as GameState,
    PlayerState as PlayerState,
    TreasureChest as TreasureChest,
    GuessStage as GuessStage,
    ChestRules as ChestRules,
    GuessProtocolError as GuessProtocolError,
    GameOverError as GameOverError,
)
from treasurechest.game.choices import (
    PlayerChoice as PlayerChoice,
    RankChoice as RankChoice,
    QuantityChoice as QuantityChoice,
    SuitChoice as SuitChoice,
    Advance as Advance,
)
from treasurechest.game.chests import find_treasure_chests as find_treasure_chests
from treasurechest.game.transitions import (
    StateTransitionEngine as StateTransitionEngine,
    initialize_game as initialize_game,
    make_guess as make_guess,
)

__all__ = [
    "GameState",
    "PlayerState",
    "TreasureChest",
    "GuessStage",
    "ChestRules",
    "GuessProtocolError",
    "GameOverError",
    "PlayerChoice",
    "RankChoice",
    "QuantityChoice",
    "SuitChoice",
    "Advance",
    "find_treasure_chests",
    "StateTransitionEngine",
    "initialize_game",
    "make_guess",
]
