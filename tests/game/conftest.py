"""
Pytest fixtures for the game state and transition tests.
"""

import pytest

from game_helpers import build_state


@pytest.fixture
def two_sevens_state():
    """
    Player 1 holds exactly two sevens (hearts and spades) and no nines.
    Player 0 is to move.
    """
    return build_state(
        [
            ["7-diamonds", "2-hearts", "9-clubs"],
            ["7-hearts", "7-spades", "K-clubs"],
            ["9-hearts", "7-clubs"],
            ["2-spades", "A-diamonds"],
        ]
    )


@pytest.fixture
def near_chest_state():
    """
    Player 0 holds three kings and player 1 holds the fourth, plus three
    queens with player 0 holding the last queen.
    """
    return build_state(
        [
            ["K-hearts", "K-diamonds", "K-clubs", "Q-spades", "3-hearts"],
            ["K-spades", "Q-hearts", "Q-diamonds", "Q-clubs"],
            ["5-hearts"],
            ["6-hearts"],
        ]
    )
