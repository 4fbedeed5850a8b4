"""
Immutable state models for the treasure chest card game.

This module provides dataclasses for representing the state of a treasure chest
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple
from enum import Enum
import uuid
import time

from treasurechest.common.card import Card, Rank, Suit
from treasurechest.game.constants import (
    CHEST_SIZE,
    DEFAULT_NUM_PLAYERS,
    MIN_PLAYERS,
    default_player_name,
)


class GuessProtocolError(Exception):
    """Raised when a guess is resolved against a state that breaks the protocol."""


class GameOverError(GuessProtocolError):
    """Raised when a guess is made after the game has ended."""


class GuessStage(Enum):
    """Steps of the guess protocol, in the order a turn walks through them."""

    PLAYER = "player"
    RANK = "rank"
    QUANTITY = "quantity"
    SUIT = "suit"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ChestRules:
    """
    Immutable representation of the rules for a treasure chest game.

    Attributes:
        num_players: Number of seats at the table
        chest_size: Number of cards (one per suit) that make a chest
        default_player_names: Names used for seats without a supplied name
    """

    num_players: int = DEFAULT_NUM_PLAYERS
    chest_size: int = CHEST_SIZE
    default_player_names: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.num_players < MIN_PLAYERS:
            raise ValueError(
                f"At least {MIN_PLAYERS} players are required, got {self.num_players}"
            )
        if self.chest_size != CHEST_SIZE:
            raise ValueError(f"A treasure chest always holds {CHEST_SIZE} cards")

    def player_name(self, index: int) -> str:
        if index < len(self.default_player_names):
            return self.default_player_names[index]
        return default_player_name(index)


@dataclass(frozen=True)
class TreasureChest:
    """A completed set: one card of every suit for a single rank."""

    rank: Rank
    suits: FrozenSet[Suit]

    def cards(self) -> Tuple[Card, ...]:
        return tuple(Card(suit, self.rank) for suit in Suit if suit in self.suits)

    def __str__(self) -> str:
        return f"Chest of {self.rank}s"


@dataclass(frozen=True)
class PlayerState:
    """
    Immutable representation of a player's state.

    Attributes:
        id: Seat index of this player, stable for the whole game
        name: Display name of the player
        cards: Cards currently held (order is irrelevant)
        treasure_chests: Completed chests, in the order they were formed
    """

    id: int
    name: str = "Player"
    cards: Tuple[Card, ...] = ()
    treasure_chests: Tuple[TreasureChest, ...] = ()

    @property
    def card_count(self) -> int:
        """Get the number of cards in the player's hand."""
        return len(self.cards)

    @property
    def chest_count(self) -> int:
        return len(self.treasure_chests)

    @property
    def chest_ranks(self) -> FrozenSet[Rank]:
        return frozenset(chest.rank for chest in self.treasure_chests)

    def has_rank(self, rank: Rank) -> bool:
        """Check if player has a card of a specific rank."""
        return any(card.rank == rank for card in self.cards)


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the treasure chest game state.

    Attributes:
        id: Unique identifier for this game
        players: Players in seat order
        current_player_index: Index of the player whose turn it is
        selected_player_index: Opponent targeted by the guess in progress
        guess_stage: Current step of the guess protocol
        guessed_rank: Rank guessed in the current sequence
        guessed_quantity: Quantity guessed in the current sequence
        guessed_suits: Suits guessed in the current sequence
        last_guess_correct: Outcome of the guess sequence awaiting completion
        game_over: Whether every card has been locked into a chest
        winner: Id of the winning player once the game is over
        rules: Rules for this game
        round_number: Number of completed guess sequences
        timestamp: Time when this game was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)
    players: Tuple[PlayerState, ...] = ()
    current_player_index: int = 0
    selected_player_index: Optional[int] = None
    guess_stage: GuessStage = GuessStage.PLAYER
    guessed_rank: Optional[Rank] = None
    guessed_quantity: Optional[int] = None
    guessed_suits: Optional[Tuple[Suit, ...]] = None
    last_guess_correct: Optional[bool] = None
    game_over: bool = False
    winner: Optional[int] = None
    rules: ChestRules = field(default_factory=ChestRules)
    round_number: int = 0
    timestamp: float = field(default_factory=lambda: time.time(), compare=False)

    @property
    def current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.current_player_index]

    @property
    def selected_player(self) -> Optional[PlayerState]:
        """Get the opponent targeted by the current guess, if any."""
        if (
            self.selected_player_index is not None
            and 0 <= self.selected_player_index < len(self.players)
        ):
            return self.players[self.selected_player_index]
        return None

    @property
    def cards_in_play(self) -> int:
        """Total number of cards still held across all players."""
        return sum(player.card_count for player in self.players)

    @property
    def winning_player(self) -> Optional[PlayerState]:
        if self.winner is None:
            return None
        return self.players[self.winner]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "guess_stage": self.guess_stage.value,
            "current_player_index": self.current_player_index,
            "selected_player_index": self.selected_player_index,
            "guessed_rank": self.guessed_rank.value if self.guessed_rank else None,
            "guessed_quantity": self.guessed_quantity,
            "guessed_suits": (
                [suit.value for suit in self.guessed_suits]
                if self.guessed_suits is not None
                else None
            ),
            "last_guess_correct": self.last_guess_correct,
            "game_over": self.game_over,
            "winner": self.winner,
            "round_number": self.round_number,
            "cards_in_play": self.cards_in_play,
            "timestamp": self.timestamp,
            "players": [
                {
                    "id": player.id,
                    "name": player.name,
                    "cards": sorted(card.id for card in player.cards),
                    "treasure_chests": [
                        {
                            "rank": chest.rank.value,
                            "suits": sorted(suit.value for suit in chest.suits),
                        }
                        for chest in player.treasure_chests
                    ],
                }
                for player in self.players
            ],
            "rules": {
                "num_players": self.rules.num_players,
                "chest_size": self.rules.chest_size,
            },
        }
