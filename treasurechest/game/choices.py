"""
Guess input for the treasure chest engine.

Each step of the guess protocol consumes exactly one kind of choice. Passing a
choice meant for a different step is ignored by the engine.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from treasurechest.common.card import Rank, Suit
from treasurechest.game.constants import MAX_GUESS_QUANTITY, MIN_GUESS_QUANTITY
from treasurechest.game.state import GuessStage


@dataclass(frozen=True)
class PlayerChoice:
    """Pick the opponent to question."""

    target_player_id: int

    def __post_init__(self):
        if isinstance(self.target_player_id, bool) or not isinstance(
            self.target_player_id, int
        ):
            raise TypeError(f"Invalid player id: {self.target_player_id!r}")


@dataclass(frozen=True)
class RankChoice:
    """Guess a rank the opponent holds. Accepts a Rank or its face value."""

    rank: Rank

    def __post_init__(self):
        if isinstance(self.rank, str):
            object.__setattr__(self, "rank", Rank.from_str(self.rank))
        elif not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank!r}")


@dataclass(frozen=True)
class QuantityChoice:
    """Guess how many cards of the guessed rank the opponent holds."""

    quantity: int

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise TypeError(f"Invalid quantity: {self.quantity!r}")
        if not MIN_GUESS_QUANTITY <= self.quantity <= MAX_GUESS_QUANTITY:
            raise ValueError(
                f"Quantity must be between {MIN_GUESS_QUANTITY} and "
                f"{MAX_GUESS_QUANTITY}, got {self.quantity}"
            )


@dataclass(frozen=True)
class SuitChoice:
    """Guess the suits of the opponent's cards of the guessed rank."""

    suits: Tuple[Suit, ...]

    def __init__(self, suits: Iterable[Union[Suit, str]]):
        resolved = tuple(
            suit if isinstance(suit, Suit) else Suit(suit) for suit in suits
        )
        if not resolved:
            raise ValueError("At least one suit must be guessed")
        object.__setattr__(self, "suits", resolved)

    @property
    def distinct_suits(self) -> Tuple[Suit, ...]:
        """Guessed suits with repeats dropped, first occurrence kept."""
        return tuple(dict.fromkeys(self.suits))


@dataclass(frozen=True)
class Advance:
    """Close a finished guess sequence and hand the turn on if needed."""


GuessChoice = Union[PlayerChoice, RankChoice, QuantityChoice, SuitChoice, Advance]

# The only choice each stage consumes
STAGE_CHOICES = {
    GuessStage.PLAYER: PlayerChoice,
    GuessStage.RANK: RankChoice,
    GuessStage.QUANTITY: QuantityChoice,
    GuessStage.SUIT: SuitChoice,
    GuessStage.COMPLETE: Advance,
}


def accepts(stage: GuessStage, choice: GuessChoice) -> bool:
    """Check whether ``choice`` is the input ``stage`` expects."""
    return isinstance(choice, STAGE_CHOICES[stage])
