"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace. Declaration order is the
order in which treasure chests are detected.

- `Card`: An immutable playing card. A card has a suit, a rank and an `id` of the
form ``"<rank>-<suit>"`` that is unique within a deck.

This module is part of the `treasurechest` package.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    @property
    def order(self) -> int:
        """Position of the rank in the canonical 2..A ordering."""
        return _RANK_ORDER[self]

    @classmethod
    def from_str(cls, value: str) -> "Rank":
        """
        Look up a rank by its face value, e.g. ``"7"`` or ``"q"``.

        :raises ValueError: if the value is not a known rank
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid rank: {value!r}") from None

    def __str__(self) -> str:
        return self.rank_str


_RANK_ORDER = {rank: index for index, rank in enumerate(Rank)}


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card. Cards are immutable values.

    >>> card = Card(Suit.HEARTS, Rank.SEVEN)
    >>> print(card)
    7 of ♥
    >>> card.id
    '7-hearts'
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    @property
    def id(self) -> str:
        """Unique identifier of the card within a deck."""
        return f"{self.rank.value}-{self.suit.value}"

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """
        Rebuild a card from its id.

        >>> Card.from_id("10-spades")
        Card(Suit.SPADES, Rank.TEN)
        """
        rank_part, _, suit_part = card_id.partition("-")
        try:
            suit = Suit(suit_part)
        except ValueError:
            raise ValueError(f"Invalid card id: {card_id!r}") from None
        return cls(suit, Rank.from_str(rank_part))

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.rank.rank_str} of {self.suit}"
