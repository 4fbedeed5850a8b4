"""
This module contains the deck builder, shuffler and dealer, plus the Deck class
that wraps them.

>>> deck = Deck()
>>> deck.size
52
>>> hands = deck.deal_hands(4)
>>> [len(hand) for hand in hands]
[13, 13, 13, 13]
>>> deck.is_empty()
True
"""

import random
from typing import List, Optional, Sequence

from treasurechest.common.card import Card, Rank, Suit


def create_deck() -> List[Card]:
    """
    Build the canonical 52-card deck.

    Ranks vary fastest within each suit. The order carries no meaning beyond
    giving the shuffler a stable enumeration.

    >>> deck = create_deck()
    >>> len(deck), deck[0], deck[-1]
    (52, Card(Suit.HEARTS, Rank.TWO), Card(Suit.SPADES, Rank.ACE))
    """
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle_deck(
    cards: Sequence[Card], rng: Optional[random.Random] = None
) -> List[Card]:
    """
    Return a shuffled copy of the cards using a Fisher-Yates shuffle.

    :param cards: The cards to shuffle. The sequence is not modified.
    :param rng: Random source with a ``randint`` method (``random.Random`` or
                the ``random`` module). Defaults to the module-level source.
    :return: A new list holding a uniformly random permutation of ``cards``.
    """
    rng = rng or random
    shuffled = list(cards)

    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def deal_round_robin(cards: Sequence[Card], num_players: int) -> List[List[Card]]:
    """
    Partition cards into hands, card ``k`` going to hand ``k % num_players``.

    Leftover cards land in the lowest-indexed hands first.

    :raises ValueError: if ``num_players`` is less than 1
    """
    if num_players < 1:
        raise ValueError("At least 1 player is required to deal cards")

    hands: List[List[Card]] = [[] for _ in range(num_players)]
    for position, card in enumerate(cards):
        hands[position % num_players].append(card)
    return hands


def deal_cards(
    cards: Sequence[Card],
    num_players: int,
    rng: Optional[random.Random] = None,
) -> List[List[Card]]:
    """
    Shuffle the cards and deal them round-robin to ``num_players`` hands.

    >>> hands = deal_cards(create_deck(), 4, random.Random(7))
    >>> sum(len(hand) for hand in hands)
    52
    """
    return deal_round_robin(shuffle_deck(cards, rng), num_players)


class Deck:
    """
    A class representing a deck of cards.
    """

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a default deck will be constructed.
        :param rng: Random source used by :meth:`shuffle` (optional).
        """
        self.rng = rng
        if cards is None:
            self.cards: List[Card] = create_deck()
        else:
            self.cards = list(cards)

    def shuffle(self) -> "Deck":
        """
        Shuffle the cards in the deck.
        """
        self.cards = shuffle_deck(self.cards, self.rng)
        return self

    def deal_hands(self, num_players: int) -> List[List[Card]]:
        """
        Deal every remaining card round-robin, leaving the deck empty.

        :param num_players: Number of hands to deal.
        :return: One list of cards per player.
        """
        hands = deal_round_robin(self.cards, num_players)
        self.cards = []
        return hands

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.
        """
        return len(self.cards)

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.

        :return: True if the deck is empty, False otherwise.
        """
        return len(self.cards) == 0

    def reset(self):
        """
        Reset the deck by recreating the full, unshuffled card set.
        """
        self.cards = create_deck()

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
