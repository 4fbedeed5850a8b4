"""Treasure chest detection and the hand helpers used around card transfers."""

from dataclasses import replace
from typing import Iterable, List, Tuple

from treasurechest.common.card import Card, Rank, Suit
from treasurechest.game.constants import CHEST_SIZE, RANK_ORDER
from treasurechest.game.state import PlayerState, TreasureChest


def count_cards_by_rank(cards: Iterable[Card], rank: Rank) -> int:
    return sum(1 for card in cards if card.rank == rank)


def get_cards_by_rank_and_suit(
    cards: Iterable[Card], rank: Rank, suit: Suit
) -> List[Card]:
    return [card for card in cards if card.rank == rank and card.suit == suit]


def find_treasure_chests(cards: Iterable[Card]) -> List[TreasureChest]:
    """
    Find every rank for which ``cards`` holds all four suits.

    Chests are returned in rank order (2 through A). Only distinct suits count,
    so duplicate cards never produce a chest on their own.

    Args:
        cards: Any collection of cards; it is not modified

    Returns:
        One TreasureChest per completed rank
    """
    suits_by_rank = {}
    for card in cards:
        suits_by_rank.setdefault(card.rank, set()).add(card.suit)

    return [
        TreasureChest(rank=rank, suits=frozenset(suits_by_rank[rank]))
        for rank in RANK_ORDER
        if len(suits_by_rank.get(rank, ())) == CHEST_SIZE
    ]


def remove_cards_from_player(
    player: PlayerState, cards_to_remove: Iterable[Card]
) -> PlayerState:
    """Return a copy of ``player`` without the given cards (matched by id)."""
    removed_ids = {card.id for card in cards_to_remove}
    return replace(
        player,
        cards=tuple(card for card in player.cards if card.id not in removed_ids),
    )


def add_cards_to_player(
    player: PlayerState, cards_to_add: Iterable[Card]
) -> PlayerState:
    """Return a copy of ``player`` holding the given cards as well."""
    held_ids = {card.id for card in player.cards}
    new_cards = []
    for card in cards_to_add:
        if card.id not in held_ids:
            held_ids.add(card.id)
            new_cards.append(card)
    return replace(player, cards=player.cards + tuple(new_cards))


def form_treasure_chests(
    player: PlayerState,
) -> Tuple[PlayerState, List[TreasureChest]]:
    """
    Move every newly completed set in the player's hand into a chest.

    Ranks the player already has a chest for are skipped. New chests are
    appended in rank order and their cards leave the hand.

    Args:
        player: Player whose hand should be checked

    Returns:
        Tuple of (updated player, chests formed by this call)
    """
    existing_ranks = player.chest_ranks
    new_chests = [
        chest
        for chest in find_treasure_chests(player.cards)
        if chest.rank not in existing_ranks
    ]

    if not new_chests:
        return player, []

    for chest in new_chests:
        chest_cards = [
            card
            for card in player.cards
            if card.rank == chest.rank and card.suit in chest.suits
        ]
        player = remove_cards_from_player(player, chest_cards)
        player = replace(player, treasure_chests=player.treasure_chests + (chest,))

    return player, new_chests
