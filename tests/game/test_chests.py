"""
Tests for treasure chest detection and the hand helpers.
"""

from treasurechest.common.card import Rank, Suit
from treasurechest.game.chests import (
    add_cards_to_player,
    count_cards_by_rank,
    find_treasure_chests,
    form_treasure_chests,
    get_cards_by_rank_and_suit,
    remove_cards_from_player,
)
from treasurechest.game.state import PlayerState, TreasureChest

from game_helpers import cards

ALL_SUITS = {Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES}


class TestFindTreasureChests:
    def test_four_kings_make_one_chest(self):
        hand = cards("K-hearts", "K-diamonds", "K-clubs", "K-spades", "2-hearts")

        chests = find_treasure_chests(hand)

        assert chests == [TreasureChest(rank=Rank.KING, suits=frozenset(ALL_SUITS))]
        assert chests[0].suits == ALL_SUITS

    def test_three_suits_make_no_chest(self):
        hand = cards("K-hearts", "K-diamonds", "K-clubs", "2-hearts")
        assert find_treasure_chests(hand) == []

    def test_empty_hand(self):
        assert find_treasure_chests(()) == []

    def test_chests_in_rank_order(self):
        hand = cards(
            "A-hearts", "A-diamonds", "A-clubs", "A-spades",
            "3-spades", "3-clubs", "3-diamonds", "3-hearts",
            "10-hearts", "10-diamonds", "10-clubs", "10-spades",
        )
        assert [chest.rank for chest in find_treasure_chests(hand)] == [
            Rank.THREE,
            Rank.TEN,
            Rank.ACE,
        ]

    def test_duplicate_cards_do_not_fill_a_chest(self):
        hand = cards("5-hearts", "5-hearts", "5-clubs", "5-clubs")
        assert find_treasure_chests(hand) == []

    def test_detector_is_idempotent_and_pure(self):
        hand = list(cards("J-hearts", "J-diamonds", "J-clubs", "J-spades", "4-clubs"))
        before = list(hand)

        assert find_treasure_chests(hand) == find_treasure_chests(hand)
        assert hand == before


class TestHandHelpers:
    def test_count_cards_by_rank(self):
        hand = cards("7-hearts", "7-spades", "K-clubs")
        assert count_cards_by_rank(hand, Rank.SEVEN) == 2
        assert count_cards_by_rank(hand, Rank.NINE) == 0

    def test_get_cards_by_rank_and_suit(self):
        hand = cards("7-hearts", "7-spades", "K-hearts")
        assert get_cards_by_rank_and_suit(hand, Rank.SEVEN, Suit.HEARTS) == list(
            cards("7-hearts")
        )
        assert get_cards_by_rank_and_suit(hand, Rank.SEVEN, Suit.CLUBS) == []

    def test_remove_cards_from_player(self):
        player = PlayerState(id=0, cards=cards("7-hearts", "7-spades", "K-clubs"))

        updated = remove_cards_from_player(player, cards("7-hearts", "7-spades"))

        assert updated.cards == cards("K-clubs")
        assert player.cards == cards("7-hearts", "7-spades", "K-clubs")

    def test_add_cards_to_player_skips_held_cards(self):
        player = PlayerState(id=0, cards=cards("7-hearts"))

        updated = add_cards_to_player(player, cards("7-hearts", "7-spades", "7-spades"))

        assert updated.cards == cards("7-hearts", "7-spades")


class TestFormTreasureChests:
    def test_no_chest(self):
        player = PlayerState(id=0, cards=cards("7-hearts", "7-spades"))

        updated, new_chests = form_treasure_chests(player)

        assert updated is player
        assert new_chests == []

    def test_chest_cards_leave_hand(self):
        player = PlayerState(
            id=0,
            cards=cards("Q-hearts", "Q-diamonds", "Q-clubs", "Q-spades", "2-clubs"),
        )

        updated, new_chests = form_treasure_chests(player)

        assert updated.cards == cards("2-clubs")
        assert [chest.rank for chest in updated.treasure_chests] == [Rank.QUEEN]
        assert new_chests == list(updated.treasure_chests)

    def test_multiple_chests_appended_in_rank_order(self):
        existing = TreasureChest(rank=Rank.ACE, suits=frozenset(ALL_SUITS))
        player = PlayerState(
            id=0,
            cards=cards(
                "Q-hearts", "Q-diamonds", "Q-clubs", "Q-spades",
                "4-hearts", "4-diamonds", "4-clubs", "4-spades",
            ),
            treasure_chests=(existing,),
        )

        updated, new_chests = form_treasure_chests(player)

        assert updated.cards == ()
        assert [chest.rank for chest in updated.treasure_chests] == [
            Rank.ACE,
            Rank.FOUR,
            Rank.QUEEN,
        ]
        assert [chest.rank for chest in new_chests] == [Rank.FOUR, Rank.QUEEN]

    def test_rank_already_chested_is_not_repeated(self):
        existing = TreasureChest(rank=Rank.KING, suits=frozenset(ALL_SUITS))
        player = PlayerState(
            id=0,
            cards=cards("K-hearts", "K-diamonds", "K-clubs", "K-spades"),
            treasure_chests=(existing,),
        )

        updated, new_chests = form_treasure_chests(player)

        assert new_chests == []
        assert updated.treasure_chests == (existing,)
        assert len(updated.cards) == 4
