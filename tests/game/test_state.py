"""
Tests for the treasure chest state models.
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from treasurechest.common.card import Rank, Suit
from treasurechest.game.state import (
    ChestRules,
    GameState,
    GuessStage,
    PlayerState,
    TreasureChest,
)

from game_helpers import build_state, cards


class TestGameState:
    def test_game_state_initialization(self):
        """Test that GameState initializes with the correct default values."""
        state = GameState()

        assert state.id is not None
        assert state.players == ()
        assert state.current_player_index == 0
        assert state.selected_player_index is None
        assert state.guess_stage == GuessStage.PLAYER
        assert state.guessed_rank is None
        assert state.guessed_quantity is None
        assert state.guessed_suits is None
        assert state.last_guess_correct is None
        assert state.game_over is False
        assert state.winner is None
        assert isinstance(state.rules, ChestRules)
        assert state.round_number == 0
        assert state.timestamp > 0

    def test_state_is_frozen(self):
        state = GameState()
        with pytest.raises(FrozenInstanceError):
            state.game_over = True

    def test_derived_players(self):
        state = build_state(
            [["7-hearts"], ["8-hearts", "9-hearts"], [], []],
            current_player_index=1,
            selected_player_index=0,
        )

        assert state.current_player.id == 1
        assert state.selected_player.id == 0
        assert state.cards_in_play == 3
        assert state.winning_player is None

    def test_equality_ignores_id_and_timestamp(self):
        first = build_state([["7-hearts"], ["8-hearts"]])
        second = build_state([["7-hearts"], ["8-hearts"]])

        assert first.id != second.id
        assert first == second
        assert replace(first, current_player_index=1) != second

    def test_selected_player_out_of_range(self):
        state = build_state([[], []], selected_player_index=7)
        assert state.selected_player is None

    def test_to_dict(self):
        chest = TreasureChest(rank=Rank.TWO, suits=frozenset(Suit))
        state = build_state(
            [["7-hearts", "2-clubs"], ["8-hearts"]],
            guess_stage=GuessStage.SUIT,
            selected_player_index=1,
            guessed_rank=Rank.EIGHT,
            guessed_quantity=1,
        )
        players = list(state.players)
        players[0] = PlayerState(
            id=0, name="Ann", cards=players[0].cards, treasure_chests=(chest,)
        )
        data = replace(state, players=tuple(players)).to_dict()

        assert data["guess_stage"] == "suit"
        assert data["guessed_rank"] == "8"
        assert data["guessed_quantity"] == 1
        assert data["guessed_suits"] is None
        assert data["cards_in_play"] == 3
        assert data["players"][0]["name"] == "Ann"
        assert data["players"][0]["cards"] == ["2-clubs", "7-hearts"]
        assert data["players"][0]["treasure_chests"] == [
            {"rank": "2", "suits": ["clubs", "diamonds", "hearts", "spades"]}
        ]
        assert data["rules"] == {"num_players": 4, "chest_size": 4}


class TestPlayerState:
    def test_player_state_initialization(self):
        player = PlayerState(id=2)

        assert player.name == "Player"
        assert player.cards == ()
        assert player.treasure_chests == ()
        assert player.card_count == 0
        assert player.chest_count == 0

    def test_rank_queries(self):
        player = PlayerState(id=0, cards=cards("7-hearts", "7-spades", "K-clubs"))

        assert player.has_rank(Rank.SEVEN)
        assert not player.has_rank(Rank.NINE)

    def test_chest_ranks(self):
        chest = TreasureChest(rank=Rank.ACE, suits=frozenset(Suit))
        player = PlayerState(id=0, treasure_chests=(chest,))

        assert player.chest_ranks == {Rank.ACE}
        assert player.chest_count == 1


class TestTreasureChest:
    def test_cards(self):
        chest = TreasureChest(rank=Rank.NINE, suits=frozenset(Suit))
        assert chest.cards() == cards("9-hearts", "9-diamonds", "9-clubs", "9-spades")
        assert str(chest) == "Chest of 9s"


class TestChestRules:
    def test_defaults(self):
        rules = ChestRules()
        assert rules.num_players == 4
        assert rules.chest_size == 4
        assert rules.player_name(0) == "Player 1"
        assert rules.player_name(3) == "Player 4"

    def test_custom_default_names(self):
        rules = ChestRules(default_player_names=("North", "East"))
        assert rules.player_name(1) == "East"
        assert rules.player_name(2) == "Player 3"

    def test_too_few_players(self):
        with pytest.raises(ValueError):
            ChestRules(num_players=1)

    def test_chest_size_is_fixed(self):
        with pytest.raises(ValueError):
            ChestRules(chest_size=3)
