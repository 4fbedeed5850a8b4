"""
State transition functions for the treasure chest card game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. Every transition announces what
happened on the event bus so a presentation layer can react to it.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, TypeVar
import logging
import random

from treasurechest.common.card import Card
from treasurechest.common.deck import Deck
from treasurechest.events import EventBus, EngineEventType
from treasurechest.game.chests import (
    add_cards_to_player,
    count_cards_by_rank,
    form_treasure_chests,
    get_cards_by_rank_and_suit,
    remove_cards_from_player,
)
from treasurechest.game.choices import (
    GuessChoice,
    PlayerChoice,
    QuantityChoice,
    RankChoice,
    SuitChoice,
    accepts,
)
from treasurechest.game.state import (
    ChestRules,
    GameOverError,
    GameState,
    GuessProtocolError,
    GuessStage,
    PlayerState,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _emit(event_type: EngineEventType, state: GameState, **data: Any) -> None:
    payload: Dict[str, Any] = {"game_id": state.id}
    payload.update(data)
    EventBus.get_instance().emit(event_type, payload)


def _reject(state: GameState, error: Exception) -> Exception:
    logger.warning("Rejected guess input for game %s: %s", state.id, error)
    _emit(
        EngineEventType.ERROR,
        state,
        error_type=type(error).__name__,
        message=str(error),
        guess_stage=state.guess_stage.value,
    )
    return error


class StateTransitionEngine:
    """
    Pure functions for state transitions in the treasure chest game.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def initialize_game(
        player_names: Optional[Sequence[str]] = None,
        rules: Optional[ChestRules] = None,
        rng: Optional[random.Random] = None,
    ) -> GameState:
        """
        Create a new game with a freshly shuffled deck dealt to every seat.

        Args:
            player_names: Display names in seat order; missing or empty names
                fall back to the rules' defaults ("Player 1", ...)
            rules: Rules for the new game (default rules if None)
            rng: Random source for the shuffle; seed it for reproducible deals

        Returns:
            New game state at the PLAYER stage with player 0 to move
        """
        game_rules = rules or ChestRules()
        names = list(player_names or ())

        if len(names) > game_rules.num_players:
            raise ValueError(
                f"Got {len(names)} player names for {game_rules.num_players} seats"
            )

        deck = Deck(rng=rng).shuffle()
        hands = deck.deal_hands(game_rules.num_players)

        players = tuple(
            PlayerState(
                id=index,
                name=(
                    names[index]
                    if index < len(names) and names[index]
                    else game_rules.player_name(index)
                ),
                cards=tuple(hand),
            )
            for index, hand in enumerate(hands)
        )

        state = GameState(players=players, rules=game_rules)

        logger.info(
            "Created game %s for %s", state.id, ", ".join(p.name for p in players)
        )
        _emit(
            EngineEventType.GAME_CREATED,
            state,
            players=[{"id": p.id, "name": p.name} for p in players],
            timestamp=state.timestamp,
        )
        _emit(
            EngineEventType.CARDS_DEALT,
            state,
            hand_sizes={p.id: p.card_count for p in players},
        )

        return state

    @staticmethod
    def make_guess(state: GameState, choice: GuessChoice) -> GameState:
        """
        Advance the guess protocol by one step.

        Only the choice expected by the current stage is consumed; any other
        choice leaves the state untouched and the same object is returned.

        Args:
            state: Current game state
            choice: One piece of guess input

        Returns:
            New game state

        Raises:
            GameOverError: If the game has already ended
            GuessProtocolError: If the state lacks the target or guess fields
                the current stage relies on
            ValueError: If the chosen opponent is not a valid target
        """
        if state.game_over:
            raise _reject(state, GameOverError(f"Game {state.id} is already over"))

        if not accepts(state.guess_stage, choice):
            logger.debug(
                "Ignoring %s at stage %s",
                type(choice).__name__,
                state.guess_stage.value,
            )
            _emit(
                EngineEventType.ACTION_IGNORED,
                state,
                choice=type(choice).__name__,
                guess_stage=state.guess_stage.value,
            )
            return state

        if state.guess_stage == GuessStage.PLAYER:
            return StateTransitionEngine.select_player(state, choice)
        if state.guess_stage == GuessStage.RANK:
            return StateTransitionEngine.guess_rank(state, choice)
        if state.guess_stage == GuessStage.QUANTITY:
            return StateTransitionEngine.guess_quantity(state, choice)
        if state.guess_stage == GuessStage.SUIT:
            return StateTransitionEngine.guess_suits(state, choice)
        return StateTransitionEngine.complete_guess(state)

    @staticmethod
    def select_player(state: GameState, choice: PlayerChoice) -> GameState:
        """
        Pick the opponent to question.

        Raises:
            ValueError: If the target is not at the table or is the guesser
        """
        target = choice.target_player_id
        if not 0 <= target < len(state.players):
            raise _reject(state, ValueError(f"No player with id {target}"))
        if target == state.current_player_index:
            raise _reject(state, ValueError("A player cannot question themselves"))

        new_state = replace(
            state, selected_player_index=target, guess_stage=GuessStage.RANK
        )

        logger.debug(
            "Player %s questions player %s", state.current_player_index, target
        )
        _emit(
            EngineEventType.PLAYER_SELECTED,
            new_state,
            player_id=state.current_player_index,
            target_player_id=target,
        )
        return new_state

    @staticmethod
    def guess_rank(state: GameState, choice: RankChoice) -> GameState:
        """
        Guess a rank the opponent holds.

        A miss ends the guess sequence; a hit moves on to the quantity step.
        """
        opponent = _require_opponent(state)

        if opponent.has_rank(choice.rank):
            return replace(
                state, guessed_rank=choice.rank, guess_stage=GuessStage.QUANTITY
            )

        return _miss(replace(state, guessed_rank=choice.rank), GuessStage.RANK)

    @staticmethod
    def guess_quantity(state: GameState, choice: QuantityChoice) -> GameState:
        """
        Guess how many cards of the guessed rank the opponent holds.
        """
        opponent = _require_opponent(state)
        rank = _require(state, state.guessed_rank, "guessed rank")

        if count_cards_by_rank(opponent.cards, rank) == choice.quantity:
            return replace(
                state, guessed_quantity=choice.quantity, guess_stage=GuessStage.SUIT
            )

        return _miss(
            replace(state, guessed_quantity=choice.quantity), GuessStage.QUANTITY
        )

    @staticmethod
    def guess_suits(state: GameState, choice: SuitChoice) -> GameState:
        """
        Guess the suits of the opponent's cards of the guessed rank.

        The guess is correct when it lists exactly the guessed quantity of
        suits, the opponent holds the guessed rank in every listed suit and
        the matching cards number exactly the guessed quantity. A correct
        guess moves those cards to the guesser and forms any chests they
        complete. Either way the sequence is then complete.
        """
        opponent = _require_opponent(state)
        rank = _require(state, state.guessed_rank, "guessed rank")
        quantity = _require(state, state.guessed_quantity, "guessed quantity")

        state = replace(state, guessed_suits=choice.suits)

        # One listed suit per guessed card, repeats included
        if len(choice.suits) != quantity:
            return _miss(state, GuessStage.SUIT)

        matching_cards: List[Card] = []
        for suit in choice.distinct_suits:
            cards = get_cards_by_rank_and_suit(opponent.cards, rank, suit)
            if not cards:
                return _miss(state, GuessStage.SUIT)
            matching_cards.extend(cards)

        if len(matching_cards) != quantity:
            return _miss(state, GuessStage.SUIT)

        new_state = StateTransitionEngine.transfer_cards(
            state, opponent.id, state.current_player_index, matching_cards
        )
        new_state = replace(
            new_state, last_guess_correct=True, guess_stage=GuessStage.COMPLETE
        )

        _emit(
            EngineEventType.GUESS_CORRECT,
            new_state,
            player_id=state.current_player_index,
            target_player_id=opponent.id,
            rank=rank.value,
            quantity=quantity,
            suits=[suit.value for suit in choice.distinct_suits],
        )
        return new_state

    @staticmethod
    def transfer_cards(
        state: GameState, from_index: int, to_index: int, cards: Sequence[Card]
    ) -> GameState:
        """
        Move cards between players and lock any chests the receiver completes.

        Args:
            state: Current game state
            from_index: Player giving up the cards
            to_index: Player receiving the cards
            cards: Cards to move

        Returns:
            New game state with updated hands and chests
        """
        giver = remove_cards_from_player(state.players[from_index], cards)
        receiver = add_cards_to_player(state.players[to_index], cards)
        receiver, new_chests = form_treasure_chests(receiver)

        new_players = list(state.players)
        new_players[from_index] = giver
        new_players[to_index] = receiver
        new_state = replace(state, players=tuple(new_players))

        _emit(
            EngineEventType.CARDS_TRANSFERRED,
            new_state,
            from_player_id=from_index,
            to_player_id=to_index,
            cards=[card.id for card in cards],
        )

        for chest in new_chests:
            logger.info("%s formed a chest of %ss", receiver.name, chest.rank)
            _emit(
                EngineEventType.TREASURE_CHEST_FORMED,
                new_state,
                player_id=to_index,
                player_name=receiver.name,
                rank=chest.rank.value,
                chest_count=receiver.chest_count,
            )

        return new_state

    @staticmethod
    def complete_guess(state: GameState) -> GameState:
        """
        Close the finished guess sequence.

        Clears the target and guess fields, passes the turn on after a wrong
        guess (keeps it after a correct one), and ends the game once no cards
        are left in play.
        """
        guess_was_correct = state.last_guess_correct is True
        num_players = len(state.players)
        next_index = (
            state.current_player_index
            if guess_was_correct
            else (state.current_player_index + 1) % num_players
        )

        new_state = replace(
            state,
            current_player_index=next_index,
            selected_player_index=None,
            guessed_rank=None,
            guessed_quantity=None,
            guessed_suits=None,
            last_guess_correct=None,
            guess_stage=GuessStage.PLAYER,
            round_number=state.round_number + 1,
        )

        event_type = (
            EngineEventType.TURN_KEPT
            if guess_was_correct
            else EngineEventType.TURN_PASSED
        )
        _emit(
            event_type,
            new_state,
            previous_player_id=state.current_player_index,
            current_player_id=next_index,
            round_number=new_state.round_number,
        )

        return StateTransitionEngine.check_game_over(new_state)

    @staticmethod
    def check_game_over(state: GameState) -> GameState:
        """
        End the game once every card has been locked into a chest.

        Returns:
            The same state if cards remain, else a state with the winner set
        """
        if state.game_over or not is_game_over(state.players):
            return state

        winner = determine_winner(state.players)
        new_state = replace(state, game_over=True, winner=winner)

        logger.info(
            "Game %s over after %s rounds, winner: %s",
            state.id,
            state.round_number,
            new_state.winning_player.name,
        )
        _emit(
            EngineEventType.GAME_ENDED,
            new_state,
            winner_id=winner,
            winner_name=new_state.winning_player.name,
            chest_counts={p.id: p.chest_count for p in state.players},
        )
        return new_state


def is_game_over(players: Sequence[PlayerState]) -> bool:
    """The game is over when no player holds any card."""
    return sum(player.card_count for player in players) == 0


def determine_winner(players: Sequence[PlayerState]) -> int:
    """
    Id of the player with the most chests; ties go to the lowest id.
    """
    winner = players[0]
    for player in players[1:]:
        if player.chest_count > winner.chest_count:
            winner = player
    return winner.id


def _require_opponent(state: GameState) -> PlayerState:
    opponent = state.selected_player
    if opponent is None:
        raise _reject(
            state,
            GuessProtocolError(
                f"No opponent selected at stage {state.guess_stage.value}"
            ),
        )
    if opponent.id == state.current_player_index:
        raise _reject(
            state, GuessProtocolError("The selected opponent is the current player")
        )
    return opponent


def _require(state: GameState, value: Optional[T], label: str) -> T:
    if value is None:
        raise _reject(
            state,
            GuessProtocolError(
                f"Missing {label} at stage {state.guess_stage.value}"
            ),
        )
    return value


def _miss(state: GameState, failed_stage: GuessStage) -> GameState:
    new_state = replace(
        state, last_guess_correct=False, guess_stage=GuessStage.COMPLETE
    )

    logger.debug(
        "Player %s guessed wrong at stage %s",
        state.current_player_index,
        failed_stage.value,
    )
    _emit(
        EngineEventType.GUESS_INCORRECT,
        new_state,
        player_id=state.current_player_index,
        target_player_id=state.selected_player_index,
        failed_stage=failed_stage.value,
        rank=state.guessed_rank.value if state.guessed_rank else None,
        quantity=state.guessed_quantity,
    )
    return new_state


def initialize_game(
    player_names: Optional[Sequence[str]] = None,
    rules: Optional[ChestRules] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Create a new game. See :meth:`StateTransitionEngine.initialize_game`."""
    return StateTransitionEngine.initialize_game(player_names, rules, rng)


def make_guess(state: GameState, choice: GuessChoice) -> GameState:
    """Resolve one step of a guess. See :meth:`StateTransitionEngine.make_guess`."""
    return StateTransitionEngine.make_guess(state, choice)
