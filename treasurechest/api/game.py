"""
Treasure chest game API module.

This module provides a small stateful wrapper around the pure transition
engine. It keeps the current state plus a history of earlier states, so a
presentation layer can drive a game one input at a time and undo steps.
"""

import random
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from treasurechest.common.card import Rank, Suit
from treasurechest.events import EventBus, EngineEventType, EventPriority
from treasurechest.game.choices import (
    Advance,
    GuessChoice,
    PlayerChoice,
    QuantityChoice,
    RankChoice,
    SuitChoice,
)
from treasurechest.game.state import ChestRules, GameState
from treasurechest.game.transitions import StateTransitionEngine


class TreasureChestGame:
    """
    High-level API for a game of treasure chest.

    Example:
        ```python
        game = TreasureChestGame(rng=random.Random(42))
        game.new_game(["Ann", "Ben", "Cat", "Dan"])
        game.on(EngineEventType.TREASURE_CHEST_FORMED, print)
        game.select_player(1)
        game.guess_rank("7")
        game.guess_quantity(2)
        game.guess_suits(["hearts", "spades"])
        game.advance()
        ```

    Attributes:
        rules: Rules used for new games
        event_bus: The event bus the engine reports on
        event_handlers: Unsubscribe functions for handlers registered here
    """

    def __init__(
        self,
        rules: Optional[ChestRules] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the API wrapper.

        Args:
            rules: Rules for games started through this object
            rng: Random source for shuffling; seed it for reproducible games
        """
        self.rules = rules or ChestRules()
        self.rng = rng
        self.event_bus = EventBus.get_instance()
        self.event_handlers: Dict[Union[str, EngineEventType], List[Callable]] = {}
        self._state: Optional[GameState] = None
        self._history: List[GameState] = []

    @property
    def state(self) -> GameState:
        """
        Get the current game state.

        Raises:
            RuntimeError: If no game has been started
        """
        if self._state is None:
            raise RuntimeError("Game not started. Call new_game() first.")
        return self._state

    @property
    def history(self) -> Sequence[GameState]:
        """States that preceded the current one, oldest first."""
        return tuple(self._history)

    def new_game(self, player_names: Optional[Sequence[str]] = None) -> GameState:
        """
        Start a new game, discarding the current one and its history.

        Args:
            player_names: Display names in seat order

        Returns:
            The freshly dealt game state
        """
        self._state = StateTransitionEngine.initialize_game(
            player_names, self.rules, self.rng
        )
        self._history = []
        return self._state

    def submit(self, choice: GuessChoice) -> GameState:
        """
        Feed one guess input to the engine.

        Ignored input (wrong kind of choice for the stage) leaves the state and
        history unchanged. Errors from the engine propagate unchanged.
        """
        current = self.state
        new_state = StateTransitionEngine.make_guess(current, choice)
        if new_state is not current:
            self._history.append(current)
            self._state = new_state
        return new_state

    def select_player(self, target_player_id: int) -> GameState:
        return self.submit(PlayerChoice(target_player_id))

    def guess_rank(self, rank: Union[Rank, str]) -> GameState:
        return self.submit(RankChoice(rank))

    def guess_quantity(self, quantity: int) -> GameState:
        return self.submit(QuantityChoice(quantity))

    def guess_suits(self, suits: Iterable[Union[Suit, str]]) -> GameState:
        return self.submit(SuitChoice(suits))

    def advance(self) -> GameState:
        return self.submit(Advance())

    def undo(self) -> bool:
        """
        Restore the state before the last accepted input.

        Returns:
            True if a step was undone, False if there was nothing to undo
        """
        if not self._history:
            return False
        self._state = self._history.pop()
        return True

    def on(
        self,
        event_type: Union[str, EngineEventType],
        handler: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Register an event handler.

        Args:
            event_type: Type of event to listen for
            handler: Event handler function
            priority: Priority level for the handler

        Returns:
            Function to call to unsubscribe the handler
        """
        # Convert string event types to enum if possible
        if isinstance(event_type, str):
            event_type = getattr(EngineEventType, event_type.upper(), event_type)

        unsubscribe_func = self.event_bus.on(event_type, handler, priority)
        self.event_handlers.setdefault(event_type, []).append(unsubscribe_func)
        return unsubscribe_func

    def remove_event_handlers(self) -> None:
        """Unsubscribe every handler registered through this object."""
        for unsubscribe_funcs in self.event_handlers.values():
            for unsubscribe in unsubscribe_funcs:
                unsubscribe()
        self.event_handlers.clear()

    def to_dict(self) -> dict:
        return self.state.to_dict()
