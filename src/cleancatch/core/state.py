"""
State machine for the Clean Catch round lifecycle.

States:
    IDLE: Start overlay shown, waiting for a difficulty and start command
    RUNNING: Drops falling, timers active
    ENDED: Round over (win or loss), entities frozen, summary shown
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class RoundState(Enum):
    """Round lifecycle states."""
    IDLE = auto()
    RUNNING = auto()
    ENDED = auto()


class RoundOutcome(Enum):
    """How an ended round finished."""
    WIN = auto()
    LOSS = auto()


@dataclass
class StateContext:
    """Context data carried alongside the current state."""
    outcome: RoundOutcome | None = None
    difficulty: Any = None


Listener = Callable[[RoundState, RoundState, StateContext], None]


class StateMachine:
    """
    Manages round state and transitions.

    Rejects transitions outside the table instead of raising, so a
    duplicate end-of-round trigger is simply ignored.
    """

    VALID_TRANSITIONS: list[tuple[RoundState, RoundState]] = [
        (RoundState.IDLE, RoundState.RUNNING),
        (RoundState.RUNNING, RoundState.ENDED),
        (RoundState.RUNNING, RoundState.IDLE),  # Replay aborts a live round
        (RoundState.ENDED, RoundState.IDLE),    # Replay
    ]

    def __init__(self, initial_state: RoundState = RoundState.IDLE) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> RoundState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> StateContext:
        """Get current context."""
        return self._context

    @property
    def is_running(self) -> bool:
        return self._state == RoundState.RUNNING

    def can_transition(self, to_state: RoundState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: RoundState, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def reset(self) -> None:
        """Force the machine back to IDLE with a clean context."""
        old_state = self._state
        self._state = RoundState.IDLE
        self._context = StateContext()
        if old_state != RoundState.IDLE:
            self._notify(old_state, RoundState.IDLE)
        logger.debug("StateMachine reset to IDLE")

    def _notify(self, old_state: RoundState, new_state: RoundState) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
