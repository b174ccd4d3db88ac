"""Strategy base class.

A strategy picks a move given a DecisionContext. Strategies may keep
internal state between calls, e.g. across the rounds of a repeated game.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from ..core.types import Move
from ..engine.interpreter import DecisionContext


class Strategy(ABC):
    """Abstract base class for strategies.

    Implementations must return one of ``context.available_moves``, or
    raise NoMoveAvailable to decline.
    """

    @abstractmethod
    def next_move(self, context: DecisionContext) -> Move:
        """Choose a move for ``context.player``.

        Args:
            context: The player's index, available moves, visible state,
                history and transcript.

        Returns:
            The chosen move.

        Raises:
            NoMoveAvailable: If the strategy has no move to offer.
        """
        ...

    def reset(self) -> None:
        """Forget any internal state. Override for stateful strategies."""
        pass

    def __call__(self, context: DecisionContext) -> Move:
        return self.next_move(context)


class FunctionStrategy(Strategy):
    """Strategy backed by a plain function of the context."""

    def __init__(self, fn: Callable[[DecisionContext], Move], name: str = ""):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "")

    def next_move(self, context: DecisionContext) -> Move:
        return self.fn(context)

    def __repr__(self) -> str:
        return f"FunctionStrategy({self.name!r})"


def as_strategy(value: Any) -> Strategy:
    """Coerce a Strategy or a callable into a Strategy."""
    if isinstance(value, Strategy):
        return value
    if callable(value):
        return FunctionStrategy(value)
    raise TypeError(f"Expected a Strategy or a callable, got {value!r}")
