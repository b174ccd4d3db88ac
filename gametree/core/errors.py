"""Errors raised while building or executing games.

Every failure during an execution is an ExecutionError. None of them are
retried: a rules violation is deterministic, so the in-progress execution is
aborted and the error surfaces to whoever called ``play``.
"""

from typing import Any, Optional


class ExecutionError(Exception):
    """Base class for failures that abort a single execution."""

    def __init__(self, message: str, state: Any = None):
        super().__init__(message)
        self.state = state


class InvalidPlayer(ExecutionError):
    """A player index is outside the game's declared range."""

    def __init__(self, player: Any, num_players: Optional[int] = None, state: Any = None):
        if num_players is None:
            message = f"No strategy for player {player!r}"
        else:
            message = f"Invalid player {player!r}: game has {num_players} players"
        super().__init__(message, state)
        self.player = player
        self.num_players = num_players


class IllegalMove(ExecutionError):
    """A move is outside the set declared for the player who made it."""

    def __init__(self, player: Optional[int], move: Any, state: Any = None):
        super().__init__(f"Player {player} played an illegal move: {move!r}", state)
        self.player = player
        self.move = move


class UnmappedProfile(ExecutionError):
    """A node has no continuation for a legal move or profile.

    This indicates a bug in the construction of the game, not in a strategy.
    """

    def __init__(self, key: Any, state: Any = None):
        super().__init__(f"No continuation for apparently valid move(s): {key!r}", state)
        self.key = key


class NonterminatingGame(ExecutionError):
    """No terminal node was reached within the step bound."""

    def __init__(self, max_depth: int, state: Any = None):
        super().__init__(f"No terminal node reached within {max_depth} steps", state)
        self.max_depth = max_depth


class NoMoveAvailable(ExecutionError):
    """A strategy declined to move, or a player has no legal move."""

    def __init__(self, player: Optional[int], reason: str = "", state: Any = None):
        message = f"No move available for player {player}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, state)
        self.player = player


class InvalidPayoff(ExecutionError):
    """A terminal payoff doesn't hold exactly one value per player."""

    def __init__(self, payoff: Any, num_players: int, state: Any = None):
        super().__init__(
            f"Payoff {payoff!r} has {len(payoff)} entries, expected {num_players}", state
        )
        self.payoff = payoff
        self.num_players = num_players
