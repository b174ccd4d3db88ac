"""Factory for creating discrete matrix games.

This module provides a factory function to create NormalFormGame instances
from simple payoff matrices where every player shares the same actions,
reducing boilerplate code.
"""

from itertools import product
from typing import Dict, Sequence, Tuple, Union

from ..core.types import Move, MoveProfile
from .normal_form import NormalFormGame

PayoffValue = Union[int, float]


def create_matrix_game(
    actions: Sequence[Move],
    matrix: Dict[Tuple[Move, ...], Tuple[PayoffValue, ...]],
    num_players: int = 2,
    default_payoff: Tuple[PayoffValue, ...] = None,
    name: str = "",
) -> NormalFormGame:
    """Create a discrete matrix game from a payoff matrix.

    Args:
        actions: Actions available to every player
        matrix: Dict mapping action tuples to payoff tuples
        num_players: Number of players (default 2)
        default_payoff: Payoff for action combinations missing from the
            matrix. If None, the matrix must cover every combination.
        name: Display name (e.g., "Prisoner's Dilemma")

    Returns:
        A NormalFormGame ready to play.

    Raises:
        ValueError: If matrix entries don't match num_players, contain
            invalid actions, or leave combinations uncovered without a
            default_payoff.

    Example:
        game = create_matrix_game(
            actions=["cooperate", "defect"],
            matrix={
                ("cooperate", "cooperate"): (3, 3),
                ("cooperate", "defect"): (0, 5),
                ("defect", "cooperate"): (5, 0),
                ("defect", "defect"): (1, 1),
            },
            name="Prisoner's Dilemma",
        )
    """
    actions = tuple(actions)

    # Validate matrix entries
    for action_tuple, payoff_tuple in matrix.items():
        if len(action_tuple) != num_players:
            raise ValueError(
                f"Action tuple {action_tuple} has {len(action_tuple)} entries, "
                f"expected {num_players}"
            )
        if len(payoff_tuple) != num_players:
            raise ValueError(
                f"Payoff tuple {payoff_tuple} has {len(payoff_tuple)} entries, "
                f"expected {num_players}"
            )
        for action in action_tuple:
            if action not in actions:
                raise ValueError(
                    f"Unknown action '{action}' in matrix. Valid actions: {list(actions)}"
                )

    move_sets = [actions] * num_players

    if default_payoff is None:
        return NormalFormGame.from_payoff_map(move_sets, matrix, name=name)

    if len(default_payoff) != num_players:
        raise ValueError(
            f"Default payoff {default_payoff} has {len(default_payoff)} entries, "
            f"expected {num_players}"
        )
    table = {moves: matrix.get(moves, default_payoff) for moves in product(actions, repeat=num_players)}

    # Create closure for payoff function
    def payoff_fn(profile: MoveProfile) -> Tuple[PayoffValue, ...]:
        return table[profile.moves]

    return NormalFormGame(move_sets, payoff_fn, name=name)
