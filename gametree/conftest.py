"""
Pytest configuration and shared fixtures.

Provides a Prisoner's Dilemma and a few simple strategies used across the
test modules.
"""

import pytest

from gametree.games import NormalFormGame, create_matrix_game
from gametree.strategies import FunctionStrategy, pure

COOPERATE = "cooperate"
DEFECT = "defect"

PD_MATRIX = {
    (COOPERATE, COOPERATE): (3, 3),
    (COOPERATE, DEFECT): (0, 5),
    (DEFECT, COOPERATE): (5, 0),
    (DEFECT, DEFECT): (1, 1),
}


@pytest.fixture
def prisoners_dilemma() -> NormalFormGame:
    """Return a 2-player Prisoner's Dilemma."""
    return create_matrix_game(
        actions=[COOPERATE, DEFECT],
        matrix=PD_MATRIX,
        name="Prisoner's Dilemma",
    )


@pytest.fixture
def always_cooperate():
    return pure(COOPERATE)


@pytest.fixture
def always_defect():
    return pure(DEFECT)


@pytest.fixture
def alternator():
    """Cooperate on even rounds and defect on odd rounds, judged by history length."""
    def choose(context):
        return COOPERATE if len(context.history) % 2 == 0 else DEFECT

    return FunctionStrategy(choose, name="alternator")


@pytest.fixture
def tit_for_tat():
    """Cooperate first, then copy the opponent's last move."""
    def choose(context):
        moves = context.history.moves_for_player(context.their_index)
        return moves[-1] if moves else COOPERATE

    return FunctionStrategy(choose, name="tit_for_tat")
