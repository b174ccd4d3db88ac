"""Tests for games described by hand-built trees."""

import pytest

from ..core.errors import InvalidPlayer
from ..core.types import Payoff
from ..engine import Sequential, Terminal, play
from ..strategies import pure
from .tree_game import TreeGame


def centipede(length):
    """Players alternate between taking the pot and passing it on."""
    def stage(turn):
        if turn == length:
            return Terminal(payoff=(length, length))
        player = turn % 2
        take = [turn, turn]
        take[player] += 2
        return Sequential(
            player=player,
            moves=("take", "pass"),
            next={"take": Terminal(payoff=tuple(take)), "pass": stage(turn + 1)},
        )

    return stage(0)


class TestTreeGame:
    """Tests for TreeGame."""

    def test_plays_static_tree(self):
        game = TreeGame(2, [("take", "pass")] * 2, centipede(4), name="centipede")
        assert play(game, [pure("pass"), pure("pass")], seed=0).payoff == Payoff((4, 4))
        assert play(game, [pure("pass"), pure("take")], seed=0).payoff == Payoff((1, 3))

    def test_builder_called_per_execution(self):
        calls = []

        def build():
            calls.append(1)
            return centipede(2)

        game = TreeGame(2, [("take", "pass")] * 2, build)
        game.execution()
        game.execution()
        assert len(calls) == 2

    def test_available_moves(self):
        game = TreeGame(2, [("take", "pass"), ("pass",)], centipede(2))
        assert game.available_moves(1) == ("pass",)
        with pytest.raises(InvalidPlayer):
            game.available_moves(2)

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            TreeGame(0, [], centipede(1))
        with pytest.raises(ValueError):
            TreeGame(2, [("a",)], centipede(1))
        with pytest.raises(TypeError):
            TreeGame(1, [("a",)], "not a tree")
