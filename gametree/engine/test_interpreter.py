"""Tests for the execution tree interpreter."""

import time

import pytest

from ..core.config import MAX_DEPTH
from ..core.errors import (
    IllegalMove,
    InvalidPayoff,
    InvalidPlayer,
    NoMoveAvailable,
    NonterminatingGame,
    UnmappedProfile,
)
from ..core.types import MoveProfile, Payoff
from ..strategies import FunctionStrategy, pure
from .distribution import Distribution, make_rng
from .interpreter import DecisionContext, execute
from .tree import Chance, Sequential, Simultaneous, Terminal


def matching_pennies_tree():
    """Both players show heads or tails; player 0 wins on a match."""
    def resolve(moves):
        return Terminal(payoff=(1, -1) if moves[0] == moves[1] else (-1, 1))

    return Simultaneous(players=(0, 1), moves=(("H", "T"), ("H", "T")), next=resolve)


def ultimatum_tree():
    """Player 0 offers a split, player 1 accepts or rejects."""
    def respond(offer):
        return Sequential(
            player=1,
            moves=("accept", "reject"),
            next={
                "accept": Terminal(payoff=(10 - offer, offer)),
                "reject": Terminal(payoff=(0, 0)),
            },
        )

    return Sequential(player=0, moves=(2, 5, 8), next=respond)


class TestSimultaneous:
    """Tests for simultaneous decision nodes."""

    def test_outcome_from_profile(self):
        outcome = execute(matching_pennies_tree(), [pure("H"), pure("T")], 2, rng=make_rng(0))
        assert outcome.payoff == Payoff((-1, 1))
        assert outcome.profile == MoveProfile(("H", "T"))
        assert outcome.transcript.moves_by_player(1) == ["T"]

    def test_peers_moves_are_not_visible_in_same_round(self):
        seen = []

        def record(move):
            def choose(context: DecisionContext):
                seen.append(context)
                # Nothing from this round may be in the transcript yet
                assert len(context.transcript) == 0
                return move
            return FunctionStrategy(choose)

        execute(matching_pennies_tree(), [record("H"), record("T")], 2, rng=make_rng(0))

        assert [c.player for c in seen] == [0, 1]
        assert seen[0].transcript == seen[1].transcript
        assert seen[1].available_moves == ("H", "T")

    def test_illegal_move(self):
        with pytest.raises(IllegalMove) as exc_info:
            execute(matching_pennies_tree(), [pure("H"), pure("edge")], 2, rng=make_rng(0))
        assert exc_info.value.player == 1
        assert exc_info.value.move == "edge"

    def test_unmapped_profile_from_mapping(self):
        node = Simultaneous(
            players=(0, 1),
            moves=(("a", "b"), ("a", "b")),
            next={("a", "a"): Terminal(payoff=(1, 1))},
        )
        with pytest.raises(UnmappedProfile) as exc_info:
            execute(node, [pure("a"), pure("b")], 2, rng=make_rng(0))
        assert exc_info.value.key == ("a", "b")

    def test_unmapped_profile_from_callable(self):
        node = Simultaneous(players=(0,), moves=(("a",),), next=lambda moves: None)
        with pytest.raises(UnmappedProfile):
            execute(node, [pure("a")], 1, rng=make_rng(0))

    def test_subset_of_players(self):
        node = Simultaneous(
            players=(2, 0),
            moves=(("x",), ("y",)),
            next={("x", "y"): Terminal(payoff=(1, 2, 3))},
        )
        outcome = execute(node, [pure("y"), pure("unused"), pure("x")], 3, rng=make_rng(0))
        assert outcome.payoff == Payoff((1, 2, 3))
        # Player 1 never moved
        assert outcome.profile is None


class TestSequential:
    """Tests for sequential decision nodes."""

    def test_walks_to_terminal(self):
        outcome = execute(ultimatum_tree(), [pure(2), pure("accept")], 2, rng=make_rng(0))
        assert outcome.payoff == Payoff((8, 2))
        assert outcome.profile == MoveProfile((2, "accept"))

    def test_second_mover_sees_first_move(self):
        def accept_fair(context):
            offer = context.transcript.last_move_by_player(0)
            return "accept" if offer >= 5 else "reject"

        low = execute(ultimatum_tree(), [pure(2), accept_fair], 2, rng=make_rng(0))
        fair = execute(ultimatum_tree(), [pure(5), accept_fair], 2, rng=make_rng(0))
        assert low.payoff == Payoff((0, 0))
        assert fair.payoff == Payoff((5, 5))

    def test_illegal_move(self):
        with pytest.raises(IllegalMove) as exc_info:
            execute(ultimatum_tree(), [pure(3), pure("accept")], 2, rng=make_rng(0))
        assert exc_info.value.player == 0

    def test_empty_move_set(self):
        node = Sequential(player=0, moves=(), next={})
        with pytest.raises(NoMoveAvailable):
            execute(node, [pure("x")], 1, rng=make_rng(0))

    def test_strategy_declines(self):
        def decline(context):
            raise NoMoveAvailable(context.player, "nothing to play")

        with pytest.raises(NoMoveAvailable) as exc_info:
            execute(ultimatum_tree(), [decline, pure("accept")], 2, rng=make_rng(0))
        assert exc_info.value.player == 0


class TestChance:
    """Tests for chance nodes."""

    def _coin_game(self):
        return Chance(
            distribution=Distribution.flat(["heads", "tails"]),
            next={
                "heads": Terminal(payoff=(1, 0)),
                "tails": Terminal(payoff=(0, 1)),
            },
        )

    def test_same_seed_same_outcome(self):
        results = [
            execute(self._coin_game(), [], 2, rng=make_rng(11)).payoff
            for _ in range(5)
        ]
        assert len(set(results)) == 1

    def test_both_branches_reachable(self):
        rng = make_rng(5)
        payoffs = {execute(self._coin_game(), [], 2, rng=rng).payoff for _ in range(50)}
        assert payoffs == {Payoff((1, 0)), Payoff((0, 1))}

    def test_chance_move_recorded(self):
        outcome = execute(self._coin_game(), [], 2, rng=make_rng(1))
        assert len(outcome.transcript.moves_by_chance()) == 1


class TestTermination:
    """Tests for the step bound."""

    def test_cycle_fails_instead_of_hanging(self):
        edges = {}
        loop = Sequential(player=0, moves=("again",), next=edges)
        edges["again"] = loop

        with pytest.raises(NonterminatingGame) as exc_info:
            execute(loop, [pure("again")], 1, rng=make_rng(0), max_depth=500)
        assert exc_info.value.max_depth == 500

    def test_cycle_at_default_bound_fails_promptly(self):
        edges = {}
        loop = Sequential(player=0, moves=("again",), next=edges)
        edges["again"] = loop

        started = time.perf_counter()
        with pytest.raises(NonterminatingGame) as exc_info:
            execute(loop, [pure("again")], 1, rng=make_rng(0))
        elapsed = time.perf_counter() - started

        assert exc_info.value.max_depth == MAX_DEPTH
        assert elapsed < 10

    def test_strategies_see_whole_transcript_of_long_games(self):
        lengths = []

        def count(context):
            lengths.append(len(context.transcript))
            return "again"

        edges = {}
        loop = Sequential(player=0, moves=("again",), next=edges)
        edges["again"] = loop
        with pytest.raises(NonterminatingGame):
            execute(loop, [count], 1, rng=make_rng(0), max_depth=1000)
        assert lengths == list(range(1000))

    def test_terminal_root(self):
        outcome = execute(Terminal(payoff=(4, 2)), [], 2, rng=make_rng(0))
        assert outcome.payoff == Payoff((4, 2))
        assert len(outcome.transcript) == 0

    def test_payoff_must_cover_every_player(self):
        with pytest.raises(InvalidPayoff):
            execute(Terminal(payoff=(1,)), [], 2, rng=make_rng(0))


class TestPlayers:
    """Tests for player and strategy lookup."""

    def test_node_with_unknown_player(self):
        node = Sequential(player=3, moves=("x",), next={"x": Terminal(payoff=(0, 0))})
        with pytest.raises(InvalidPlayer):
            execute(node, [pure("x"), pure("x")], 2, rng=make_rng(0))

    def test_missing_strategy(self):
        with pytest.raises(InvalidPlayer):
            execute(ultimatum_tree(), [pure(2)], 2, rng=make_rng(0))

    def test_strategies_by_mapping(self):
        outcome = execute(ultimatum_tree(), {1: pure("reject"), 0: pure(8)}, 2, rng=make_rng(0))
        assert outcome.payoff == Payoff((0, 0))

    def test_mapping_with_out_of_range_key(self):
        with pytest.raises(InvalidPlayer):
            execute(ultimatum_tree(), {0: pure(2), 1: pure("accept"), 2: pure("x")}, 2)

    def test_their_index(self):
        context = DecisionContext(player=0, available_moves=("a",), num_players=2)
        assert context.their_index == 1
        assert len(context.history) == 0
        with pytest.raises(ValueError):
            DecisionContext(player=0, available_moves=("a",), num_players=3).their_index
