"""Tests for the polars history views."""

import pytest

from ..conftest import COOPERATE, DEFECT
from ..core.types import History, MoveProfile, Outcome, Payoff
from ..engine import play_repeated
from .history import history_frame, move_frequencies, score_table


@pytest.fixture
def history(prisoners_dilemma, alternator, always_defect):
    _, history = play_repeated(prisoners_dilemma, [alternator, always_defect], repetitions=3, seed=0)
    return history


class TestHistoryFrame:
    """Tests for history_frame."""

    def test_one_row_per_round(self, history):
        frame = history_frame(history)
        assert frame.columns == [
            "round",
            "player1_move",
            "player1_payoff",
            "player2_move",
            "player2_payoff",
        ]
        assert frame["round"].to_list() == [1, 2, 3]
        assert frame["player1_move"].to_list() == [COOPERATE, DEFECT, COOPERATE]
        assert frame["player2_payoff"].to_list() == [5, 1, 5]

    def test_empty_history(self):
        assert history_frame(History()).is_empty()
        assert score_table(History()).is_empty()

    def test_tuple_moves_rendered_as_lists(self):
        history = History().add(Outcome(payoff=Payoff((1,)), profile=MoveProfile(((2, 3),))))
        assert history_frame(history)["player1_move"].to_list() == ["[2, 3]"]


class TestScoreTable:
    """Tests for score_table."""

    def test_best_total_first(self, history):
        table = score_table(history)
        assert table["player"].to_list() == [2, 1]
        assert table["total_payoff"].to_list() == [11, 1]
        assert table["rounds"].to_list() == [3, 3]
        assert table["max_payoff"].to_list() == [5, 1]
        assert table["avg_payoff"][0] == pytest.approx(11 / 3)


class TestMoveFrequencies:
    """Tests for move_frequencies."""

    def test_counts_and_shares(self, history):
        freq = move_frequencies(history, 0)
        assert freq["move"].to_list() == [COOPERATE, DEFECT]
        assert freq["count"].to_list() == [2, 1]
        assert freq["share"].to_list() == pytest.approx([2 / 3, 1 / 3])

    def test_unknown_player(self, history):
        with pytest.raises(ValueError):
            move_frequencies(history, 5)
