"""Polars views over the history of a repeated execution.

Frames use the same 1-based ``player{n}_*`` column naming for every game so
that runs of different games can be concatenated and compared.
"""

from typing import Any, Dict, List

import polars as pl

from ..core.types import History


def _num_players(history: History) -> int:
    return max((outcome.num_players for outcome in history), default=0)


def _move_display(move: Any) -> str:
    if move is None:
        return ""
    if hasattr(move, "__iter__") and not isinstance(move, str):
        return f"[{', '.join(str(m) for m in move)}]"
    return str(move)


def history_frame(history: History) -> pl.DataFrame:
    """One row per round.

    Columns: ``round`` (1-based), then ``player{n}_move`` and
    ``player{n}_payoff`` for each player. Moves are rendered as strings;
    payoffs are expected to be numeric.

    Args:
        history: History of a repeated execution.

    Returns:
        DataFrame with one row per completed round (empty if none).
    """
    if len(history) == 0:
        return pl.DataFrame()

    num_players = _num_players(history)
    columns: Dict[str, List[Any]] = {"round": list(range(1, len(history) + 1))}
    for player in range(num_players):
        p_num = player + 1
        moves = []
        for outcome in history:
            if outcome.profile is not None:
                moves.append(_move_display(outcome.profile.for_player(player)))
            else:
                moves.append(_move_display(outcome.transcript.last_move_by_player(player)))
        columns[f"player{p_num}_move"] = moves
        columns[f"player{p_num}_payoff"] = history.payoffs_for_player(player)

    return pl.DataFrame(columns)


def score_table(history: History) -> pl.DataFrame:
    """Per-player payoff summary, best total first.

    Columns: player (1-based), rounds, total_payoff, avg_payoff,
    min_payoff, max_payoff.
    """
    frame = history_frame(history)
    if frame.is_empty():
        return pl.DataFrame()

    player_dfs = []
    for p_num in range(1, _num_players(history) + 1):
        player_dfs.append(frame.select([
            pl.lit(p_num).alias("player"),
            pl.col(f"player{p_num}_payoff").alias("payoff"),
        ]))
    all_plays = pl.concat(player_dfs, how="diagonal")

    return all_plays.group_by("player").agg([
        pl.len().alias("rounds"),
        pl.col("payoff").sum().alias("total_payoff"),
        pl.col("payoff").mean().alias("avg_payoff"),
        pl.col("payoff").min().alias("min_payoff"),
        pl.col("payoff").max().alias("max_payoff"),
    ]).sort(["total_payoff", "player"], descending=[True, False])


def move_frequencies(history: History, player: int) -> pl.DataFrame:
    """How often ``player`` (0-based) played each move.

    Columns: move, count, share. Most frequent first.
    """
    frame = history_frame(history)
    if frame.is_empty():
        return pl.DataFrame()

    move_col = f"player{player + 1}_move"
    if move_col not in frame.columns:
        raise ValueError(f"No moves recorded for player {player}")

    total = frame.height
    return frame.group_by(pl.col(move_col).alias("move")).agg(
        pl.len().alias("count"),
    ).with_columns(
        (pl.col("count") / total).alias("share"),
    ).sort(["count", "move"], descending=[True, False])
