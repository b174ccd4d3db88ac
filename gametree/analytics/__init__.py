"""Analytics for observing executed games."""

from .history import history_frame, move_frequencies, score_table

__all__ = [
    "history_frame",
    "score_table",
    "move_frequencies",
]
