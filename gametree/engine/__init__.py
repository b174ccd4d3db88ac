"""Execution engine: tree nodes, the interpreter and play entry points."""

from .distribution import Distribution, make_rng, weighted
from .tree import (
    Chance,
    ExecutionNode,
    Sequential,
    Simultaneous,
    Terminal,
    is_node,
    same_structure,
    simultaneous_all,
)
from .interpreter import DecisionContext, execute
from .runner import RepeatedResult, play, play_repeated

__all__ = [
    "Distribution",
    "make_rng",
    "weighted",
    "Chance",
    "ExecutionNode",
    "Sequential",
    "Simultaneous",
    "Terminal",
    "is_node",
    "same_structure",
    "simultaneous_all",
    "DecisionContext",
    "execute",
    "RepeatedResult",
    "play",
    "play_repeated",
]
