"""Strategy contract and common strategy constructors."""

from .base import FunctionStrategy, Strategy, as_strategy
from .combinators import (
    ConditionalStrategy,
    MixedStrategy,
    PeriodicStrategy,
    PureStrategy,
    RandomStrategy,
    TriggerStrategy,
    conditional,
    mixed,
    mixed_flat,
    periodic,
    periodic_pure,
    pure,
    randomly,
    trigger,
)

__all__ = [
    "Strategy",
    "FunctionStrategy",
    "as_strategy",
    "PureStrategy",
    "MixedStrategy",
    "RandomStrategy",
    "PeriodicStrategy",
    "ConditionalStrategy",
    "TriggerStrategy",
    "pure",
    "mixed",
    "mixed_flat",
    "randomly",
    "periodic",
    "periodic_pure",
    "conditional",
    "trigger",
]
