"""Weighted distributions for chance nodes and mixed strategies.

Sampling always goes through an explicit ``numpy.random.Generator`` so that
a run is reproducible from its seed and no global random state is touched.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..core.config import DEFAULT_SEED

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator.

    Args:
        seed: Seed for the generator. Falls back to GAMETREE_SEED, then to
            fresh OS entropy.

    Returns:
        A new numpy Generator.
    """
    if seed is None:
        seed = DEFAULT_SEED
    return np.random.default_rng(seed)


@dataclass(frozen=True, init=False)
class Distribution(Generic[T]):
    """A finite probability distribution over arbitrary elements."""

    elements: Tuple[T, ...]
    probabilities: Tuple[float, ...]

    def __init__(self, weighted_elements: Iterable[Tuple[T, float]]):
        """Build a distribution from (element, weight) pairs.

        Weights are normalized, so they need not sum to one.

        Raises:
            ValueError: If there are no elements, a weight is negative or not
                finite, or all weights are zero.
        """
        pairs = list(weighted_elements)
        if not pairs:
            raise ValueError("Distribution requires at least one element")

        weights = np.array([float(w) for _, w in pairs], dtype=float)
        if not np.all(np.isfinite(weights)):
            raise ValueError(f"Distribution weights must be finite, got {weights.tolist()}")
        if np.any(weights < 0):
            raise ValueError(f"Distribution weights cannot be negative, got {weights.tolist()}")
        total = weights.sum()
        if total <= 0:
            raise ValueError("Distribution weights must have a positive total")

        object.__setattr__(self, "elements", tuple(e for e, _ in pairs))
        object.__setattr__(self, "probabilities", tuple((weights / total).tolist()))

    @classmethod
    def flat(cls, elements: Iterable[T]) -> "Distribution[T]":
        """Uniform distribution over the given elements."""
        return cls((element, 1.0) for element in elements)

    @classmethod
    def pure(cls, element: T) -> "Distribution[T]":
        """Distribution that always yields ``element``."""
        return cls([(element, 1.0)])

    def support(self) -> List[T]:
        """Elements with non-zero probability."""
        return [e for e, p in zip(self.elements, self.probabilities) if p > 0]

    def probability_of(self, element: Any) -> float:
        return sum(p for e, p in zip(self.elements, self.probabilities) if e == element)

    def sample(self, rng: np.random.Generator) -> T:
        """Draw one element.

        Indexes are drawn rather than elements so that elements of any type
        (tuples, objects) come back unchanged.
        """
        index = rng.choice(len(self.elements), p=self.probabilities)
        return self.elements[int(index)]

    def sample_many(self, rng: np.random.Generator, count: int) -> List[T]:
        indexes = rng.choice(len(self.elements), size=count, p=self.probabilities)
        return [self.elements[int(i)] for i in indexes]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(zip(self.elements, self.probabilities))


def weighted(elements: Sequence[T], weights: Sequence[float]) -> Distribution[T]:
    """Build a distribution from parallel element and weight sequences."""
    if len(elements) != len(weights):
        raise ValueError(
            f"Got {len(elements)} elements but {len(weights)} weights"
        )
    return Distribution(zip(elements, weights))
