"""Tests for weighted distributions and seeded sampling."""

import pytest

from .distribution import Distribution, make_rng, weighted


class TestDistribution:
    """Tests for building and sampling distributions."""

    def test_weights_are_normalized(self):
        dist = Distribution([("a", 1), ("b", 3)])
        assert dist.probabilities == pytest.approx((0.25, 0.75))
        assert dist.probability_of("b") == pytest.approx(0.75)

    def test_flat(self):
        dist = Distribution.flat(["x", "y", "z", "w"])
        assert dist.probabilities == pytest.approx((0.25,) * 4)
        assert len(dist) == 4

    def test_support_skips_zero_weights(self):
        dist = Distribution([("a", 0), ("b", 2)])
        assert dist.support() == ["b"]

    @pytest.mark.parametrize("pairs", [
        [],
        [("a", -1), ("b", 2)],
        [("a", 0), ("b", 0)],
        [("a", float("nan"))],
        [("a", float("inf"))],
    ])
    def test_invalid_weights_rejected(self, pairs):
        with pytest.raises(ValueError):
            Distribution(pairs)

    def test_weighted_helper_checks_lengths(self):
        with pytest.raises(ValueError):
            weighted(["a", "b"], [1.0])
        assert weighted(["a", "b"], [1, 1]) == Distribution.flat(["a", "b"])

    def test_pure_always_samples_same_element(self):
        rng = make_rng(0)
        dist = Distribution.pure(("tuple", "element"))
        assert all(dist.sample(rng) == ("tuple", "element") for _ in range(20))

    def test_same_seed_same_samples(self):
        dist = Distribution.flat(range(10))
        first = dist.sample_many(make_rng(42), 50)
        second = dist.sample_many(make_rng(42), 50)
        assert first == second

    def test_sampling_follows_weights(self):
        dist = Distribution([("heads", 9), ("tails", 1)])
        samples = dist.sample_many(make_rng(7), 2000)
        share = samples.count("heads") / len(samples)
        assert 0.85 < share < 0.95

    def test_never_samples_zero_weight(self):
        dist = Distribution([("never", 0), ("always", 1)])
        rng = make_rng(3)
        assert {dist.sample(rng) for _ in range(100)} == {"always"}
