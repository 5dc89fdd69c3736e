"""Tests for deltae_vision.core.kmeans — deterministic first-K k-means in RGB."""

import pytest
from deltae_vision.core.kmeans import cluster
from deltae_vision.core.types import ConfigError

MIXED = [
    (250, 10, 10),
    (10, 240, 20),
    (5, 5, 250),
    (240, 30, 0),
    (0, 255, 30),
    (20, 0, 230),
    (255, 0, 0),
    (30, 220, 10),
]


class TestDegenerateInput:
    def test_empty_samples(self):
        assert cluster([], 5, 6) == []

    def test_empty_samples_any_iterations(self):
        assert cluster([], 3, 0) == []

    def test_k_zero(self):
        assert cluster([(1, 2, 3)], 0, 6) == []

    def test_k_clipped_to_sample_count(self):
        samples = [(0, 0, 0), (100, 100, 100), (200, 200, 200)]
        assert len(cluster(samples, 5, 6)) == 3

    def test_zero_iterations_raises(self):
        with pytest.raises(ConfigError, match='iterations'):
            cluster([(1, 2, 3)], 1, 0)


class TestSingleCluster:
    def test_mean_of_all_samples(self):
        samples = [(0, 0, 0), (10, 20, 30), (255, 255, 255)]
        # sums 265, 275, 285 over 3 -> 88.33, 91.67, 95
        assert cluster(samples, 1, 1) == [(88, 92, 95)]

    def test_fixed_point(self):
        samples = [(0, 0, 0), (10, 20, 30), (255, 255, 255)]
        assert cluster(samples, 1, 1) == cluster(samples, 1, 7)

    def test_rounds_half_up(self):
        assert cluster([(0, 0, 0), (1, 1, 1)], 1, 1) == [(1, 1, 1)]
        assert cluster([(2, 2, 2), (3, 3, 3)], 1, 1) == [(3, 3, 3)]


class TestDeterminism:
    def test_identical_inputs_identical_output(self):
        assert cluster(MIXED, 3, 6) == cluster(list(MIXED), 3, 6)

    def test_seeded_from_first_samples(self):
        result = cluster(MIXED, 3, 1)
        # first three samples are red, green, blue seeds
        r, g, b = result
        assert r[0] > 200 and r[1] < 50
        assert g[1] > 200 and g[0] < 50
        assert b[2] > 200 and b[0] < 50

    def test_order_follows_seeding(self):
        reordered = MIXED[2:3] + MIXED[:2] + MIXED[3:]
        blue, red, green = cluster(reordered, 3, 6)
        assert blue[2] > 200
        assert red[0] > 200
        assert green[1] > 200

    def test_identical_samples(self):
        samples = [(10, 20, 30)] * 100
        assert cluster(samples, 5, 6) == [(10, 20, 30)] * 5


class TestAssignment:
    def test_ties_go_to_lowest_index_and_starved_centroid_is_kept(self):
        samples = [(0, 0, 0), (0, 0, 0), (255, 255, 255)]
        # Both seeds are black, so every sample ties and joins centroid 0;
        # centroid 1 gets nothing and keeps its seed
        assert cluster(samples, 2, 1) == [(85, 85, 85), (0, 0, 0)]
        # Next round the blacks move to the untouched seed
        assert cluster(samples, 2, 2) == [(255, 255, 255), (0, 0, 0)]

    def test_no_uint8_overflow(self):
        samples = [(255, 255, 255)] * 300 + [(0, 0, 0)]
        ((r, g, b),) = cluster(samples, 1, 1)
        assert (r, g, b) == (254, 254, 254)

    def test_returns_plain_ints(self):
        for c in cluster(MIXED, 2, 2):
            assert all(type(v) is int for v in c)
