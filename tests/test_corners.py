"""Tests for corner-sampled energy statistics."""
import logging
import math

import numpy as np
import pytest

from latticecut.errors import EmptyCornerSet, PreconditionViolation
from latticecut.geometry.alignment import ALL_CORNERS, Corner, Horizontal, Vertical
from latticecut.geometry.window import extract_corner
from latticecut.lattices.square import PinwheelGenerator, SquareGenerator
from latticecut.physics.dipolar import energy
from latticecut.sampling import corners as corners_module
from latticecut.sampling.corners import (
    SizeStatistic,
    StatisticsConfig,
    aggregate,
    aggregate_config,
    corner_energies,
    iter_size_statistics,
    summarize_energies,
)


@pytest.fixture
def square_5x5():
    return SquareGenerator().build(5)


@pytest.fixture
def pinwheel_4x4():
    return PinwheelGenerator().build(4)


class TestSummarizeEnergies:
    def test_known_values(self):
        mean, std = summarize_energies([2.0, 4.0, 6.0])
        assert mean == 4.0
        assert std == pytest.approx(math.sqrt(8.0 / 3.0))

    def test_population_not_sample(self):
        _, std = summarize_energies([1.0, 3.0])
        assert std == pytest.approx(1.0)

    def test_single_value(self):
        assert summarize_energies([-1.5]) == (-1.5, 0.0)

    def test_empty(self):
        with pytest.raises(EmptyCornerSet):
            summarize_energies([])


class TestAggregate:
    def test_one_row_per_size_in_order(self, square_5x5):
        stats = aggregate(square_5x5, [3, 1, 2], ALL_CORNERS)
        assert [s.size for s in stats] == [3, 1, 2]
        assert all(isinstance(s, SizeStatistic) for s in stats)
        assert all(len(s.energies) == 9 for s in stats)

    def test_mean_and_std_from_energies(self, pinwheel_4x4):
        corners = [
            Corner(Horizontal.LEFT, Vertical.TOP),
            Corner(Horizontal.CENTER, Vertical.CENTER),
            Corner(Horizontal.RIGHT, Vertical.BOTTOM),
        ]
        (stat,) = aggregate(pinwheel_4x4, [2], corners)
        expected = [energy(extract_corner(pinwheel_4x4, 2, c)) for c in corners]
        assert stat.energies == expected
        assert stat.mean_energy == pytest.approx(np.mean(expected))
        assert stat.stddev_energy == pytest.approx(np.std(expected))

    def test_translation_invariant_lattice(self, square_5x5):
        # Every window of a uniform lattice is a translated copy.
        (stat,) = aggregate(square_5x5, [2], ALL_CORNERS)
        assert stat.mean_energy != 0.0
        assert stat.stddev_energy == pytest.approx(0.0, abs=1e-9 * abs(stat.mean_energy))

    def test_statistics_of_corner_energies(self, square_5x5, monkeypatch):
        values = iter([2.0, 4.0, 6.0])
        monkeypatch.setattr(corners_module, "energy", lambda store: next(values))
        (stat,) = aggregate(square_5x5, [2], ALL_CORNERS[:3])
        assert stat.energies == [2.0, 4.0, 6.0]
        assert stat.mean_energy == 4.0
        assert stat.stddev_energy == pytest.approx(1.632993161855452)

    def test_corner_energies_order(self, pinwheel_4x4):
        corners = [ALL_CORNERS[8], ALL_CORNERS[0]]
        energies = corner_energies(pinwheel_4x4, 3, corners)
        assert energies[0] == energy(extract_corner(pinwheel_4x4, 3, ALL_CORNERS[8]))
        assert energies[1] == energy(extract_corner(pinwheel_4x4, 3, ALL_CORNERS[0]))

    def test_no_sizes(self, square_5x5):
        assert aggregate(square_5x5, [], ALL_CORNERS) == []


class TestErrors:
    def test_empty_corner_set(self, square_5x5):
        with pytest.raises(EmptyCornerSet):
            aggregate(square_5x5, [2], [])

    def test_empty_corner_set_checked_before_sizes(self, square_5x5):
        with pytest.raises(EmptyCornerSet):
            aggregate(square_5x5, [], [])

    def test_size_too_large_aborts(self, square_5x5):
        with pytest.raises(PreconditionViolation):
            aggregate(square_5x5, [2, 5], ALL_CORNERS)

    def test_skip_invalid(self, square_5x5, caplog):
        with caplog.at_level(logging.ERROR, logger="latticecut.sampling.corners"):
            stats = aggregate(square_5x5, [2, 5, 9, 1], ALL_CORNERS[:2], skip_invalid=True)
        assert [s.size for s in stats] == [2, 1]
        assert "Skipping size 5" in caplog.text
        assert "Skipping size 9" in caplog.text

    def test_full_size_when_not_strict(self, square_5x5):
        (stat,) = aggregate(square_5x5, [5], ALL_CORNERS, strict=False)
        assert stat.energies == [energy(square_5x5)] * 9
        assert stat.mean_energy == pytest.approx(energy(square_5x5))
        assert stat.stddev_energy == pytest.approx(0.0, abs=1e-12)

    def test_generator_yields_completed_rows_before_failure(self, square_5x5):
        rows = iter_size_statistics(square_5x5, [1, 7], ALL_CORNERS[:1])
        first = next(rows)
        assert first.size == 1
        with pytest.raises(PreconditionViolation):
            next(rows)


class TestStatisticsConfig:
    def test_defaults_to_all_corners(self):
        config = StatisticsConfig(sizes=[2])
        assert config.resolved_corners() == ALL_CORNERS
        assert config.strict
        assert not config.skip_invalid

    def test_aggregate_config(self, square_5x5):
        config = StatisticsConfig(sizes=[1, 2], corners=["left-top", "right-bottom"])
        stats = aggregate_config(square_5x5, config)
        assert [s.size for s in stats] == [1, 2]
        assert all(len(s.energies) == 2 for s in stats)
