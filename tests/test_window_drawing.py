"""Smoke tests for window figures."""
import matplotlib.pyplot as plt
import pytest

from latticecut.errors import IOFailure, PreconditionViolation
from latticecut.geometry.alignment import parse_corner
from latticecut.lattices.square import SquareGenerator
from latticecut.viz.window_drawing import compute_layout_bounds, save_window_figure


@pytest.fixture
def square_4x4():
    return SquareGenerator().build(4, seed=1)


def test_save_figure(tmp_path, square_4x4):
    path = save_window_figure(str(tmp_path / "fig" / "window.png"), square_4x4, 2,
                              parse_corner("left-top"))
    assert (tmp_path / "fig" / "window.png").stat().st_size > 0
    assert path.endswith("window.png")


def test_window_must_fit(tmp_path, square_4x4):
    with pytest.raises(PreconditionViolation):
        save_window_figure(str(tmp_path / "w.png"), square_4x4, 5, parse_corner("center"))


def test_layout_bounds(square_4x4):
    xmin, xmax, ymin, ymax = compute_layout_bounds(square_4x4.positions, padding=0.5)
    assert (xmin, xmax, ymin, ymax) == (-0.25, 4.25, -0.25, 4.25)


def test_unwritable_path_raises_and_closes_figure(tmp_path, square_4x4):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    open_before = plt.get_fignums()
    with pytest.raises(IOFailure) as exc_info:
        save_window_figure(str(blocker / "window.png"), square_4x4, 2, parse_corner("center"))
    assert isinstance(exc_info.value, OSError)
    assert isinstance(exc_info.value.__cause__, OSError)
    assert plt.get_fignums() == open_before
