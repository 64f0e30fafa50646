import math

import pytest

from midline_studio.geometry import angle_degrees, midpoint, perpendicular_bisector


def test_horizontal_and_vertical_angles():
    assert angle_degrees((0, 0), (100, 0)) == 0.0
    assert angle_degrees((0, 0), (0, 10)) == pytest.approx(90.0)
    assert angle_degrees((0, 0), (0, -10)) == pytest.approx(-90.0)


def test_leftward_angle_is_plus_180():
    assert angle_degrees((100, 0), (0, 0)) == 180.0
    assert angle_degrees((0.0, 0.0), (-5.0, -0.0)) == 180.0


def test_coincident_points_give_zero():
    assert angle_degrees((12.5, 40.0), (12.5, 40.0)) == 0.0


def test_tilted_line_angle():
    assert angle_degrees((0, 50), (100, 60)) == pytest.approx(math.degrees(math.atan(0.1)))


@pytest.mark.parametrize(
    "p1,p2",
    [((0, 0), (3, 4)), ((10, 5), (-7, 2)), ((1, 1), (1, 9)), ((-4, 6), (-4, -6)), ((0, 0), (-1, 0))],
)
def test_reversed_direction_differs_by_half_turn(p1, p2):
    forward = angle_degrees(p1, p2)
    backward = angle_degrees(p2, p1)
    assert -180.0 < forward <= 180.0
    assert -180.0 < backward <= 180.0
    assert (forward - backward) % 360.0 == pytest.approx(180.0)


def test_midpoint():
    assert midpoint((0, 0), (10, 4)) == (5.0, 2.0)


def test_perpendicular_bisector_of_horizontal_segment():
    start, end = perpendicular_bisector((0, 0), (10, 0), 5)
    assert start == pytest.approx((5.0, -5.0))
    assert end == pytest.approx((5.0, 5.0))


def test_perpendicular_bisector_is_perpendicular_and_centered():
    p1, p2 = (3.0, 7.0), (11.0, 13.0)
    start, end = perpendicular_bisector(p1, p2, 20.0)
    mx, my = midpoint(p1, p2)
    assert midpoint(start, end) == pytest.approx((mx, my))
    assert math.dist(start, end) == pytest.approx(40.0)
    seg = (p2[0] - p1[0], p2[1] - p1[1])
    guide = (end[0] - start[0], end[1] - start[1])
    assert seg[0] * guide[0] + seg[1] * guide[1] == pytest.approx(0.0)


def test_perpendicular_bisector_degenerate_collapses_to_midpoint():
    assert perpendicular_bisector((4, 4), (4, 4), 100) == ((4.0, 4.0), (4.0, 4.0))


@pytest.mark.parametrize("p1,p2", [((math.nan, 0), (1, 1)), ((0, 0), (math.inf, 1)), ((0, -math.inf), (0, 0))])
def test_non_finite_points_raise(p1, p2):
    with pytest.raises(ValueError):
        angle_degrees(p1, p2)
