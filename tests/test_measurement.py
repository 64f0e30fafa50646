import logging

import pytest

from midline_studio.errors import MissingLandmarks
from midline_studio.landmarks import LandmarkId
from midline_studio.measurement import Measurement, compute_measurement, format_degrees
from midline_studio.placement import Marker


def centrals(ulc, urc, llc, lrc):
    return {
        LandmarkId.UPPER_LEFT_CENTRAL: Marker(*ulc),
        LandmarkId.UPPER_RIGHT_CENTRAL: Marker(*urc),
        LandmarkId.LOWER_LEFT_CENTRAL: Marker(*llc),
        LandmarkId.LOWER_RIGHT_CENTRAL: Marker(*lrc),
    }


def test_tilted_lower_line_is_significant():
    m = compute_measurement(centrals((0, 0), (100, 0), (0, 50), (100, 60)))
    assert m.upper_angle_deg == pytest.approx(0.0)
    assert m.lower_angle_deg == pytest.approx(5.71, abs=0.01)
    assert m.midline_deviation_deg == 5.7
    assert m.is_significant


def test_coincident_lines_have_zero_deviation():
    m = compute_measurement(centrals((0, 0), (100, 0), (0, 0), (100, 0)))
    assert m.midline_deviation_deg == 0.0
    assert not m.is_significant


def test_threshold_is_exclusive():
    assert not Measurement(0.0, 3.0, 3.0).is_significant
    assert Measurement(0.0, 3.1, 3.1).is_significant


def test_laterals_are_not_required():
    m = compute_measurement(centrals((0, 0), (10, 0), (0, 5), (10, 5)))
    assert m.midline_deviation_deg == 0.0


def test_missing_central_raises():
    placed = centrals((0, 0), (10, 0), (0, 5), (10, 5))
    del placed[LandmarkId.LOWER_RIGHT_CENTRAL]
    with pytest.raises(MissingLandmarks) as excinfo:
        compute_measurement(placed)
    assert excinfo.value.missing == (LandmarkId.LOWER_RIGHT_CENTRAL,)
    assert "lower_right_central" in str(excinfo.value)


def test_no_wraparound_at_the_seam(caplog):
    # Upper line points left and slightly down (+170), lower slightly up (-170).
    upper = ((100, 0), (100 - 98.48, 17.36))
    lower = ((100, 50), (100 - 98.48, 50 - 17.36))
    with caplog.at_level(logging.WARNING, logger="midline_studio.measurement"):
        m = compute_measurement(centrals(upper[0], upper[1], lower[0], lower[1]))
    assert m.midline_deviation_deg == pytest.approx(340.0, abs=0.1)
    assert "not wrapped" in caplog.text


def test_measurement_is_immutable():
    m = Measurement(1.0, 2.0, 1.0)
    with pytest.raises(AttributeError):
        m.upper_angle_deg = 5.0


def test_format_degrees():
    assert format_degrees(5.7106) == "5.7°"
