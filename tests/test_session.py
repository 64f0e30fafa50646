import pytest

from midline_studio.errors import ImageLoadError, PlacementRefused
from midline_studio.landmarks import LANDMARK_SEQUENCE, LandmarkId
from midline_studio.session import AnalysisSession

from .helpers import TILTED_POINTS, place_all


def test_placement_refused_while_disarmed():
    session = AnalysisSession()
    with pytest.raises(PlacementRefused):
        session.place_marker(10, 10)
    assert dict(session.placed) == {}
    assert session.current_target is LandmarkId.UPPER_LEFT_CENTRAL


def test_stop_keeps_progress(session):
    session.place_marker(1, 1)
    session.place_marker(2, 2)
    session.stop()
    with pytest.raises(PlacementRefused):
        session.place_marker(3, 3)
    assert len(session.placed) == 2
    assert session.current_target is LandmarkId.UPPER_RIGHT_CENTRAL
    session.start()
    assert session.place_marker(3, 3) is LandmarkId.UPPER_RIGHT_CENTRAL


def test_toggle_armed():
    session = AnalysisSession()
    assert session.toggle_armed() is True
    assert session.toggle_armed() is False


def test_measurement_appears_only_on_completion(session):
    for landmark in LANDMARK_SEQUENCE[:-1]:
        session.place_marker(*TILTED_POINTS[landmark])
        assert session.measurement is None
    session.place_marker(*TILTED_POINTS[LANDMARK_SEQUENCE[-1]])
    assert session.measurement is not None
    assert session.measurement.midline_deviation_deg == 5.7


def test_out_of_bounds_coordinates_are_kept(session):
    session.place_marker(-15, 9000)
    marker = session.placed[LandmarkId.UPPER_LEFT_CENTRAL]
    assert (marker.x, marker.y) == (-15.0, 9000.0)


def test_placement_refused_after_completion(measured_session):
    with pytest.raises(PlacementRefused):
        measured_session.place_marker(0, 0)


def test_reset_clears_everything_but_armed(measured_session, photo_path):
    measured_session.load_image(photo_path)
    measured_session.reset()
    assert dict(measured_session.placed) == {}
    assert measured_session.current_target is LandmarkId.UPPER_LEFT_CENTRAL
    assert measured_session.measurement is None
    assert measured_session.image_bgr is None
    assert measured_session.armed
    measured_session.reset()
    assert dict(measured_session.placed) == {}
    assert measured_session.measurement is None


def test_measurement_recomputed_after_reset(measured_session):
    first = measured_session.measurement
    measured_session.reset()
    level = dict(TILTED_POINTS)
    level[LandmarkId.LOWER_LEFT_CENTRAL] = (0.0, 50.0)
    level[LandmarkId.LOWER_RIGHT_CENTRAL] = (100.0, 50.0)
    place_all(measured_session, level)
    assert measured_session.measurement is not first
    assert measured_session.measurement.midline_deviation_deg == 0.0
    assert not measured_session.measurement.is_significant


def test_prompt(session):
    assert session.prompt() == "Tap on: Upper Left Central Incisor"
    session.stop()
    assert session.prompt() is None
    session.start()
    place_all(session)
    assert session.prompt() is None


def test_load_image(session, photo_path):
    img = session.load_image(photo_path)
    assert img.shape == (60, 80, 3)
    assert session.image_path == str(photo_path)


def test_load_image_rejects_non_image(session, tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not a photo")
    with pytest.raises(ImageLoadError):
        session.load_image(notes)


def test_load_image_rejects_undecodable_file(session, tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"definitely not png data")
    with pytest.raises(ImageLoadError):
        session.load_image(broken)
    assert session.image_bgr is None


def test_nan_click_never_reaches_measurement(session):
    with pytest.raises(PlacementRefused):
        session.place_marker(float("nan"), 0.0)
    place_all(session)
    assert session.measurement.midline_deviation_deg == 5.7


def test_unknown_extension_is_left_to_the_decoder(session, photo_path, tmp_path):
    unknown = tmp_path / "smile.capture"
    unknown.write_bytes(photo_path.read_bytes())
    img = session.load_image(unknown)
    assert img.shape == (60, 80, 3)
