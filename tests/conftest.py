import cv2
import numpy as np
import pytest

from midline_studio.session import AnalysisSession

from .helpers import place_all


@pytest.fixture
def session():
    s = AnalysisSession()
    s.set_surface_size(320, 240)
    s.start()
    return s


@pytest.fixture
def measured_session(session):
    place_all(session)
    return session


@pytest.fixture
def photo_path(tmp_path):
    img = np.zeros((60, 80, 3), dtype=np.uint8)
    img[:, :40] = (0, 0, 255)
    path = tmp_path / "smile.png"
    cv2.imwrite(str(path), img)
    return path
