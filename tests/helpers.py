from midline_studio.landmarks import LANDMARK_SEQUENCE, LandmarkId

# Upper centrals level, lower centrals tilted about 5.7 degrees.
TILTED_POINTS = {
    LandmarkId.UPPER_LEFT_CENTRAL: (0.0, 0.0),
    LandmarkId.UPPER_LEFT_LATERAL: (-20.0, 5.0),
    LandmarkId.UPPER_RIGHT_CENTRAL: (100.0, 0.0),
    LandmarkId.UPPER_RIGHT_LATERAL: (120.0, 5.0),
    LandmarkId.LOWER_LEFT_CENTRAL: (0.0, 50.0),
    LandmarkId.LOWER_LEFT_LATERAL: (-20.0, 55.0),
    LandmarkId.LOWER_RIGHT_CENTRAL: (100.0, 60.0),
    LandmarkId.LOWER_RIGHT_LATERAL: (120.0, 65.0),
}


def place_all(session, points=None):
    """Place every landmark in sequence order from a {LandmarkId: (x, y)} map."""
    points = points or TILTED_POINTS
    for landmark in LANDMARK_SEQUENCE:
        session.place_marker(*points[landmark])
