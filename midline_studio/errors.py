"""Exceptions raised by the midline analysis core."""


class MidlineError(Exception):
    """Base class for all midline analysis errors."""


class PlacementRefused(MidlineError):
    """Marker placement was requested while it cannot be accepted."""


class MissingLandmarks(MidlineError):
    """Measurement was requested before its required landmarks were placed."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        names = ", ".join(landmark.value for landmark in self.missing)
        super().__init__(f"Missing landmarks for measurement: {names}")


class ImageLoadError(MidlineError):
    """Selected file is not a decodable image."""


class ExportError(MidlineError):
    """Report export failed."""


class NothingToExport(ExportError):
    """Export was requested without a measurement or visual surface."""
