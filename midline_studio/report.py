"""
PDF export of the midline analysis.

The exporter snapshots the session (measurement plus a detached scene of the
visual surface) when export starts, rasterizes the scene and composes a
single A4 page: title, three measurement lines and the annotated image.
"""

import enum
import logging
import os
import tempfile
from dataclasses import dataclass

import cv2
from fpdf import FPDF

from .errors import ExportError, NothingToExport
from .measurement import Measurement, format_degrees
from .raster import rasterize
from .scene import build_scene
from .settings import (
    RASTER_SCALE,
    REPORT_BODY_SIZE,
    REPORT_FILENAME,
    REPORT_FIRST_LINE_Y,
    REPORT_FONT,
    REPORT_IMAGE_Y,
    REPORT_LINE_SPACING,
    REPORT_MARGIN,
    REPORT_TITLE,
    REPORT_TITLE_SIZE,
    REPORT_TITLE_Y,
)

logger = logging.getLogger(__name__)


class ExportStage(enum.Enum):
    IDLE = "idle"
    SNAPSHOTTING = "snapshotting"
    COMPOSING = "composing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    path: str
    measurement: Measurement
    raster_size: tuple  # (width, height) in pixels


def report_lines(measurement):
    """Labeled measurement lines printed under the report title."""
    return [
        f"Upper Angle: {format_degrees(measurement.upper_angle_deg)}",
        f"Lower Angle: {format_degrees(measurement.lower_angle_deg)}",
        f"Midline Deviation: {format_degrees(measurement.midline_deviation_deg)}",
    ]


def fit_image_to_width(img_w, img_h, target_w):
    """Scale (img_w, img_h) to target_w keeping the aspect ratio."""
    return target_w, (img_h * target_w) / img_w


class ReportExporter:
    """
    Runs one export at a time through IDLE -> SNAPSHOTTING -> COMPOSING -> DONE,
    ending in FAILED if any stage raises.

    `progress` is an optional callable (percent, text) used by the UI to
    drive its progress popup.
    """

    def __init__(self, progress=None, raster_scale=RASTER_SCALE):
        self.progress = progress
        self.raster_scale = raster_scale
        self.stage = ExportStage.IDLE

    def _report_progress(self, value, text):
        if self.progress is not None:
            self.progress(value, text)

    def export(self, session, output_path=REPORT_FILENAME) -> ExportResult:
        """
        Write the report PDF to `output_path`.

        Raises NothingToExport (stage unchanged) when there is no measurement
        or visual surface, and ExportError when rendering or writing fails.
        The session is only read, never modified.
        """
        self.stage = ExportStage.IDLE
        if session.measurement is None or session.surface_size is None:
            raise NothingToExport("No measurements to export or visual surface not found.")

        measurement = session.measurement

        image_path = None
        try:
            self.stage = ExportStage.SNAPSHOTTING
            # Scene is captured before the first progress callback; later edits
            # to the session do not change an export already in progress.
            scene = build_scene(session)
            self._report_progress(10, "Rendering annotated image...")
            raster = rasterize(scene, self.raster_scale)
            raster_h, raster_w = raster.shape[:2]

            with tempfile.NamedTemporaryFile(suffix="_midline_snapshot.png", delete=False) as tmp:
                image_path = tmp.name
            if not cv2.imwrite(image_path, raster):
                raise ExportError("Could not encode snapshot as PNG.")

            self.stage = ExportStage.COMPOSING
            self._report_progress(50, "Composing PDF page...")
            pdf = FPDF("P", "mm", "A4")
            pdf.set_auto_page_break(auto=False)
            pdf.add_page()

            pdf.set_font(REPORT_FONT, size=REPORT_TITLE_SIZE)
            pdf.text(REPORT_MARGIN, REPORT_TITLE_Y, REPORT_TITLE)
            pdf.set_font(REPORT_FONT, size=REPORT_BODY_SIZE)
            for i, line in enumerate(report_lines(measurement)):
                pdf.text(REPORT_MARGIN, REPORT_FIRST_LINE_Y + i * REPORT_LINE_SPACING, line)

            image_w, image_h = fit_image_to_width(raster_w, raster_h, pdf.w - 2 * REPORT_MARGIN)
            pdf.image(image_path, x=REPORT_MARGIN, y=REPORT_IMAGE_Y, w=image_w, h=image_h)

            self._report_progress(90, "Writing PDF to disk...")
            pdf.output(os.fspath(output_path))

            self.stage = ExportStage.DONE
            self._report_progress(100, "Done.")
        except Exception as exc:
            self.stage = ExportStage.FAILED
            logger.exception("Error exporting PDF")
            if isinstance(exc, ExportError):
                raise
            raise ExportError(f"Failed to export PDF: {exc}") from exc
        finally:
            if image_path and os.path.exists(image_path):
                os.remove(image_path)

        logger.info("Exported midline report to %s", output_path)
        return ExportResult(os.fspath(output_path), measurement, (raster_w, raster_h))
