"""
MetaOrtho Midline Studio

Guided 8-point incisor marker placement, midline deviation measurement and
PDF report export for dental photographs.
"""

from .landmarks import LANDMARK_SEQUENCE, REQUIRED_LANDMARKS, LandmarkId
from .measurement import Measurement, compute_measurement
from .placement import MarkerPlacement, Marker
from .report import ExportStage, ReportExporter
from .session import AnalysisSession

__version__ = "0.1.0"
__all__ = [
    "AnalysisSession",
    "ExportStage",
    "LANDMARK_SEQUENCE",
    "LandmarkId",
    "Marker",
    "MarkerPlacement",
    "Measurement",
    "REQUIRED_LANDMARKS",
    "ReportExporter",
    "compute_measurement",
]
