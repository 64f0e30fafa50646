# ==============================
# Landmark group colors
# ==============================
UPPER_ARCH_COLOR = "#3B82F6"
LOWER_ARCH_COLOR = "#10B981"

# ==============================
# Overlay drawing
# ==============================
MARKER_OUTER_RADIUS = 8
MARKER_INNER_RADIUS = 4
MARKER_INNER_COLOR = "#ffffff"
MARKER_LABEL_COLOR = "#000000"
MARKER_LABEL_SIZE = 10
MARKER_LABEL_OFFSET = 10  # Label sits above the marker center.
CENTRAL_LINE_WIDTH = 2
LATERAL_LINE_COLOR = "#888888"
LATERAL_LINE_DASH = (2, 2)
MIDLINE_GUIDE_COLOR = "#000000"
MIDLINE_GUIDE_DASH = (5, 5)
MIDLINE_GUIDE_HALF_LENGTH = 100.0

# ==============================
# Visual surface and rasterization
# ==============================
SURFACE_BG = "#f3f4f6"
FALLBACK_BACKGROUND_COLOR = "#f3f4f6"
FALLBACK_FOREGROUND_COLOR = "#000000"
RASTER_SCALE = 2

# ==============================
# Measurement
# ==============================
SIGNIFICANT_DEVIATION_DEG = 3.0

# ==============================
# PDF report layout (mm, A4 portrait)
# ==============================
REPORT_FILENAME = "midline_report.pdf"
REPORT_TITLE = "Midline Analysis Report"
REPORT_FONT = "helvetica"
REPORT_TITLE_SIZE = 16
REPORT_BODY_SIZE = 12
REPORT_MARGIN = 20
REPORT_TITLE_Y = 20
REPORT_FIRST_LINE_Y = 30
REPORT_LINE_SPACING = 10
REPORT_IMAGE_Y = 60
