"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_FACE_CONFIDENCE_THRESHOLD = 80
QR_CODE_PREFIX = "QR_"
ISO_DATE_FORMAT = "%Y-%m-%d"

REPORT_SHEET_NAME = "Attendance Report"
REPORT_HEADERS = (
    "Admission No",
    "Name",
    "Class",
    "Total Days",
    "Present Days",
    "Absent Days",
    "Attendance %",
)

# PDF layout, in points measured from the top of the page.
PDF_TABLE_TOP = 200
PDF_ROW_HEIGHT = 15
PDF_PAGE_BREAK_Y = 700
PDF_CONTINUATION_TOP = 50
PDF_COLUMN_X = (50, 150, 250, 300, 350, 400)
