"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# 0 = Monday ... 6 = Sunday (datetime.date.weekday convention)
DEFAULT_WEEK_START = 0

CSV_HEADER = (
    "Employee ID",
    "Employee Name",
    "Date",
    "Clock In",
    "Clock Out",
    "Total Hours",
    "Status",
)

EXPORT_FILENAME_TEMPLATE = "timesheet_{start}_to_{end}.{ext}"
EXCEL_SHEET_NAME = "Timesheet"
