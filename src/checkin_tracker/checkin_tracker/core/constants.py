"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CHECKIN_CAP = 4
DEFAULT_WEEKLY_GOAL = 4
DEFAULT_STUDENT_NAME = "Student 1"
ANNOTATION_SEPARATOR = "; "

# Sun=0 ... Sat=6, same numbering the week clock works in.
FRIDAY = 5
SATURDAY = 6
SUNDAY = 0

ISO_DATE_FORMAT = "%Y-%m-%d"
