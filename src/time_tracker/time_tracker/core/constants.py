"""Shared formats, labels and defaults."""

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"

# Nominal calendar date used to turn two times-of-day into datetimes.
NOMINAL_DATE = (2000, 1, 1)

ALL_TIME_LABEL = "All Time"

DEFAULT_HR_EMAIL = "hr@company.com"
DEFAULT_COMPANY_NAME = "Sense Projects Pvt Ltd"
SYSTEM_NAME = "Sense Time Tracker"

DEFAULT_SMTP_TIMEOUT_SECONDS = 15
