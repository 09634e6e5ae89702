"""Fixed calendar constants.

Days per month and seconds per minute vary at runtime (leap days, leap
seconds); only their typical values live here.
"""

# NTP era 0 starts at 1900-01-01; leap-seconds.list offsets count from it.
REFERENCE_YEAR = 1900
DEFAULT_EPOCH_YEAR = 1900
END_YEAR = 9999

MONTHS_PER_YEAR = 12
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
TYPICAL_SECONDS_PER_MINUTE = 60
TYPICAL_DAYS_PER_YEAR = 365

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_YEAR = TYPICAL_DAYS_PER_YEAR * SECONDS_PER_DAY

TYPICAL_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
FEBRUARY = 2

START_MONTH = 1
START_DAY = 1
START_HOUR = 0
START_MINUTE = 0
START_SECOND = 0
START_FRACTION = 0.0

END_MONTH = 12
END_HOUR = 23
END_MINUTE = 59
END_FRACTION = 1.0
