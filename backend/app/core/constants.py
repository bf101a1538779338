"""Application-wide constants for the mentorship booking platform."""

from __future__ import annotations

import re

BRAND_NAME = "Mentorship Booking"
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Mentor availability, pricing and booking engine"
API_VERSION = "1.0.0"

# Every session booked through the platform lasts this long (minutes)
DEFAULT_SESSION_DURATION_MINUTES = 60

# 24-hour HH:MM; a leading zero on the hour is optional
TIME_OF_DAY_PATTERN = re.compile(r"(?:[01]?[0-9]|2[0-3]):[0-5][0-9]")

# Loose Region/City check, not an IANA database lookup
TIMEZONE_PATTERN = re.compile(r"[A-Za-z_]+/[A-Za-z_]+")

DEFAULT_MEETING_PLATFORM = "google_meet"

# Text constraints
MAX_SERVICE_NAME_LENGTH = 255
MAX_TOPIC_LENGTH = 500
MAX_NOTES_LENGTH = 2000
MAX_REASON_LENGTH = 1000
