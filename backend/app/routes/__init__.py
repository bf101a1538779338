# backend/app/routes/__init__.py
from . import (
    bookings as bookings,
    dashboard as dashboard,
    health as health,
    mentors as mentors,
    prometheus as prometheus,
)
