"""Holidays app package.

Read-only proxy for public and school holidays, shown next to the bookings
in the calendar.
"""
