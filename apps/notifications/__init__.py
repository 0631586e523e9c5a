"""Notifications app package.

Overlap requests and their answers, stored per recipient and optionally
delivered by e-mail through Celery once the booking transaction commits.
"""
