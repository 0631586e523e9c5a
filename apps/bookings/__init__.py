"""Bookings app package.

Holds the booking model, the segmentation algorithm that splits a request
around other members' stays, and the command handlers that run it inside
one transaction.
"""
