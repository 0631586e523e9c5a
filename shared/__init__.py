"""
Shared Kernel

Value objects, domain events and the transaction plumbing (unit of work,
message bus) used by every app of the calendar.
"""
