"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class OverlapRequested(DomainEvent):
    """
    Event: A pending segment was created on top of someone else's stay

    Triggers:
    - E-mail the owner of the colliding stay
    """
    notification_id: int = None
    recipient_id: int = None
    requester_id: int = None
    overlap_start: date = None
    overlap_end: date = None


@dataclass
class OverlapResponded(DomainEvent):
    """
    Event: The owner of a stay acknowledged or rejected an overlap request

    Triggers:
    - E-mail the requester (notification_id is the one addressed to them)
    """
    notification_id: int = None
    recipient_id: int = None
    response: str = ''
