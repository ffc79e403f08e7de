"""
baucrew/booking/policy.py

Address Visibility Policy

A provider only learns the customer's street address once payment for the
booking has been confirmed. Before that the street lines are returned as empty
strings; city and postal code are always visible for planning the job.

Redaction happens while building the response, never on the stored booking.
"""

from baucrew.booking.models import Booking, BookingStatus

# Statuses reached only after payment was confirmed (including terminal ones)
ADDRESS_VISIBLE_STATUSES = frozenset(
    {
        BookingStatus.PAID,
        BookingStatus.SCHEDULED,
        BookingStatus.IN_PROGRESS,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELED,
        BookingStatus.DISPUTED,
        BookingStatus.REFUNDED,
    }
)


def should_show_full_address_to_provider(status: BookingStatus | str) -> bool:
    """
    Return True when a provider may see the street address of a booking in this status.

    >>> should_show_full_address_to_provider(BookingStatus.NEEDS_PAYMENT)
    False
    >>> should_show_full_address_to_provider("PAID")
    True
    """
    try:
        return BookingStatus(status) in ADDRESS_VISIBLE_STATUSES
    except ValueError:
        return False


def provider_address_lines(booking: Booking) -> tuple[str, str]:
    """Street lines as a provider may see them; a missing second line becomes ""."""
    if not should_show_full_address_to_provider(booking.status):
        return "", ""
    return booking.address_line1, booking.address_line2 or ""
