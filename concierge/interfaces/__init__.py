# interfaces/__init__.py
"""
Interfaces Package

Contains the service's boundaries and stores:
- credential_store: API credential (Redis with in-memory fallback)
- booking_directory: Reservation lookup and curated attractions
- session_store: Journey sessions and their coordinators
"""

from .credential_store import CredentialStore
from .booking_directory import BookingDirectory, PRESET_AVATARS, trip_status
from .session_store import SessionStore

__all__ = [
    "CredentialStore",
    "BookingDirectory",
    "PRESET_AVATARS",
    "trip_status",
    "SessionStore"
]
