# agents/__init__.py
"""
Agents Package

Contains the coordinators and the service facade:
- DashboardCoordinator: Attractions, images, itinerary, insights, chat
- SouvenirCoordinator: Post-checkout postcard
- ConciergeService: Login flow, sessions, credential
"""

from .dashboard import DashboardCoordinator
from .souvenir import SouvenirCoordinator
from .concierge_service import ConciergeService, get_concierge

__all__ = [
    "DashboardCoordinator",
    "SouvenirCoordinator",
    "ConciergeService",
    "get_concierge"
]
