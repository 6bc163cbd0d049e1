# api/__init__.py
"""
API Endpoints Package

Contains all FastAPI routers for the concierge service:
- login: Booking lookup, avatars, journey start
- sessions: Session lookup and the dashboard
- chat: Concierge chat
- souvenir: Post-checkout postcard
- credential: API key management
"""

from .login import router as login_router
from .sessions import router as sessions_router
from .chat import router as chat_router
from .souvenir import router as souvenir_router
from .credential import router as credential_router

__all__ = [
    "login_router",
    "sessions_router",
    "chat_router",
    "souvenir_router",
    "credential_router"
]
