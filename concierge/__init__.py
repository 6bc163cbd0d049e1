# concierge/__init__.py
"""
Hotel Digital Concierge Package

Guest-facing trip content generated from a booking:
- Local insights for nearby and must-see attractions
- Daily itinerary and concierge chat
- Traveler avatars and attraction icons
- Souvenir postcards after checkout

Trip lifecycle:
1. Upcoming / during stay -> dashboard
2. Completed -> souvenir
"""

__version__ = "1.0.0"
__author__ = "Concierge Team"

# Package structure:
# concierge/
# ├── __init__.py           <- This file
# ├── main.py               <- FastAPI application entry
# ├── config.py             <- Configuration settings
# │
# ├── agents/               <- Coordinators
# │   ├── dashboard.py      <- Attractions, images, itinerary, insights, chat
# │   ├── souvenir.py       <- Caption + postcard
# │   └── concierge_service.py <- Login flow, sessions, credential
# │
# ├── api/                  <- FastAPI Routers
# │   ├── login.py          <- /api/concierge/login, /api/concierge/sessions
# │   ├── sessions.py       <- /api/concierge/sessions/{id}/dashboard
# │   ├── chat.py           <- /api/concierge/sessions/{id}/chat
# │   ├── souvenir.py       <- /api/concierge/sessions/{id}/souvenir
# │   └── credential.py     <- /api/concierge/credential
# │
# ├── cache/                <- Content caches, Redis client
# ├── interfaces/           <- Credential, bookings, sessions
# │
# ├── llm/                  <- Generation layer
# │   ├── transport.py      <- Gemini REST calls
# │   ├── normalizer.py     <- Response extraction
# │   ├── prompts.py        <- Prompt templates
# │   └── generators.py     <- One generator per content kind
# │
# └── schemas/              <- Pydantic Models
#     └── ai_schemas.py
