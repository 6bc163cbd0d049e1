"""
Hotel Digital Concierge - FastAPI Application
Guest-facing trip content: local insights, itinerary, chat, avatars and
souvenir postcards, generated by Gemini with fixed fallbacks when the
service is unavailable.
"""

import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .agents.concierge_service import ConciergeService, get_concierge
from .api import chat_router, credential_router, login_router, sessions_router, souvenir_router
from .cache.redis_client import check_redis_health
from .config import settings
from .schemas.ai_schemas import HealthResponse

# Configure logging
logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())


# ============================================
# Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("=" * 50)
    logger.info("Starting Hotel Digital Concierge")
    logger.info("=" * 50)
    logger.info(f"Environment: {settings.API_ENV}")
    logger.info(f"Text model: {settings.GEMINI_TEXT_MODEL}")
    logger.info(f"Image model: {settings.GEMINI_IMAGE_MODEL}")

    concierge = get_concierge()
    if concierge.credential_configured:
        logger.info(f"API credential: {concierge.credentials.source}")
    else:
        logger.warning("No API credential configured; all content will use fallbacks")

    yield

    await concierge.aclose()
    logger.info("Concierge shutdown complete")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="Hotel Digital Concierge",
    description="AI-generated travel content for hotel guests, scoped to their booking.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(login_router)
app.include_router(sessions_router)
app.include_router(chat_router)
app.include_router(souvenir_router)
app.include_router(credential_router)


# ============================================
# REST Endpoints
# ============================================

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Hotel Digital Concierge",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "endpoints": [
            "/api/concierge/health",
            "/api/concierge/login/lookup",
            "/api/concierge/login/avatar",
            "/api/concierge/sessions",
            "/api/concierge/credential"
        ]
    }


@app.get("/api/concierge/health", response_model=HealthResponse)
async def health_check(concierge: ConciergeService = Depends(get_concierge)):
    """Detailed health check"""
    redis_status = "disabled"
    if settings.REDIS_ENABLED:
        client = concierge.credentials.redis_client
        redis_status = "connected" if client is not None and check_redis_health(client) else "unavailable"

    return HealthResponse(
        status="healthy",
        service="hotel-concierge",
        version=__version__,
        credential_configured=concierge.credential_configured,
        redis=redis_status,
        active_sessions=concierge.sessions.count(),
        timestamp=datetime.now(),
    )


# ============================================
# Main
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "concierge.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_ENV == "development"
    )
