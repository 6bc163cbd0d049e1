"""
Cache Module
Per-session content caches and the Redis connection
"""

from .redis_client import get_redis_client, check_redis_health
from .content_cache import ContentCache, InFlightRegistry

__all__ = [
    "get_redis_client",
    "check_redis_health",
    "ContentCache",
    "InFlightRegistry"
]
