"""
Redis Client Management
Handles the Redis connection used for credential persistence
"""

import redis
from functools import lru_cache
from loguru import logger

from ..config import settings


@lru_cache(maxsize=1)
def get_redis_client() -> redis.Redis:
    """
    Get Redis client singleton

    Returns:
        redis.Redis: Connected Redis client

    Raises:
        redis.ConnectionError: If cannot connect to Redis
    """
    try:
        client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD,
            db=settings.REDIS_DB,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5
        )

        client.ping()

        logger.info(
            f"Redis connected: {settings.REDIS_HOST}:{settings.REDIS_PORT} "
            f"(DB: {settings.REDIS_DB})"
        )

        return client

    except redis.ConnectionError as e:
        logger.error(f"Failed to connect to Redis: {e}")
        logger.warning(
            "Redis is not available. The API credential will only be kept in memory. "
            "Make sure Redis is running: redis-server"
        )
        raise


def check_redis_health(client=None) -> bool:
    """
    Check if Redis is healthy

    Returns:
        bool: True if Redis is accessible
    """
    try:
        client = client or get_redis_client()
        client.ping()
        return True
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
