import logging
from typing import Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from signhook.api.core.config import settings

logger = logging.getLogger("signhook")

# Global Redis client instance
_redis_client: Optional[redis.Redis] = None
_connection_pool: Optional[ConnectionPool] = None


async def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client instance.

    Returns:
        Redis client instance

    Raises:
        ValueError: If REDIS_URL is not configured
    """
    global _redis_client, _connection_pool
    if _redis_client is None:
        if not settings.REDIS_URL:
            raise ValueError(
                "REDIS_URL is not configured. Please set REDIS_URL in your .env file "
                "with a valid Redis URL (e.g., redis://localhost:6379/0)"
            )

        _connection_pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            max_connections=50,
            socket_connect_timeout=5,
            socket_timeout=10,
            socket_keepalive=True,
            retry_on_timeout=True,
            health_check_interval=30,
        )

        _redis_client = redis.Redis(connection_pool=_connection_pool)
        logger.info("Redis client initialized")
    return _redis_client


async def close_redis_client():
    """Close the Redis client connection and pool."""
    global _redis_client, _connection_pool
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
    if _connection_pool:
        await _connection_pool.disconnect()
        _connection_pool = None
        logger.info("Redis client and connection pool closed")
