import logging
from typing import Optional

from redis.exceptions import RedisError

from signhook.api.core.config import settings
from signhook.api.core.dependencies.redis_service import get_redis_client

logger = logging.getLogger(__name__)


class SignatureCache:
    """
    Short-lived store for uploaded signature images.

    Values are data URLs keyed by an opaque reference the checkout metadata
    carries as ``signatureDataUrl``. Entries expire on their own; reads are
    best effort.
    """

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = settings.SIGNATURE_CACHE_PREFIX if prefix is None else prefix

    def _key(self, ref: str) -> str:
        return f"{self.prefix}{ref}"

    async def get(self, ref: str) -> Optional[str]:
        """
        Look up a signature data URL.

        Args:
            ref: Reference stored in the checkout metadata.

        Returns:
            The data URL, or None on a miss or when Redis is unavailable.
        """
        if not ref:
            return None

        try:
            redis_client = await get_redis_client()
            value = await redis_client.get(self._key(ref))
        except RedisError as e:
            logger.warning("Signature cache lookup failed for %s: %s", ref, e)
            return None

        if not value:
            logger.info("Signature cache miss for %s", ref)
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def put(self, ref: str, data_url: str, ttl: Optional[int] = None) -> None:
        """
        Store a signature data URL.

        Args:
            ref: Reference the checkout metadata will carry.
            data_url: ``data:image/...;base64,...`` string.
            ttl: Expiry in seconds, defaults to SIGNATURE_CACHE_TTL_SECONDS.
        """
        ttl = settings.SIGNATURE_CACHE_TTL_SECONDS if ttl is None else ttl
        redis_client = await get_redis_client()
        await redis_client.setex(self._key(ref), ttl, data_url)


def get_signature_cache() -> SignatureCache:
    """FastAPI dependency returning the configured signature cache."""
    return SignatureCache()
