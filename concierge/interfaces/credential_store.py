# interfaces/credential_store.py
"""
Credential Store
Holds the generation-service API key for the process.
An override set at runtime is persisted in Redis (when reachable) and
wins over the configured value on the next start.
"""

from typing import Optional
from loguru import logger

from ..cache.redis_client import get_redis_client
from ..config import settings


class CredentialStore:
    """
    Zero or one credential per process.

    The key is never validated; an empty value means "absent" and every
    generator degrades to its fallback.
    """

    def __init__(
        self,
        configured: Optional[str] = None,
        redis_client=None,
        use_redis: Optional[bool] = None,
        storage_key: Optional[str] = None,
    ):
        self.storage_key = storage_key or settings.CREDENTIAL_STORAGE_KEY
        self.redis_client = redis_client
        configured = settings.GEMINI_API_KEY if configured is None else configured
        self._configured = configured.strip()
        self._value = self._configured
        self._source = "environment" if self._value else "none"

        if use_redis is None:
            use_redis = settings.REDIS_ENABLED
        if self.redis_client is None and use_redis:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"CredentialStore using in-memory store: {e}")
                self.redis_client = None

        self._load_override()

    def _load_override(self):
        if not self.redis_client:
            return
        try:
            stored = self.redis_client.get(self.storage_key)
        except Exception as e:
            logger.error(f"Redis get error: {e}")
            return
        if stored:
            self._value = stored.strip()
            self._source = "override"
            logger.info("Loaded persisted API credential override")

    def get(self) -> str:
        return self._value

    def has_credential(self) -> bool:
        return bool(self._value)

    @property
    def source(self) -> str:
        """'override', 'environment' or 'none'"""
        return self._source if self._value else "none"

    def set(self, raw: str):
        """Trim and store; an empty value clears the credential and its persisted entry"""
        value = (raw or "").strip()
        self._value = value
        self._source = "override" if value else "none"

        if self.redis_client:
            try:
                if value:
                    self.redis_client.set(self.storage_key, value)
                else:
                    self.redis_client.delete(self.storage_key)
            except Exception as e:
                logger.error(f"Redis save error: {e}")

        logger.info("API credential updated" if value else "API credential cleared")
