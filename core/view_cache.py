"""
Cached renderings of dashboard views, keyed by view path.

Writes to invoices make the listing stale; revalidate_path() drops the cached
copy so the next read rebuilds it. Cache trouble never fails a request that
has already committed: errors are logged and reads fall through to a miss.
"""

import logging

import redis

from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class ViewCache:
    """Valkey-backed cache of view data, one key per path."""

    def __init__(self, valkey: ValkeyClient, prefix: str = "view", ttl_seconds: int = 300):
        self.valkey = valkey
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds

    def key_for(self, path: str) -> str:
        return f"{self.prefix}:{path}"

    def get(self, path: str) -> list | dict | None:
        """Cached data for path, or None on a miss or a cache error."""
        try:
            return self.valkey.get_json(self.key_for(path))
        except (redis.RedisError, ValueError):
            logger.exception("View cache read failed for %s", path)
            return None

    def put(self, path: str, value: list | dict) -> None:
        try:
            self.valkey.set_json(self.key_for(path), value, expire_seconds=self.ttl_seconds)
        except redis.RedisError:
            logger.exception("View cache write failed for %s", path)

    def revalidate_path(self, path: str) -> bool:
        """
        Drop the cached copy of path.

        Returns False if the cache could not be reached; the stale entry then
        lives until its TTL.
        """
        try:
            self.valkey.delete(self.key_for(path))
        except redis.RedisError:
            logger.exception("View cache invalidation failed for %s", path)
            return False
        logger.debug("Revalidated %s", path)
        return True
