"""Helper function to create Redis clients with SSL support for hosted providers."""

from __future__ import annotations

import ssl
from typing import Any

from redis import Redis

HOSTED_TLS_DOMAINS = (".upstash.io",)


def _needs_tls(url: str) -> bool:
    return url.startswith("rediss://") or any(d in url for d in HOSTED_TLS_DOMAINS)


def create_redis_client(url: str, **kwargs: Any) -> Redis:
    """Create a Redis client for the snapshot store.

    Hosted providers that only accept TLS get their ``redis://`` URL upgraded
    to ``rediss://`` and certificate verification relaxed.

    Args:
        url: Redis connection URL (redis:// or rediss://)
        **kwargs: Extra client options (decode_responses, socket_connect_timeout, ...)

    Returns:
        Configured Redis client
    """
    if url.startswith("redis://") and _needs_tls(url):
        url = url.replace("redis://", "rediss://", 1)

    client = Redis.from_url(url, **kwargs)

    if _needs_tls(url):
        pool_kwargs = getattr(client.connection_pool, "connection_kwargs", None)
        if pool_kwargs is not None:
            pool_kwargs["ssl_cert_reqs"] = ssl.CERT_NONE

    return client
