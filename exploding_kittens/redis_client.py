from redis.asyncio import Redis

from exploding_kittens.load_secrets import (
    redis_db,
    redis_host,
    redis_password,
    redis_port,
    redis_socket_timeout,
)

# Centralized client so routers never build their own connection pool.
redis = Redis(
    host=redis_host,
    port=redis_port,
    db=redis_db,
    password=redis_password,
    decode_responses=True,
    health_check_interval=30,
    socket_timeout=redis_socket_timeout,
    socket_connect_timeout=redis_socket_timeout,
)


def get_redis() -> Redis:
    """FastAPI dependency returning the shared Redis client."""
    return redis
