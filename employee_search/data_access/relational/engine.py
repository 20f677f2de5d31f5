from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

_engines: dict[str, AsyncEngine] = {}


def create_engine(connection_url: str, key: str = "default") -> AsyncEngine:
    """Create the pooled async engine for the given URL. Cached by key."""
    if key in _engines:
        return _engines[key]
    engine = create_async_engine(
        connection_url,
        echo=False,
        pool_pre_ping=True,
    )
    _engines[key] = engine
    return engine


def get_engine(key: str = "default") -> AsyncEngine | None:
    return _engines.get(key)


async def dispose_engines() -> None:
    while _engines:
        _, engine = _engines.popitem()
        await engine.dispose()
