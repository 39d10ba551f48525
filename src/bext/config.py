"""Router and application configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

# Match-cache entry lifetime in milliseconds
DEFAULT_CACHE_TTL = 60_000

DEFAULT_ROUTES_DIR = "app/api"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    ::

        config = RouterConfig(prefix="/api", cache_ttl=5_000)
    """

    # Keep recent (method, path) matches in a TTL cache
    cache: bool = True
    cache_ttl: int = DEFAULT_CACHE_TTL

    # Common path prefix; requests outside it never match
    prefix: str = ""

    # Log every registered route at DEBUG level
    debug: bool = False


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=5002, prefix="/api", debug=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Routing
    routes_dir: str | Path = DEFAULT_ROUTES_DIR
    prefix: str = ""
    cache: bool = True
    cache_ttl: int = DEFAULT_CACHE_TTL

    # Exposed read-only to every handler through the context
    env: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    plugins: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def router_config(self) -> RouterConfig:
        """Project the routing fields onto a :class:`RouterConfig`."""
        return RouterConfig(
            cache=self.cache,
            cache_ttl=self.cache_ttl,
            prefix=self.prefix,
            debug=self.debug,
        )
