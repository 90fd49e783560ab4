"""Application configuration helpers."""

from __future__ import annotations

from .apify import (
    ACTOR_TIMEOUT_SECONDS,
    APIFY_BASE_URL,
    ApifyConfig,
    default_apify_resilience,
    get_apify_config,
)
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconciliation import (
    DEFAULT_GROUP_SIZE,
    EXHIBITION_TIMEZONE,
    TRANSACTION_OPERATION_LIMIT,
    ReconciliationConfig,
    get_reconciliation_config,
)
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "ACTOR_TIMEOUT_SECONDS",
    "APIFY_BASE_URL",
    "DEFAULT_GROUP_SIZE",
    "EXHIBITION_TIMEZONE",
    "TRANSACTION_OPERATION_LIMIT",
    "ApifyConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "default_apify_resilience",
    "get_apify_config",
    "get_database_config",
    "get_database_uri",
    "get_reconciliation_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
