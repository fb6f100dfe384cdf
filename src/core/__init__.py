"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    FrozenModel,
    DocumentValidator,
    validate_document,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, hash_string, hash_bytes, hash_fields, hash_object
from .cache import LRUCache, Stats


def create_container(settings: Settings | None = None, configure_logs: bool = False):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings, configure_logs)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "FrozenModel",
    "DocumentValidator",
    "validate_document",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_bytes",
    "hash_fields",
    "hash_object",
    # Caching
    "LRUCache",
    "Stats",
]
