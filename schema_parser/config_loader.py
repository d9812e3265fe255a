# Path: schema_parser/config_loader.py
"""
Configuration Loader for schema_parser

Loads configuration from a .env file and SCHEMA_PARSER_* environment
variables. Singleton pattern ensures consistent configuration across all
components.

NO hardcoded paths, NO magic numbers.
All configuration comes from environment variables.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from .constants import (
    LARGE_THRESHOLD_BYTES,
    STREAMING_THRESHOLD_BYTES,
    CACHE_MAX_ENTRIES,
    CACHE_RETAIN_ENTRIES,
    MEMORY_MULTIPLIER,
    MEMORY_MARGIN_BYTES,
    CHUNK_SIZE_BYTES,
    GC_INTERVAL_LINES,
    GC_GENERATION,
    PREVIEW_LENGTH,
)


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

ENV_PREFIX: str = 'SCHEMA_PARSER_'

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'
DEFAULT_EVENTS_LOG: str = 'parse_events.log'
DEFAULT_MAIN_LOG: str = 'full_activity.log'

# Persistent Cache Defaults
DEFAULT_PERSISTENT_CACHE_MAX_MB: int = 256


class ConfigLoader:
    """
    Singleton configuration loader for schema_parser.

    Loads configuration from environment variables with type conversion
    and sensible defaults.

    Example:
        config = ConfigLoader()
        threshold = config.get('large_threshold_bytes')  # Returns int
        log_dir = config.get('log_dir')  # Returns Path or None
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads the .env file from
        the working directory when present.
        """
        if ConfigLoader._initialized:
            return

        env_path = Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton so the next instantiation re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('ENVIRONMENT', 'development'),
            'debug': self._get_bool('DEBUG', False),

            # ================================================================
            # STRATEGY SELECTION
            # ================================================================
            'large_threshold_bytes': self._get_int(
                'LARGE_THRESHOLD_BYTES', LARGE_THRESHOLD_BYTES
            ),
            'streaming_threshold_bytes': self._get_int(
                'STREAMING_THRESHOLD_BYTES', STREAMING_THRESHOLD_BYTES
            ),
            'default_sections': self._get_env('DEFAULT_SECTIONS', 'core'),

            # ================================================================
            # RESULT CACHE
            # ================================================================
            'cache_max_entries': self._get_int('CACHE_MAX_ENTRIES', CACHE_MAX_ENTRIES),
            'cache_retain_entries': self._get_int(
                'CACHE_RETAIN_ENTRIES', CACHE_RETAIN_ENTRIES
            ),

            # ================================================================
            # MEMORY NEGOTIATION
            # ================================================================
            'memory_multiplier': self._get_float('MEMORY_MULTIPLIER', MEMORY_MULTIPLIER),
            'memory_margin_bytes': self._get_int(
                'MEMORY_MARGIN_BYTES', MEMORY_MARGIN_BYTES
            ),
            'chunk_size_bytes': self._get_int('CHUNK_SIZE_BYTES', CHUNK_SIZE_BYTES),
            'fail_on_memory_unavailable': self._get_bool(
                'FAIL_ON_MEMORY_UNAVAILABLE', True
            ),

            # ================================================================
            # STREAMING
            # ================================================================
            'gc_interval_lines': self._get_int('GC_INTERVAL_LINES', GC_INTERVAL_LINES),
            'gc_generation': self._get_int('GC_GENERATION', GC_GENERATION),

            # ================================================================
            # DIAGNOSTICS & LOGGING
            # ================================================================
            'preview_length': self._get_int('PREVIEW_LENGTH', PREVIEW_LENGTH),
            'enable_event_logging': self._get_bool('ENABLE_EVENT_LOGGING', True),
            'log_dir': self._get_path('LOG_DIR'),
            'log_level': self._get_env('LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('LOG_CONSOLE', True),
            'main_log': self._get_env('MAIN_LOG', DEFAULT_MAIN_LOG),
            'events_log': self._get_env('EVENTS_LOG', DEFAULT_EVENTS_LOG),

            # ================================================================
            # PERSISTENT CACHE
            # ================================================================
            'persistent_cache_dir': self._get_path('PERSISTENT_CACHE_DIR'),
            'persistent_cache_enabled': self._get_bool('PERSISTENT_CACHE_ENABLED', True),
            'persistent_cache_max_mb': self._get_int(
                'PERSISTENT_CACHE_MAX_MB', DEFAULT_PERSISTENT_CACHE_MAX_MB
            ),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Variable name without the SCHEMA_PARSER_ prefix
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(ENV_PREFIX + key)

        if value is None:
            if required:
                raise ValueError(f"Required path not configured: {ENV_PREFIX + key}")
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(ENV_PREFIX + key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"large_threshold_bytes={self._config.get('large_threshold_bytes')})"
        )


__all__ = ['ConfigLoader']
