# Path: schema_parser/models/config.py
"""
Engine Configuration Schema

Type-safe, validated configuration for the parsing engine using Pydantic.

Design:
- Pydantic v2 for validation and serialization
- Immutable configuration (frozen)
- Defaults match the engine constants
- Can be built from the environment through ConfigLoader
"""

from typing import Optional, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import (
    LARGE_THRESHOLD_BYTES,
    STREAMING_THRESHOLD_BYTES,
    DEFAULT_LAZY_SECTIONS,
    CACHE_MAX_ENTRIES,
    CACHE_RETAIN_ENTRIES,
    MEMORY_MULTIPLIER,
    MEMORY_MARGIN_BYTES,
    CHUNK_SIZE_BYTES,
    GC_INTERVAL_LINES,
    GC_GENERATION,
    PREVIEW_LENGTH,
)

if TYPE_CHECKING:
    from ..config_loader import ConfigLoader


class EngineConfig(BaseModel):
    """
    Type-safe engine configuration with validation.

    Example:
        # Defaults
        config = EngineConfig()

        # Smaller thresholds for tests or constrained hosts
        config = EngineConfig(
            large_threshold_bytes=1024,
            streaming_threshold_bytes=4096
        )

        # From environment (.env + SCHEMA_PARSER_* variables)
        config = EngineConfig.from_loader(ConfigLoader())
    """

    model_config = ConfigDict(frozen=True)

    # ========================================================================
    # STRATEGY SELECTION
    # ========================================================================

    large_threshold_bytes: int = Field(
        default=LARGE_THRESHOLD_BYTES,
        ge=1,
        description="Content size above which lazy section parsing is used"
    )

    streaming_threshold_bytes: int = Field(
        default=STREAMING_THRESHOLD_BYTES,
        ge=1,
        description="Content size above which streaming parsing is used"
    )

    default_sections: tuple[str, ...] = Field(
        default=tuple(DEFAULT_LAZY_SECTIONS),
        description="Sections parsed by the lazy strategy when none are requested"
    )

    # ========================================================================
    # CACHING
    # ========================================================================

    cache_max_entries: int = Field(
        default=CACHE_MAX_ENTRIES,
        ge=1,
        le=100000,
        description="Result cache entry count that triggers pruning"
    )

    cache_retain_entries: int = Field(
        default=CACHE_RETAIN_ENTRIES,
        ge=0,
        description="Most recently inserted entries kept after pruning"
    )

    # ========================================================================
    # MEMORY
    # ========================================================================

    memory_multiplier: float = Field(
        default=MEMORY_MULTIPLIER,
        gt=0.0,
        le=100.0,
        description="Estimated parse tree size as a multiple of the text size"
    )

    memory_margin_bytes: int = Field(
        default=MEMORY_MARGIN_BYTES,
        ge=0,
        description="Extra headroom added when widening the memory ceiling"
    )

    chunk_size_bytes: int = Field(
        default=CHUNK_SIZE_BYTES,
        ge=1,
        description="Chunked parses at or below this size skip negotiation"
    )

    fail_on_memory_unavailable: bool = Field(
        default=True,
        description="Raise when the memory ceiling cannot be widened "
                    "(False returns an empty result instead)"
    )

    # ========================================================================
    # STREAMING
    # ========================================================================

    gc_interval_lines: int = Field(
        default=GC_INTERVAL_LINES,
        ge=0,
        description="Lines between garbage-collection hints (0 disables)"
    )

    gc_generation: int = Field(
        default=GC_GENERATION,
        ge=0,
        le=2,
        description="Generation collected by each streaming GC hint"
    )

    # ========================================================================
    # DIAGNOSTICS
    # ========================================================================

    preview_length: int = Field(
        default=PREVIEW_LENGTH,
        ge=0,
        le=10000,
        description="Characters of content quoted in syntax errors"
    )

    enable_event_logging: bool = Field(
        default=True,
        description="Emit structured start/end/performance events"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('default_sections', mode='before')
    @classmethod
    def _split_sections(cls, value):
        """Accept comma-separated strings from the environment."""
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(',') if part.strip())
        return value

    @model_validator(mode='after')
    def _check_ordering(self) -> 'EngineConfig':
        """Thresholds and cache sizes must be consistent."""
        if self.streaming_threshold_bytes < self.large_threshold_bytes:
            raise ValueError(
                "streaming_threshold_bytes must be >= large_threshold_bytes"
            )
        if self.cache_retain_entries > self.cache_max_entries:
            raise ValueError(
                "cache_retain_entries must be <= cache_max_entries"
            )
        return self

    @classmethod
    def from_loader(cls, loader: Optional['ConfigLoader'] = None) -> 'EngineConfig':
        """
        Build configuration from ConfigLoader values.

        Keys the loader does not define keep their defaults.

        Args:
            loader: ConfigLoader instance (creates the singleton if omitted)

        Returns:
            EngineConfig
        """
        if loader is None:
            from ..config_loader import ConfigLoader
            loader = ConfigLoader()

        values = {}
        for name in cls.model_fields:
            value = loader.get(name)
            if value is not None:
                values[name] = value
        return cls(**values)


__all__ = ['EngineConfig']
