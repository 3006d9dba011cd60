"""Service layer package.

Exports high-level services consumed by orchestration / presentation layers.
"""

from .conversion_service import (
    ConversionService,
    ConversionServiceConfig,
    split_gpx_paths,
)

__all__ = ["ConversionService", "ConversionServiceConfig", "split_gpx_paths"]
