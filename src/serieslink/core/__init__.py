"""Core utilities for serieslink."""

from serieslink.core.config import (
    MarkerStyle,
    MissingPolicy,
    PublishDefaults,
    SyncConfig,
    load_config,
)
from serieslink.core.errors import (
    ConfigError,
    DirectoryNotFound,
    ParseFailure,
    SeriesLinkError,
    UnresolvedTitleMatch,
    UnterminatedBlock,
)

__all__ = [
    # Config
    "SyncConfig",
    "PublishDefaults",
    "MarkerStyle",
    "MissingPolicy",
    "load_config",
    # Errors
    "SeriesLinkError",
    "ConfigError",
    "DirectoryNotFound",
    "ParseFailure",
    "UnresolvedTitleMatch",
    "UnterminatedBlock",
]
