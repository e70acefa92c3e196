"""
Configuration for lang_mustache: engine options, cli run settings and
the TOML loader that merges user, project and profile settings.
"""
from .settings import (
    Escaping,
    EngineOptions,
    RenderConfig,
    DEFAULT_ESCAPING,
    DEFAULT_JOIN_DELIMITER,
)

__all__ = [
    "Escaping",
    "EngineOptions",
    "RenderConfig",
    "DEFAULT_ESCAPING",
    "DEFAULT_JOIN_DELIMITER",
]
