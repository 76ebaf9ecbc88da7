from __future__ import annotations

from .embed import EmbedConfig, EmitConfig, ImageEntry, load_embed_config
from .io import load_config

__all__ = [
    "EmbedConfig",
    "EmitConfig",
    "ImageEntry",
    "load_config",
    "load_embed_config",
]
