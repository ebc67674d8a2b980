"""
Embed classification and fragment rendering.

* :mod:`delta_ssr.embeds.kinds` – the closed set of embed kinds and their
  oEmbed presentation settings
* :mod:`delta_ssr.embeds.classify` – block promotion and size extraction
* :mod:`delta_ssr.embeds.builders` – HTML fragments per embed kind
* :mod:`delta_ssr.embeds.dispatch` – the custom renderer tying them together
"""

from .classify import embed_kind_name, maybe_get_embed_sizes, should_render_as_block
from .dispatch import aspect_ratio, render_custom_op
from .kinds import (
    BLOCK_EMBED_KINDS,
    DEFAULT_EMBED_CONFIGS,
    EmbedKind,
    EmbedRenderConfig,
    build_embed_configs,
)

__all__ = [
    "BLOCK_EMBED_KINDS",
    "DEFAULT_EMBED_CONFIGS",
    "EmbedKind",
    "EmbedRenderConfig",
    "aspect_ratio",
    "build_embed_configs",
    "embed_kind_name",
    "maybe_get_embed_sizes",
    "render_custom_op",
    "should_render_as_block",
]
