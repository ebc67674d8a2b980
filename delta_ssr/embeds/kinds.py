from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class EmbedKind(str, Enum):
    BLOCK_IMAGE = "block-image"
    TWEET = "tweet"
    TUMBLR_EMBED = "tumblr-embed"
    PIXIV_EMBED = "pixiv-embed"
    TIKTOK_EMBED = "tiktok-embed"
    OEMBED_EMBED = "oembed-embed"
    INLINE_SPOILERS_TEXT = "inline-spoilers-text"

    @classmethod
    def lookup(cls, name: str) -> Optional["EmbedKind"]:
        """Return the member named ``name`` or ``None`` for kinds this renderer does not know."""
        try:
            return cls(name)
        except ValueError:
            return None


# Kinds that always render as their own block, whatever their payload.
BLOCK_EMBED_KINDS = frozenset(
    {
        EmbedKind.BLOCK_IMAGE,
        EmbedKind.TWEET,
        EmbedKind.TUMBLR_EMBED,
        EmbedKind.PIXIV_EMBED,
        EmbedKind.TIKTOK_EMBED,
        EmbedKind.OEMBED_EMBED,
    }
)


class EmbedRenderConfig(BaseModel):
    """Presentation settings handed to the shared oEmbed fragment builder."""

    model_config = ConfigDict(frozen=True)

    loading_message: str
    background_color: str
    extra_class: Optional[str] = None


DEFAULT_EMBED_CONFIGS: Mapping[EmbedKind, EmbedRenderConfig] = {
    EmbedKind.PIXIV_EMBED: EmbedRenderConfig(
        extra_class="ql-pixiv-embed",
        loading_message="行っ・・・行っちゃう!",
        background_color="#0096fa",
    ),
    EmbedKind.TIKTOK_EMBED: EmbedRenderConfig(
        extra_class="ql-tiktok-embed",
        loading_message="Hello fellow kids, it's TikTok time™",
        background_color="aquamarine",
    ),
    EmbedKind.OEMBED_EMBED: EmbedRenderConfig(
        loading_message="Doing my best!",
        background_color="#e6e6e6",
    ),
}


def build_embed_configs(overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[EmbedKind, EmbedRenderConfig]:
    """
    Merge per-kind overrides (keyed by kind name, e.g. ``"tiktok-embed"``)
    over :data:`DEFAULT_EMBED_CONFIGS`. Overrides for kinds that do not use
    the oEmbed builder are rejected with ``ValueError``.
    """
    configs = dict(DEFAULT_EMBED_CONFIGS)
    for name, fields in (overrides or {}).items():
        kind = EmbedKind.lookup(name)
        if kind not in configs:
            raise ValueError(f"No oEmbed configuration for embed kind '{name}'")
        configs[kind] = configs[kind].model_copy(update=dict(fields or {}))
    return configs
