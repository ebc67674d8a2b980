"""
Rendering of custom (non-text) delta operations.

:func:`render_custom_op` is registered as the custom renderer of the delta
converter. Dispatch is a match over :class:`EmbedKind` with two default arms
for kinds this package does not know: a padding placeholder when the payload
carries a size, and a neutral ``<div></div>`` otherwise. Every custom
operation therefore yields a non-empty fragment.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Mapping, Optional

from delta_ssr.utils.errors import report_error, report_ok
from .builders import (
    NEUTRAL_PLACEHOLDER,
    block_image,
    inline_spoiler_text,
    oembed_base,
    ratio_placeholder,
    tumblr_embed,
    tweet_embed,
)
from .classify import embed_kind_name, maybe_get_embed_sizes
from .kinds import DEFAULT_EMBED_CONFIGS, EmbedKind, EmbedRenderConfig

__all__ = ["render_custom_op", "aspect_ratio"]

_DEDICATED_BUILDERS: Dict[EmbedKind, Callable[[Any], str]] = {
    EmbedKind.BLOCK_IMAGE: block_image,
    EmbedKind.TWEET: tweet_embed,
    EmbedKind.TUMBLR_EMBED: tumblr_embed,
    EmbedKind.INLINE_SPOILERS_TEXT: inline_spoiler_text,
}


def aspect_ratio(sizes: Optional[Dict[str, Any]]) -> Optional[float]:
    """
    ``height / width * 100`` for an embed size pair, or ``None`` when either
    side is not a positive finite number.

    Values must be numbers or numeric strings as a whole: unit suffixes such
    as ``"100px"`` are rejected rather than read up to the first non-digit.
    """
    if not sizes:
        return None
    try:
        width = float(str(sizes["width"]).strip())
        height = float(str(sizes["height"]).strip())
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0:
        return None
    return height / width * 100


def render_custom_op(
    op: Dict[str, Any],
    context_op: Optional[Dict[str, Any]] = None,
    *,
    embed_configs: Optional[Mapping[EmbedKind, EmbedRenderConfig]] = None,
    report_dir: Optional[str] = None,
) -> str:
    """
    Produce the HTML fragment for a custom operation.

    ``context_op`` is the line the operation belongs to, as handed over by
    the converter; it is accepted for signature compatibility and unused.
    """
    configs = DEFAULT_EMBED_CONFIGS if embed_configs is None else embed_configs
    name = embed_kind_name(op) or ""
    value = op["insert"].get(name) if name else None
    kind = EmbedKind.lookup(name)

    if kind in _DEDICATED_BUILDERS:
        return _DEDICATED_BUILDERS[kind](value)
    if kind in configs:
        config = configs[kind]
        return oembed_base(
            value,
            loading_message=config.loading_message,
            background_color=config.background_color,
            extra_class=config.extra_class,
            ratio=aspect_ratio(maybe_get_embed_sizes(op)),
        )

    sizes = maybe_get_embed_sizes(op)
    if sizes:
        ratio = aspect_ratio(sizes)
        if ratio is not None:
            return ratio_placeholder(ratio)
        report_error("INVALID_EMBED_SIZE", {"embed": name, "sizes": sizes}, report_dir=report_dir)
        return NEUTRAL_PLACEHOLDER

    # Kinds from newer editors are expected; only batch runs keep a trace.
    if report_dir:
        report_ok("UNKNOWN_EMBED", {"embed": name}, report_dir=report_dir)
    return NEUTRAL_PLACEHOLDER
