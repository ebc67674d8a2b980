from __future__ import annotations

from html import escape
from typing import Any, Dict, Optional, Union


EmbedValue = Union[str, Dict[str, Any], None]

NEUTRAL_PLACEHOLDER = "<div></div>"

SPOILER_CLASS = "inline-spoilers"


# --- Helpers ---

def _field(value: EmbedValue, key: str, default: Any = "") -> Any:
    if isinstance(value, dict):
        found = value.get(key)
        return default if found is None else found
    return default


def _class_attr(*names: Optional[str]) -> str:
    return " ".join(n for n in names if n)


def format_ratio(ratio: float) -> str:
    """Render a percentage without a trailing ``.0`` for integral ratios."""
    if float(ratio).is_integer():
        return str(int(ratio))
    return repr(float(ratio))


# --- Builders for embed fragments ---

def ratio_placeholder(ratio: float) -> str:
    return f'<div style="padding-top: {format_ratio(ratio)}%"></div>'


def block_image(value: EmbedValue) -> str:
    src = value if isinstance(value, str) else _field(value, "src") or _field(value, "url")
    alt = _field(value, "alt")
    classes = _class_attr("ql-block-image", "spoilers" if _field(value, "spoilers", False) else None)
    caption = _field(value, "caption")
    parts = [f'<div class="{classes}">']
    parts.append(f'<img src="{escape(str(src))}" alt="{escape(str(alt))}"/>')
    if caption:
        parts.append(f'<div class="ql-block-image-caption">{escape(str(caption))}</div>')
    parts.append("</div>")
    return "".join(parts)


def tweet_embed(value: EmbedValue) -> str:
    tweet_id = value if isinstance(value, str) else _field(value, "tweetId")
    url = _field(value, "url") or f"https://twitter.com/i/status/{tweet_id}"
    return (
        f'<div class="ql-tweet" data-tweet-id="{escape(str(tweet_id))}">'
        f'<blockquote class="twitter-tweet"><a href="{escape(url)}">{escape(url)}</a></blockquote>'
        "</div>"
    )


def tumblr_embed(value: EmbedValue) -> str:
    href = _field(value, "href")
    did = _field(value, "did")
    url = value if isinstance(value, str) else _field(value, "url") or href
    return (
        '<div class="ql-tumblr-embed">'
        f'<div class="tumblr-post" data-href="{escape(str(href))}" data-did="{escape(str(did))}">'
        f'<a href="{escape(str(url))}">{escape(str(url))}</a>'
        "</div></div>"
    )


def oembed_base(
    value: EmbedValue,
    *,
    loading_message: str,
    background_color: str,
    extra_class: Optional[str] = None,
    ratio: Optional[float] = None,
) -> str:
    """
    Shared markup for third-party embeds resolved client-side through oEmbed.

    The fragment shows ``loading_message`` over ``background_color`` until
    the embed is hydrated. When ``ratio`` is known a padding placeholder
    reserves the final height.
    """
    url = value if isinstance(value, str) else _field(value, "url")
    classes = _class_attr("ql-oembed-embed", extra_class)
    parts = [
        f'<div class="{classes}" data-url="{escape(str(url))}" '
        f'style="background-color: {escape(background_color)}">',
        f'<div class="loading-message">{escape(loading_message)}</div>',
    ]
    if ratio is not None:
        parts.append(ratio_placeholder(ratio))
    parts.append("</div>")
    return "".join(parts)


def inline_spoiler_text(value: EmbedValue) -> str:
    text = value if isinstance(value, str) else _field(value, "text")
    return f'<span class="{SPOILER_CLASS}">{escape(str(text))}</span>'
