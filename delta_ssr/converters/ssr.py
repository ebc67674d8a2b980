"""
Server-side rendering of delta documents.

The pipeline runs in a fixed order:

1. the input is validated and normalized to a list of operations;
2. embeds that must stand on their own line get ``renderAsBlock``;
3. :class:`DeltaToHtmlConverter` renders the groups, calling
   :func:`render_custom_op` for embeds and merging spoiler runs in every
   inline group right after it is rendered;
4. empty paragraphs are marked on the assembled document.

Step 4 matches literal markup and therefore has to see the fragments as
re-serialized by the spoiler merge in step 3, never the other way round.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Dict, List, Mapping, Optional

from delta_ssr.embeds.classify import maybe_get_embed_sizes, should_render_as_block
from delta_ssr.embeds.dispatch import render_custom_op
from delta_ssr.embeds.kinds import EmbedKind, EmbedRenderConfig, build_embed_configs
from delta_ssr.models.delta import normalize_delta
from delta_ssr.postprocess.normalize import mark_empty_paragraphs
from delta_ssr.postprocess.spoilers import SPOILER_CLASS, merge_spoilers_after_render
from .delta_html import DeltaToHtmlConverter

__all__ = [
    "SsrConverter",
    "get_ssr_converter",
    "convert_delta_to_html",
    "promote_block_ops",
    "ssr_css_classes",
    "maybe_get_embed_sizes",
    "should_render_as_block",
]

SYNTAX_CLASS = "ql-syntax"

# Options forced by the pipeline: every line is its own paragraph/blockquote.
SSR_CONVERTER_OPTIONS: Dict[str, Any] = {
    "multi_line_paragraph": False,
    "multi_line_blockquote": False,
}


def ssr_css_classes(op: Dict[str, Any]) -> Optional[str]:
    """CSS class hook: one class at most, for text operations only."""
    if not isinstance(op.get("insert"), str):
        return None
    attrs = op.get("attributes") or {}
    if attrs.get("code-block"):
        return SYNTAX_CLASS
    if attrs.get(SPOILER_CLASS):
        return SPOILER_CLASS
    return None


def promote_block_ops(ops: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Return ``ops`` with block embeds replaced by copies flagged ``renderAsBlock``."""
    promoted: List[Dict[str, Any]] = []
    for op in ops:
        if should_render_as_block(op):
            attributes = {**(op.get("attributes") or {}), "renderAsBlock": True}
            promoted.append({**op, "attributes": attributes})
        else:
            promoted.append(op)
    return promoted


class SsrConverter:
    """
    Delta to HTML converter used for static and server-side rendering.

    ``embed_configs`` replaces the oEmbed presentation settings,
    ``converter_options`` is merged into the converter options (the
    paragraph and blockquote grouping flags are always forced off), and
    ``report_dir`` receives JSON Lines reports for embeds that had to fall
    back to a placeholder.
    """

    def __init__(
        self,
        *,
        embed_configs: Optional[Mapping[EmbedKind, EmbedRenderConfig]] = None,
        converter_options: Optional[Dict[str, Any]] = None,
        report_dir: Optional[str] = None,
    ) -> None:
        self.embed_configs = embed_configs if embed_configs is not None else build_embed_configs()
        self.converter_options = {**(converter_options or {}), **SSR_CONVERTER_OPTIONS}
        self.report_dir = report_dir

    def convert(self, initial_text: Any) -> str:
        ops = promote_block_ops(normalize_delta(initial_text))
        converter = DeltaToHtmlConverter(
            ops,
            {**self.converter_options, "custom_css_classes": ssr_css_classes},
        )
        converter.render_custom_with(
            partial(render_custom_op, embed_configs=self.embed_configs, report_dir=self.report_dir)
        )
        converter.after_render(merge_spoilers_after_render)
        return mark_empty_paragraphs(converter.convert())


def get_ssr_converter(
    embed_overrides: Optional[Dict[str, Dict[str, Any]]] = None,
    converter_options: Optional[Dict[str, Any]] = None,
    report_dir: Optional[str] = None,
) -> SsrConverter:
    """Build an :class:`SsrConverter`; ``embed_overrides`` is keyed by embed kind name."""
    return SsrConverter(
        embed_configs=build_embed_configs(embed_overrides),
        converter_options=converter_options,
        report_dir=report_dir,
    )


def convert_delta_to_html(delta: Any) -> str:
    """Render ``delta`` (op list or ``{"ops": [...]}``) with the default settings."""
    return SsrConverter().convert(delta)
