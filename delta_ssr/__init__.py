"""
Top-level package for the delta server-side renderer.

This package turns rich-text documents stored as Quill deltas into static
HTML. Modules are split into subpackages:

* :mod:`delta_ssr.models` – validation of delta input
* :mod:`delta_ssr.converters` – delta to HTML conversion and the SSR pipeline
* :mod:`delta_ssr.embeds` – block promotion and embed fragment rendering
* :mod:`delta_ssr.postprocess` – spoiler merging and empty paragraph marking
* :mod:`delta_ssr.utils` – structured reporting

Batch rendering of files, with configuration and reports, is handled by
:class:`delta_ssr.ssr_tool.SsrRenderTool`.
"""

from .converters.ssr import SsrConverter, convert_delta_to_html, get_ssr_converter
from .hydration import attach_event_listeners

__all__ = ["SsrConverter", "attach_event_listeners", "convert_delta_to_html", "get_ssr_converter"]
