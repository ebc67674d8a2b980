"""
Delta to HTML converters.

Currently this subpackage exposes the generic
:class:`~delta_ssr.converters.delta_html.DeltaToHtmlConverter` and the
server-side rendering pipeline built on it in :mod:`delta_ssr.converters.ssr`.
"""

from .delta_html import DeltaToHtmlConverter
from .ssr import SsrConverter, convert_delta_to_html, get_ssr_converter

__all__ = ["DeltaToHtmlConverter", "SsrConverter", "convert_delta_to_html", "get_ssr_converter"]
