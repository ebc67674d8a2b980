"""
Batch rendering of delta documents to static HTML files.

This module defines a :class:`SsrRenderTool` class that ties together the
input model, the server-side converter and the reporting utilities. It
reads delta documents from JSON files, renders each to an HTML file and
records successes and failures in JSON Lines reports.

Configuration is supplied via a JSON file path or directly as a dictionary.
All sections are optional:

* ``converter`` – delta converter options (``multi_line_header``,
  ``multi_line_code_block``, ``link_target``, ...)
* ``embeds`` – per embed kind overrides of ``loading_message``,
  ``background_color`` and ``extra_class``
* ``output`` – ``html_dir`` and ``report_dir``
* ``render`` – ``limit`` on the number of documents rendered per run
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List, Optional

from delta_ssr.converters.ssr import get_ssr_converter
from delta_ssr.models.delta import DeltaInputError
from delta_ssr.utils.errors import report_error, report_ok


class SsrRenderTool:
    """
    Holds the configuration and the converter used to render a batch of
    delta documents. Each document is rendered independently: a failure is
    reported and the batch moves on to the next file.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            config = {}

        config.setdefault("converter", {})
        config["converter"].setdefault("multi_line_header", True)
        config["converter"].setdefault("multi_line_code_block", True)
        config["converter"].setdefault("link_target", "_blank")

        config.setdefault("embeds", {})

        config.setdefault("output", {})
        config["output"].setdefault("html_dir", os.getenv("DELTA_SSR_OUTPUT_DIR", os.path.join("reports", "html")))
        config["output"].setdefault("report_dir", os.getenv("DELTA_SSR_REPORT_DIR", os.path.join("reports", "render")))

        config.setdefault("render", {})
        config["render"].setdefault("limit", None)

        self.config = config
        self.converter = get_ssr_converter(
            embed_overrides=config["embeds"],
            converter_options=config["converter"],
            report_dir=config["output"]["report_dir"],
        )

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        report_dir = self.config["output"]["report_dir"]
        os.makedirs(report_dir, exist_ok=True)
        with open(os.path.join(report_dir, "render.log"), "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def render_delta(self, delta: Any) -> str:
        return self.converter.convert(delta)

    def render_file(self, path: str) -> Optional[str]:
        """
        Render the delta stored in ``path`` and write ``<html_dir>/<name>.html``.

        Returns the written path, or ``None`` when the document could not be
        read or rendered (the failure is reported).
        """
        report_dir = self.config["output"]["report_dir"]
        context = {"source": path}
        try:
            with open(path, "r", encoding="utf-8") as f:
                delta = json.load(f)
            html = self.render_delta(delta)
        except DeltaInputError as e:
            report_error("INVALID_DELTA", context, e, report_dir=report_dir)
            self.log_message(f"Invalid delta in '{path}': {e}", "ERROR")
            return None
        except (OSError, ValueError) as e:
            report_error("RENDER_FAILED", context, e, report_dir=report_dir)
            self.log_message(f"Failed to render '{path}': {e}", "ERROR")
            return None

        html_dir = self.config["output"]["html_dir"]
        os.makedirs(html_dir, exist_ok=True)
        name = os.path.splitext(os.path.basename(path))[0]
        out_path = os.path.join(html_dir, f"{name}.html")
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)
        report_ok("RENDERED", context, {"output": out_path, "bytes": len(html)}, report_dir=report_dir)
        return out_path

    def render_files(self, paths: Iterable[str]) -> List[str]:
        limit: Optional[int] = self.config["render"]["limit"]
        written: List[str] = []
        for count, path in enumerate(paths):
            if limit is not None and count >= limit:
                break
            self.log_message(f"Rendering '{path}'")
            out_path = self.render_file(path)
            if out_path:
                written.append(out_path)
        self.log_message(f"Rendered {len(written)} document(s) to {self.config['output']['html_dir']}")
        return written
