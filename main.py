"""
Entry point for the delta server-side renderer.
"""

import glob
import os

from delta_ssr.ssr_tool import SsrRenderTool

CONFIG_FILE = "config/ssr_config.json"


def main():
    """
    Render every delta document found in the 'docs' directory to HTML.
    """
    tool = SsrRenderTool(config_file=CONFIG_FILE)
    tool.log_message("Starting delta rendering.")

    docs_path = "docs/"
    json_files = sorted(glob.glob(os.path.join(docs_path, "*.json")))
    tool.log_message(f"Discovered delta files: {json_files}", level="DEBUG")

    if not json_files:
        tool.log_message(f"No delta files (.json) found in '{docs_path}' directory.", level="ERROR")
        return

    limit = tool.config["render"]["limit"]
    expected = len(json_files) if limit is None else min(limit, len(json_files))
    written = tool.render_files(json_files)
    if len(written) < expected:
        tool.log_message(
            f"{expected - len(written)} document(s) could not be rendered; see the render reports.",
            level="WARNING",
        )

    tool.log_message("Rendering finished.")


if __name__ == "__main__":
    main()
