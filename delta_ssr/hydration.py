from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from bs4 import Tag

from delta_ssr.postprocess.spoilers import SPOILER_CLASS

IMAGE_SPOILER_SELECTOR = ".ql-block-image.spoilers"


def attach_event_listeners(
    root: Optional[Tag],
    *,
    on_spoiler: Callable[[Tag], Any],
    on_image_spoiler: Callable[[Tag, Dict[str, Any]], Any],
) -> None:
    """
    Hand the interactive parts of rendered markup to their behaviors.

    ``on_spoiler`` receives every inline spoiler element and
    ``on_image_spoiler`` every block image flagged as a spoiler, together
    with the ``{"spoilers": True}`` options it should be made spoilerable
    with. A missing root is ignored.
    """
    if root is None:
        return
    for node in root.select(f".{SPOILER_CLASS}"):
        on_spoiler(node)
    for node in root.select(IMAGE_SPOILER_SELECTOR):
        on_image_spoiler(node, {"spoilers": True})
