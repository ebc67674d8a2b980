"""
Passes applied to the converter output.

The spoiler merge works on parsed fragments, once per rendered group; the
empty paragraph marking is a textual pass over the assembled document and
runs after it.
"""

from .normalize import EMPTY_PARAGRAPH, mark_empty_paragraphs
from .spoilers import (
    INLINE_GROUP,
    SPOILER_CLASS,
    ElementArena,
    SpoilerMergeError,
    compact_spoilers,
    merge_spoilers_after_render,
)

__all__ = [
    "EMPTY_PARAGRAPH",
    "INLINE_GROUP",
    "SPOILER_CLASS",
    "ElementArena",
    "SpoilerMergeError",
    "compact_spoilers",
    "mark_empty_paragraphs",
    "merge_spoilers_after_render",
]
